"""
Agent Chain Data Models

Domain models for agents, chains and chain execution.
"""
from .agent import Agent, AgentRole, ModelProvider, AgentValidationError, now_ms
from .chain import AgentChain, ChainStep, ChainValidationError
from .output import AgentInput, AgentOutput, StepStatus
from .snapshot import RegistrySnapshot, RegistryDocumentError

__all__ = [
    'Agent',
    'AgentRole',
    'ModelProvider',
    'AgentValidationError',
    'now_ms',
    'AgentChain',
    'ChainStep',
    'ChainValidationError',
    'AgentInput',
    'AgentOutput',
    'StepStatus',
    'RegistrySnapshot',
    'RegistryDocumentError',
]
