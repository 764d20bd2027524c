"""
Agent Chain Engine

Registry of named agents and chains, and a sequential chain orchestrator.
"""
from .models import Agent, AgentChain, AgentInput, AgentOutput, AgentRole, ChainStep, ModelProvider
from .services import AgentRegistry, ChainOrchestrator

__version__ = "0.1.0"

__all__ = [
    'Agent',
    'AgentChain',
    'AgentInput',
    'AgentOutput',
    'AgentRole',
    'ChainStep',
    'ModelProvider',
    'AgentRegistry',
    'ChainOrchestrator',
]
