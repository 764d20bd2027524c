"""
Execution Models

Transient records produced by a chain run. Nothing here is persisted
as registry state.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any

from .agent import now_ms


class StepStatus(str, Enum):
    """Per-step state: Pending -> Running -> {Succeeded, Failed}"""
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (StepStatus.SUCCEEDED, StepStatus.FAILED)


@dataclass
class AgentInput:
    """
    Input for a chain run or a single step.

    previous_output is only set for pass-through steps (no explicit
    input mapping) that have a preceding successful output.
    """
    task: str
    context: Dict[str, Any] = field(default_factory=dict)
    previous_output: Optional["AgentOutput"] = None

    @classmethod
    def from_dict(cls, data: dict) -> "AgentInput":
        context = data.get("context") or {}
        if not isinstance(context, dict):
            raise ValueError("AgentInput context must be an object")
        return cls(task=str(data.get("task") or ""), context=dict(context))


@dataclass
class AgentOutput:
    """
    Outcome of one chain step.

    agent_id/agent_name are a snapshot taken at execution time.
    error is set only when success is False.
    """
    agent_id: str
    agent_name: str
    success: bool
    content: str = ""
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: int = field(default_factory=now_ms)      # epoch ms when the step completed

    @classmethod
    def succeeded(cls, agent_id: str, agent_name: str, content: str,
                  metadata: Optional[Dict[str, Any]] = None) -> "AgentOutput":
        return cls(
            agent_id=agent_id,
            agent_name=agent_name,
            success=True,
            content=content,
            metadata=metadata or {},
        )

    @classmethod
    def failed(cls, agent_id: str, agent_name: str, error: str) -> "AgentOutput":
        return cls(
            agent_id=agent_id,
            agent_name=agent_name,
            success=False,
            content="",
            error=error or "Unknown error",
        )

    def to_dict(self) -> dict:
        data = {
            "agentId": self.agent_id,
            "agentName": self.agent_name,
            "content": self.content,
            "success": self.success,
            "timestamp": self.timestamp,
        }
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        if not self.success:
            data["error"] = self.error
        return data
