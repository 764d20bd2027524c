"""
Agent Chain Model

An ordered list of agent references. List order is execution order.
"""
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from .agent import now_ms


class ChainValidationError(ValueError):
    """Raised when a chain record is structurally invalid"""


@dataclass
class ChainStep:
    """
    One position in a chain.

    input_mapping maps a target key in this step's input to a source in
    the accumulated context: either an agent id (that agent's output
    content) or "agentId.field" (a field of that agent's output).
    None or an empty mapping means "no explicit mapping".
    """
    agent_id: str
    input_mapping: Optional[Dict[str, str]] = None
    config: Optional[Dict[str, Any]] = None

    @property
    def has_explicit_mapping(self) -> bool:
        return bool(self.input_mapping)

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {"agentId": self.agent_id}
        if self.input_mapping is not None:
            data["inputMapping"] = dict(self.input_mapping)
        if self.config is not None:
            data["config"] = dict(self.config)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ChainStep":
        if not isinstance(data, dict):
            raise ChainValidationError(f"Chain step must be an object, got {type(data).__name__}")

        agent_id = data.get("agentId", data.get("agent_id"))
        if not agent_id or not isinstance(agent_id, str):
            raise ChainValidationError("Chain step is missing agentId")

        mapping = data.get("inputMapping", data.get("input_mapping"))
        if mapping is not None and not isinstance(mapping, dict):
            raise ChainValidationError(f"inputMapping for step '{agent_id}' must be an object")

        config = data.get("config")
        if config is not None and not isinstance(config, dict):
            raise ChainValidationError(f"config for step '{agent_id}' must be an object")

        return cls(
            agent_id=agent_id,
            input_mapping={str(k): str(v) for k, v in mapping.items()} if mapping is not None else None,
            config=dict(config) if config is not None else None,
        )


@dataclass
class AgentChain:
    """
    Chain entity - a pipeline of agents.

    Agent references are resolved at execution time, so a chain may
    name agents that are not (or no longer) registered.
    """
    id: str
    name: str
    description: str = ""
    agents: List[ChainStep] = field(default_factory=list)
    created_at: int = field(default_factory=now_ms)

    @property
    def agent_ids(self) -> List[str]:
        return [step.agent_id for step in self.agents]

    def validate(self) -> "AgentChain":
        if not isinstance(self.id, str) or not self.id.strip():
            raise ChainValidationError("Chain is missing id")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ChainValidationError(f"Chain '{self.id}' is missing name")
        for step in self.agents:
            if not step.agent_id:
                raise ChainValidationError(f"Chain '{self.id}' has a step without agentId")
        return self

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "agents": [step.to_dict() for step in self.agents],
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AgentChain":
        if not isinstance(data, dict):
            raise ChainValidationError(f"Chain record must be an object, got {type(data).__name__}")

        steps = data.get("agents") or []
        if not isinstance(steps, list):
            raise ChainValidationError(f"Chain '{data.get('id')}' agents must be a list")

        created_at = data.get("createdAt", data.get("created_at"))
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            description=data.get("description") or "",
            agents=[ChainStep.from_dict(step) for step in steps],
            created_at=int(created_at) if created_at else now_ms(),
        )
