"""
Agent Model

Represents a named agent: an identity bundling a role tag and a
system prompt that is handed to a language model for one chain step.
"""
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class AgentValidationError(ValueError):
    """Raised when an agent record is missing required fields"""


class AgentRole(str, Enum):
    """Categorical tag for grouping and theming. No execution semantics."""
    RESEARCHER = "researcher"
    PLANNER = "planner"
    WRITER = "writer"
    ANALYZER = "analyzer"
    REVIEWER = "reviewer"
    COORDINATOR = "coordinator"
    ENGINEER = "engineer"
    PROTECTOR = "protector"
    EXECUTOR = "executor"
    QUANT = "quant"
    LEGAL = "legal"
    MARKETING = "marketing"
    SECURITY = "security"
    SUPPORT = "support"
    DATA_SCIENCE = "data-science"
    STRATEGIST = "strategist"
    FINANCE = "finance"
    ARCHITECT = "architect"
    CURATOR = "curator"
    TRANSLATOR = "translator"
    CREATIVE = "creative"
    ANALYST = "analyst"
    ORCHESTRATOR = "orchestrator"


class ModelProvider(str, Enum):
    """Backing model services an agent can ask for"""
    OLLAMA = "ollama"
    OPENAI = "openai"
    GROK = "grok"
    MINIMAX = "minimax"
    GEMINI = "gemini"


def now_ms() -> int:
    """Wall-clock time in epoch milliseconds"""
    return int(time.time() * 1000)


@dataclass
class Agent:
    """
    Agent entity - one executable step template.

    The id is the primary key: registering an agent whose id already
    exists replaces the previous record. created_at is set once.
    """
    id: str
    name: str
    system_prompt: str
    role: AgentRole = AgentRole.ANALYST
    description: str = ""
    preferred_provider: Optional[ModelProvider] = None   # hint for the model call
    version: str = "1.0.0"
    created_at: int = field(default_factory=now_ms)        # epoch ms, never mutated

    def validate(self) -> "Agent":
        """Refuse records that cannot be registered"""
        missing = [
            name for name, value in (
                ("id", self.id),
                ("name", self.name),
                ("systemPrompt", self.system_prompt),
            )
            if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            raise AgentValidationError(
                f"Agent '{self.id or '?'}' is missing required fields: {', '.join(missing)}"
            )
        return self

    def to_dict(self) -> dict:
        """Convert to the persisted record shape"""
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "role": self.role.value,
            "systemPrompt": self.system_prompt,
            "version": self.version,
            "createdAt": self.created_at,
        }
        if self.preferred_provider is not None:
            data["preferredProvider"] = self.preferred_provider.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Agent":
        """
        Create from a persisted or imported record.

        Raises:
            AgentValidationError: If data is not a mapping
            ValueError: If role or preferredProvider is not a known tag
        """
        if not isinstance(data, dict):
            raise AgentValidationError(f"Agent record must be an object, got {type(data).__name__}")

        provider = data.get("preferredProvider", data.get("preferred_provider"))
        created_at = data.get("createdAt", data.get("created_at"))

        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            description=data.get("description") or "",
            role=AgentRole(data.get("role") or AgentRole.ANALYST.value),
            system_prompt=data.get("systemPrompt", data.get("system_prompt")) or "",
            preferred_provider=ModelProvider(provider) if provider else None,
            version=str(data.get("version") or "1.0.0"),
            created_at=int(created_at) if created_at else now_ms(),
        )
