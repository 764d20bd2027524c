"""
Registry Snapshot

The whole-registry document written to durable storage:
{"agents": [...], "chains": [...]}
"""
import json
from dataclasses import dataclass, field
from typing import Callable, List, TypeVar

from .agent import Agent
from .chain import AgentChain


class RegistryDocumentError(ValueError):
    """Raised when a persisted registry document is malformed"""


T = TypeVar("T")


@dataclass
class RegistrySnapshot:
    """
    Registry contents.

    skipped holds one message per stored record that could not be
    parsed; it is never written back.
    """
    agents: List[Agent] = field(default_factory=list)
    chains: List[AgentChain] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "agents": [agent.to_dict() for agent in self.agents],
            "chains": [chain.to_dict() for chain in self.chains],
        }

    def to_json(self) -> str:
        """Pretty-printed document"""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> "RegistrySnapshot":
        """
        Parse a registry document.

        Invalid records are left out and listed in skipped.

        Raises:
            RegistryDocumentError: If the document itself is not an object
                                   with 'agents' and 'chains' lists
        """
        if not isinstance(data, dict):
            raise RegistryDocumentError("Registry document must be a JSON object")

        agents = data.get("agents", [])
        chains = data.get("chains", [])
        if not isinstance(agents, list) or not isinstance(chains, list):
            raise RegistryDocumentError("Registry document 'agents' and 'chains' must be lists")

        skipped: List[str] = []
        return cls(
            agents=_parse_records(agents, lambda item: Agent.from_dict(item).validate(), "agent", skipped),
            chains=_parse_records(chains, lambda item: AgentChain.from_dict(item).validate(), "chain", skipped),
            skipped=skipped,
        )

    @classmethod
    def from_json(cls, text: str) -> "RegistrySnapshot":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise RegistryDocumentError(f"Registry document is not valid JSON: {e}") from e
        return cls.from_dict(data)


def _parse_records(items: list, parse: Callable[[dict], T], kind: str, skipped: List[str]) -> List[T]:
    records = []
    for item in items:
        try:
            records.append(parse(item))
        except (TypeError, ValueError) as e:
            record_id = item.get("id") if isinstance(item, dict) else None
            skipped.append(f"{kind} '{record_id or '?'}': {e}")
    return records
