"""
Profile Service

Exports the registry and credential references to a portable JSON
document and restores them from one.
"""
import json
import logging
from dataclasses import dataclass
from typing import Union

from ..llm.credentials import CredentialStore
from ..models.agent import Agent, now_ms
from ..models.chain import AgentChain
from .registry_service import AgentRegistry

logger = logging.getLogger("agentchain.services.profile")

PROFILE_VERSION = 1


class ProfileFormatError(ValueError):
    """Raised when a profile document is malformed"""


@dataclass
class ProfileImportResult:
    agents: int = 0
    chains: int = 0
    secrets: int = 0


class ProfileService:
    """Service for profile export/import"""

    def __init__(self, registry: AgentRegistry, credential_store: CredentialStore):
        self.registry = registry
        self.credential_store = credential_store

    async def build_profile(self) -> dict:
        """Profile document as a dict"""
        await self.registry.initialize()
        snapshot = self.registry.snapshot()
        return {
            "version": PROFILE_VERSION,
            "timestamp": now_ms(),
            "secrets": self.credential_store.as_dict(),
            "agents": [agent.to_dict() for agent in snapshot.agents],
            "chains": [chain.to_dict() for chain in snapshot.chains],
        }

    async def export_profile(self) -> str:
        """Export the current profile (credentials + agents + chains) as JSON"""
        profile = await self.build_profile()
        logger.info(f"Exported profile with {len(profile['agents'])} agents and {len(profile['chains'])} chains")
        return json.dumps(profile, indent=2, ensure_ascii=False)

    async def import_profile(self, document: Union[str, dict]) -> ProfileImportResult:
        """
        Import a profile, upserting agents and chains.

        Every record is validated before anything is restored.

        Raises:
            ProfileFormatError: If the document is not JSON, lacks the
                                'secrets' object or 'agents' list, or holds
                                invalid records
        """
        if isinstance(document, str):
            try:
                profile = json.loads(document)
            except json.JSONDecodeError as e:
                raise ProfileFormatError(f"Profile is not valid JSON: {e}") from e
        else:
            profile = document

        if (
            not isinstance(profile, dict)
            or not isinstance(profile.get("secrets"), dict)
            or not isinstance(profile.get("agents"), list)
        ):
            raise ProfileFormatError("Invalid profile format")

        chain_records = profile.get("chains") or []
        if not isinstance(chain_records, list):
            raise ProfileFormatError("Invalid profile format: 'chains' must be a list")

        try:
            agents = [Agent.from_dict(record).validate() for record in profile["agents"]]
            chains = [AgentChain.from_dict(record).validate() for record in chain_records]
        except ValueError as e:
            raise ProfileFormatError(f"Invalid profile record: {e}") from e

        await self.registry.initialize()
        result = ProfileImportResult(
            secrets=self.credential_store.restore(profile["secrets"]),
        )
        result.agents = await self.registry.register_agents(agents)
        result.chains = await self.registry.register_chains(chains)

        logger.info(
            f"Imported profile: {result.agents} agents, {result.chains} chains, "
            f"{result.secrets} credentials"
        )
        return result
