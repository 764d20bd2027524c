"""
Agent Registry

Durable catalog of agents and chains. In-memory maps keyed by id,
persisted as one whole-registry snapshot after every mutation.

Three bootstrap sources, three merge policies:
- built-in presets: never overwrite an existing id
- persisted snapshot: overwrite same-id records
- preset manifest: additive only (unknown ids)
"""
import asyncio
import copy
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Union
from uuid import uuid4

from ..models.agent import Agent, AgentRole
from ..models.chain import AgentChain, ChainStep
from ..models.snapshot import RegistrySnapshot
from ..presets.builtin import builtin_agents
from ..presets.source import PresetManifestSource
from ..storage.base import BaseRegistryStorage

logger = logging.getLogger("agentchain.services.registry")


@dataclass
class ImportSummary:
    """Result of an additive import"""
    imported: int = 0
    skipped: int = 0


class AgentRegistry:
    """
    Registry of agents and chains.

    Reads take no lock. Writes (mutate map, then write snapshot) are
    serialized so two registrations never interleave a snapshot write.
    Persistence is best-effort: a failed write is logged and the
    in-memory state stays authoritative until the next successful write.
    """

    def __init__(
        self,
        storage: BaseRegistryStorage,
        preset_source: Optional[PresetManifestSource] = None,
        preset_loader: Callable[[], List[Agent]] = builtin_agents,
    ):
        self.storage = storage
        self.preset_source = preset_source
        self.preset_loader = preset_loader

        self._agents: "OrderedDict[str, Agent]" = OrderedDict()
        self._chains: "OrderedDict[str, AgentChain]" = OrderedDict()
        self._initialized = False
        # Set when the stored document could not be fully loaded
        self._protect_stored = False
        self._init_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    # ============================================
    # Bootstrap
    # ============================================

    async def initialize(self):
        """
        Idempotent bootstrap. Never raises: storage and manifest errors
        are logged and whatever loaded successfully is kept.
        """
        async with self._init_lock:
            if self._initialized:
                return

            async with self._write_lock:
                self._merge_builtin_presets()
                await self._load_persisted()

            if self.preset_source is not None:
                try:
                    agents = await self.preset_source.fetch()
                    summary = await self._add_unknown_agents(agents, explicit=False)
                    if summary.imported:
                        logger.info(f"Auto-imported {summary.imported} preset agents")
                except Exception as e:
                    logger.warning(f"Preset manifest unavailable at bootstrap: {e}")

            self._initialized = True
            logger.info(
                f"AgentRegistry initialized with {len(self._agents)} agents "
                f"and {len(self._chains)} chains"
            )

    def _merge_builtin_presets(self) -> int:
        added = 0
        for agent in self.preset_loader():
            if agent.id not in self._agents:
                self._agents[agent.id] = agent
                added += 1
        return added

    async def _load_persisted(self):
        """Merge the stored snapshot over in-memory defaults"""
        try:
            snapshot = await self.storage.read()
        except Exception as e:
            logger.warning(f"Could not load registry from {self.storage.name} storage, using defaults only: {e}")
            self._protect_stored = True
            return

        if snapshot is None:
            # First run: save defaults
            await self._persist()
            return

        for message in snapshot.skipped:
            logger.warning(f"Skipping invalid stored record: {message}")
        if snapshot.skipped:
            self._protect_stored = True

        for agent in snapshot.agents:
            self._agents[agent.id] = agent
        for chain in snapshot.chains:
            self._chains[chain.id] = chain
        logger.info(f"Loaded {len(snapshot.agents)} agents and {len(snapshot.chains)} chains from storage")

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    # ============================================
    # Persistence
    # ============================================

    def snapshot(self) -> RegistrySnapshot:
        """Copy of the current registry contents"""
        return RegistrySnapshot(
            agents=copy.deepcopy(list(self._agents.values())),
            chains=copy.deepcopy(list(self._chains.values())),
        )

    async def _persist(self, explicit: bool = True) -> bool:
        """
        Write the whole registry. Caller holds the write lock.

        While the stored document is protected (it failed to load, or some
        of its records were skipped) only explicit user changes may
        replace it; additive bootstrap merges stay in memory.
        """
        if explicit:
            self._protect_stored = False
        elif self._protect_stored:
            logger.warning("Stored registry was not fully loaded, keeping it until the next explicit change")
            return False

        try:
            await self.storage.write(self.snapshot())
            return True
        except Exception as e:
            logger.error(f"Failed to save AgentRegistry: {e}")
            return False

    # ============================================
    # Agents
    # ============================================

    async def register_agent(self, agent: Agent):
        """
        Upsert an agent by id and persist.

        Raises:
            AgentValidationError: If the agent lacks id, name or system prompt
        """
        agent.validate()
        async with self._write_lock:
            self._agents[agent.id] = copy.deepcopy(agent)
            await self._persist()
        logger.info(f"Registered agent: {agent.name} ({agent.id})")

    async def register_agents(self, agents: Iterable[Agent]) -> int:
        """Upsert many agents with a single persist. All are validated first."""
        agents = [agent.validate() for agent in agents]
        if not agents:
            return 0
        async with self._write_lock:
            for agent in agents:
                self._agents[agent.id] = copy.deepcopy(agent)
            await self._persist()
        logger.info(f"Registered {len(agents)} agents")
        return len(agents)

    async def remove_agent(self, agent_id: str) -> bool:
        async with self._write_lock:
            removed = self._agents.pop(agent_id, None) is not None
            if removed:
                await self._persist()
        if removed:
            logger.info(f"Removed agent: {agent_id}")
        return removed

    def get_agent(self, agent_id: str) -> Optional[Agent]:
        return self._agents.get(agent_id)

    def get_all_agents(self) -> List[Agent]:
        return list(self._agents.values())

    def get_agents_by_role(self, role: Union[AgentRole, str]) -> List[Agent]:
        """
        Filter agents by role tag.

        Raises:
            ValueError: If role is not a known tag
        """
        role = AgentRole(role)
        return [agent for agent in self._agents.values() if agent.role == role]

    async def reset_to_defaults(self):
        """Drop every agent and restore the built-in presets. Chains are kept."""
        async with self._write_lock:
            self._agents.clear()
            self._merge_builtin_presets()
            await self._persist()
        logger.info("Reset agents to defaults")

    async def import_agents(self, agents: Iterable[Agent]) -> ImportSummary:
        """
        Additive import: add unknown ids, never overwrite existing ones.

        Raises:
            AgentValidationError: If any agent is invalid; nothing is imported
        """
        return await self._add_unknown_agents(agents, explicit=True)

    async def _add_unknown_agents(self, agents: Iterable[Agent], explicit: bool) -> ImportSummary:
        agents = [agent.validate() for agent in agents]
        summary = ImportSummary()
        async with self._write_lock:
            for agent in agents:
                if agent.id in self._agents:
                    summary.skipped += 1
                    continue
                self._agents[agent.id] = copy.deepcopy(agent)
                summary.imported += 1
            if summary.imported:
                await self._persist(explicit=explicit)
        return summary

    async def import_presets(self) -> ImportSummary:
        """
        Fetch the preset manifest and import unknown agents.

        Raises:
            PresetFetchError: If the manifest cannot be fetched or parsed
            RuntimeError: If no preset source is configured
        """
        if self.preset_source is None:
            raise RuntimeError("No preset manifest source configured")

        agents = await self.preset_source.fetch()
        summary = await self.import_agents(agents)
        logger.info(f"Imported {summary.imported} agents, skipped {summary.skipped} duplicates")
        return summary

    # ============================================
    # Chains
    # ============================================

    async def register_chain(self, chain: AgentChain):
        """
        Upsert a chain by id and persist.

        Raises:
            ChainValidationError: If the chain lacks id or name
        """
        chain.validate()
        async with self._write_lock:
            self._chains[chain.id] = copy.deepcopy(chain)
            await self._persist()
        logger.info(f"Registered chain: {chain.name} ({chain.id})")

    async def register_chains(self, chains: Iterable[AgentChain]) -> int:
        """Upsert many chains with a single persist"""
        chains = [chain.validate() for chain in chains]
        if not chains:
            return 0
        async with self._write_lock:
            for chain in chains:
                self._chains[chain.id] = copy.deepcopy(chain)
            await self._persist()
        return len(chains)

    async def register_chains_if_absent(self, chains: Iterable[AgentChain]) -> int:
        """
        Add chains whose ids are unknown; persist only if something was added.
        Used for built-in chains at bootstrap, so it never replaces a stored
        document that failed to load.
        """
        chains = [chain.validate() for chain in chains]
        added = 0
        async with self._write_lock:
            for chain in chains:
                if chain.id in self._chains:
                    continue
                self._chains[chain.id] = copy.deepcopy(chain)
                added += 1
            if added:
                await self._persist(explicit=False)
        return added

    async def remove_chain(self, chain_id: str) -> bool:
        async with self._write_lock:
            removed = self._chains.pop(chain_id, None) is not None
            if removed:
                await self._persist()
        if removed:
            logger.info(f"Removed chain: {chain_id}")
        return removed

    def get_chain(self, chain_id: str) -> Optional[AgentChain]:
        return self._chains.get(chain_id)

    def get_all_chains(self) -> List[AgentChain]:
        return list(self._chains.values())

    async def create_custom_chain(
        self,
        name: str,
        agent_ids: List[str],
        description: Optional[str] = None,
        chain_id: Optional[str] = None,
    ) -> AgentChain:
        """
        Build, register and return a chain over agent_ids.

        The first step draws from the chain's initial input; later steps
        get an empty mapping, i.e. they receive the preceding step's output.
        """
        chain = AgentChain(
            id=chain_id or f"chain-{uuid4().hex[:12]}",
            name=name,
            description=description or f"Custom chain with {len(agent_ids)} agents",
            agents=[
                ChainStep(agent_id=agent_id, input_mapping={} if index > 0 else None)
                for index, agent_id in enumerate(agent_ids)
            ],
        )
        await self.register_chain(chain)
        return chain
