"""Tests for the agent registry: bootstrap merge policies, CRUD, persistence."""

import asyncio
import json

import pytest

from agentchain.models import Agent, AgentChain, AgentRole, ChainStep
from agentchain.models.agent import AgentValidationError
from agentchain.models.chain import ChainValidationError
from agentchain.models.snapshot import RegistrySnapshot
from agentchain.presets import PRESET_AGENT_IDS, PresetFetchError, PresetManifestSource
from agentchain.services.registry_service import AgentRegistry

from conftest import InMemoryRegistryStorage, make_agent, run


def write_manifest(path, records):
    path.write_text(json.dumps({"agents": records}), encoding="utf-8")
    return PresetManifestSource(path=path)


class TestBootstrap:
    def test_first_run_loads_presets_and_saves(self, storage):
        registry = AgentRegistry(storage)
        run(registry.initialize())

        ids = [agent.id for agent in registry.get_all_agents()]
        assert ids == PRESET_AGENT_IDS
        assert storage.writes == 1
        assert [a.id for a in storage.snapshot.agents] == PRESET_AGENT_IDS

    def test_persisted_records_overwrite_presets(self):
        edited = make_agent("researcher-v1", name="My Researcher")
        custom = make_agent("custom-v1")
        storage = InMemoryRegistryStorage(RegistrySnapshot(agents=[edited, custom]))

        registry = AgentRegistry(storage)
        run(registry.initialize())

        assert registry.get_agent("researcher-v1").name == "My Researcher"
        assert registry.get_agent("custom-v1") is not None
        assert len(registry.get_all_agents()) == len(PRESET_AGENT_IDS) + 1
        # Nothing changed, nothing written
        assert storage.writes == 0

    def test_persisted_chains_loaded(self):
        chain = AgentChain(id="c1", name="Chain", agents=[ChainStep(agent_id="writer-v1")])
        storage = InMemoryRegistryStorage(RegistrySnapshot(chains=[chain]))

        registry = AgentRegistry(storage)
        run(registry.initialize())

        assert registry.get_chain("c1").agent_ids == ["writer-v1"]

    def test_new_preset_appears_alongside_persisted_state(self):
        # Stored snapshot predates a preset added in a later release
        storage = InMemoryRegistryStorage(RegistrySnapshot(agents=[make_agent("custom-v1")]))
        registry = AgentRegistry(storage)
        run(registry.initialize())

        for agent_id in PRESET_AGENT_IDS:
            assert registry.get_agent(agent_id) is not None

    def test_manifest_is_additive_only(self, storage, tmp_path):
        source = write_manifest(tmp_path / "agents.json", [
            {"id": "researcher-v1", "name": "Remote Researcher", "systemPrompt": "remote"},
            {"id": "remote-v1", "name": "Remote", "systemPrompt": "remote", "role": "strategist"},
        ])
        registry = AgentRegistry(storage, preset_source=source)
        run(registry.initialize())

        assert registry.get_agent("researcher-v1").name == "Research Specialist"
        assert registry.get_agent("remote-v1").role == AgentRole.STRATEGIST
        assert any(a.id == "remote-v1" for a in storage.snapshot.agents)

    def test_manifest_does_not_overwrite_persisted_edit(self, tmp_path):
        storage = InMemoryRegistryStorage(RegistrySnapshot(agents=[make_agent("remote-v1", name="Mine")]))
        source = write_manifest(tmp_path / "agents.json", [
            {"id": "remote-v1", "name": "Remote", "systemPrompt": "remote"},
        ])
        registry = AgentRegistry(storage, preset_source=source)
        run(registry.initialize())

        assert registry.get_agent("remote-v1").name == "Mine"

    def test_manifest_failure_does_not_fail_bootstrap(self, storage, tmp_path):
        source = PresetManifestSource(path=tmp_path / "missing.json")
        registry = AgentRegistry(storage, preset_source=source)
        run(registry.initialize())

        assert registry.is_initialized
        assert len(registry.get_all_agents()) == len(PRESET_AGENT_IDS)

    def test_storage_read_failure_uses_defaults(self):
        storage = InMemoryRegistryStorage(fail_reads=True)
        registry = AgentRegistry(storage)
        run(registry.initialize())

        assert registry.is_initialized
        assert [a.id for a in registry.get_all_agents()] == PRESET_AGENT_IDS

    def test_unreadable_storage_not_overwritten_at_bootstrap(self, tmp_path):
        storage = InMemoryRegistryStorage(RegistrySnapshot(agents=[make_agent("custom-v1")]), fail_reads=True)
        source = write_manifest(tmp_path / "agents.json", [
            {"id": "remote-v1", "name": "Remote", "systemPrompt": "remote"},
        ])
        registry = AgentRegistry(storage, preset_source=source)
        run(registry.initialize())
        run(registry.register_chains_if_absent([AgentChain(id="c1", name="Chain")]))

        assert registry.get_agent("remote-v1") is not None
        assert storage.writes == 0
        assert [a.id for a in storage.snapshot.agents] == ["custom-v1"]

        # An explicit change replaces the stored document
        run(registry.register_agent(make_agent("new-v1")))
        assert storage.writes == 1
        assert "new-v1" in [a.id for a in storage.snapshot.agents]

    def test_initialize_is_idempotent(self, storage):
        registry = AgentRegistry(storage)
        run(registry.initialize())
        run(registry.register_agent(make_agent("custom-v1")))
        run(registry.initialize())

        assert storage.reads == 1
        assert registry.get_agent("custom-v1") is not None

    def test_concurrent_initialize_runs_once(self, storage):
        registry = AgentRegistry(storage)

        async def scenario():
            await asyncio.gather(*(registry.initialize() for _ in range(5)))

        run(scenario())
        assert storage.reads == 1
        assert storage.writes == 1


class TestAgentOperations:
    def test_register_then_get(self, registry, storage):
        agent = make_agent("custom-v1", role=AgentRole.WRITER)
        run(registry.register_agent(agent))

        stored = registry.get_agent("custom-v1")
        assert stored.to_dict() == agent.to_dict()
        assert any(a.id == "custom-v1" for a in storage.snapshot.agents)

    def test_register_is_upsert(self, registry):
        run(registry.register_agent(make_agent("custom-v1", name="First")))
        run(registry.register_agent(make_agent("custom-v1", name="Second")))

        matches = [a for a in registry.get_all_agents() if a.id == "custom-v1"]
        assert len(matches) == 1
        assert matches[0].name == "Second"

    def test_register_keeps_insertion_order(self, registry):
        run(registry.register_agent(make_agent("z-v1")))
        run(registry.register_agent(make_agent("a-v1")))
        ids = [a.id for a in registry.get_all_agents()]
        assert ids[-2:] == ["z-v1", "a-v1"]

    def test_register_copies_record(self, registry):
        agent = make_agent("custom-v1", name="Original")
        run(registry.register_agent(agent))
        agent.name = "Mutated"
        assert registry.get_agent("custom-v1").name == "Original"

    def test_register_invalid_agent(self, registry, storage):
        writes = storage.writes
        with pytest.raises(AgentValidationError):
            run(registry.register_agent(Agent(id="bad", name="Bad", system_prompt="")))
        assert registry.get_agent("bad") is None
        assert storage.writes == writes

    def test_persist_failure_keeps_memory_state(self):
        storage = InMemoryRegistryStorage()
        registry = AgentRegistry(storage)
        run(registry.initialize())
        storage.fail_writes = True

        run(registry.register_agent(make_agent("custom-v1")))

        assert registry.get_agent("custom-v1") is not None
        assert all(a.id != "custom-v1" for a in storage.snapshot.agents)

    def test_remove_agent(self, registry, storage):
        run(registry.register_agent(make_agent("custom-v1")))
        assert run(registry.remove_agent("custom-v1")) is True
        assert registry.get_agent("custom-v1") is None
        assert all(a.id != "custom-v1" for a in storage.snapshot.agents)

    def test_remove_unknown_agent(self, registry, storage):
        writes = storage.writes
        assert run(registry.remove_agent("nope")) is False
        assert storage.writes == writes

    def test_get_unknown_agent(self, registry):
        assert registry.get_agent("nope") is None

    def test_agents_by_role(self, registry):
        writers = registry.get_agents_by_role(AgentRole.WRITER)
        assert "writer-v1" in [a.id for a in writers]
        assert all(a.role == AgentRole.WRITER for a in writers)
        assert registry.get_agents_by_role("writer") == writers

    def test_agents_by_unused_role_is_empty(self, registry):
        assert registry.get_agents_by_role(AgentRole.LEGAL) == []

    def test_agents_by_unknown_role(self, registry):
        with pytest.raises(ValueError):
            registry.get_agents_by_role("wizard")

    def test_register_agents_bulk(self, registry, storage):
        writes = storage.writes
        count = run(registry.register_agents([make_agent("x-v1"), make_agent("y-v1")]))
        assert count == 2
        assert storage.writes == writes + 1

    def test_register_agents_validates_all_first(self, registry):
        with pytest.raises(AgentValidationError):
            run(registry.register_agents([make_agent("x-v1"), Agent(id="", name="", system_prompt="")]))
        assert registry.get_agent("x-v1") is None

    def test_concurrent_registrations_all_persist(self):
        storage = InMemoryRegistryStorage()
        registry = AgentRegistry(storage)

        async def scenario():
            await registry.initialize()
            await asyncio.gather(*(
                registry.register_agent(make_agent(f"agent-{i}")) for i in range(20)
            ))

        run(scenario())
        stored_ids = {a.id for a in storage.snapshot.agents}
        for i in range(20):
            assert f"agent-{i}" in stored_ids


class TestPresets:
    def test_reset_to_defaults(self, registry):
        run(registry.register_agent(make_agent("custom-v1")))
        run(registry.register_agent(make_agent("writer-v1", name="Edited Writer")))
        run(registry.register_chain(AgentChain(id="c1", name="Chain")))

        run(registry.reset_to_defaults())

        assert [a.id for a in registry.get_all_agents()] == PRESET_AGENT_IDS
        assert registry.get_agent("writer-v1").name == "Content Writer"
        assert registry.get_chain("c1") is not None

    def test_import_agents_summary(self, registry):
        summary = run(registry.import_agents([make_agent("writer-v1", name="Other"), make_agent("new-v1")]))
        assert summary.imported == 1
        assert summary.skipped == 1
        assert registry.get_agent("writer-v1").name == "Content Writer"

    def test_import_agents_invalid_record_changes_nothing(self, registry, storage):
        writes = storage.writes
        with pytest.raises(AgentValidationError):
            run(registry.import_agents([make_agent("x-v1"), Agent(id="bad", name="Bad", system_prompt="")]))

        assert registry.get_agent("x-v1") is None
        assert storage.writes == writes

    def test_register_chains_if_absent_invalid_chain_changes_nothing(self, registry, storage):
        writes = storage.writes
        chains = [AgentChain(id="c1", name="Chain"), AgentChain(id="c2", name="")]
        with pytest.raises(ChainValidationError):
            run(registry.register_chains_if_absent(chains))

        assert registry.get_chain("c1") is None
        assert storage.writes == writes

    def test_import_presets_without_source(self, registry):
        with pytest.raises(RuntimeError):
            run(registry.import_presets())

    def test_import_presets_fetch_error(self, storage, tmp_path):
        (tmp_path / "agents.json").write_text("{broken", encoding="utf-8")
        registry = AgentRegistry(storage, preset_source=PresetManifestSource(path=tmp_path / "agents.json"))
        run(registry.initialize())

        with pytest.raises(PresetFetchError):
            run(registry.import_presets())

    def test_import_presets_twice_skips(self, storage, tmp_path):
        source = write_manifest(tmp_path / "agents.json", [
            {"id": "remote-v1", "name": "Remote", "systemPrompt": "remote"},
        ])
        registry = AgentRegistry(storage, preset_source=source)
        run(registry.initialize())

        summary = run(registry.import_presets())
        assert summary.imported == 0
        assert summary.skipped == 1


class TestChainOperations:
    def test_register_and_remove_chain(self, registry, storage):
        chain = AgentChain(id="c1", name="Chain", agents=[ChainStep(agent_id="writer-v1")])
        run(registry.register_chain(chain))
        assert registry.get_chain("c1").name == "Chain"
        assert [c.id for c in storage.snapshot.chains] == ["c1"]

        assert run(registry.remove_chain("c1")) is True
        assert registry.get_chain("c1") is None
        assert run(registry.remove_chain("c1")) is False

    def test_chain_may_reference_unknown_agent(self, registry):
        chain = AgentChain(id="c1", name="Chain", agents=[ChainStep(agent_id="ghost")])
        run(registry.register_chain(chain))
        assert registry.get_chain("c1").agent_ids == ["ghost"]

    def test_removing_agent_keeps_chain(self, registry):
        run(registry.register_chain(AgentChain(id="c1", name="Chain", agents=[ChainStep(agent_id="writer-v1")])))
        run(registry.remove_agent("writer-v1"))
        assert registry.get_chain("c1").agent_ids == ["writer-v1"]

    def test_register_chains_if_absent(self, registry):
        run(registry.register_chain(AgentChain(id="c1", name="Mine")))
        added = run(registry.register_chains_if_absent([
            AgentChain(id="c1", name="Theirs"),
            AgentChain(id="c2", name="New"),
        ]))
        assert added == 1
        assert registry.get_chain("c1").name == "Mine"
        assert registry.get_chain("c2") is not None

    def test_create_custom_chain(self, registry, storage):
        chain = run(registry.create_custom_chain("My Chain", ["researcher-v1", "writer-v1", "reviewer-v1"]))

        assert chain.id.startswith("chain-")
        assert chain.agent_ids == ["researcher-v1", "writer-v1", "reviewer-v1"]
        assert chain.agents[0].input_mapping is None
        assert chain.agents[1].input_mapping == {}
        assert chain.agents[2].input_mapping == {}
        assert chain.description == "Custom chain with 3 agents"
        assert registry.get_chain(chain.id) is not None
        assert any(c.id == chain.id for c in storage.snapshot.chains)

    def test_create_custom_chain_ids_are_unique(self, registry):
        first = run(registry.create_custom_chain("One", ["writer-v1"]))
        second = run(registry.create_custom_chain("Two", ["writer-v1"]))
        assert first.id != second.id

    def test_create_custom_chain_with_id_and_description(self, registry):
        chain = run(registry.create_custom_chain("Mine", ["writer-v1"], description="Just writing", chain_id="mine"))
        assert chain.id == "mine"
        assert chain.description == "Just writing"
