"""Tests for profile export/import."""

import json

import pytest

from agentchain.llm.credentials import KNOWN_SECRET_KEYS, CredentialStore
from agentchain.models import AgentChain, ChainStep
from agentchain.presets import PRESET_AGENT_IDS
from agentchain.services.profile_service import PROFILE_VERSION, ProfileFormatError, ProfileService
from agentchain.services.registry_service import AgentRegistry

from conftest import InMemoryRegistryStorage, make_agent, run


@pytest.fixture
def service(registry):
    return ProfileService(registry, CredentialStore({"grok_api_key": "xai-123"}))


def fresh_service():
    registry = AgentRegistry(InMemoryRegistryStorage())
    return ProfileService(registry, CredentialStore())


class TestExport:
    def test_profile_document(self, service):
        profile = run(service.build_profile())

        assert profile["version"] == PROFILE_VERSION
        assert profile["timestamp"] > 0
        assert profile["secrets"]["grok_api_key"] == "xai-123"
        assert profile["secrets"]["openai_api_key"] is None
        assert set(KNOWN_SECRET_KEYS) <= set(profile["secrets"])
        assert [a["id"] for a in profile["agents"]] == PRESET_AGENT_IDS
        assert profile["chains"] == []

    def test_export_is_json(self, service):
        run(service.registry.register_agent(make_agent("custom-v1")))
        profile = json.loads(run(service.export_profile()))
        assert "custom-v1" in [a["id"] for a in profile["agents"]]


class TestImport:
    def test_round_trip(self, service):
        run(service.registry.register_agent(make_agent("custom-v1", name="Custom")))
        run(service.registry.register_chain(
            AgentChain(id="c1", name="Chain", agents=[ChainStep(agent_id="custom-v1")])
        ))
        exported = run(service.export_profile())

        target = fresh_service()
        result = run(target.import_profile(exported))

        assert result.secrets == 1
        assert result.agents == len(PRESET_AGENT_IDS) + 1
        assert result.chains == 1
        assert target.registry.is_initialized
        assert target.registry.get_agent("custom-v1").name == "Custom"
        assert target.registry.get_chain("c1").agent_ids == ["custom-v1"]
        assert target.credential_store.api_key_for("grok") == "xai-123"

    def test_import_upserts(self, service):
        profile = run(service.build_profile())
        profile["agents"] = [make_agent("writer-v1", name="Imported Writer").to_dict()]
        run(service.import_profile(profile))

        assert service.registry.get_agent("writer-v1").name == "Imported Writer"
        # Agents absent from the profile are kept
        assert service.registry.get_agent("researcher-v1") is not None

    def test_chains_section_optional(self):
        target = fresh_service()
        result = run(target.import_profile({"secrets": {}, "agents": []}))
        assert result.agents == 0
        assert result.chains == 0

    def test_invalid_json(self, service):
        with pytest.raises(ProfileFormatError):
            run(service.import_profile("{oops"))

    @pytest.mark.parametrize("profile", [
        {"agents": []},
        {"secrets": {}},
        {"secrets": [], "agents": []},
        {"secrets": {}, "agents": {}},
        {"secrets": {}, "agents": [], "chains": "c1"},
        [],
    ])
    def test_invalid_format(self, service, profile):
        with pytest.raises(ProfileFormatError):
            run(service.import_profile(profile))

    def test_invalid_record_changes_nothing(self):
        target = fresh_service()
        profile = {
            "secrets": {"openai_api_key": "sk-1"},
            "agents": [
                make_agent("good-v1").to_dict(),
                {"id": "bad-v1", "name": "Bad"},
            ],
        }
        with pytest.raises(ProfileFormatError):
            run(target.import_profile(profile))

        assert target.registry.get_agent("good-v1") is None
        assert target.credential_store.api_key_for("openai") is None
