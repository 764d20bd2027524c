"""Shared fixtures: in-memory registry storage and a scripted model invoker."""

import asyncio
import copy
from typing import Dict, List, Optional

import pytest

from agentchain.models import Agent, AgentRole
from agentchain.models.snapshot import RegistrySnapshot
from agentchain.services.registry_service import AgentRegistry
from agentchain.storage.base import BaseRegistryStorage


class InMemoryRegistryStorage(BaseRegistryStorage):
    """Storage double that keeps the last written snapshot."""

    name = "memory"

    def __init__(self, snapshot: Optional[RegistrySnapshot] = None,
                 fail_writes: bool = False, fail_reads: bool = False):
        self.snapshot = copy.deepcopy(snapshot)
        self.fail_writes = fail_writes
        self.fail_reads = fail_reads
        self.writes = 0
        self.reads = 0

    async def read(self):
        self.reads += 1
        if self.fail_reads:
            raise OSError("disk unavailable")
        return copy.deepcopy(self.snapshot)

    async def write(self, snapshot):
        if self.fail_writes:
            raise OSError("disk full")
        self.writes += 1
        self.snapshot = copy.deepcopy(snapshot)


class FakeInvoker:
    """
    Model invoker double.

    responses maps an agent's system prompt to either a string or an
    exception instance to raise. Every call is recorded.
    """

    def __init__(self, responses: Optional[Dict[str, object]] = None, default: str = "ok"):
        self.responses = responses or {}
        self.default = default
        self.calls: List[dict] = []

    async def invoke(self, system_prompt, user_input, credentials=None, provider_hint=None):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_input": user_input,
            "credentials": credentials,
            "provider_hint": provider_hint,
        })
        response = self.responses.get(system_prompt, self.default)
        if isinstance(response, Exception):
            raise response
        return response


def make_agent(agent_id: str, name: Optional[str] = None, role=AgentRole.ANALYST, **kwargs) -> Agent:
    return Agent(
        id=agent_id,
        name=name or agent_id.title(),
        system_prompt=kwargs.pop("system_prompt", f"prompt for {agent_id}"),
        role=role,
        **kwargs,
    )


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def storage():
    return InMemoryRegistryStorage()


@pytest.fixture
def registry(storage):
    """Initialized registry over in-memory storage, built-in presets only."""
    registry = AgentRegistry(storage)
    run(registry.initialize())
    return registry
