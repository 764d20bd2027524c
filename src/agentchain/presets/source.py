"""
Preset Manifest Source

Fetches a preset manifest document {"agents": [...]} from a remote URL,
or reads the manifest bundled with the package when no URL is set.
"""
import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

import httpx

from ..models.agent import Agent

logger = logging.getLogger("agentchain.presets.source")

BUNDLED_MANIFEST = Path(__file__).parent / "agents.json"


class PresetFetchError(RuntimeError):
    """Raised when a preset manifest cannot be fetched or parsed"""


def parse_manifest(data) -> List[Agent]:
    """
    Parse a manifest document into agents.

    Records that fail validation are skipped with a warning.

    Raises:
        PresetFetchError: If the document has no agents list
    """
    if not isinstance(data, dict) or not isinstance(data.get("agents"), list):
        raise PresetFetchError("Preset manifest must be an object with an 'agents' list")

    agents = []
    for record in data["agents"]:
        try:
            agents.append(Agent.from_dict(record).validate())
        except ValueError as e:
            logger.warning(f"Skipping invalid preset record: {e}")
    return agents


class PresetManifestSource:
    """
    Source of additive preset agents.

    Usage:
        source = PresetManifestSource()                       # bundled file
        source = PresetManifestSource(url="https://.../agents.json")
        agents = await source.fetch()
    """

    def __init__(
        self,
        url: Optional[str] = None,
        path: Union[str, Path, None] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or None
        self.path = Path(path) if path else BUNDLED_MANIFEST
        self.timeout = timeout
        self._transport = transport

    @property
    def location(self) -> str:
        return self.url or str(self.path)

    async def fetch(self) -> List[Agent]:
        """
        Fetch and parse the manifest.

        Raises:
            PresetFetchError: On network, HTTP status, or format errors
        """
        if self.url:
            data = await self._fetch_remote()
        else:
            data = await self._read_bundled()

        agents = parse_manifest(data)
        logger.info(f"Fetched {len(agents)} preset agents from {self.location}")
        return agents

    async def _fetch_remote(self):
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            raise PresetFetchError(f"Failed to fetch presets: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise PresetFetchError(f"Failed to fetch presets: {e}") from e
        except json.JSONDecodeError as e:
            raise PresetFetchError(f"Preset manifest is not valid JSON: {e}") from e

    async def _read_bundled(self):
        try:
            content = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
            return json.loads(content)
        except FileNotFoundError as e:
            raise PresetFetchError(f"Preset manifest not found: {self.path}") from e
        except json.JSONDecodeError as e:
            raise PresetFetchError(f"Preset manifest is not valid JSON: {e}") from e
