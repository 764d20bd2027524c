"""
File Registry Storage

Stores the registry as one pretty-printed JSON document under the
application data directory.
"""
import asyncio
import logging
import os
from pathlib import Path
from typing import Optional, Union

from .base import BaseRegistryStorage
from ..models.snapshot import RegistrySnapshot

logger = logging.getLogger("agentchain.storage.file")


class FileRegistryStorage(BaseRegistryStorage):
    """
    Filesystem backend.

    Blocking file I/O runs in a worker thread. Writes go to a temporary
    sibling file that then replaces the document, so a reader never
    sees a half-written snapshot.
    """

    name = "file"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def exists(self) -> bool:
        return await asyncio.to_thread(self.path.exists)

    async def create_dir(self):
        """Create the application data directory if missing"""
        await asyncio.to_thread(self.path.parent.mkdir, parents=True, exist_ok=True)

    async def read_text(self) -> str:
        return await asyncio.to_thread(self.path.read_text, encoding="utf-8")

    async def write_text(self, text: str):
        await asyncio.to_thread(self._replace_text, text)

    def _replace_text(self, text: str):
        tmp_path = self.path.with_name(f".{self.path.name}.{os.getpid()}.tmp")
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, self.path)

    async def read(self) -> Optional[RegistrySnapshot]:
        if not await self.exists():
            logger.info(f"No registry document at {self.path}")
            return None

        content = await self.read_text()
        snapshot = RegistrySnapshot.from_json(content)
        logger.info(
            f"Loaded {len(snapshot.agents)} agents and {len(snapshot.chains)} chains from {self.path}"
        )
        return snapshot

    async def write(self, snapshot: RegistrySnapshot) -> None:
        await self.create_dir()
        await self.write_text(snapshot.to_json())
        logger.debug(f"Registry saved to {self.path}")
