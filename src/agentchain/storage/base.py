"""
Base Registry Storage

Storage port for the agent registry. A backend stores exactly one
registry document and replaces it whole on every write.
"""
from abc import ABC, abstractmethod
from typing import Optional

from ..models.snapshot import RegistrySnapshot


class BaseRegistryStorage(ABC):
    """
    Abstract base class for registry storage backends.

    Implementations:
    - FileRegistryStorage: JSON file under the application data directory
    - PostgresRegistryStorage: JSONB row in PostgreSQL

    Backends hold no open handle between calls.
    """

    name: str = "base"

    @abstractmethod
    async def read(self) -> Optional[RegistrySnapshot]:
        """
        Read the stored registry document.

        Returns:
            Parsed snapshot, or None if nothing has been stored yet

        Raises:
            RegistryDocumentError: If the stored document is malformed
        """
        pass

    @abstractmethod
    async def write(self, snapshot: RegistrySnapshot) -> None:
        """Replace the stored registry document with snapshot"""
        pass
