"""
Agent Chain Storage Layer

Registry storage backends behind a read()/write() port.
"""
from .base import BaseRegistryStorage
from .file_storage import FileRegistryStorage
from .postgres_storage import PostgresRegistryStorage

__all__ = [
    'BaseRegistryStorage',
    'FileRegistryStorage',
    'PostgresRegistryStorage',
]
