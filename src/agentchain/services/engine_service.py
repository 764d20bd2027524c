"""
Engine Service

Main composite service that wires storage, registry, model invoker,
orchestrator and profile service together.
Singleton pattern - one instance per process.
"""
import logging
from typing import Optional

from ..config import Config
from ..llm.credentials import CredentialStore
from ..llm.invoker import ModelInvoker
from ..presets.source import PresetManifestSource
from ..storage.base import BaseRegistryStorage
from ..storage.file_storage import FileRegistryStorage
from ..storage.postgres_storage import PostgresRegistryStorage
from .orchestrator import ChainOrchestrator
from .profile_service import ProfileService
from .registry_service import AgentRegistry

logger = logging.getLogger("agentchain.services.engine")

# Singleton instance
_engine_service: Optional["EngineService"] = None


def create_storage() -> BaseRegistryStorage:
    """Storage backend selected by Config.STORAGE_BACKEND"""
    if Config.STORAGE_BACKEND == "postgres":
        return PostgresRegistryStorage(Config.get_postgres_dsn(), registry_key=Config.REGISTRY_KEY)
    if Config.STORAGE_BACKEND != "file":
        logger.warning(f"Unknown STORAGE_BACKEND '{Config.STORAGE_BACKEND}', falling back to file")
    return FileRegistryStorage(Config.get_registry_path())


class EngineService:
    """
    Composite engine service.

    Manages:
    - Registry storage and preset source
    - Agent registry and chain orchestrator
    - Credentials and profile export/import
    """

    def __init__(
        self,
        storage: Optional[BaseRegistryStorage] = None,
        preset_source: Optional[PresetManifestSource] = None,
        invoker=None,
        credential_store: Optional[CredentialStore] = None,
    ):
        self.storage = storage if storage is not None else create_storage()
        self.preset_source = preset_source if preset_source is not None else PresetManifestSource(
            url=Config.PRESET_MANIFEST_URL or None,
            timeout=Config.PRESET_FETCH_TIMEOUT,
        )
        # An empty CredentialStore is falsy
        self.credential_store = credential_store if credential_store is not None else CredentialStore.from_env()
        self.invoker = invoker if invoker is not None else ModelInvoker.from_config(self.credential_store)

        self.registry = AgentRegistry(self.storage, self.preset_source)
        self.orchestrator = ChainOrchestrator(self.registry, self.invoker)
        self.profile_service = ProfileService(self.registry, self.credential_store)

        self._initialized = False
        logger.info(f"EngineService created (storage={self.storage.name})")

    async def initialize(self):
        """Bootstrap the registry and the common chains"""
        if self._initialized:
            logger.info("EngineService already initialized")
            return

        logger.info("Initializing EngineService...")
        await self.registry.initialize()
        await self.orchestrator.initialize_common_chains()

        self._initialized = True
        logger.info("EngineService initialized successfully")

    async def close(self):
        logger.info("Closing EngineService...")
        self._initialized = False
        logger.info("EngineService closed")

    @property
    def is_initialized(self) -> bool:
        """Check if service is initialized"""
        return self._initialized

    @classmethod
    def get_instance(cls) -> "EngineService":
        """Get singleton instance"""
        return get_engine_service()


def get_engine_service() -> EngineService:
    """Get or create engine service singleton"""
    global _engine_service
    if _engine_service is None:
        _engine_service = EngineService()
    return _engine_service


def set_engine_service(service: Optional[EngineService]):
    """Replace the singleton (tests and embedding applications)"""
    global _engine_service
    _engine_service = service


async def init_engine_service() -> EngineService:
    """Initialize and return engine service"""
    service = get_engine_service()
    await service.initialize()
    return service
