"""
Postgres Registry Storage

Stores the registry document as a JSONB row keyed by registry name.
"""
import asyncio
import logging
from typing import Optional

import asyncpg

from .base import BaseRegistryStorage
from ..models.snapshot import RegistrySnapshot

logger = logging.getLogger("agentchain.storage.postgres")

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS agent_registry_documents (
        registry_key TEXT PRIMARY KEY,
        document JSONB NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""


class PostgresRegistryStorage(BaseRegistryStorage):
    """
    PostgreSQL backend.

    Opens one connection per read/write and closes it afterwards;
    no pool is held between calls.
    """

    name = "postgres"

    def __init__(
        self,
        postgres_dsn: str = "postgresql://postgres@localhost/agentchain",
        registry_key: str = "default",
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        self.pg_dsn = postgres_dsn
        self.registry_key = registry_key
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._schema_ready = False

    async def _connect(self) -> asyncpg.Connection:
        """Open a connection with retries"""
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                conn = await asyncpg.connect(self.pg_dsn, command_timeout=60)
                if not self._schema_ready:
                    try:
                        await conn.execute(SCHEMA_SQL)
                    except Exception:
                        await conn.close()
                        raise
                    self._schema_ready = True
                return conn
            except (OSError, asyncpg.PostgresError) as e:
                last_error = e
                logger.error(f"PostgreSQL connection failed (attempt {attempt}/{self.max_retries}): {e}")
                if attempt < self.max_retries:
                    await asyncio.sleep(self.retry_delay)

        raise ConnectionError(f"Failed to connect to PostgreSQL after {self.max_retries} attempts: {last_error}")

    async def read(self) -> Optional[RegistrySnapshot]:
        conn = await self._connect()
        try:
            document = await conn.fetchval(
                "SELECT document FROM agent_registry_documents WHERE registry_key = $1",
                self.registry_key,
            )
        finally:
            await conn.close()

        if document is None:
            logger.info(f"No registry document for key '{self.registry_key}'")
            return None

        # asyncpg returns JSONB as text unless a codec is registered
        if isinstance(document, str):
            return RegistrySnapshot.from_json(document)
        return RegistrySnapshot.from_dict(document)

    async def write(self, snapshot: RegistrySnapshot) -> None:
        conn = await self._connect()
        try:
            await conn.execute(
                """
                INSERT INTO agent_registry_documents (registry_key, document, updated_at)
                VALUES ($1, $2::jsonb, NOW())
                ON CONFLICT (registry_key) DO UPDATE
                SET document = EXCLUDED.document, updated_at = EXCLUDED.updated_at
                """,
                self.registry_key,
                snapshot.to_json(),
            )
        finally:
            await conn.close()
        logger.debug(f"Registry saved to PostgreSQL (key={self.registry_key})")
