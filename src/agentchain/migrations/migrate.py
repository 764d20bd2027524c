"""
Database Migration Runner

Simple migration runner for the Postgres registry backend.

Usage:
    python -m agentchain.migrations.migrate
"""
import asyncio
import sys
from pathlib import Path

import asyncpg

from ..config import Config


async def run_migrations(dsn: str = None) -> int:
    """
    Run all SQL migrations in order.

    Returns:
        Number of migrations that failed
    """
    migrations_dir = Path(__file__).parent
    dsn = dsn or Config.get_postgres_dsn()

    print("Connecting to database...")
    conn = await asyncpg.connect(dsn)
    print("Connected successfully!")

    failed = 0
    try:
        for sql_file in sorted(migrations_dir.glob("*.sql")):
            print(f"\nRunning migration: {sql_file.name}")
            sql = sql_file.read_text(encoding="utf-8")

            try:
                await conn.execute(sql)
                print(f"  ✓ {sql_file.name} completed")
            except asyncpg.PostgresError as e:
                failed += 1
                print(f"  ✗ Error in {sql_file.name}: {e}")
                # Continue with other migrations
    finally:
        await conn.close()

    print("\nMigrations complete!")
    return failed


def main():
    try:
        failed = asyncio.run(run_migrations())
    except (OSError, asyncpg.PostgresError) as e:
        print(f"Connection failed: {e}")
        sys.exit(1)
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
