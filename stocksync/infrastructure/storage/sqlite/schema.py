"""Local cache schema."""

import aiosqlite

SCHEMA_VERSION = "001"

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS local_collections (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT NOT NULL DEFAULT (datetime('now'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS schema_migrations (
        version TEXT PRIMARY KEY,
        applied_at TEXT NOT NULL DEFAULT (datetime('now'))
    )
    """,
)


async def ensure_schema(conn: aiosqlite.Connection) -> None:
    """Create cache tables if missing and record the schema version."""
    for statement in SCHEMA_STATEMENTS:
        await conn.execute(statement)
    await conn.execute(
        "INSERT OR IGNORE INTO schema_migrations (version) VALUES (?)",
        (SCHEMA_VERSION,),
    )
    await conn.commit()
