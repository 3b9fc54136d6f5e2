"""Schema creation and upgrades for the tsk database.

Migrations are plain .sql files applied in filename order and recorded in
the schema_migrations table. Databases created before a column existed are
patched up by ensure_columns before the migrations run.
"""

import sqlite3
from pathlib import Path
from typing import List

from logger import get_logger

logger = get_logger()

# Columns added after the first release, as (table, column, definition).
# SQLite only allows ADD COLUMN with a REFERENCES clause when the default is NULL.
UPGRADE_COLUMNS = [
    ("tasks", "description", "TEXT"),
    ("tasks", "parent_id", "INTEGER REFERENCES tasks(id) ON DELETE CASCADE"),
    ("tasks", "completed", "BOOLEAN NOT NULL DEFAULT 0"),
]


def init_schema_migrations_table(conn):
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            migration_file TEXT PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    conn.commit()


def get_applied_migrations(conn):
    cursor = conn.execute(
        "SELECT migration_file FROM schema_migrations ORDER BY migration_file"
    )
    return {row[0] for row in cursor.fetchall()}


def get_available_migrations(migrations_dir: Path) -> List[str]:
    if not migrations_dir.exists():
        return []

    return sorted(file_path.name for file_path in migrations_dir.glob("*.sql"))


def apply_migration(conn, migrations_dir: Path, migration_file: str):
    with open(migrations_dir / migration_file, "r") as f:
        sql = f.read()

    try:
        conn.executescript(sql)
        conn.execute(
            "INSERT INTO schema_migrations (migration_file) VALUES (?)",
            (migration_file,),
        )
        conn.commit()
        logger.info(f"Applied migration: {migration_file}")
    except Exception as e:
        conn.rollback()
        logger.error(f"Error applying migration {migration_file}: {e}")
        raise


def apply_pending_migrations(conn, migrations_dir: Path) -> List[str]:
    """Apply every migration not yet recorded as applied.

    Returns:
        Names of the migrations applied, in order.
    """
    init_schema_migrations_table(conn)
    applied = get_applied_migrations(conn)
    pending = [
        m for m in get_available_migrations(migrations_dir) if m not in applied
    ]

    for migration in pending:
        apply_migration(conn, migrations_dir, migration)

    return pending


def get_columns(conn, table: str) -> List[str]:
    cursor = conn.execute(f"PRAGMA table_info({table})")
    return [row[1] for row in cursor.fetchall()]


def ensure_columns(conn) -> List[str]:
    """Add columns missing from tables created by older versions.

    Tables that don't exist yet are skipped; the migrations create them.
    A column that can't be added is logged and skipped.

    Returns:
        The "table.column" names that were added.
    """
    added = []
    for table, column, definition in UPGRADE_COLUMNS:
        existing = get_columns(conn, table)
        if not existing or column in existing:
            continue

        try:
            conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {definition}")
            conn.commit()
        except sqlite3.OperationalError as e:
            logger.warning(f"Could not add column {table}.{column}: {e}")
            continue

        logger.info(f"Added missing column {table}.{column}")
        added.append(f"{table}.{column}")

    return added


def init_db(db_manager) -> List[str]:
    """Bring the database schema up to date.

    Args:
        db_manager: Database manager whose database should be initialized.

    Returns:
        Names of the migrations applied.
    """
    with db_manager.connect() as conn:
        ensure_columns(conn)
        return apply_pending_migrations(conn, db_manager.get_migrations_dir())
