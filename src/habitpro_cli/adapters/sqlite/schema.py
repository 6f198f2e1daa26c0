"""Database schema definitions for the local SQLite vault.

Dates are stored as ``YYYY-MM-DD`` text and timestamps as ISO-8601 text so
that rows round-trip exactly through the Pydantic models.
"""

from __future__ import annotations

# Tasks table - recurring habit definitions
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT,
    time TEXT NOT NULL,
    frequency TEXT NOT NULL,
    day_of_month INTEGER,
    month_of_year INTEGER,
    day_of_year INTEGER,
    is_active BOOLEAN NOT NULL DEFAULT 1,
    created_at DATETIME NOT NULL
)
"""

# Completions table - at most one row per (task, date)
CREATE_COMPLETIONS_TABLE = """
CREATE TABLE IF NOT EXISTS completions (
    id TEXT PRIMARY KEY,
    task_id TEXT NOT NULL,
    date TEXT NOT NULL,
    completed_at DATETIME NOT NULL,
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE,
    UNIQUE(task_id, date)
)
"""

# Achievements table - at most one row per (task, milestone type)
CREATE_ACHIEVEMENTS_TABLE = """
CREATE TABLE IF NOT EXISTS achievements (
    id TEXT PRIMARY KEY,
    task_id TEXT NOT NULL,
    type TEXT NOT NULL,
    streak_count INTEGER NOT NULL,
    earned_at DATETIME NOT NULL,
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE,
    UNIQUE(task_id, type)
)
"""

# Indexes for performance
CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_active ON tasks(is_active)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_frequency ON tasks(frequency)",
]

CREATE_COMPLETION_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_completions_task ON completions(task_id)",
    "CREATE INDEX IF NOT EXISTS idx_completions_date ON completions(date)",
]

CREATE_ACHIEVEMENT_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_achievements_task ON achievements(task_id)",
]

# All table creation statements in order
ALL_TABLES = [
    CREATE_TASKS_TABLE,
    CREATE_COMPLETIONS_TABLE,
    CREATE_ACHIEVEMENTS_TABLE,
]

# All index creation statements
ALL_INDEXES = (
    CREATE_TASK_INDEXES + CREATE_COMPLETION_INDEXES + CREATE_ACHIEVEMENT_INDEXES
)


def initialize_schema(connection) -> None:
    """Create all tables and indexes on a bare connection.

    Used for in-memory databases in tests; file vaults go through the
    migration runner instead.

    Args:
        connection: sqlite3.Connection object
    """
    cursor = connection.cursor()

    for create_statement in ALL_TABLES:
        cursor.execute(create_statement)

    for index_statement in ALL_INDEXES:
        cursor.execute(index_statement)

    connection.commit()
