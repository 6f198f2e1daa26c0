"""Row and value conversions shared by the SQLite repositories."""

from __future__ import annotations

import sqlite3
import uuid
from datetime import UTC, date, datetime
from typing import Any


def generate_uuid() -> str:
    """New record ID (UUID4 text)."""
    return str(uuid.uuid4())


def now_iso() -> str:
    """Current UTC timestamp as stored in ``created_at``/``completed_at``/``earned_at``."""
    return datetime.now(UTC).isoformat()


def row_to_dict(row: sqlite3.Row) -> dict[str, Any]:
    """Column name to value mapping, ready for ``Model(**...)``.

    SQLite hands back INTEGER flags and TEXT dates; the Pydantic models
    coerce them (``is_active`` 0/1 to bool, ``date`` text to a date).
    """
    return {key: row[key] for key in row.keys()}


def date_to_text(value: date) -> str:
    """Calendar date as the ``YYYY-MM-DD`` text kept in the ``date`` column."""
    return value.isoformat()
