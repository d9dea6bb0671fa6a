"""Translate Supabase/PostgREST failures into core errors."""

from typing import Any

from postgrest.exceptions import APIError

from nutriplan.errors import StorageError

UNIQUE_VIOLATION = "23505"


def execute(query: Any, action: str) -> Any:
    """Execute a PostgREST query, wrapping API failures in StorageError."""
    try:
        return query.execute()
    except APIError as exc:
        raise StorageError(f"Failed to {action}: {exc.message}") from exc


def is_unique_violation(exc: APIError) -> bool:
    return exc.code == UNIQUE_VIOLATION
