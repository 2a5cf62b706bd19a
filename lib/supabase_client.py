# =============================================================================
# lib/supabase_client.py - Supabase Client Factory and Query Helpers
# =============================================================================
# Builds the Supabase client from an explicit Settings object and provides
# the two boundary helpers every service goes through:
# - execute(): run a PostgREST query, turning failures into PersistenceError
# - decode_rows()/decode_row(): validate raw rows into typed models
#
# Usage:
#   from lib.supabase_client import create_supabase_client, execute
#   client = create_supabase_client(settings)
#   response = execute(client.table("categories").select("*"), "list_categories")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, TypeVar

from postgrest.exceptions import APIError
from pydantic import BaseModel, ValidationError
from supabase import Client, create_client

from app.config import Settings
from app.exceptions import PersistenceError

# Set up logging for this module
logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Postgres error codes that mean "the caller sent a conflicting reference"
# 23505 unique_violation, 23503 foreign_key_violation
CONFLICT_CODES = {"23505", "23503"}

# Postgres error codes that mean "the caller sent a malformed value"
# 22P02 invalid_text_representation (e.g. a non-UUID id), 23514 check_violation
INVALID_INPUT_CODES = {"22P02", "23514"}


def create_supabase_client(settings: Settings) -> Client:
    """
    Create a Supabase client for server-side operations.

    Uses the service_role key which bypasses Row Level Security (RLS);
    admin routes are gated by JWT verification in app/auth instead.

    Raises:
        PersistenceError: If the client cannot be created
    """
    try:
        client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
    except Exception as e:
        raise PersistenceError(
            message=f"Failed to create Supabase client: {e}",
            operation="create_client",
            details={"hint": "Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"},
        ) from e

    logger.info("Supabase client initialized successfully")
    return client


def execute(query: Any, operation: str, **details: Any) -> Any:
    """
    Execute a PostgREST query builder.

    Args:
        query: A query builder (select/insert/update/delete chain)
        operation: Short name used in logs and error details
        **details: Extra context attached to the error

    Returns:
        The APIResponse (``.data`` is always a list for non-single queries)

    Raises:
        PersistenceError: 409 for unique/foreign-key violations, 400 for
            malformed values, 500 otherwise
    """
    try:
        return query.execute()
    except APIError as e:
        if e.code in CONFLICT_CODES:
            status_code = 409
        elif e.code in INVALID_INPUT_CODES:
            status_code = 400
        else:
            status_code = 500
        logger.error(f"{operation} rejected by store: {e.message} (code={e.code})")
        raise PersistenceError(
            message=e.message or str(e),
            operation=operation,
            status_code=status_code,
            details={"db_code": e.code, **details},
        ) from e
    except Exception as e:
        logger.error(f"{operation} failed: {e}")
        raise PersistenceError(
            message=str(e),
            operation=operation,
            details=details,
        ) from e


def decode_rows(model: type[ModelT], rows: Any, operation: str) -> list[ModelT]:
    """
    Validate raw store rows into typed models.

    Raises:
        PersistenceError: If the store returned an unexpected shape
    """
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise PersistenceError(
            message=f"Expected a list of rows, got {type(rows).__name__}",
            operation=operation,
        )
    try:
        return [model.model_validate(row) for row in rows]
    except ValidationError as e:
        raise PersistenceError(
            message=f"Unexpected {model.__name__} row shape: {e.error_count()} error(s)",
            operation=operation,
            details={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
        ) from e


def decode_row(model: type[ModelT], rows: Any, operation: str) -> ModelT | None:
    """Decode the first row of a response, or None when there are no rows."""
    decoded = decode_rows(model, rows, operation)
    return decoded[0] if decoded else None
