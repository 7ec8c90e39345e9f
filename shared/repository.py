"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the conversion of provider errors into
BridgeIt exceptions, so nothing above the repository sees httpx or
PostgREST error types.
"""

from typing import Any, Awaitable, Callable, TypeVar, Generic

import httpx
from supabase import PostgrestAPIError

from .exceptions import (
    AuthorizationError,
    BridgeItError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


T = TypeVar("T")

# Postgres insufficient_privilege, and PostgREST's JWT rejection codes
PERMISSION_ERROR_CODES = {"42501", "PGRST301", "PGRST302"}
# foreign_key_violation: the referenced row (a profile) does not exist
MISSING_REFERENCE_CODES = {"23503"}
# invalid_text_representation, check_violation, not_null_violation, string_data_right_truncation
INVALID_INPUT_CODES = {"22P02", "23514", "23502", "22001"}


def convert_store_error(error: Exception) -> BridgeItError:
    """
    Convert a Supabase/PostgREST/transport error into a BridgeIt error.

    Permission failures become AuthorizationError, a missing referenced row
    becomes NotFoundError and malformed input becomes ValidationError;
    repeating any of these cannot succeed. Everything else is treated as a
    transient ExternalServiceError that the user may retry by repeating
    the action.
    """
    if isinstance(error, PostgrestAPIError):
        details = {"store_code": error.code}
        if error.code in PERMISSION_ERROR_CODES:
            return AuthorizationError(
                error.message or "Permission denied by the data store",
                code="STORE_PERMISSION_DENIED",
                details=details,
            )
        if error.code in MISSING_REFERENCE_CODES:
            return NotFoundError(
                "A referenced record does not exist",
                code="STORE_REFERENCE_NOT_FOUND",
                details=details,
            )
        if error.code in INVALID_INPUT_CODES:
            return ValidationError(
                error.message or "The data store rejected the input",
                code="STORE_INVALID_INPUT",
                details=details,
            )
        return ExternalServiceError(
            error.message or "The data store rejected the request",
            service="supabase",
            code="STORE_REJECTED",
            details=details,
        )
    return ExternalServiceError(
        f"Supabase request failed: {error}",
        service="supabase",
        code="STORE_UNAVAILABLE",
    )


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _execute() / _aexecute() which run a query and convert errors

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ProfileRepository(BaseRepository[Profile]):
            def get_by_id(self, user_id: str) -> Optional[Profile]:
                result = self._execute(
                    lambda: self._db.table("profiles").select("*").eq("id", user_id).execute()
                )
                if not result.data:
                    return None
                return self._map_to_profile(result.data[0])
    """

    def __init__(self, db: Any) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance (sync or async) for database operations.
        """
        self._db = db

    def _execute(self, query: Callable[[], Any]) -> Any:
        """Run a synchronous query, converting provider errors."""
        try:
            return query()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise convert_store_error(e) from e

    async def _aexecute(self, query: Callable[[], Awaitable[Any]]) -> Any:
        """Run an async query, converting provider errors."""
        try:
            return await query()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise convert_store_error(e) from e
