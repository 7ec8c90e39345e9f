"""
Profile repository for database access.

Encapsulates all Supabase queries and data mapping for the profiles table.
"""

from datetime import datetime, timezone
from typing import Optional, Any

from supabase import Client

from shared.config import get_settings
from shared.repository import BaseRepository
from .models import Profile, ProfileFields, ProfileUpdate, UserType


class ProfileRepository(BaseRepository[Profile]):
    """
    Repository for profile data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for only updating the caller's own row.
    """

    def __init__(self, db: Client, table: Optional[str] = None) -> None:
        super().__init__(db)
        self._table = table or get_settings().profiles_table

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        """
        Get a profile by its owner's identity ID.

        Returns:
            Profile, or None if not found.
        """
        result = self._execute(
            lambda: self._db.table(self._table).select("*").eq("id", user_id).execute()
        )
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    def create(self, user_id: str, fields: ProfileFields) -> Profile:
        """
        Create the profile row for a freshly signed-up identity.

        Args:
            user_id: Identity ID issued by auth.
            fields: Questionnaire answers.

        Returns:
            Created Profile with timestamps.
        """
        now = datetime.now(timezone.utc).isoformat()
        data: dict[str, Any] = {
            "id": user_id,
            **fields.model_dump(mode="json"),
            "created_at": now,
            "updated_at": now,
        }
        result = self._execute(lambda: self._db.table(self._table).insert(data).execute())
        return self._map_to_profile(result.data[0])

    def update(self, user_id: str, changes: ProfileUpdate) -> None:
        """
        Merge the set fields of an update into the stored profile.

        Args:
            user_id: Owner identity ID.
            changes: Fields to overwrite; unset fields are left as they are.
        """
        data: dict[str, Any] = changes.model_dump(exclude_unset=True, exclude_none=True)
        data["updated_at"] = datetime.now(timezone.utc).isoformat()
        self._execute(
            lambda: self._db.table(self._table).update(data).eq("id", user_id).execute()
        )

    def list_by_user_type(self, user_type: UserType) -> list[Profile]:
        """
        List every profile of one user type.

        No pagination: the directory materializes the full result set.
        """
        result = self._execute(
            lambda: self._db.table(self._table)
            .select("*")
            .eq("user_type", user_type.value)
            .execute()
        )
        return [self._map_to_profile(row) for row in result.data]

    def _map_to_profile(self, data: dict) -> Profile:
        """Map database row to Profile model."""
        return Profile(
            id=str(data["id"]),
            user_type=UserType(data.get("user_type", UserType.EMPLOYEE.value)),
            role=data["role"],
            field=data["field"],
            experience=str(data["experience"]),
            country=data["country"],
            citizenship=data["citizenship"],
            gender=data["gender"],
            bio=data.get("bio") or "",
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


# Module-level instance getter
_repository_instance: Optional[ProfileRepository] = None


def get_profile_repository() -> ProfileRepository:
    """Get the profile repository singleton."""
    global _repository_instance
    if _repository_instance is None:
        from shared.database import get_supabase_client
        _repository_instance = ProfileRepository(get_supabase_client())
    return _repository_instance


def reset_profile_repository() -> None:
    """Reset the profile repository singleton (for testing)."""
    global _repository_instance
    _repository_instance = None
