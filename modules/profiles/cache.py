"""
Local profile cache.

Keeps the last loaded profile in one JSON file so a restarted client can
show a provisional profile before the network round-trip completes. The
cache is never authoritative: every successful fetch overwrites it.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .models import Profile

logger = logging.getLogger(__name__)


class ProfileCache:
    """Single-slot, file-backed cache of the last session's profile."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[Profile]:
        """Return the cached profile, or None if absent or unreadable."""
        if not self._path.exists():
            return None
        try:
            return Profile.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, PydanticValidationError) as e:
            logger.warning(f"Ignoring unreadable profile cache {self._path}: {e}")
            return None

    def save(self, profile: Profile) -> None:
        """Overwrite the cache with a profile, stored as a flat attribute map."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(profile.model_dump_json(), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not write profile cache {self._path}: {e}")

    def clear(self) -> None:
        """Remove the cached profile entirely."""
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove profile cache {self._path}: {e}")
