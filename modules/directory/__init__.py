"""
Directory module.

Lists profiles of the counterpart user type, with free-text filtering.

Public API:
- IDirectoryService: Interface for directory queries
- filter_profiles: Case-insensitive text filter over profiles
"""

from .interfaces import IDirectoryService
from .filters import filter_profiles, SEARCHABLE_FIELDS

__all__ = [
    "IDirectoryService",
    "filter_profiles",
    "SEARCHABLE_FIELDS",
]
