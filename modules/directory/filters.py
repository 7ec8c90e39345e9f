"""
Text filtering for directory results.
"""

from typing import Iterable

from modules.profiles.models import Profile

SEARCHABLE_FIELDS = ("role", "field", "country", "bio")


def filter_profiles(profiles: Iterable[Profile], query: str = "") -> list[Profile]:
    """
    Keep profiles where any searchable field contains the query.

    Matching is a case-insensitive substring test on the query as typed:
    spaces are part of the needle. An empty query keeps everything.
    Input order is preserved.
    """
    needle = query.lower()
    if not needle:
        return list(profiles)
    return [
        profile
        for profile in profiles
        if any(needle in (getattr(profile, name) or "").lower() for name in SEARCHABLE_FIELDS)
    ]
