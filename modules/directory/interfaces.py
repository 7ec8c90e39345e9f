"""
Directory module interfaces.
"""

from typing import Protocol, runtime_checkable

from modules.profiles.models import Profile, Session


@runtime_checkable
class IDirectoryService(Protocol):
    """
    Interface for browsing the other side of the marketplace.
    """

    async def browse(self, session: Session, query: str = "") -> list[Profile]:
        """
        List profiles of the session's counterpart user type.

        Employees see employers and employers see employees. The full
        result set is fetched on every call, then filtered by query.

        Args:
            session: Caller's session; must carry a profile
            query: Optional filter text

        Returns:
            Matching profiles

        Raises:
            NotSignedInError: If the session has no identity
            ProfileRequiredError: If the session has no profile
        """
        ...
