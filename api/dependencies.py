"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.profiles.interfaces import IProfileService
    from modules.directory.interfaces import IDirectoryService
    from modules.catalog.interfaces import ICatalogService
    from modules.chat.service import ChatService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._profile_service: "IProfileService | None" = None
        self._directory_service: "IDirectoryService | None" = None
        self._catalog_service: "ICatalogService | None" = None
        self._chat_service: "ChatService | None" = None

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService()
        return self._auth_service

    @property
    def profiles(self) -> "IProfileService":
        """Get the profile service instance."""
        if self._profile_service is None:
            from modules.profiles.service import ProfileService
            self._profile_service = ProfileService()
        return self._profile_service

    @property
    def directory(self) -> "IDirectoryService":
        """Get the directory service instance."""
        if self._directory_service is None:
            from modules.directory.service import DirectoryService
            self._directory_service = DirectoryService(self.profiles)
        return self._directory_service

    @property
    def catalog(self) -> "ICatalogService":
        """Get the catalog service instance."""
        if self._catalog_service is None:
            from modules.catalog.service import CatalogService
            self._catalog_service = CatalogService()
        return self._catalog_service

    async def chat(self) -> "ChatService":
        """
        Get the chat service instance.

        Async because the Realtime-capable Supabase client is created
        with an await.
        """
        if self._chat_service is None:
            from modules.chat.service import ChatService
            from modules.chat.repository import MessageRepository
            from shared.database import get_async_supabase_client
            self._chat_service = ChatService(
                store=MessageRepository(await get_async_supabase_client()),
            )
        return self._chat_service

    async def aclose(self) -> None:
        """Release long-lived resources (open chat streams)."""
        if self._chat_service is not None:
            await self._chat_service.aclose()

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._profile_service = None
        self._directory_service = None
        self._catalog_service = None
        self._chat_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_profile_service() -> "IProfileService":
    """FastAPI dependency for profile service."""
    return get_container().profiles


def get_directory_service() -> "IDirectoryService":
    """FastAPI dependency for directory service."""
    return get_container().directory


def get_catalog_service() -> "ICatalogService":
    """FastAPI dependency for catalog service."""
    return get_container().catalog


async def get_chat_service() -> "ChatService":
    """FastAPI dependency for chat service."""
    return await get_container().chat()
