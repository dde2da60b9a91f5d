from typing import Optional, Protocol


class SessionStorePort(Protocol):
    async def create(self, account_id: str) -> str:
        """Open a session and return its opaque bearer token."""

    async def get(self, token: str) -> Optional[str]:
        """Account id for a live session, None once expired or revoked."""

    async def revoke(self, token: str) -> None:
        """End the session; unknown tokens are ignored."""
