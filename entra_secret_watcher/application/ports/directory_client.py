"""Port for the identity directory - driven/secondary port."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True, slots=True)
class CredentialItem:
    """A password or key credential as listed by the directory."""

    display_name: str | None
    expires_on: datetime | None


@dataclass(frozen=True, slots=True)
class ApplicationRecord:
    """An application registration with its attached credentials."""

    display_name: str | None
    app_id: str | None
    password_credentials: tuple[CredentialItem, ...] = ()
    key_credentials: tuple[CredentialItem, ...] = ()


@dataclass(frozen=True, slots=True)
class ApplicationPage:
    """One page of applications plus the cursor for the next page."""

    applications: tuple[ApplicationRecord, ...] = field(default_factory=tuple)
    next_page_token: str | None = None


class DirectoryClient(Protocol):
    """
    Port for listing application registrations from an identity directory.

    This is a driven (secondary) port. Implementations return one page per
    call; traversal is driven by the caller.
    """

    async def list_applications(self, page_token: str | None = None) -> ApplicationPage:
        """
        Retrieve one page of application registrations.

        Args:
            page_token: Continuation cursor from the previous page, or None
                for the first page.

        Returns:
            The page of applications and the next continuation cursor.
        """
        ...
