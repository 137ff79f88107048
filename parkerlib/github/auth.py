"""Authentication modes for the GitHub REST API."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Auth:
    """Unauthenticated access, or access with a personal access token."""

    token: str | None = field(default=None, repr=False)

    @classmethod
    def unauthenticated(cls) -> Auth:
        """No authentication."""
        return cls()

    @classmethod
    def personal_access_token(cls, token: str) -> Auth:
        """Authenticate with a personal access token."""
        return cls(token)

    def is_authenticated(self) -> bool:
        """Return whether a token is used."""
        return self.token is not None

    def __repr__(self) -> str:
        if self.token is None:
            return "Auth(unauthenticated)"
        return "Auth(personal_access_token=***)"