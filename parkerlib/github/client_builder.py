"""A builder for configuring GitHub API clients."""

from __future__ import annotations

import logging
import os
from urllib.parse import urlsplit

import httpx

from parkerlib.github.auth import Auth
from parkerlib.github.client import DEFAULT_BASE_URL, Client
from parkerlib.github.errors import InvalidTokenEnvVarError, UrlParseError

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "NP_GITHUB_TOKEN"


class ClientBuilder:
    """Configures and builds a Client; by default unauthenticated against the public API."""

    def __init__(self) -> None:
        self._base_url = DEFAULT_BASE_URL
        self._auth = Auth()
        self._ignore_certs = False
        self._transport: httpx.BaseTransport | None = None

    def base_url(self, url: str) -> ClientBuilder:
        """Use the given base URL, raising UrlParseError if it is not an absolute URL."""
        url = str(url)
        try:
            parts = urlsplit(url)
        except ValueError as exc:
            raise UrlParseError(str(exc)) from exc
        if not parts.scheme or not parts.netloc:
            raise UrlParseError(f"invalid base URL {url!r}")
        self._base_url = url
        return self

    def auth(self, auth: Auth) -> ClientBuilder:
        """Use the given authentication."""
        self._auth = auth
        return self

    def ignore_certs(self, ignore_certs: bool) -> ClientBuilder:
        """Skip validation of TLS certificates."""
        self._ignore_certs = ignore_certs
        return self

    def transport(self, transport: httpx.BaseTransport | None) -> ClientBuilder:
        """Use the given HTTP transport."""
        self._transport = transport
        return self

    def personal_access_token_from_env(self) -> ClientBuilder:
        """Load an optional personal access token from the NP_GITHUB_TOKEN variable."""
        return self._personal_access_token_from_env_var(TOKEN_ENV_VAR)

    def _personal_access_token_from_env_var(self, name: str) -> ClientBuilder:
        value = os.environ.get(name)
        if value is None:
            logger.debug("No GitHub access token provided; using unauthenticated API access.")
            return self
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise InvalidTokenEnvVarError(name) from None
        logger.debug("Using GitHub personal access token from %s environment variable", name)
        self._auth = Auth.personal_access_token(value)
        return self

    def build(self) -> Client:
        """Build the configured client."""
        return Client(self._base_url, self._auth, self._ignore_certs, self._transport)