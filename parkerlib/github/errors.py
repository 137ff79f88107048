"""Errors raised when talking to the GitHub REST API."""

from __future__ import annotations

import json
from datetime import timedelta

from parkerlib.github.models import ClientError


class GitHubError(Exception):
    """Base class of all GitHub API errors."""


class RateLimitedError(GitHubError):
    """The request was rate-limited; ``wait`` is how long to wait, if known."""

    def __init__(self, client_error: ClientError, wait: timedelta | None = None) -> None:
        super().__init__(f"request was rate-limited: {client_error.message}")
        self.client_error = client_error
        self.wait = wait


class UrlBaseError(GitHubError):
    """The base URL cannot be used as a base for API paths."""

    def __init__(self, url: str) -> None:
        super().__init__(f"invalid base url: {url}")
        self.url = url


class UrlParseError(GitHubError):
    """A URL could not be parsed."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"error parsing URL: {detail}")
        self.detail = detail


class UrlSlashError(GitHubError):
    """A URL path component contained a slash."""

    def __init__(self, component: str) -> None:
        quoted = json.dumps(component, ensure_ascii=False)
        super().__init__(f"error building URL: component {quoted} contains a slash")
        self.component = component


class RequestError(GitHubError):
    """Making an HTTP request failed."""

    def __init__(self, detail: object) -> None:
        super().__init__(f"error making request: {detail}")
        self.detail = detail


class InvalidTokenEnvVarError(GitHubError):
    """The token environment variable held an ill-formed value."""

    def __init__(self, var_name: str) -> None:
        super().__init__(
            f"error loading token: ill-formed value of {var_name} environment variable"
        )
        self.var_name = var_name