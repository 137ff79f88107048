"""Listing repositories that belong to GitHub users and organizations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

import httpx

from parkerlib.github.client import DEFAULT_BASE_URL, Client
from parkerlib.github.client_builder import ClientBuilder
from parkerlib.github.errors import RateLimitedError
from parkerlib.github.models import OrganizationShort, Repository

logger = logging.getLogger(__name__)


class _Progress(Protocol):
    def inc(self, delta: int) -> None: ...


class RepoType(Enum):
    """Which kinds of repositories to select."""

    ALL = "all"
    SOURCE = "source"
    FORK = "fork"

    def matches(self, repo: Repository) -> bool:
        """Return whether ``repo`` is selected."""
        if self is RepoType.SOURCE:
            return not repo.fork
        if self is RepoType.FORK:
            return repo.fork
        return True


@dataclass
class RepoSpecifiers:
    """A set of GitHub user and organization names."""

    user: list[str] = field(default_factory=list)
    organization: list[str] = field(default_factory=list)
    all_organizations: bool = False
    repo_filter: RepoType = RepoType.ALL

    def is_empty(self) -> bool:
        """Return whether nothing is specified."""
        return not self.user and not self.organization and not self.all_organizations


class RepoEnumerator:
    """Lists repositories of users and organizations through a Client."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def enumerate_user_repos(self, username: str) -> list[Repository]:
        """List the accessible repositories of a user."""
        return self.client.get_all(self.client.get_user_repos(username))

    def enumerate_org_repos(self, orgname: str) -> list[Repository]:
        """List the accessible repositories of an organization."""
        return self.client.get_all(self.client.get_org_repos(orgname))

    def enumerate_instance_orgs(self) -> list[OrganizationShort]:
        """List the organizations of the instance."""
        return self.client.get_all(self.client.get_orgs())

    def _selected_urls(
        self, repos: list[Repository], spec: RepoSpecifiers, progress: _Progress | None
    ) -> list[str]:
        selected = [r.clone_url for r in repos if spec.repo_filter.matches(r)]
        if progress is not None:
            progress.inc(len(selected))
        return selected

    def enumerate_repo_urls(
        self, repo_specifiers: RepoSpecifiers, progress: _Progress | None = None
    ) -> list[str]:
        """Return the sorted, deduplicated clone URLs of the specified repositories."""
        urls: list[str] = []
        for username in repo_specifiers.user:
            repos = self.enumerate_user_repos(username)
            urls.extend(self._selected_urls(repos, repo_specifiers, progress))

        instance_orgs = (
            [o.login for o in self.enumerate_instance_orgs()]
            if repo_specifiers.all_organizations
            else []
        )
        for orgname in [*repo_specifiers.organization, *instance_orgs]:
            repos = self.enumerate_org_repos(orgname)
            urls.extend(self._selected_urls(repos, repo_specifiers, progress))

        return sorted(set(urls))


def enumerate_repo_urls(
    repo_specifiers: RepoSpecifiers,
    github_url: str = DEFAULT_BASE_URL,
    ignore_certs: bool = False,
    progress: _Progress | None = None,
    transport: httpx.BaseTransport | None = None,
) -> list[str]:
    """List accessible repository URLs matching the specifiers, using a token from the environment."""
    client = (
        ClientBuilder()
        .base_url(github_url)
        .personal_access_token_from_env()
        .ignore_certs(ignore_certs)
        .transport(transport)
        .build()
    )
    with client:
        try:
            # Asking for the rate limit first reveals connectivity problems quickly.
            rate_limit = client.get_rate_limit()
            logger.debug("GitHub rate limits: %r", rate_limit.rate)
            return RepoEnumerator(client).enumerate_repo_urls(repo_specifiers, progress)
        except RateLimitedError as exc:
            suggestion = (
                ""
                if client.is_authenticated()
                else "; consider supplying a GitHub personal access token through the "
                "NP_GITHUB_TOKEN environment variable"
            )
            logger.warning(
                "Rate limit exceeded: must wait for %s before retrying%s", exc.wait, suggestion
            )
            raise