"""A client for the GitHub REST API."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Any, TypeVar
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

import httpx

from parkerlib.github.auth import Auth
from parkerlib.github.errors import (
    RateLimitedError,
    RequestError,
    UrlBaseError,
    UrlParseError,
    UrlSlashError,
)
from parkerlib.github.models import (
    ClientError,
    OrganizationShort,
    RateLimitOverview,
    Repository,
    User,
)
from parkerlib.github.page import Page

_T = TypeVar("_T")

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
USER_AGENT = "parkerlib"

_MAX_PER_PAGE = ("per_page", "100")
_PATH_SAFE = "/!$&'()*+,;=:@-._~%"
_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class _TypedPage(Page[_T]):
    """A page that remembers how to decode the items of the pages after it."""

    item_type: Any = field(default=None, compare=False, repr=False)


def url_from_path_parts_and_params(
    base_url: str,
    path_parts: Sequence[str],
    params: Iterable[tuple[str, str]] = (),
) -> str:
    """Build a URL from a base, path parts without slashes, and query parameters."""
    try:
        parts = urlsplit(base_url)
    except ValueError as exc:
        raise UrlParseError(str(exc)) from exc
    if not parts.scheme:
        raise UrlParseError(f"relative URL without a base: {base_url}")
    if not parts.netloc and not parts.path.startswith("/"):
        raise UrlBaseError(base_url)

    path = parts.path if parts.path.endswith("/") else parts.path + "/"
    for part in path_parts:
        if "/" in part:
            raise UrlSlashError(part)
    path += "/".join(path_parts)

    query = urlencode(list(params))
    return urlunsplit((parts.scheme, parts.netloc, quote(path, safe=_PATH_SAFE), query, ""))


def _retry_after_wait(text: str) -> timedelta | None:
    found = _INTEGER.match(text)
    if found is None:
        return None
    try:
        return timedelta(seconds=int(found.group(0)))
    except OverflowError:
        return None


def _reset_wait(headers: httpx.Headers) -> timedelta | None:
    date_text = headers.get("date")
    reset_text = headers.get("x-ratelimit-reset")
    if date_text is None or reset_text is None:
        return None
    if _INTEGER.fullmatch(reset_text) is None:
        return None
    try:
        date = parsedate_to_datetime(date_text)
        reset = datetime.fromtimestamp(int(reset_text), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    return reset - date


class Client:
    """A synchronous GitHub REST API client."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        auth: Auth | None = None,
        ignore_certs: bool = False,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.auth = auth if auth is not None else Auth()
        self._http = httpx.Client(
            headers={"User-Agent": USER_AGENT},
            verify=not ignore_certs,
            transport=transport,
            follow_redirects=True,
        )

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        self._http.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def is_authenticated(self) -> bool:
        """Return whether requests carry a token."""
        return self.auth.is_authenticated()

    def get_rate_limit(self) -> RateLimitOverview:
        """Fetch the current rate limits."""
        return self._get_json(["rate_limit"], RateLimitOverview.from_dict)

    def get_user(self, username: str) -> User:
        """Fetch a user."""
        return self._get_json(["users", username], User.from_dict)

    def get_user_repos(self, username: str) -> Page[Repository]:
        """Fetch the first page of a user's repositories."""
        return self._get_paginated(["users", username, "repos"], Repository)

    def get_org_members(self, orgname: str) -> Page[User]:
        """Fetch the first page of an organization's members."""
        return self._get_paginated(["orgs", orgname, "members"], User)

    def get_org_repos(self, orgname: str) -> Page[Repository]:
        """Fetch the first page of an organization's repositories."""
        return self._get_paginated(["orgs", orgname, "repos"], Repository)

    def get_orgs(self) -> Page[OrganizationShort]:
        """Fetch the first page of the organizations of the instance."""
        return self._get_paginated(["organizations"], OrganizationShort)

    def next_page(self, page: Page[_T]) -> Page[_T] | None:
        """Fetch the page after ``page``, or return None if it is the last."""
        url = page.links.next
        if url is None:
            return None
        item_type = getattr(page, "item_type", None)
        if item_type is None and page.items:
            item_type = type(page.items[0])
        if item_type is None:
            raise ValueError("cannot determine the item type of the next page")
        return self._fetch_page(url, item_type)

    def get_all(self, page: Page[_T]) -> list[_T]:
        """Collect the items of ``page`` and of every page after it."""
        results: list[_T] = []
        current: Page[_T] | None = page
        while current is not None:
            results.extend(current.items)
            current = self.next_page(current)
        return results

    def _get_json(self, path_parts: Sequence[str], build: Callable[[Any], _T]) -> _T:
        response = self._get(path_parts)
        try:
            return build(response.json())
        except ValueError as exc:
            raise RequestError(exc) from exc

    def _get_paginated(self, path_parts: Sequence[str], item_type: Any) -> Page[Any]:
        url = url_from_path_parts_and_params(self.base_url, path_parts, [_MAX_PER_PAGE])
        return self._fetch_page(url, item_type)

    def _fetch_page(self, url: str, item_type: Any) -> Page[Any]:
        response = self._get_url(url)
        try:
            page = _TypedPage.from_response(response, item_type)
        except ValueError as exc:
            raise RequestError(exc) from exc
        return replace(page, item_type=item_type)

    def _get(self, path_parts: Sequence[str], params: Iterable[tuple[str, str]] = ()) -> httpx.Response:
        url = url_from_path_parts_and_params(self.base_url, path_parts, params)
        return self._get_url(url)

    def _client_error(self, response: httpx.Response) -> ClientError:
        try:
            return ClientError.from_dict(response.json())
        except ValueError as exc:
            raise RequestError(exc) from exc

    def _get_url(self, url: str) -> httpx.Response:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.auth.token is not None:
            headers["Authorization"] = f"Bearer {self.auth.token}"

        try:
            response = self._http.get(url, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise RequestError(exc) from exc

        # GitHub signals rate limiting with 403 rather than 429.
        if response.status_code == httpx.codes.FORBIDDEN:
            retry_after = response.headers.get("retry-after")
            if retry_after is not None:
                raise RateLimitedError(self._client_error(response), _retry_after_wait(retry_after))
            if response.headers.get("x-ratelimit-remaining") == "0":
                raise RateLimitedError(self._client_error(response), _reset_wait(response.headers))

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RequestError(exc) from exc
        return response