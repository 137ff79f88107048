"""Paginated GitHub API responses."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar
from urllib.parse import urlsplit

import httpx

_T = TypeVar("_T")

_NEXT_LINK = re.compile(r'<([^>]+)>; \s* rel \s* = \s* "next"', re.VERBOSE)
_HOST_SCHEMES = {"http", "https", "ws", "wss", "ftp"}


class _FromDict(Protocol[_T]):
    def from_dict(self, data: Any) -> _T: ...


@dataclass(frozen=True)
class HeaderLinks:
    """Links parsed from a response's ``Link`` headers."""

    next: str | None = None


@dataclass(frozen=True)
class Page(Generic[_T]):
    """One page of items together with the link to the next page."""

    items: list[_T]
    links: HeaderLinks

    @classmethod
    def from_response(cls, response: httpx.Response, item_type: _FromDict[_T]) -> Page[_T]:
        """Build a page from a response whose body is a JSON array of items."""
        links = get_header_links(response.headers.get_list("link"))
        data = response.json()
        if not isinstance(data, list):
            raise ValueError("expected a JSON array of items")
        return cls([item_type.from_dict(item) for item in data], links)


def _is_absolute_url(text: str) -> bool:
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    if not parts.scheme or any(c.isspace() for c in text):
        return False
    if parts.scheme.lower() in _HOST_SCHEMES:
        return bool(parts.netloc)
    return True


def get_header_links(values: Iterable[str | bytes]) -> HeaderLinks:
    """Find the first valid ``rel="next"`` link among the given header values."""
    for value in values:
        if isinstance(value, (bytes, bytearray)):
            try:
                value = bytes(value).decode("ascii")
            except UnicodeDecodeError:
                continue
        found = _NEXT_LINK.search(value)
        if found is None:
            continue
        url = found.group(1)
        if not _is_absolute_url(url):
            continue
        return HeaderLinks(next=url)
    return HeaderLinks()