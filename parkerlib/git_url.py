"""Validated HTTPS Git repository URLs and their on-disk clone paths."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote, urlsplit

_ERROR_MESSAGE = (
    "only https URLs without credentials, query parameters, or fragment identifiers are supported"
)
_DEFAULT_PORTS = {"https": 443}
_PATH_SAFE = "!$%&'()*+,-./:;=@[]^_|~"
_FORBIDDEN_HOST_CHARS = set(" \t\r\n<>^|%/\\#?@[]")


class GitUrlError(ValueError):
    """Raised when a URL is not an acceptable Git repository URL."""

    def __init__(self) -> None:
        super().__init__(_ERROR_MESSAGE)


def _is_single_dot(segment: str) -> bool:
    return segment == "." or segment.lower() == "%2e"


def _is_double_dot(segment: str) -> bool:
    return segment.lower() in {"..", ".%2e", "%2e.", "%2e%2e"}


def _normalize_segments(raw_path: str) -> tuple[str, ...]:
    path = raw_path.replace("\\", "/") or "/"
    pieces = path.removeprefix("/").split("/")
    final = len(pieces)
    out: list[str] = []
    for position, piece in enumerate(pieces, start=1):
        is_last = position == final
        if _is_double_dot(piece):
            if out:
                out.pop()
            if is_last:
                out.append("")
        elif _is_single_dot(piece):
            if is_last:
                out.append("")
        else:
            out.append(quote(piece, safe=_PATH_SAFE))
    return tuple(out)


def _normalize_host(hostname: str) -> tuple[str, str]:
    """Return the host as written in a URL and as written in a path."""
    try:
        address = ipaddress.ip_address(hostname)
    except ValueError:
        address = None
    if isinstance(address, ipaddress.IPv6Address):
        return f"[{address.compressed}]", address.compressed
    if isinstance(address, ipaddress.IPv4Address):
        return str(address), str(address)
    if any(char in _FORBIDDEN_HOST_CHARS for char in hostname):
        raise GitUrlError()
    host = hostname.lower()
    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError as exc:
            raise GitUrlError() from exc
    return host, host


@dataclass(frozen=True, order=True)
class GitUrl:
    """An https URL without credentials, query or fragment."""

    url: str
    host: str = field(compare=False)
    port: int | None = field(compare=False)
    segments: tuple[str, ...] = field(compare=False)
    scheme: str = field(default="https", compare=False)

    @classmethod
    def parse(cls, text: str) -> GitUrl:
        """Parse and validate a Git URL, raising GitUrlError if it is unacceptable."""
        text = text.strip()
        if "#" in text or "?" in text:
            raise GitUrlError()
        try:
            parts = urlsplit(text)
            port = parts.port
            hostname = parts.hostname
        except ValueError as exc:
            raise GitUrlError() from exc

        scheme = parts.scheme
        if scheme != "https":
            raise GitUrlError()
        if not hostname:
            raise GitUrlError()
        if parts.username or parts.password is not None:
            raise GitUrlError()

        if port == _DEFAULT_PORTS.get(scheme):
            port = None

        url_host, path_host = _normalize_host(hostname)
        segments = _normalize_segments(parts.path)
        if ".." in segments:
            raise GitUrlError()

        port_suffix = f":{port}" if port is not None else ""
        url = f"{scheme}://{url_host}{port_suffix}/{'/'.join(segments)}"
        return cls(url=url, host=path_host, port=port, segments=segments, scheme=scheme)

    def to_path(self) -> Path:
        """Convert this URL into a relative path free of traversal components."""
        host = f"{self.host}:{self.port}" if self.port is not None else self.host
        return Path(self.scheme, host, *self.segments)

    def __str__(self) -> str:
        return self.url


def clone_destination(root: str | Path, repo: GitUrl) -> Path:
    """Return the path for a local clone of ``repo`` underneath ``root``."""
    return Path(root) / repo.to_path()