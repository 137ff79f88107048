"""Where a blob or match was found when scanning."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union


def _lossy(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class FileProvenance:
    """A blob seen at a particular file path."""

    path: Path

    def blob_path(self) -> Path | None:
        """Return the file path of the blob."""
        return self.path

    def to_dict(self) -> dict[str, Any]:
        """Serialize in tagged form."""
        return {"kind": "file", "path": str(self.path)}

    def __str__(self) -> str:
        return f"file {self.path}"


@dataclass(frozen=True)
class CommitProvenance:
    """The commit in which a blob was first seen, and its path there."""

    commit_metadata: Mapping[str, Any]
    blob_path: bytes

    @property
    def commit_id(self) -> str:
        """The identifier of the commit, or an empty string if unknown."""
        return str(self.commit_metadata.get("commit_id", ""))

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the blob path as lossily decoded UTF-8."""
        return {
            "commit_metadata": dict(self.commit_metadata),
            "blob_path": _lossy(self.blob_path),
        }


@dataclass(frozen=True)
class GitRepoProvenance:
    """A blob seen in a Git repository, optionally with commit information."""

    repo_path: Path
    first_commit: CommitProvenance | None = None

    def blob_path(self) -> Path | None:
        """Return the blob's path within the first commit, if known and decodable."""
        if self.first_commit is None:
            return None
        try:
            return Path(self.first_commit.blob_path.decode("utf-8"))
        except UnicodeDecodeError:
            return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize in tagged form."""
        return {
            "kind": "git_repo",
            "repo_path": str(self.repo_path),
            "first_commit": None if self.first_commit is None else self.first_commit.to_dict(),
        }

    def __str__(self) -> str:
        if self.first_commit is None:
            return f"git repo {self.repo_path}"
        return (
            f"git repo {self.repo_path}: first seen in commit "
            f"{self.first_commit.commit_id} as {_lossy(self.first_commit.blob_path)}"
        )


@dataclass(frozen=True)
class ExtendedProvenance:
    """An arbitrary JSON value; a string ``path`` field in an object is used as the blob path."""

    payload: Any

    def path(self) -> Path | None:
        """Return the ``path`` field of the payload if it is a string."""
        if isinstance(self.payload, Mapping):
            value = self.payload.get("path")
            if isinstance(value, str):
                return Path(value)
        return None

    def blob_path(self) -> Path | None:
        """Return the blob path given by the payload, if any."""
        return self.path()

    def to_dict(self) -> dict[str, Any]:
        """Serialize in tagged form."""
        return {"kind": "extended", "payload": self.payload}

    def __str__(self) -> str:
        return f"extended {_compact_json(self.payload)}"


Provenance = Union[FileProvenance, GitRepoProvenance, ExtendedProvenance]


def from_file(path: str | Path) -> FileProvenance:
    """Create a provenance entry for a plain file."""
    return FileProvenance(Path(path))


def from_git_repo(repo_path: str | Path) -> GitRepoProvenance:
    """Create a provenance entry for a Git repository without commit information."""
    return GitRepoProvenance(Path(repo_path))


def from_git_repo_with_first_commit(
    repo_path: str | Path, commit_metadata: Mapping[str, Any], blob_path: bytes | str
) -> GitRepoProvenance:
    """Create a provenance entry for a Git repository with commit information."""
    if isinstance(blob_path, str):
        blob_path = blob_path.encode("utf-8")
    return GitRepoProvenance(Path(repo_path), CommitProvenance(commit_metadata, bytes(blob_path)))


def from_extended(payload: Any) -> ExtendedProvenance:
    """Create a provenance entry from an arbitrary JSON value."""
    return ExtendedProvenance(payload)


def from_dict(data: Mapping[str, Any]) -> Provenance:
    """Build a provenance entry from its tagged serialized form."""
    if not isinstance(data, Mapping):
        raise ValueError("provenance must be a JSON object")
    kind = data.get("kind")
    try:
        if kind == "file":
            return FileProvenance(Path(data["path"]))
        if kind == "git_repo":
            commit = data.get("first_commit")
            first_commit = None
            if commit is not None:
                first_commit = CommitProvenance(
                    dict(commit["commit_metadata"]),
                    str(commit["blob_path"]).encode("utf-8"),
                )
            return GitRepoProvenance(Path(data["repo_path"]), first_commit)
        if kind == "extended":
            return ExtendedProvenance(data["payload"])
    except (KeyError, TypeError) as exc:
        raise ValueError(f"malformed {kind} provenance: {exc}") from exc
    raise ValueError(f"unknown provenance kind: {kind!r}")


def to_json(provenance: Provenance) -> str:
    """Serialize a provenance entry as compact JSON."""
    return _compact_json(provenance.to_dict())


def from_json(text: str | bytes) -> Provenance:
    """Parse a provenance entry from JSON."""
    return from_dict(json.loads(text))