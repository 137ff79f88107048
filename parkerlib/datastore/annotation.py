"""User-assigned annotations on matches and findings."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from parkerlib.datastore.status import Status
from parkerlib.match_type import Group, Groups


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


def _string(data: Mapping[str, Any], key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _optional_string(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string or null")
    return value


def _unsigned(data: Mapping[str, Any], key: str) -> int:
    value = _require(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"field `{key}` must be a non-negative integer")
    return value


def _groups_from_value(value: Any) -> Groups:
    if not isinstance(value, list):
        raise ValueError("field `groups` must be an array")
    return Groups(Group.from_json_value(v) for v in value)


def _groups_to_value(groups: Groups) -> list[str]:
    return [g.to_json_value() for g in groups]


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object")
    return data


@dataclass(frozen=True)
class MatchAnnotation:
    """A status and/or comment assigned to a match."""

    finding_id: str
    rule_name: str
    rule_text_id: str
    rule_structural_id: str
    match_id: str
    blob_id: str
    start_byte: int
    end_byte: int
    groups: Groups
    status: Status | None = None
    comment: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize as a JSON-compatible dictionary."""
        return {
            "finding_id": self.finding_id,
            "rule_name": self.rule_name,
            "rule_text_id": self.rule_text_id,
            "rule_structural_id": self.rule_structural_id,
            "match_id": self.match_id,
            "blob_id": self.blob_id,
            "start_byte": self.start_byte,
            "end_byte": self.end_byte,
            "groups": _groups_to_value(self.groups),
            "status": None if self.status is None else self.status.value,
            "comment": self.comment,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MatchAnnotation:
        """Build a match annotation from its serialized form."""
        data = _mapping(data, "match annotation")
        raw_status = data.get("status")
        if raw_status is None:
            status = None
        elif isinstance(raw_status, str):
            try:
                status = Status(raw_status)
            except ValueError:
                raise ValueError(f"invalid status: {raw_status!r}") from None
        else:
            raise ValueError("field `status` must be a string or null")
        return cls(
            finding_id=_string(data, "finding_id"),
            rule_name=_string(data, "rule_name"),
            rule_text_id=_string(data, "rule_text_id"),
            rule_structural_id=_string(data, "rule_structural_id"),
            match_id=_string(data, "match_id"),
            blob_id=_string(data, "blob_id"),
            start_byte=_unsigned(data, "start_byte"),
            end_byte=_unsigned(data, "end_byte"),
            groups=_groups_from_value(_require(data, "groups")),
            status=status,
            comment=_optional_string(data, "comment"),
        )


@dataclass(frozen=True)
class FindingAnnotation:
    """A comment assigned to a finding."""

    finding_id: str
    rule_name: str
    rule_text_id: str
    rule_structural_id: str
    groups: Groups
    comment: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize as a JSON-compatible dictionary."""
        return {
            "finding_id": self.finding_id,
            "rule_name": self.rule_name,
            "rule_text_id": self.rule_text_id,
            "rule_structural_id": self.rule_structural_id,
            "groups": _groups_to_value(self.groups),
            "comment": self.comment,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FindingAnnotation:
        """Build a finding annotation from its serialized form."""
        data = _mapping(data, "finding annotation")
        return cls(
            finding_id=_string(data, "finding_id"),
            rule_name=_string(data, "rule_name"),
            rule_text_id=_string(data, "rule_text_id"),
            rule_structural_id=_string(data, "rule_structural_id"),
            groups=_groups_from_value(_require(data, "groups")),
            comment=_string(data, "comment"),
        )


@dataclass(frozen=True)
class Annotations:
    """All match and finding annotations of a datastore."""

    match_annotations: tuple[MatchAnnotation, ...] = ()
    finding_annotations: tuple[FindingAnnotation, ...] = ()

    def to_json(self) -> str:
        """Serialize as JSON."""
        return json.dumps(
            {
                "match_annotations": [a.to_dict() for a in self.match_annotations],
                "finding_annotations": [a.to_dict() for a in self.finding_annotations],
            }
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> Annotations:
        """Parse annotations from JSON."""
        data = _mapping(json.loads(text), "annotations")
        matches = _require(data, "match_annotations")
        findings = _require(data, "finding_annotations")
        if not isinstance(matches, list) or not isinstance(findings, list):
            raise ValueError("annotation collections must be arrays")
        return cls(
            match_annotations=tuple(MatchAnnotation.from_dict(a) for a in matches),
            finding_annotations=tuple(FindingAnnotation.from_dict(a) for a in findings),
        )