import string

import pytest

from parkerlib.location import Location, OffsetSpan, SourcePoint, SourceSpan
from parkerlib.match_type import Group, Groups, Match, compute_structural_id
from parkerlib.snippet import Snippet


def _match(groups, rule="r1"):
    span = OffsetSpan(0, 4)
    return Match(
        blob_id="ab" * 20,
        location=Location(span, SourceSpan(SourcePoint(1, 1), SourcePoint(1, 4))),
        groups=groups,
        snippet=Snippet(b"", b"test", b""),
        structural_id=compute_structural_id(rule, "ab" * 20, span),
        rule_structural_id=rule,
        rule_text_id="test.1",
        rule_name="test",
    )


def _is_sha1_hex(value):
    return len(value) == 40 and all(c in string.hexdigits for c in value)


def test_group_base64():
    assert Group(b"hello").to_json_value() == "aGVsbG8="


def test_groups_json_round_trip():
    groups = Groups([b"abc", b"\x00\xff", b""])
    back = Groups.from_json(groups.to_json())
    assert back == groups
    assert [g.data for g in back] == [b"abc", b"\x00\xff", b""]


def test_groups_json_from_bytes():
    groups = Groups([b"x"])
    assert Groups.from_json(groups.to_json().encode()) == groups


def test_groups_json_errors():
    with pytest.raises(ValueError):
        Groups.from_json('{"a": 1}')
    with pytest.raises(ValueError):
        Groups.from_json('["not base64!"]')


def test_structural_id_properties():
    span = OffsetSpan(1, 5)
    a = compute_structural_id("rule", "00ff", span)
    assert _is_sha1_hex(a)
    assert a == compute_structural_id("rule", bytes([0, 255]), span)
    assert a != compute_structural_id("rule", "00ff", OffsetSpan(1, 6))
    assert a != compute_structural_id("other", "00ff", span)


def test_finding_id_properties():
    m1 = _match(Groups([b"secret"]))
    m2 = _match(Groups([b"secret"]))
    m3 = _match(Groups([b"other"]))
    m4 = _match(Groups([b"secret"]), rule="r2")
    assert _is_sha1_hex(m1.finding_id())
    assert m1.finding_id() == m2.finding_id()
    assert m1.finding_id() != m3.finding_id()
    assert m1.finding_id() != m4.finding_id()


def test_finding_id_independent_of_location():
    m = _match(Groups([b"x"]))
    moved = Match(
        blob_id="cd" * 20,
        location=m.location,
        groups=m.groups,
        snippet=m.snippet,
        structural_id="z",
        rule_structural_id=m.rule_structural_id,
        rule_text_id=m.rule_text_id,
        rule_name=m.rule_name,
    )
    assert moved.finding_id() == m.finding_id()