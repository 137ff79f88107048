from pathlib import Path

import pytest

from parkerlib import provenance as prov


@pytest.mark.parametrize(
    "value",
    [
        "this is a string",
        42,
        42.0,
        True,
        False,
        None,
        ["this is a string in an array"],
        {"value": "this is a string in an array"},
    ],
    ids=["string", "int", "float", "bool true", "bool false", "null", "array", "object"],
)
def test_serialize_extended_provenance(value):
    p = prov.from_extended(value)
    text = prov.to_json(p)
    back = prov.from_json(text)
    assert back == p
    assert back.payload == value


def test_file_provenance():
    p = prov.from_file("a/b.txt")
    assert p.blob_path() == Path("a/b.txt")
    assert str(p) == f"file {Path('a/b.txt')}"
    assert p.to_dict() == {"kind": "file", "path": str(Path("a/b.txt"))}
    assert prov.from_json(prov.to_json(p)) == p


def test_git_repo_without_commit():
    p = prov.from_git_repo("repo")
    assert p.blob_path() is None
    assert str(p) == "git repo repo"
    assert p.to_dict()["first_commit"] is None
    assert prov.from_json(prov.to_json(p)) == p


def test_git_repo_with_commit():
    md = {"commit_id": "abc"}
    p = prov.from_git_repo_with_first_commit("repo", md, b"src/a.txt")
    assert p.blob_path() == Path("src/a.txt")
    assert str(p) == "git repo repo: first seen in commit abc as src/a.txt"
    back = prov.from_json(prov.to_json(p))
    assert back == p


def test_git_repo_undecodable_blob_path():
    p = prov.from_git_repo_with_first_commit("repo", {"commit_id": "abc"}, b"\xff\xfe")
    assert p.blob_path() is None


def test_extended_path():
    p = prov.from_extended({"path": "x/y"})
    assert p.path() == Path("x/y")
    assert p.blob_path() == Path("x/y")
    assert prov.from_extended({"path": 3}).path() is None
    assert prov.from_extended(["path"]).path() is None


def test_extended_str_is_compact_json():
    p = prov.from_extended({"value": "v"})
    assert str(p) == 'extended {"value":"v"}'


def test_tagged_form():
    p = prov.from_extended(1)
    assert p.to_dict() == {"kind": "extended", "payload": 1}


def test_unknown_kind():
    with pytest.raises(ValueError):
        prov.from_dict({"kind": "bogus"})


def test_missing_field():
    with pytest.raises(ValueError):
        prov.from_dict({"kind": "file"})