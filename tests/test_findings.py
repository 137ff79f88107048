import json

from parkerlib.datastore.findings import FindingMetadata, FindingSummary, FindingSummaryEntry
from parkerlib.datastore.status import Status, Statuses
from parkerlib.match_type import Groups


def _metadata(**overrides):
    values = dict(
        finding_id="f" * 40,
        rule_name="AWS API Key",
        rule_text_id="np.aws.1",
        rule_structural_id="a" * 40,
        groups=Groups([b"value"]),
        num_matches=3,
        num_redundant_matches=1,
        statuses=Statuses([Status.ACCEPT, Status.REJECT]),
        comment=None,
        mean_score=0.5,
    )
    values.update(overrides)
    return FindingMetadata(**values)


def test_metadata_to_dict_fields():
    d = _metadata().to_dict()
    assert d["rule_name"] == "AWS API Key"
    assert d["num_matches"] == 3
    assert d["num_redundant_matches"] == 1
    assert d["mean_score"] == 0.5
    assert d["comment"] is None


def test_metadata_statuses_serialized_as_names():
    assert _metadata().to_dict()["statuses"] == ["accept", "reject"]


def test_metadata_groups_match_groups_json():
    groups = Groups([b"one", b"two"])
    d = _metadata(groups=groups).to_dict()
    assert d["groups"] == json.loads(groups.to_json())


def test_metadata_to_dict_is_json_serializable():
    d = _metadata(comment="ok").to_dict()
    assert json.loads(json.dumps(d)) == d


def _entry(name):
    return FindingSummaryEntry(
        rule_name=name,
        distinct_count=2,
        total_count=5,
        accept_count=1,
        reject_count=0,
        mixed_count=0,
        unlabeled_count=1,
    )


def test_summary_to_json_entries():
    summary = FindingSummary([_entry("AWS API Key"), _entry("GitHub Token")])
    data = json.loads(summary.to_json())
    assert [e["rule_name"] for e in data] == ["AWS API Key", "GitHub Token"]
    assert data[0]["total_count"] == 5
    assert list(data[0]) == [
        "rule_name",
        "distinct_count",
        "total_count",
        "accept_count",
        "reject_count",
        "mixed_count",
        "unlabeled_count",
    ]


def test_empty_summary_json():
    assert FindingSummary().to_json() == "[]"
    assert len(FindingSummary()) == 0


def test_summary_iteration():
    entries = [_entry("a"), _entry("b")]
    assert list(FindingSummary(entries)) == entries