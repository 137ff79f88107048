# parkerlib

The data model and supporting pieces of a secrets scanner, as a Python library:

- **Locations** (`parkerlib.location`): byte spans (`OffsetSpan`), line/column
  points (`SourcePoint`, `SourceSpan`) and a `LocationMapping` that turns the one
  into the other.
- **Git URLs** (`parkerlib.git_url`): `GitUrl` accepts only plain `https` URLs,
  without credentials, query or fragment, and maps them to safe relative paths
  for local clones.
- **Provenance** (`parkerlib.provenance`, `parkerlib.provenance_set`): where a
  blob was seen. It can be a file, a Git repository (optionally with the commit
  it first appeared in), or an arbitrary JSON payload. `ProvenanceSet` is a
  non-empty collection that drops less specific Git entries.
- **Matches** (`parkerlib.match_type`, `parkerlib.snippet`): `Match`, `Groups`,
  `Group` and `Snippet`. `compute_structural_id` and `Match.finding_id` compute
  content-based identifiers.
- **Datastore records** (`parkerlib.datastore`): `Status` / `Statuses`, match and
  finding annotations with JSON round trips (`Annotations.to_json`,
  `Annotations.from_json`), `FindingMetadata` and `FindingSummary`.
- **Statistics** (`parkerlib.matcher_stats`, `parkerlib.rule_profiling`):
  `MatcherStats` counters and per-rule `RuleProfile` match counts and timings.
- **GitHub** (`parkerlib.github`): a small synchronous REST client built on
  `httpx`, with pagination, rate-limit detection and enumeration of repository
  clone URLs for users and organisations.

## Installation

```
pip install .
pip install ".[test]"   # with pytest, to run the tests
```

## Locations

```python
from parkerlib.location import LocationMapping, OffsetSpan

mapping = LocationMapping(b"ab\ncd")
span = OffsetSpan.from_range(range(3, 5))
print(mapping.get_source_span(span))   # 2:1-2:2
```

Lines are counted from 1. A mapping refers to the bytes it was built from.
Asking for an offset outside them raises `IndexError`.

## Git URLs and clone destinations

```python
from pathlib import Path
from parkerlib.git_url import GitUrl, GitUrlError, clone_destination

url = GitUrl.parse("https://example.com/org/repo.git")
print(url.to_path())                          # https/example.com/org/repo.git
print(clone_destination(Path("clones"), url)) # clones/https/example.com/org/repo.git

try:
    GitUrl.parse("ssh://example.com/repo.git")
except GitUrlError as err:
    print(err)
```

Dot segments are resolved before the path is built, so
`https://example.com/../boom.git` maps to `https/example.com/boom.git`.

## Provenance

```python
from parkerlib import provenance
from parkerlib.provenance_set import ProvenanceSet

entries = ProvenanceSet.try_from_iter([
    provenance.from_file("src/settings.py"),
    provenance.from_extended({"path": "exported/config.json"}),
])
for entry in entries:
    print(entry.blob_path())

text = provenance.to_json(entries.first())
assert provenance.from_json(text) == entries.first()
```

`ProvenanceSet.try_from_iter` returns `None` when it is given no entries. Entries
are serialized as tagged JSON objects whose `kind` is `file`, `git_repo` or
`extended`.

## Enumerating GitHub repositories

```python
from parkerlib.github.repo_enumerator import RepoSpecifiers, RepoType, enumerate_repo_urls

specifiers = RepoSpecifiers(
    user=["someuser"],
    organization=["someorg"],
    all_organizations=False,
    repo_filter=RepoType.SOURCE,
)
urls = enumerate_repo_urls(
    specifiers,
    github_url="https://api.github.com",
    ignore_certs=False,
    progress=None,
)
```

The first request always fetches the rate-limit overview, which surfaces
connectivity problems early. The clone URLs that come back are sorted and
deduplicated. If you pass a `progress` object, its `inc(n)` method is called with
the number of repositories selected for each user and organisation.

A personal access token is read from the `NP_GITHUB_TOKEN` environment variable.
Without it the API is used unauthenticated, with much lower rate limits. A
rate-limited request raises `RateLimitedError` (from `parkerlib.github.errors`).
The error carries GitHub's `client_error` and, when known, a `wait` timedelta.
All client errors derive from `GitHubError`.

For finer control, build a client yourself:

```python
from parkerlib.github.client_builder import ClientBuilder
from parkerlib.github.repo_enumerator import RepoEnumerator

with ClientBuilder().personal_access_token_from_env().build() as client:
    repos = RepoEnumerator(client).enumerate_org_repos("someorg")
    print([repo.clone_url for repo in repos])
```

`ClientBuilder.transport(...)` and the `transport` argument of
`enumerate_repo_urls` accept any `httpx` transport, such as
`httpx.MockTransport` for tests.

## What this package does not do

This package provides the records and helpers only. It has:

- no scanning engine: nothing here compiles rules or searches blobs for matches;
- no rule set;
- no on-disk datastore: the datastore types describe findings, annotations and
  summaries, but nothing stores or queries them;
- no command-line program.