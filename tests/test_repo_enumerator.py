from dataclasses import MISSING, fields

import httpx
import pytest

from parkerlib.github.client import Client
from parkerlib.github.errors import RateLimitedError
from parkerlib.github.models import OrganizationShort, Repository
from parkerlib.github.repo_enumerator import (
    RepoEnumerator,
    RepoSpecifiers,
    RepoType,
    enumerate_repo_urls,
)

_FILLER = {"str": "x", "int": 0, "bool": False}


def _fill(model, **overrides):
    data = {f.name: _FILLER[f.type] for f in fields(model) if f.default is MISSING}
    data.update(overrides)
    return data


def _repo(clone_url, fork=False):
    return _fill(Repository, clone_url=clone_url, fork=fork)


def _rate():
    return {"limit": 60, "remaining": 60, "reset": 0, "used": 0}


def _transport(routes, seen=None):
    def handler(request):
        if seen is not None:
            seen.append(request)
        body = routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json=body)

    return httpx.MockTransport(handler)


ROUTES = {
    "/users/alice/repos": [
        _repo("https://github.com/alice/b.git"),
        _repo("https://github.com/alice/a.git", fork=True),
    ],
    "/orgs/acme/repos": [
        _repo("https://github.com/acme/z.git"),
        _repo("https://github.com/alice/b.git"),
    ],
    "/orgs/initech/repos": [_repo("https://github.com/initech/tps.git", fork=True)],
    "/organizations": [_fill(OrganizationShort, login="initech")],
    "/rate_limit": {"resources": {"core": _rate(), "search": _rate()}, "rate": _rate()},
}


class _Counter:
    def __init__(self):
        self.total = 0

    def inc(self, delta):
        self.total += delta


def test_repo_type_matches():
    source = Repository.from_dict(_repo("https://github.com/a/s.git"))
    fork = Repository.from_dict(_repo("https://github.com/a/f.git", fork=True))
    assert RepoType.ALL.matches(source) and RepoType.ALL.matches(fork)
    assert RepoType.SOURCE.matches(source) and not RepoType.SOURCE.matches(fork)
    assert RepoType.FORK.matches(fork) and not RepoType.FORK.matches(source)


def test_repo_specifiers_is_empty():
    assert RepoSpecifiers().is_empty() is True
    assert RepoSpecifiers(user=["alice"]).is_empty() is False
    assert RepoSpecifiers(organization=["acme"]).is_empty() is False
    assert RepoSpecifiers(all_organizations=True).is_empty() is False


def test_enumerate_sorted_and_deduplicated():
    spec = RepoSpecifiers(user=["alice"], organization=["acme"])
    with Client(transport=_transport(ROUTES)) as client:
        urls = RepoEnumerator(client).enumerate_repo_urls(spec)
    assert urls == [
        "https://github.com/acme/z.git",
        "https://github.com/alice/a.git",
        "https://github.com/alice/b.git",
    ]
    assert urls == sorted(set(urls))


def test_enumerate_source_filter_and_progress():
    spec = RepoSpecifiers(user=["alice"], organization=["acme"], repo_filter=RepoType.SOURCE)
    counter = _Counter()
    with Client(transport=_transport(ROUTES)) as client:
        urls = RepoEnumerator(client).enumerate_repo_urls(spec, counter)
    assert urls == ["https://github.com/acme/z.git", "https://github.com/alice/b.git"]
    assert counter.total == 3


def test_enumerate_all_organizations():
    spec = RepoSpecifiers(all_organizations=True)
    seen = []
    with Client(transport=_transport(ROUTES, seen)) as client:
        urls = RepoEnumerator(client).enumerate_repo_urls(spec)
    assert urls == ["https://github.com/initech/tps.git"]
    assert [r.url.path for r in seen] == ["/organizations", "/orgs/initech/repos"]


def test_enumerate_instance_orgs():
    with Client(transport=_transport(ROUTES)) as client:
        orgs = RepoEnumerator(client).enumerate_instance_orgs()
    assert [o.login for o in orgs] == ["initech"]


def test_module_enumerate_checks_rate_limit_first(monkeypatch):
    monkeypatch.delenv("NP_GITHUB_TOKEN", raising=False)
    seen = []
    urls = enumerate_repo_urls(
        RepoSpecifiers(organization=["initech"]), transport=_transport(ROUTES, seen)
    )
    assert urls == ["https://github.com/initech/tps.git"]
    assert seen[0].url.path == "/rate_limit"
    assert "authorization" not in seen[0].headers


def test_module_enumerate_rate_limited(monkeypatch):
    monkeypatch.delenv("NP_GITHUB_TOKEN", raising=False)

    def handler(request):
        return httpx.Response(403, json={"message": "limited"}, headers={"Retry-After": "5"})

    with pytest.raises(RateLimitedError) as exc:
        enumerate_repo_urls(
            RepoSpecifiers(user=["alice"]), transport=httpx.MockTransport(handler)
        )
    assert exc.value.client_error.message == "limited"