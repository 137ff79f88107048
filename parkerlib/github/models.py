"""Data models for GitHub REST API responses."""

import types
from collections.abc import Callable, Mapping
from dataclasses import MISSING, dataclass, fields
from enum import Enum
from typing import Any, TypeVar, Union, get_args, get_origin

_T = TypeVar("_T")


def _type_ok(value: Any, tp: Any) -> bool:
    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        return any(_type_ok(value, arg) for arg in get_args(tp) if arg is not type(None))
    if origin is list:
        (item,) = get_args(tp)
        return isinstance(value, list) and all(_type_ok(v, item) for v in value)
    if tp is bool:
        return isinstance(value, bool)
    if tp is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if tp is str:
        return isinstance(value, str)
    return True


def _build(
    cls: "type[_T]",
    data: Any,
    *,
    renames: "Mapping[str, str] | None" = None,
    converters: "Mapping[str, Callable[[Any], Any]] | None" = None,
) -> _T:
    """Build a model dataclass from a JSON object, checking field presence and types."""
    if not isinstance(data, Mapping):
        raise ValueError(f"{cls.__name__}: expected a JSON object")
    renames = renames or {}
    converters = converters or {}
    kwargs: dict = {}
    for f in fields(cls):  # type: ignore[arg-type]
        key = renames.get(f.name, f.name)
        value = data.get(key)
        if value is None:
            if f.default is MISSING:
                raise ValueError(f"{cls.__name__}: missing field `{key}`")
            kwargs[f.name] = None
            continue
        convert = converters.get(f.name)
        if convert is not None:
            value = convert(value)
        elif not _type_ok(value, f.type):
            raise ValueError(f"{cls.__name__}: invalid type for field `{key}`")
        kwargs[f.name] = value
    return cls(**kwargs)


def _list_of(item: "Callable[[Any], _T]") -> "Callable[[Any], list[_T]]":
    def convert(value: Any) -> "list[_T]":
        if not isinstance(value, list):
            raise ValueError("expected a JSON array")
        return [item(v) for v in value]

    return convert


class ErrorCode(str, Enum):
    """The code of a validation error reported by GitHub."""

    MISSING = "Missing"
    MISSING_FIELD = "MissingField"
    INVALID = "Invalid"
    ALREADY_EXISTS = "AlreadyExists"
    UNPROCESSABLE = "Unprocessable"


def _error_code(value: Any) -> ErrorCode:
    try:
        return ErrorCode(value)
    except ValueError:
        raise ValueError(f"unknown error code: {value!r}") from None


@dataclass(frozen=True, kw_only=True)
class ErrorDetail:
    """One validation error within a client error."""

    resource: str
    field: str
    code: ErrorCode

    @classmethod
    def from_dict(cls, data: "Mapping[str, Any]") -> "ErrorDetail":
        """Build from a JSON object."""
        return _build(cls, data, converters={"code": _error_code})


@dataclass(frozen=True, kw_only=True)
class ClientError:
    """An error body returned by GitHub."""

    message: str
    documentation_url: str | None = None
    errors: list[ErrorDetail] | None = None

    @classmethod
    def from_dict(cls, data: "Mapping[str, Any]") -> "ClientError":
        """Build from a JSON object."""
        return _build(cls, data, converters={"errors": _list_of(ErrorDetail.from_dict)})


@dataclass(frozen=True, kw_only=True)
class Rate:
    """A rate limit and its current use."""

    limit: int
    remaining: int
    reset: int
    used: int

    @classmethod
    def from_dict(cls, data: "Mapping[str, Any]") -> "Rate":
        """Build from a JSON object."""
        return _build(cls, data)


@dataclass(frozen=True, kw_only=True)
class Resources:
    """Rate limits for each API resource."""

    core: Rate
    search: Rate
    graphql: Rate | None = None
    source_import: Rate | None = None
    integration_manifest: Rate | None = None
    code_scanning_upload: Rate | None = None
    actions_runner_registration: Rate | None = None
    scim: Rate | None = None
    dependency_snapshots: Rate | None = None

    @classmethod
    def from_dict(cls, data: "Mapping[str, Any]") -> "Resources":
        """Build from a JSON object."""
        return _build(cls, data, converters={f.name: Rate.from_dict for f in fields(cls)})


@dataclass(frozen=True, kw_only=True)
class RateLimitOverview:
    """The response of the rate limit endpoint."""

    resources: Resources
    rate: Rate

    @classmethod
    def from_dict(cls, data: "Mapping[str, Any]") -> "RateLimitOverview":
        """Build from a JSON object."""
        return _build(
            cls, data, converters={"resources": Resources.from_dict, "rate": Rate.from_dict}
        )


@dataclass(frozen=True, kw_only=True)
class User:
    """A GitHub user."""

    login: str
    id: int
    node_id: str
    avatar_url: str
    gravatar_id: str | None = None
    url: str
    html_url: str
    followers_url: str
    following_url: str
    gists_url: str
    starred_url: str
    subscriptions_url: str
    organizations_url: str
    repos_url: str
    events_url: str
    received_events_url: str
    user_type: str
    site_admin: bool
    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    hireable: bool | None = None
    bio: str | None = None
    twitter_username: str | None = None
    public_repos: int
    public_gists: int
    followers: int
    following: int
    created_at: str
    updated_at: str
    suspended_at: str | None = None
    private_gists: int | None = None
    total_private_repos: int | None = None
    owned_private_repos: int | None = None
    disk_usage: int | None = None
    collaborators: int | None = None
    business_plus: bool | None = None
    ldap_dn: str | None = None
    two_factor_authentication: bool | None = None

    @classmethod
    def from_dict(cls, data: "Mapping[str, Any]") -> "User":
        """Build from a JSON object; the ``type`` key becomes ``user_type``."""
        return _build(cls, data, renames={"user_type": "type"})


@dataclass(frozen=True, kw_only=True)
class Repository:
    """A GitHub repository."""

    id: int
    node_id: str
    name: str
    full_name: str
    private: bool
    html_url: str
    description: str | None = None
    fork: bool
    url: str
    archive_url: str
    assignees_url: str
    blobs_url: str
    branches_url: str
    collaborators_url: str
    comments_url: str
    commits_url: str
    compare_url: str
    contents_url: str
    contributors_url: str
    deployments_url: str
    downloads_url: str
    events_url: str
    forks_url: str
    git_commits_url: str
    git_refs_url: str
    git_tags_url: str
    git_url: str
    issue_comment_url: str
    issue_events_url: str
    issues_url: str
    keys_url: str
    labels_url: str
    languages_url: str
    merges_url: str
    milestones_url: str
    notifications_url: str
    pulls_url: str
    releases_url: str
    ssh_url: str
    stargazers_url: str
    statuses_url: str
    subscribers_url: str
    subscription_url: str
    tags_url: str
    teams_url: str
    trees_url: str
    clone_url: str
    mirror_url: str | None = None
    hooks_url: str
    svn_url: str
    homepage: str | None = None
    language: str | None = None
    forks_count: int
    stargazers_count: int
    watchers_count: int
    size: int
    default_branch: str
    open_issues_count: int
    is_template: bool | None = None
    topics: list[str] | None = None
    has_issues: bool
    has_projects: bool
    has_wiki: bool
    has_pages: bool
    has_downloads: bool
    has_discussions: bool | None = None
    archived: bool
    disabled: bool
    visibility: str
    pushed_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    role_name: str | None = None
    temp_clone_token: str | None = None
    delete_branch_on_merge: bool | None = None
    subscribers_count: int | None = None
    network_count: int | None = None
    forks: int | None = None
    open_issues: int | None = None
    watchers: int | None = None
    allow_forking: bool | None = None
    web_commit_signoff_required: bool | None = None

    @classmethod
    def from_dict(cls, data: "Mapping[str, Any]") -> "Repository":
        """Build from a JSON object."""
        return _build(cls, data)


@dataclass(frozen=True, kw_only=True)
class OrganizationShort:
    """An organization as listed by the organizations endpoint."""

    login: str
    id: int
    node_id: str
    url: str
    repos_url: str
    events_url: str
    hooks_url: str
    issues_url: str
    members_url: str
    public_members_url: str
    avatar_url: str
    description: str | None = None

    @classmethod
    def from_dict(cls, data: "Mapping[str, Any]") -> "OrganizationShort":
        """Build from a JSON object."""
        return _build(cls, data)