"""
GitHub webhook payload models

Each event record mirrors the body GitHub sends for one webhook event name.
Fields are optional throughout: GitHub omits keys freely between event
actions, and a missing key decodes to None.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, Field

from .base import GitHubModel
from .hooks import PingPayload


class Action(str, Enum):
    """Known values of the ``action`` key on event payloads"""

    ADDED = "added"
    BLOCKED = "blocked"
    CHANGED = "changed"
    CREATED = "created"
    DELETED = "deleted"
    MEMBER_INVITED = "member_invited"
    OPENED = "opened"
    PUBLISHED = "published"
    REMOVED = "removed"
    STARTED = "started"
    SUBMITTED = "submitted"


class State(str, Enum):
    """Known state values for reviews, pull requests, statuses and memberships"""

    ACTIVE = "active"
    APPROVED = "approved"
    OPEN = "open"
    SUCCESS = "success"


class Privacy(str, Enum):
    """Team privacy levels"""

    EDITED = "edited"
    PUBLIC = "public"
    SECRET = "secret"


class AccountType(str, Enum):
    """Account kinds reported in the ``type`` field of users and hooks"""

    USER = "User"
    ORGANIZATION = "Organization"
    APP = "App"


class User(GitHubModel):
    """GitHub user or organization account"""

    login: Optional[str] = None
    id: Optional[int] = None
    avatar_url: Optional[str] = None
    gravatar_id: Optional[str] = None
    url: Optional[str] = None
    html_url: Optional[str] = None
    followers_url: Optional[str] = None
    gists_url: Optional[str] = None
    starred_url: Optional[str] = None
    subscriptions_url: Optional[str] = None
    organizations_url: Optional[str] = None
    repos_url: Optional[str] = None
    events_url: Optional[str] = None
    received_events_url: Optional[str] = None
    type: Optional[str] = None
    site_admin: Optional[bool] = None


class Repository(GitHubModel):
    """GitHub repository as embedded in webhook payloads"""

    id: Optional[int] = None
    name: Optional[str] = None
    full_name: Optional[str] = None
    owner: Optional[User] = None
    private: Optional[bool] = None
    html_url: Optional[str] = None
    description: Optional[str] = None
    fork: Optional[bool] = None
    url: Optional[str] = None
    forks_url: Optional[str] = None
    keys_url: Optional[str] = None
    collaborators_url: Optional[str] = None
    teams_url: Optional[str] = None
    hooks_url: Optional[str] = None
    issue_events_url: Optional[str] = None
    events_url: Optional[str] = None
    assignees_url: Optional[str] = None
    branches_url: Optional[str] = None
    tags_url: Optional[str] = None
    blobs_url: Optional[str] = None
    git_tags_url: Optional[str] = None
    git_refs_url: Optional[str] = None
    trees_url: Optional[str] = None
    statuses_url: Optional[str] = None
    languages_url: Optional[str] = None
    stargazers_url: Optional[str] = None
    contributors_url: Optional[str] = None
    subscribers_url: Optional[str] = None
    subscription_url: Optional[str] = None
    commits_url: Optional[str] = None
    git_commits_url: Optional[str] = None
    comments_url: Optional[str] = None
    issue_comment_url: Optional[str] = None
    contents_url: Optional[str] = None
    compare_url: Optional[str] = None
    merges_url: Optional[str] = None
    archive_url: Optional[str] = None
    downloads_url: Optional[str] = None
    issues_url: Optional[str] = None
    pulls_url: Optional[str] = None
    milestones_url: Optional[str] = None
    notifications_url: Optional[str] = None
    labels_url: Optional[str] = None
    releases_url: Optional[str] = None
    # push payloads send these three as unix timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    pushed_at: Optional[datetime] = None
    git_url: Optional[str] = None
    ssh_url: Optional[str] = None
    clone_url: Optional[str] = None
    svn_url: Optional[str] = None
    homepage: Optional[str] = None
    size: Optional[int] = None
    stargazers_count: Optional[int] = None
    watchers_count: Optional[int] = None
    language: Optional[str] = None
    has_issues: Optional[bool] = None
    has_downloads: Optional[bool] = None
    has_wiki: Optional[bool] = None
    has_pages: Optional[bool] = None
    forks_count: Optional[int] = None
    mirror_url: Optional[str] = None
    open_issues_count: Optional[int] = None
    forks: Optional[int] = None
    open_issues: Optional[int] = None
    watchers: Optional[int] = None
    default_branch: Optional[str] = None


class Organization(GitHubModel):
    """GitHub organization"""

    login: Optional[str] = None
    id: Optional[int] = None
    url: Optional[str] = None
    repos_url: Optional[str] = None
    events_url: Optional[str] = None
    members_url: Optional[str] = None
    public_members_url: Optional[str] = None
    avatar_url: Optional[str] = None


class Installation(GitHubModel):
    """GitHub App installation reference"""

    id: Optional[int] = None


class Author(GitHubModel):
    """Git identity attached to commits and pushes"""

    name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None


class Commit(GitHubModel):
    """Commit as listed in push and status payloads"""

    id: Optional[str] = None
    tree_id: Optional[str] = None
    timestamp: Optional[datetime] = None
    sha: Optional[str] = None
    commit: Optional["Commit"] = None
    message: Optional[str] = None
    author: Optional[Author] = None
    committer: Optional[Author] = None
    url: Optional[str] = None
    html_url: Optional[str] = None
    distinct: Optional[bool] = None
    added: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)
    modified: List[str] = Field(default_factory=list)


class Branch(GitHubModel):
    name: Optional[str] = None
    commit: Optional[Commit] = None


class Link(GitHubModel):
    href: Optional[str] = None


class Links(GitHubModel):
    """The ``_links`` hypermedia block on pull requests, reviews and comments"""

    self_: Optional[Link] = Field(default=None, alias="self")
    html: Optional[Link] = None
    issue: Optional[Link] = None
    comments: Optional[Link] = None
    review_comments: Optional[Link] = None
    review_comment: Optional[Link] = None
    commits: Optional[Link] = None
    statuses: Optional[Link] = None
    pull_request: Optional[Link] = None


class ChangedValue(GitHubModel):
    """Previous value of an edited attribute"""

    from_: Optional[str] = Field(default=None, alias="from")


class Change(GitHubModel):
    """The ``changes`` block sent with ``edited`` actions"""

    title: Optional[ChangedValue] = None
    body: Optional[ChangedValue] = None
    description: Optional[ChangedValue] = None
    name: Optional[ChangedValue] = None
    privacy: Optional[ChangedValue] = None


class Milestone(GitHubModel):
    url: Optional[str] = None
    html_url: Optional[str] = None
    labels_url: Optional[str] = None
    id: Optional[int] = None
    number: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    creator: Optional[User] = None
    open_issues: Optional[int] = None
    closed_issues: Optional[int] = None
    state: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    due_on: Optional[datetime] = None
    closed_at: Optional[datetime] = None


class Head(GitHubModel):
    """Head or base ref of a pull request"""

    label: Optional[str] = None
    ref: Optional[str] = None
    sha: Optional[str] = None
    user: Optional[User] = None
    repo: Optional[Repository] = None


class PullRequest(GitHubModel):
    """GitHub pull request"""

    url: Optional[str] = None
    id: Optional[int] = None
    html_url: Optional[str] = None
    diff_url: Optional[str] = None
    patch_url: Optional[str] = None
    issue_url: Optional[str] = None
    number: Optional[int] = None
    state: Optional[str] = None
    locked: Optional[bool] = None
    title: Optional[str] = None
    user: Optional[User] = None
    body: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    merged_at: Optional[datetime] = None
    merge_commit_sha: Optional[str] = None
    assignee: Optional[User] = None
    milestone: Optional[Milestone] = None
    commits_url: Optional[str] = None
    review_comment_url: Optional[str] = None
    review_comments_url: Optional[str] = None
    comments_url: Optional[str] = None
    statuses_url: Optional[str] = None
    head: Optional[Head] = None
    base: Optional[Head] = None
    links: Optional[Links] = Field(default=None, alias="_links")
    merged: Optional[bool] = None
    mergeable: Optional[bool] = None
    merged_by: Optional[User] = None
    comments: Optional[int] = None
    review_comments: Optional[int] = None
    commits: Optional[int] = None
    additions: Optional[int] = None
    deletions: Optional[int] = None
    changed_files: Optional[int] = None


class Review(GitHubModel):
    """Pull request review"""

    id: Optional[int] = None
    user: Optional[User] = None
    body: Optional[str] = None
    submitted_at: Optional[datetime] = None
    state: Optional[str] = None
    html_url: Optional[str] = None
    pull_request_url: Optional[str] = None
    links: Optional[Links] = Field(default=None, alias="_links")


class Comment(GitHubModel):
    """Pull request review comment"""

    url: Optional[str] = None
    id: Optional[int] = None
    diff_hunk: Optional[str] = None
    path: Optional[str] = None
    position: Optional[int] = None
    original_position: Optional[int] = None
    commit_id: Optional[str] = None
    original_commit_id: Optional[str] = None
    user: Optional[User] = None
    body: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    html_url: Optional[str] = None
    pull_request_url: Optional[str] = None
    links: Optional[Links] = Field(default=None, alias="_links")


class Release(GitHubModel):
    url: Optional[str] = None
    assets_url: Optional[str] = None
    upload_url: Optional[str] = None
    html_url: Optional[str] = None
    id: Optional[int] = None
    tag_name: Optional[str] = None
    target_commitish: Optional[str] = None
    name: Optional[str] = None
    draft: Optional[bool] = None
    author: Optional[User] = None
    prerelease: Optional[bool] = None
    created_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    assets: List[Dict[str, Any]] = Field(default_factory=list)
    tarball_url: Optional[str] = None
    zipball_url: Optional[str] = None
    body: Optional[str] = None


class Membership(GitHubModel):
    url: Optional[str] = None
    state: Optional[str] = None
    role: Optional[str] = None
    organization_url: Optional[str] = None
    user: Optional[User] = None


class Invitation(GitHubModel):
    """Pending organization invitation"""

    id: Optional[int] = None
    login: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


class Team(GitHubModel):
    name: Optional[str] = None
    id: Optional[int] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    privacy: Optional[str] = None
    permission: Optional[str] = None
    url: Optional[str] = None


class WebhookEvent(GitHubModel):
    """Base for top-level delivery bodies; unknown keys are dropped"""


class PushEvent(WebhookEvent):
    """Payload for the ``push`` event"""

    # Full ref that was pushed, e.g. "refs/heads/master"
    ref: Optional[str] = None
    # SHA of the most recent commit on ref after and before the push
    after: Optional[str] = None
    before: Optional[str] = None
    created: Optional[bool] = None
    deleted: Optional[bool] = None
    forced: Optional[bool] = None
    compare: Optional[str] = None
    # Capped at 20 entries by GitHub
    commits: List[Commit] = Field(default_factory=list)
    head_commit: Optional[Commit] = None
    repository: Optional[Repository] = None
    pusher: Optional[Author] = None
    sender: Optional[User] = None
    installation: Optional[Installation] = None


class PullRequestEvent(WebhookEvent):
    """Payload for the ``pull_request`` event"""

    action: Optional[str] = None
    number: Optional[int] = None
    changes: Optional[Change] = None
    pull_request: Optional[PullRequest] = None
    repository: Optional[Repository] = None
    sender: Optional[User] = None
    installation: Optional[Installation] = None


class PullRequestReviewEvent(WebhookEvent):
    """Payload for the ``pull_request_review`` event"""

    action: Optional[str] = None
    changes: Optional[Change] = None
    review: Optional[Review] = None
    pull_request: Optional[PullRequest] = None
    repository: Optional[Repository] = None
    sender: Optional[User] = None


class PullRequestReviewCommentEvent(WebhookEvent):
    """Payload for the ``pull_request_review_comment`` event"""

    action: Optional[str] = None
    changes: Optional[Change] = None
    pull_request: Optional[PullRequest] = None
    comment: Optional[Comment] = None
    repository: Optional[Repository] = None
    sender: Optional[User] = None


class ReleaseEvent(WebhookEvent):
    """Payload for the ``release`` event"""

    action: Optional[str] = None
    release: Optional[Release] = None
    repository: Optional[Repository] = None
    sender: Optional[User] = None


class RepositoryEvent(WebhookEvent):
    """
    Payload for the ``repository`` event

    Sent when a repository is created, made public or made private.
    Organization hooks also receive it when a repository is deleted.
    """

    action: Optional[str] = None
    repository: Optional[Repository] = None
    organization: Optional[Organization] = None
    sender: Optional[User] = None


class StatusEvent(WebhookEvent):
    """Payload for the ``status`` event, fired when a commit status changes"""

    id: Optional[int] = None
    sha: Optional[str] = None
    name: Optional[str] = None
    state: Optional[str] = None
    description: Optional[str] = None
    target_url: Optional[str] = None
    context: Optional[str] = None
    branches: List[Branch] = Field(default_factory=list)
    commit: Optional[Commit] = None
    repository: Optional[Repository] = None
    sender: Optional[User] = None


class TeamEvent(WebhookEvent):
    """Payload for the ``team`` event (organization hooks only)"""

    action: Optional[str] = None
    team: Optional[Team] = None
    changes: Optional[Change] = None
    repository: Optional[Repository] = None
    organization: Optional[Organization] = None
    sender: Optional[User] = None


class TeamAddEvent(WebhookEvent):
    """Payload for the ``team_add`` event, fired when a repository joins a team"""

    team: Optional[Team] = None
    repository: Optional[Repository] = None
    organization: Optional[Organization] = None
    sender: Optional[User] = None


class WatchEvent(WebhookEvent):
    """
    Payload for the ``watch`` event

    Despite the name this reports starring: the sender starred the repository.
    """

    action: Optional[str] = None
    repository: Optional[Repository] = None
    sender: Optional[User] = None


class OrganizationEvent(WebhookEvent):
    """Payload for the ``organization`` event"""

    action: Optional[str] = None
    invitation: Optional[Invitation] = None
    membership: Optional[Membership] = None
    organization: Optional[Organization] = None
    sender: Optional[User] = None


Commit.model_rebuild()


# Keyed by the X-GitHub-Event header value
EVENT_PAYLOADS: Dict[str, Type[BaseModel]] = {
    "push": PushEvent,
    "pull_request": PullRequestEvent,
    "pull_request_review": PullRequestReviewEvent,
    "pull_request_review_comment": PullRequestReviewCommentEvent,
    "release": ReleaseEvent,
    "repository": RepositoryEvent,
    "status": StatusEvent,
    "team": TeamEvent,
    "team_add": TeamAddEvent,
    "watch": WatchEvent,
    "organization": OrganizationEvent,
    "ping": PingPayload,
}


class UnknownEventError(KeyError):
    """Raised when no payload model is registered for an event name"""

    def __init__(self, event_name: str):
        self.event_name = event_name
        super().__init__(event_name)

    def __str__(self) -> str:
        return f"no payload model registered for event {self.event_name!r}"


def parse_event_payload(event_name: str, data: Dict[str, Any]) -> BaseModel:
    """
    Decode a delivery body into the record for its event name

    Args:
        event_name: Value of the X-GitHub-Event header
        data: Decoded JSON body

    Returns:
        The populated payload record

    Raises:
        UnknownEventError: If the event name has no registered model
        pydantic.ValidationError: If the body does not fit the model
    """
    model = EVENT_PAYLOADS.get(event_name)
    if model is None:
        raise UnknownEventError(event_name)
    return model.model_validate(data)
