"""
Webhook subscription models: the request that registers a hook, the
subscription GitHub returns, and the ping delivery that follows it.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import GitHubModel


class Event(str, Enum):
    """
    Webhook event names

    GitHub's catalogue keeps growing, so fields holding event names are typed
    as plain strings and these members are just the names this package knows.
    """

    ALL = "*"
    ISSUES = "issues"
    PUSH = "push"
    PULL_REQUEST = "pull_request"
    PULL_REQUEST_REVIEW = "pull_request_review"
    PULL_REQUEST_REVIEW_COMMENT = "pull_request_review_comment"
    RELEASE = "release"
    REPOSITORY = "repository"
    STATUS = "status"
    TEAM = "team"
    TEAM_ADD = "team_add"
    WATCH = "watch"
    ORGANIZATION = "organization"
    PING = "ping"


class ContentType(str, Enum):
    """Encodings GitHub can use when delivering payloads"""

    JSON = "json"
    JSONP = "jsonp"
    XML = "xml"
    FORM = "form"


class PayloadConfig(GitHubModel):
    """Where and how GitHub delivers payloads for a hook"""

    url: Optional[str] = None
    content_type: Optional[str] = None


class SubscribeRequest(GitHubModel):
    """Hook configuration sent when creating a subscription"""

    class Config:
        frozen = True

    name: Optional[str] = None
    active: Optional[bool] = None
    events: List[str] = Field(default_factory=list)
    config: Optional[PayloadConfig] = None


class RepoSubscribeRequest(GitHubModel):
    """A SubscribeRequest addressed to one repository"""

    class Config:
        frozen = True

    owner: str
    repo: str
    hook_subscription: SubscribeRequest


class Subscription(GitHubModel):
    """Hook record returned by GitHub after a subscription is created"""

    id: Optional[int] = None
    url: Optional[str] = None
    test_url: Optional[str] = None
    ping_url: Optional[str] = None
    name: Optional[str] = None
    events: List[str] = Field(default_factory=list)
    active: Optional[bool] = None
    config: Optional[PayloadConfig] = None
    updated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def is_valid(self) -> bool:
        """A subscription GitHub actually created always carries an id"""
        return bool(self.id)


class Hook(GitHubModel):
    """Hook descriptor embedded in ping deliveries"""

    id: Optional[int] = None
    url: Optional[str] = None
    test_url: Optional[str] = None
    ping_url: Optional[str] = None
    name: Optional[str] = None
    events: List[str] = Field(default_factory=list)
    active: Optional[bool] = None
    config: Optional[PayloadConfig] = None
    updated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    type: Optional[str] = None
    app_id: Optional[int] = None


class PingPayload(GitHubModel):
    """Body of the ``ping`` delivery GitHub sends when a hook is created"""

    zen: Optional[str] = None
    hook_id: Optional[int] = None
    hook: Optional[Hook] = None
