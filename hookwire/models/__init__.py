"""
Data models for GitHub webhook payloads and subscriptions
"""

from .base import GitHubModel
from .hooks import (
    ContentType,
    Event,
    Hook,
    PayloadConfig,
    PingPayload,
    RepoSubscribeRequest,
    SubscribeRequest,
    Subscription,
)
from .github import (
    EVENT_PAYLOADS,
    AccountType,
    Action,
    Privacy,
    PullRequestEvent,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
    PushEvent,
    ReleaseEvent,
    RepositoryEvent,
    State,
    StatusEvent,
    TeamAddEvent,
    TeamEvent,
    UnknownEventError,
    WatchEvent,
    OrganizationEvent,
    parse_event_payload,
)

__all__ = [
    "GitHubModel",
    "ContentType",
    "Event",
    "Hook",
    "PayloadConfig",
    "PingPayload",
    "RepoSubscribeRequest",
    "SubscribeRequest",
    "Subscription",
    "EVENT_PAYLOADS",
    "AccountType",
    "Action",
    "Privacy",
    "State",
    "PushEvent",
    "PullRequestEvent",
    "PullRequestReviewEvent",
    "PullRequestReviewCommentEvent",
    "ReleaseEvent",
    "RepositoryEvent",
    "StatusEvent",
    "TeamEvent",
    "TeamAddEvent",
    "WatchEvent",
    "OrganizationEvent",
    "UnknownEventError",
    "parse_event_payload",
]
