"""
Tests for GitHub API client
"""

import json

import httpx
import pytest
from pydantic import ValidationError

from config.settings import Settings
from hookwire.models.hooks import (
    ContentType,
    Event,
    PayloadConfig,
    RepoSubscribeRequest,
    SubscribeRequest,
)
from hookwire.services.github_client import (
    EmptySubscriptionError,
    GitHubAPIError,
    GitHubClient,
    MissingCredentialError,
)


SUBSCRIPTION_BODY = {
    "id": 12345678,
    "url": "https://api.github.com/repos/orijtech/gcla/hooks/12345678",
    "test_url": "https://api.github.com/repos/orijtech/gcla/hooks/12345678/test",
    "ping_url": "https://api.github.com/repos/orijtech/gcla/hooks/12345678/pings",
    "name": "web",
    "events": ["issues", "push", "pull_request"],
    "active": True,
    "config": {"url": "https://hooks.example.com/gcla-test", "content_type": "json"},
    "updated_at": "2017-06-01T12:00:00Z",
    "created_at": "2017-06-01T12:00:00Z",
}


class RecordingTransport:
    """Builds an httpx.MockTransport that records every request it sees"""

    def __init__(self, status_code=201, json_body=None, content=None):
        self.requests = []
        self.status_code = status_code
        self.json_body = json_body
        self.content = content

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.json_body is not None:
            return httpx.Response(self.status_code, json=self.json_body)
        return httpx.Response(self.status_code, content=self.content or b"")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class TestGitHubClient:
    """Test cases for GitHub API client"""

    @pytest.fixture
    def subscribe_request(self):
        """Subscription request for orijtech/gcla"""
        return RepoSubscribeRequest(
            owner="orijtech",
            repo="gcla",
            hook_subscription=SubscribeRequest(
                name="web",
                active=True,
                events=[Event.ISSUES, Event.PUSH, Event.PULL_REQUEST],
                config=PayloadConfig(
                    url="https://hooks.example.com/gcla-test",
                    content_type=ContentType.JSON,
                ),
            ),
        )

    @pytest.fixture
    def recorder(self):
        return RecordingTransport(status_code=201, json_body=SUBSCRIPTION_BODY)

    @pytest.fixture
    def client(self, recorder):
        """Create a test client"""
        return GitHubClient(api_key="test_token", transport=recorder.transport)

    def test_from_env_reads_api_key(self, monkeypatch):
        """Test client construction from the environment"""
        monkeypatch.setenv("HOOKWIRE_GITHUB_API_KEY", "env_token")

        client = GitHubClient.from_env()

        assert client.has_credentials
        assert client.base_url == "https://api.github.com"

    def test_from_env_missing_key_raises_error(self, monkeypatch):
        """Test that a missing API key names the expected variable"""
        monkeypatch.delenv("HOOKWIRE_GITHUB_API_KEY", raising=False)

        with pytest.raises(MissingCredentialError, match="HOOKWIRE_GITHUB_API_KEY"):
            GitHubClient.from_env()

    def test_from_env_ignores_legacy_variable(self, monkeypatch):
        """Test that only HOOKWIRE_GITHUB_API_KEY supplies the key"""
        monkeypatch.delenv("HOOKWIRE_GITHUB_API_KEY", raising=False)
        monkeypatch.setenv("GCLA_GITHUB_API_KEY", "old_token")

        with pytest.raises(MissingCredentialError, match="HOOKWIRE_GITHUB_API_KEY"):
            GitHubClient.from_env()

    def test_from_env_empty_key_raises_error(self, monkeypatch):
        """Test that an empty API key is treated as missing"""
        monkeypatch.setenv("HOOKWIRE_GITHUB_API_KEY", "")

        with pytest.raises(ValueError, match="HOOKWIRE_GITHUB_API_KEY"):
            GitHubClient.from_env()

    def test_from_settings_uses_configured_api_url(self):
        """Test that explicit settings override the environment"""
        settings = Settings(
            HOOKWIRE_GITHUB_API_KEY="abc",
            GITHUB_API_URL="https://github.example.com/api/v3/",
        )

        client = GitHubClient.from_env(settings)

        assert client.base_url == "https://github.example.com/api/v3"

    @pytest.mark.asyncio
    async def test_subscribe_to_repo_success(self, client, recorder, subscribe_request):
        """Test a 201 response decodes into the subscription"""
        subscription = await client.subscribe_to_repo(subscribe_request)

        assert subscription.id == 12345678
        assert subscription.url == SUBSCRIPTION_BODY["url"]
        assert subscription.test_url == SUBSCRIPTION_BODY["test_url"]
        assert subscription.ping_url == SUBSCRIPTION_BODY["ping_url"]
        assert subscription.name == "web"
        assert subscription.events == ["issues", "push", "pull_request"]
        assert subscription.active is True
        assert subscription.config.url == "https://hooks.example.com/gcla-test"
        assert subscription.config.content_type == "json"
        assert subscription.to_json_dict()["created_at"].startswith("2017-06-01T12:00:00")

    @pytest.mark.asyncio
    async def test_subscribe_to_repo_request_shape(self, client, recorder, subscribe_request):
        """Test the outbound request method, URL, headers and body"""
        await client.subscribe_to_repo(subscribe_request)

        assert len(recorder.requests) == 1
        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.github.com/repos/orijtech/gcla/hooks"
        assert request.headers["Accept"] == "application/vnd.github.v3+json"
        assert request.headers["Authorization"] == "token test_token"
        assert json.loads(request.content) == {
            "name": "web",
            "active": True,
            "events": ["issues", "push", "pull_request"],
            "config": {"url": "https://hooks.example.com/gcla-test", "content_type": "json"},
        }

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_key(self, recorder, subscribe_request):
        """Test that anonymous clients still send the Accept header"""
        client = GitHubClient(transport=recorder.transport)

        await client.subscribe_to_repo(subscribe_request)

        request = recorder.requests[0]
        assert request.headers["Accept"] == "application/vnd.github.v3+json"
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_subscribe_to_repo_not_found(self, subscribe_request):
        """Test that a 404 surfaces the status line"""
        recorder = RecordingTransport(status_code=404, json_body={"message": "Not Found"})
        client = GitHubClient(api_key="test_token", transport=recorder.transport)

        with pytest.raises(GitHubAPIError) as exc_info:
            await client.subscribe_to_repo(subscribe_request)

        assert "404 Not Found" in str(exc_info.value)
        assert exc_info.value.status_code == 404
        assert not isinstance(exc_info.value, EmptySubscriptionError)

    @pytest.mark.asyncio
    async def test_subscribe_to_repo_empty_object(self, subscribe_request):
        """Test that an empty JSON object is rejected"""
        recorder = RecordingTransport(status_code=201, json_body={})
        client = GitHubClient(api_key="test_token", transport=recorder.transport)

        with pytest.raises(EmptySubscriptionError, match="no subscription could be parsed"):
            await client.subscribe_to_repo(subscribe_request)

    @pytest.mark.asyncio
    async def test_subscribe_to_repo_null_body(self, subscribe_request):
        """Test that a JSON null body is rejected as an empty subscription"""
        recorder = RecordingTransport(status_code=201, content=b"null")
        client = GitHubClient(api_key="test_token", transport=recorder.transport)

        with pytest.raises(EmptySubscriptionError, match="no subscription could be parsed"):
            await client.subscribe_to_repo(subscribe_request)

    @pytest.mark.asyncio
    async def test_subscribe_to_repo_zero_id(self, subscribe_request):
        """Test that a body without a usable id is rejected"""
        recorder = RecordingTransport(status_code=201, json_body={"id": 0, "name": "web"})
        client = GitHubClient(api_key="test_token", transport=recorder.transport)

        with pytest.raises(EmptySubscriptionError):
            await client.subscribe_to_repo(subscribe_request)

    @pytest.mark.asyncio
    async def test_subscribe_to_repo_malformed_json(self, subscribe_request):
        """Test that decode errors propagate unchanged"""
        recorder = RecordingTransport(status_code=201, content=b"{not json")
        client = GitHubClient(api_key="test_token", transport=recorder.transport)

        with pytest.raises(json.JSONDecodeError):
            await client.subscribe_to_repo(subscribe_request)

    @pytest.mark.asyncio
    async def test_subscribe_to_repo_wrong_shape(self, subscribe_request):
        """Test that JSON of the wrong shape fails validation"""
        recorder = RecordingTransport(status_code=201, json_body=[1, 2, 3])
        client = GitHubClient(api_key="test_token", transport=recorder.transport)

        with pytest.raises(ValidationError):
            await client.subscribe_to_repo(subscribe_request)

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, subscribe_request):
        """Test that network failures are not wrapped"""
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = GitHubClient(api_key="test_token", transport=httpx.MockTransport(refuse))

        with pytest.raises(httpx.ConnectError, match="connection refused"):
            await client.subscribe_to_repo(subscribe_request)

    @pytest.mark.asyncio
    async def test_set_transport_applies_to_later_requests(self, client, recorder, subscribe_request):
        """Test that a replaced transport handles subsequent calls"""
        replacement = RecordingTransport(status_code=201, json_body=SUBSCRIPTION_BODY)

        client.set_transport(replacement.transport)
        await client.subscribe_to_repo(subscribe_request)

        assert recorder.requests == []
        assert len(replacement.requests) == 1

    @pytest.mark.asyncio
    async def test_set_transport_during_request(self, subscribe_request):
        """Test that swapping the transport mid-request only affects later calls"""
        replacement = RecordingTransport(status_code=201, json_body=SUBSCRIPTION_BODY)
        original_requests = []

        def swap_then_answer(request):
            original_requests.append(request)
            client.set_transport(replacement.transport)
            return httpx.Response(201, json=SUBSCRIPTION_BODY)

        client = GitHubClient(api_key="test_token", transport=httpx.MockTransport(swap_then_answer))

        subscription = await client.subscribe_to_repo(subscribe_request)

        assert subscription.id == 12345678
        assert len(original_requests) == 1
        assert replacement.requests == []

        await client.subscribe_to_repo(subscribe_request)

        assert len(original_requests) == 1
        assert len(replacement.requests) == 1

    def test_subscribe_request_is_immutable(self, subscribe_request):
        """Test that subscription requests cannot be changed after construction"""
        with pytest.raises(ValidationError):
            subscribe_request.hook_subscription.name = "other"
