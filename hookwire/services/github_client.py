"""
GitHub REST client for registering webhook subscriptions
"""

import threading
from typing import Any, Dict, Optional

import httpx
import structlog

from config.settings import API_KEY_ENV_VAR, Settings
from hookwire.models.hooks import RepoSubscribeRequest, Subscription

logger = structlog.get_logger()

DEFAULT_API_URL = "https://api.github.com"

# Pins the REST API version, see https://developer.github.com/v3/#current-version
GITHUB_ACCEPT = "application/vnd.github.v3+json"


class MissingCredentialError(ValueError):
    """Raised when the API key environment variable is unset or empty"""

    def __init__(self, env_var: str = API_KEY_ENV_VAR):
        self.env_var = env_var
        super().__init__(f"expecting {env_var!r} to have been set in your environment")


class GitHubAPIError(Exception):
    """Custom exception for GitHub API errors"""
    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class EmptySubscriptionError(GitHubAPIError):
    """GitHub answered 2xx but the body held no subscription"""
    def __init__(self):
        super().__init__("no subscription could be parsed")


class GitHubClient:
    """GitHub API client for webhook subscriptions"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        base_url: str = DEFAULT_API_URL,
    ):
        self._lock = threading.Lock()
        self._api_key = api_key
        self._transport = transport
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_env(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "GitHubClient":
        """
        Build a client from the HOOKWIRE_GITHUB_API_KEY environment variable

        Args:
            settings: Settings to read from; loaded from the environment if omitted
            transport: Optional httpx transport for outbound requests

        Raises:
            MissingCredentialError: If the API key is unset or empty
        """
        settings = settings or Settings()
        api_key = settings.github_api_key
        if not api_key:
            raise MissingCredentialError(API_KEY_ENV_VAR)

        return cls(api_key=api_key, transport=transport, base_url=settings.GITHUB_API_URL)

    @property
    def has_credentials(self) -> bool:
        with self._lock:
            return bool(self._api_key)

    def set_transport(self, transport: Optional[httpx.AsyncBaseTransport]) -> None:
        """Replace the transport used by subsequent requests; None restores httpx's default"""
        with self._lock:
            self._transport = transport

    def _request_state(self):
        # Read once per request so a concurrent set_transport cannot split a call
        with self._lock:
            return self._api_key, self._transport

    async def _make_request(self, method: str, url: str, **kwargs) -> Any:
        """Make a single request to the GitHub API and return the decoded JSON body"""
        api_key, transport = self._request_state()

        headers = {
            "Accept": GITHUB_ACCEPT,
            "User-Agent": "hookwire/1.0",
        }
        if api_key:
            headers["Authorization"] = f"token {api_key}"

        try:
            async with httpx.AsyncClient(
                transport=transport,
                headers=headers,
                timeout=httpx.Timeout(30.0),
            ) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.error("GitHub API request failed", error=str(e), url=url)
            raise

        if not response.is_success:
            status_line = f"{response.status_code} {response.reason_phrase}".strip()
            logger.warning(
                "GitHub API returned an error status",
                url=url,
                status_code=response.status_code,
            )
            raise GitHubAPIError(status_line, status_code=response.status_code)

        return response.json()

    async def subscribe_to_repo(self, request: RepoSubscribeRequest) -> Subscription:
        """
        Create a webhook on a repository

        Args:
            request: Repository coordinates and the hook configuration to register

        Returns:
            Subscription: The hook GitHub created

        Raises:
            GitHubAPIError: GitHub answered with a non-2xx status
            EmptySubscriptionError: The response decoded to a subscription without an id
            httpx.TransportError: The request never got a response
            json.JSONDecodeError: The response body was not JSON
            pydantic.ValidationError: The response JSON did not fit a subscription
        """
        url = f"{self.base_url}/repos/{request.owner}/{request.repo}/hooks"
        body: Dict[str, Any] = request.hook_subscription.to_json_dict()

        logger.debug(
            "Creating webhook subscription",
            owner=request.owner,
            repo=request.repo,
            events=body.get("events"),
        )

        data = await self._make_request("POST", url, json=body)
        # A JSON null body decodes to no subscription at all
        subscription = Subscription.model_validate(data) if data is not None else Subscription()
        if not subscription.is_valid():
            logger.warning("Empty subscription in GitHub response", owner=request.owner, repo=request.repo)
            raise EmptySubscriptionError()

        logger.info(
            "Webhook subscription created",
            owner=request.owner,
            repo=request.repo,
            hook_id=subscription.id,
        )
        return subscription
