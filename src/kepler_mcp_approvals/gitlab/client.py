"""GitLab API client.

Provides the shared async HTTP client used by the API services. It owns
the connection, authentication headers and the mapping of error responses
to exceptions; services only format paths and decode payloads.
"""

from __future__ import annotations

import urllib.parse
from typing import TYPE_CHECKING, Any

import httpx

from kepler_mcp_approvals.gitlab.exceptions import (
    GitLabAPIError,
    GitLabAuthenticationError,
    GitLabConflictError,
    GitLabForbiddenError,
    GitLabNotFoundError,
    GitLabRateLimitError,
    GitLabValidationError,
)
from kepler_mcp_approvals.logging_config import get_logger

if TYPE_CHECKING:
    from types import TracebackType

    from kepler_mcp_approvals.security import AuthStrategy

logger = get_logger(__name__)

# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 30.0

_ERRORS_BY_STATUS: dict[int, type[GitLabAPIError]] = {
    400: GitLabValidationError,
    401: GitLabAuthenticationError,
    403: GitLabForbiddenError,
    404: GitLabNotFoundError,
    409: GitLabConflictError,
}


class GitLabClient:
    """Async client for the GitLab REST API.

    This client handles:
    - Authentication via AuthStrategy (access token or no auth)
    - Error handling and exception mapping
    - URL encoding for project paths

    Example:
        ```python
        async with GitLabClient("https://gitlab.com", auth_strategy) as client:
            approvals = MergeRequestApprovalsService(client)
            state = await approvals.approve_merge_request("mygroup/myproject", 42)
        ```
    """

    def __init__(
        self,
        base_url: str,
        auth_strategy: AuthStrategy,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the GitLab client.

        Args:
            base_url: GitLab instance base URL (e.g., "https://gitlab.com")
            auth_strategy: Authentication strategy for API requests
            timeout: Request timeout in seconds
        """
        self._base_url = base_url.rstrip("/")
        self._api_url = f"{self._base_url}/api/v4"
        self._auth_strategy = auth_strategy
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def api_url(self) -> str:
        """Root URL of the REST API."""
        return self._api_url

    async def __aenter__(self) -> GitLabClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client.

        Note: Auth headers are fetched per-request, not stored on the client.
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def encode_project_id(project_id: str | int) -> str:
        """URL-encode a project ID or path.

        GitLab accepts either numeric IDs or URL-encoded paths like "group%2Fproject".

        Args:
            project_id: Numeric ID or path like "mygroup/myproject"

        Returns:
            URL-encoded project identifier
        """
        if isinstance(project_id, int):
            return str(project_id)
        return urllib.parse.quote(project_id, safe="")

    def _handle_error_response(self, response: httpx.Response) -> None:
        """Raise the exception matching an error response.

        Args:
            response: HTTP response object

        Raises:
            GitLabAPIError: Appropriate exception based on status code
        """
        status = response.status_code
        body: dict | list | str | None = None

        try:
            body = response.json()
        except ValueError:
            message = response.text or f"HTTP {status}"
        else:
            if isinstance(body, dict):
                message = str(body.get("message") or body.get("error") or body)
            else:
                message = str(body)

        logger.debug("GitLab API error %d: %s", status, message)

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise GitLabRateLimitError(
                message,
                status,
                body,
                int(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        error_cls = _ERRORS_BY_STATUS.get(status, GitLabAPIError)
        raise error_cls(message, status, body)

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> Any:
        """Make an API request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path (without base URL)
            params: Query parameters
            json_data: JSON body for POST/PUT requests

        Returns:
            Parsed JSON response, or None for empty responses

        Raises:
            GitLabAPIError: On API errors
        """
        client = await self._get_client()
        url = f"{self._api_url}{path}"

        # Filter out None values from params
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        # Get auth headers per-request
        auth_headers = await self._auth_strategy.get_auth_headers()

        logger.debug("GitLab API request: %s %s", method, path)

        response = await client.request(
            method=method,
            url=url,
            params=params,
            json=json_data,
            headers=auth_headers,
        )

        if not response.is_success:
            self._handle_error_response(response)

        # Empty responses (e.g., unapprove) decode to None
        if response.status_code == 204 or not response.content:
            return None

        return response.json()

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a POST request."""
        return await self.request("POST", path, params=params, json_data=json_data)

    async def put(
        self,
        path: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a PUT request."""
        return await self.request("PUT", path, params=params, json_data=json_data)
