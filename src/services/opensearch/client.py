import logging
from typing import Any, Dict, Iterable, Optional, Union

import httpx
from src.config import Settings, get_settings
from src.exceptions import BackendConnectionError, BackendRequestError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}

RequestContent = Union[str, bytes, Iterable[bytes]]


class OpenSearchClient:
    """
    Thin HTTP client for the search backend.

    Every call is blocking and, unless a timeout is configured, waits for the
    backend indefinitely. Any non-success status is raised as
    BackendRequestError with the backend's body attached verbatim.
    """

    def __init__(
        self,
        host: str = "http://localhost:9200",
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize OpenSearch client."""
        self.host = host.rstrip("/")
        self.settings = settings or get_settings()

        self.client = httpx.Client(
            base_url=self.host,
            timeout=httpx.Timeout(self.settings.opensearch.timeout_seconds),
            transport=transport,
        )
        logger.info(f"OpenSearch client initialized with host: {self.host}")

    def request(
        self,
        method: str,
        path: str,
        operation: str,
        json: Optional[Dict[str, Any]] = None,
        content: Optional[RequestContent] = None,
        headers: Optional[Dict[str, str]] = None,
        allowed_statuses: Iterable[int] = (),
    ) -> httpx.Response:
        """
        Send one request and check its status.

        Args:
            method: HTTP method
            path: Path relative to the backend host
            operation: Human-readable name used in logs and errors
            json: JSON body
            content: Raw body, possibly an iterator of byte chunks
            headers: Extra request headers
            allowed_statuses: Non-success statuses the caller handles itself

        Returns:
            The backend response

        Raises:
            BackendRequestError: On a non-success status
            BackendConnectionError: When the backend cannot be reached
        """
        endpoint = f"{self.host}{path}"
        logger.debug(f"{method} {endpoint}")
        try:
            response = self.client.request(method, path, json=json, content=content, headers=headers)
        except httpx.TransportError as e:
            logger.error(f"{operation} could not reach {endpoint}: {e}")
            raise BackendConnectionError(f"{operation} could not reach {endpoint}: {e}") from e

        if response.is_success or response.status_code in allowed_statuses:
            return response

        logger.error(f"{operation} failed with status {response.status_code}: {response.text}")
        raise BackendRequestError(operation, response.status_code, response.text, endpoint=endpoint)

    def health_check(self) -> bool:
        """Check if OpenSearch is healthy and accessible."""
        try:
            health = self.request("GET", "/_cluster/health", "Health check").json()
            return health.get("status") in ["green", "yellow"]
        except (BackendConnectionError, BackendRequestError, ValueError) as e:
            logger.error(f"Health check failed: {e}")
            return False

    def close(self) -> None:
        self.client.close()
