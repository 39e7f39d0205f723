"""
Base API client for the Open-Meteo services.

Handles HTTP requests, session management and translation of transport
failures into application errors.
"""

import asyncio
import logging
from typing import Dict, Any, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore

from ..core import constants
from ..core.exceptions import NetworkError, MalformedResponseError


class APIClient:
    """Base client performing JSON GET requests."""

    def __init__(
        self,
        timeout: int = constants.DEFAULT_TIMEOUT,
        max_retries: int = constants.DEFAULT_MAX_RETRIES,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.verify_ssl = verify_ssl

        if not verify_ssl:
            import urllib3
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        # Setup session with retry strategy
        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=1,
            status_forcelist=constants.RETRY_STATUS_CODES,
            allowed_methods=["GET"]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.headers.update({"Accept": "application/json"})

    def _make_request(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Make HTTP GET request.

        Args:
            url: Full endpoint URL
            params: Query parameters (URL-encoded by requests)

        Returns:
            Response object

        Raises:
            NetworkError: On transport failure, timeout or non-success status
        """
        self.logger.debug(f"GET {url} params={params}")

        try:
            response = self.session.get(
                url,
                params=params,
                timeout=self.timeout,
                verify=self.verify_ssl
            )
            response.raise_for_status()
            return response

        except requests.exceptions.Timeout as e:
            self.logger.error(f"API request timed out: GET {url} - {e}")
            raise NetworkError(f"Request to {url} timed out after {self.timeout}s") from e

        except requests.exceptions.RequestException as e:
            self.logger.error(f"API request failed: GET {url} - {e}")
            raise NetworkError(f"Request to {url} failed: {e}") from e

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Make GET request and decode the JSON object body.

        Args:
            url: Full endpoint URL
            params: Query parameters

        Returns:
            JSON response as dictionary

        Raises:
            NetworkError: On transport failure
            MalformedResponseError: If the body is not a JSON object
        """
        response = self._make_request(url, params=params)
        try:
            payload = response.json()
        except ValueError as e:
            self.logger.error(f"Invalid JSON from {url}: {e}")
            raise MalformedResponseError(f"Response from {url} is not valid JSON") from e

        if not isinstance(payload, dict):
            raise MalformedResponseError(f"Response from {url} is not a JSON object")
        return payload

    async def get_async(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Awaitable variant of get(); the blocking call runs in a worker thread."""
        return await asyncio.to_thread(self.get, url, params)

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
