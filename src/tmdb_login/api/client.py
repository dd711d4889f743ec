"""
Base API client for the TMDB v3 API.

Handles HTTP requests, API key injection and response classification.
"""

import logging
from typing import Dict, Any, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore

from ..core import constants
from ..core.logger import redact
from ..exceptions import HttpStatusError, MalformedResponseError, TransportError


class APIClient:
    """Base client for interacting with the TMDB API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = constants.DEFAULT_API_BASE_URL,
        timeout: int = constants.DEFAULT_TIMEOUT,
        max_retries: int = constants.DEFAULT_MAX_RETRIES,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client.

        Args:
            api_key: TMDB API key sent with every request
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            max_retries: Maximum number of transport retry attempts
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        if not api_key:
            raise ValueError("API key is required")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.verify_ssl = verify_ssl

        if not verify_ssl:
            import urllib3
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        # Only connection-level failures are ever retried, never statuses
        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            connect=max_retries,
            read=0,
            status=0,
            backoff_factor=1,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self._update_headers()

    def _update_headers(self) -> None:
        """Set default session headers."""
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json"
        })

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> requests.Response:
        """
        Make HTTP request to API.

        Args:
            method: HTTP method (GET, POST, DELETE)
            endpoint: API endpoint (without base URL)
            params: Query parameters, the API key is added automatically
            **kwargs: Additional arguments for requests

        Returns:
            Response object with a 2xx status

        Raises:
            TransportError: If no response was received
            HttpStatusError: If the status is outside 200-299
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        query = {constants.PARAM_API_KEY: self.api_key}
        if params:
            query.update(params)
        kwargs.setdefault("verify", self.verify_ssl)

        self.logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=query,
                timeout=self.timeout,
                **kwargs
            )
        except requests.exceptions.RequestException as e:
            reason = redact(str(e))
            self.logger.error(f"API request failed: {method} {url} - {reason}")
            raise TransportError(reason) from e

        if not 200 <= response.status_code <= 299:
            status_message = self._status_message(response)
            self.logger.error(
                f"API request returned status {response.status_code}: {method} {url}"
                + (f" - {status_message}" if status_message else "")
            )
            raise HttpStatusError(
                constants.REASON_NON_2XX,
                status_code=response.status_code,
                status_message=status_message,
            )

        return response

    @staticmethod
    def _status_message(response: requests.Response) -> Optional[str]:
        """Extract TMDB's status_message from an error body, if any."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            return body.get("status_message")
        return None

    def _decode(self, response: requests.Response, endpoint: str) -> Dict[str, Any]:
        """
        Decode a response body as a JSON object.

        An empty body or a JSON null decodes to an empty dict, so the caller
        reports the missing field rather than a parse error.

        Raises:
            MalformedResponseError: If the body is not a JSON object
        """
        if not response.content or not response.content.strip():
            return {}

        try:
            data = response.json()
        except ValueError as e:
            self.logger.error(f"Could not parse JSON returned from {endpoint}: {e}")
            raise MalformedResponseError("could not parse the JSON data returned from the API") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            self.logger.error(f"Expected a JSON object from {endpoint}, got {type(data).__name__}")
            raise MalformedResponseError("response is not a JSON object")
        return data

    def get(self, endpoint: str, params: Optional[Dict] = None) -> Dict[str, Any]:
        """
        Make GET request.

        Args:
            endpoint: API endpoint
            params: Query parameters

        Returns:
            JSON response as dictionary
        """
        response = self._make_request("GET", endpoint, params=params)
        return self._decode(response, endpoint)

    def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict] = None
    ) -> Dict[str, Any]:
        """
        Make POST request.

        Args:
            endpoint: API endpoint
            data: Request body data
            params: Query parameters

        Returns:
            JSON response as dictionary
        """
        response = self._make_request("POST", endpoint, params=params, json=data)
        return self._decode(response, endpoint)

    def delete(self, endpoint: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Make DELETE request.

        Args:
            endpoint: API endpoint
            data: Request body data

        Returns:
            JSON response as dictionary
        """
        response = self._make_request("DELETE", endpoint, json=data)
        return self._decode(response, endpoint)

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
