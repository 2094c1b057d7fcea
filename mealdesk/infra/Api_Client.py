"""HTTP client for the meal-planning backend.

Every remote call goes through ApiClient.request so that failures reach the
caller as a single error type (ApiError) carrying a human readable message:

  * transport failure         -> message from the exception, no status code
  * non-2xx, JSON {message}   -> that message + status code
  * non-2xx, JSON w/o message -> "Error: <reason phrase>"
  * non-2xx, unparseable body -> "HTTP <status>: <reason phrase>"

Redirects are followed; a 3xx that is not a redirect (304) is an error
like any other non-2xx.

No retries are attempted.
"""
import logging
from typing import Any, Optional

import httpx

from mealdesk.utilities.config import API_BASE_URL, API_TIMEOUT

logger = logging.getLogger(__name__)

COMMUNICATION_ERROR = "An error occurred while communicating with the API"


class ApiError(Exception):
    """Remote call failed; message is safe to show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


def _error_message(response: httpx.Response) -> str:
    reason = response.reason_phrase or ""
    try:
        data = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {reason}"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"Error: {reason}"


class ApiClient:
    def __init__(self, base_url: str = API_BASE_URL, timeout: float = API_TIMEOUT,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url
        self._http = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
            headers={"Content-Type": "application/json"},
        )

    def request(self, method: str, endpoint: str, payload: Any = None) -> Any:
        """Send a request and return the decoded JSON body (None when empty)."""
        logger.debug("%s %s", method, endpoint)
        try:
            response = self._http.request(method, endpoint, json=payload)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, endpoint, e)
            raise ApiError(str(e) or COMMUNICATION_ERROR) from e

        if not response.is_success:
            message = _error_message(response)
            logger.warning("%s %s -> %s %s", method, endpoint, response.status_code, message)
            raise ApiError(message, response.status_code)

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(COMMUNICATION_ERROR, response.status_code) from e

    def get(self, endpoint: str) -> Any:
        return self.request("GET", endpoint)

    def post(self, endpoint: str, payload: Any = None) -> Any:
        return self.request("POST", endpoint, payload)

    def put(self, endpoint: str, payload: Any = None) -> Any:
        return self.request("PUT", endpoint, payload)

    def delete(self, endpoint: str) -> Any:
        return self.request("DELETE", endpoint)

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
