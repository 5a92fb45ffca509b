"""Shared HTTP plumbing for the GitHub, OpenAI and Jira clients."""

import logging

import httpx

from prfill.errors import UpstreamError

# Applied to connect, read, write and pool alike.
TIMEOUT = httpx.Timeout(60.0)

USER_AGENT = "prfill"

logger = logging.getLogger(__name__)


class ApiClient:
    """Base for the REST clients: one synchronous request at a time, errors as UpstreamError."""

    base_url: str = ""

    def __init__(self, headers: dict[str, str], auth: httpx.Auth | tuple[str, str] | None = None) -> None:
        self._headers = {"User-Agent": USER_AGENT, **headers}
        self._auth = auth

    def _request(self, method: str, path: str, what: str, **kwargs) -> httpx.Response:
        """Send a request and return the response, raising UpstreamError on failure.

        ``what`` names the operation for error messages ("fetch PR diff").
        """
        url = f"{self.base_url}{path}"
        headers = {**self._headers, **kwargs.pop("headers", {})}
        try:
            response = httpx.request(method, url, headers=headers, auth=self._auth, timeout=TIMEOUT, **kwargs)
        except httpx.HTTPError as exc:
            raise UpstreamError(None, f"Failed to {what}: {exc}") from exc
        logger.debug("%s %s -> %s", method, url, response.status_code)
        if response.is_error:
            raise UpstreamError(
                response.status_code,
                f"Failed to {what}: {response.reason_phrase}",
                payload=response.text or None,
            )
        return response

    def _get_json(self, path: str, what: str, **kwargs) -> dict:
        response = self._request("GET", path, what, **kwargs)
        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError(response.status_code, f"Failed to {what}: response is not JSON") from exc
        if not isinstance(data, dict):
            raise UpstreamError(response.status_code, f"Failed to {what}: unexpected response shape")
        return data
