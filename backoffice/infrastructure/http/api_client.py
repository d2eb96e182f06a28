"""
REST client for the back-office backend.
Wraps a requests session with bearer authentication, debug tracing and
central handling of rejected credentials.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from backoffice.infrastructure.auth.session import SessionContext
from backoffice.infrastructure.http.errors import ApiError, NotFoundError, UnauthorizedError


logger = logging.getLogger(__name__)


class ApiClient:
    """
    Asynchronous facade over ``requests``.

    Calls run in a worker thread so the event loop stays responsive. Every
    failure is terminal; nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        session: SessionContext,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        debug: bool = False
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.http = http or requests.Session()
        self.timeout = timeout
        self.debug = debug

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def get_bytes(self, path: str) -> bytes:
        """Download a binary body, e.g. a payment proof."""
        return await self.request("GET", path, raw=True)

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        raw: bool = False
    ) -> Any:
        """
        Issue a request and decode the response.

        Args:
            method: HTTP method
            path: Endpoint path appended to the base URL
            params: Query string parameters
            json: JSON body
            raw: Return the raw bytes instead of decoded JSON

        Returns:
            Decoded JSON body, raw bytes, or None for empty responses

        Raises:
            UnauthorizedError: On HTTP 401, after the session was cleared
            NotFoundError: On HTTP 404
            ApiError: On any other failure, including a body that is not JSON
        """
        url = f"{self.base_url}{path}"
        if self.debug:
            logger.debug(f"API Request: {method} {url} params={params}")

        response = await asyncio.to_thread(self._send, method, url, params, json)

        if response.status_code == 401:
            self.session.handle_unauthorized()
            raise UnauthorizedError(payload=self._safe_json(response))

        if not response.ok:
            payload = self._safe_json(response)
            message = None
            if isinstance(payload, dict):
                message = payload.get("message")
            message = message or f"HTTP error! status: {response.status_code}"
            logger.error(f"API Error: {method} {url} -> {response.status_code}: {message}")
            if response.status_code == 404:
                raise NotFoundError(message, payload)
            raise ApiError(message, response.status_code, payload)

        if self.debug:
            logger.debug(f"API Response: {method} {url} -> {response.status_code}")

        if raw:
            return response.content
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"API Error: {method} {url} -> {response.status_code}: body is not JSON")
            raise ApiError("Invalid JSON response", response.status_code) from e

    def _send(self, method: str, url: str, params: Optional[Dict[str, Any]],
              json: Optional[Any]) -> requests.Response:
        headers = {"Content-Type": "application/json", **self.session.auth_headers()}
        try:
            return self.http.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"API Error: {method} {url} failed: {str(e)}")
            raise ApiError(f"Request failed: {str(e)}") from e

    @staticmethod
    def _safe_json(response: requests.Response) -> Optional[Any]:
        try:
            return response.json()
        except ValueError:
            return None
