"""
filess.io REST API client.

Performs authenticated JSON requests against the filess.io backend with a
short linear backoff for transient failures (network errors and the
intermittent 401s the API is known to return), and unwraps the uniform
``{"msg": ..., "data": ...}`` response envelope.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import httpx

from ..utils.json_value import JsonValue
from .exceptions import (
    FilessAPIError,
    FilessConfigurationError,
    FilessError,
    FilessSerializationError,
    FilessTransportError,
)

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class APIResponse:
    """
    Successful API response envelope.

    Attributes:
        msg: Human-readable message from the API
        data: Payload; its shape depends on the endpoint
    """
    msg: str
    data: JsonValue


class FilessClient:
    """Client for the filess.io REST API."""

    DEFAULT_TIMEOUT = 30.0
    DEFAULT_MAX_ATTEMPTS = 3
    DEFAULT_RETRY_DELAY = 0.1

    def __init__(
        self,
        base_url: str,
        api_token: str,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[SleepFunc] = None,
    ):
        """
        Initialize FilessClient.

        Args:
            base_url: Base URL of the API (e.g. https://backend.filess.io)
            api_token: Bearer token. An empty token is rejected on each
                request rather than here.
            timeout: Limit in seconds for one attempt, response body included
            max_attempts: Total attempts per logical request
            retry_delay: Backoff unit; attempt N waits N * retry_delay
            transport: Optional httpx transport (used by tests)
            sleep: Optional coroutine used for backoff waits

        Raises:
            ValueError: If base_url is empty
        """
        if not base_url:
            raise ValueError("base_url must be provided")

        self._base_url = base_url.rstrip("/")
        self._api_token = api_token
        self._max_attempts = max(1, max_attempts)
        self._retry_delay = retry_delay
        self._timeout = timeout
        self._sleep = sleep or asyncio.sleep
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def __aenter__(self) -> "FilessClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def get(self, path: str) -> APIResponse:
        return await self._do_request("GET", path)

    async def post(self, path: str, body: Any) -> APIResponse:
        return await self._do_request("POST", path, body)

    async def delete(self, path: str) -> APIResponse:
        return await self._do_request("DELETE", path)

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._api_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _do_request(
        self,
        method: str,
        path: str,
        body: Any = None,
    ) -> APIResponse:
        """
        Perform one logical request with retries.

        Args:
            method: HTTP method (GET, POST, DELETE)
            path: API path appended to the base URL
            body: JSON-serializable request body, or None for no body

        Returns:
            Parsed response envelope

        Raises:
            FilessConfigurationError: If the API token is empty
            FilessSerializationError: If the body or response is not valid JSON
            FilessTransportError: If every attempt failed at the network level
            FilessAPIError: On a non-2xx response (401 only after the last attempt)
        """
        content = None
        if body is not None:
            try:
                content = json.dumps(body).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise FilessSerializationError("error marshaling request body", original_error=e)

        if not self._api_token:
            raise FilessConfigurationError("API token is empty")

        url = f"{self._base_url}{path}"
        last_error: Optional[FilessError] = None

        for attempt in range(self._max_attempts):
            if attempt > 0:
                delay = attempt * self._retry_delay
                logger.warning(
                    f"Retrying {method} {path} (attempt {attempt + 1}/{self._max_attempts}) "
                    f"after {delay:.2f}s: {last_error}"
                )
                await self._sleep(delay)

            # Rebuilt every attempt so the body stream is never replayed
            request = self._http.build_request(
                method,
                url,
                headers=self._headers(),
                content=content,
            )

            try:
                response = await self._send(request)
            except httpx.HTTPError as e:
                last_error = FilessTransportError(
                    f"error making request {method} {path}",
                    original_error=e,
                )
                continue
            except asyncio.TimeoutError:
                last_error = FilessTransportError(
                    f"error making request {method} {path}: no complete response within {self._timeout:g}s"
                )
                continue

            logger.debug(f"{method} {path} -> {response.status_code}")

            if not response.is_success:
                last_error = self._api_error(response)
                if last_error.is_unauthorized and attempt < self._max_attempts - 1:
                    continue
                raise last_error

            return self._parse_envelope(response)

        logger.error(f"{method} {path} failed after {self._max_attempts} attempts: {last_error}")
        raise last_error

    async def _send(self, request: httpx.Request) -> httpx.Response:
        # httpx timeouts apply per network operation; this caps the whole attempt
        if not self._timeout:
            return await self._http.send(request)
        return await asyncio.wait_for(self._http.send(request), self._timeout)

    @staticmethod
    def _api_error(response: httpx.Response) -> FilessAPIError:
        message = response.text
        try:
            payload = JsonValue.parse(response.content)
        except ValueError:
            payload = None

        if payload is not None:
            error_text = payload.get_str("error")
            if error_text:
                message = error_text

        return FilessAPIError(response.status_code, message)

    @staticmethod
    def _parse_envelope(response: httpx.Response) -> APIResponse:
        try:
            payload = JsonValue.parse(response.content)
        except ValueError as e:
            raise FilessSerializationError("error unmarshaling response", original_error=e)

        if payload.as_object() is None:
            raise FilessSerializationError(
                f"error unmarshaling response: expected a JSON object, got {payload.kind.value}"
            )

        return APIResponse(
            msg=payload.get_str("msg"),
            data=payload.get("data") or JsonValue.null(),
        )
