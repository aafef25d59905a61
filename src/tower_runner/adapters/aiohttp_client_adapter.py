import asyncio
import json
import aiohttp
from typing import Any, Optional

from tower_runner.core.exceptions import TransportError
from tower_runner.core.interfaces.http_client import HttpClientPort
from tower_runner.core.models.http import HttpRequest, HttpResponse
from tower_runner.core.settings import logger


class AioHttpClientAdapter(HttpClientPort):
    def __init__(self, timeout: float = 30.0, sock_connect: float = 10.0):
        self._session: Optional[aiohttp.ClientSession] = None
        # Default client timeout for individual requests; callers never
        # construct ClientTimeout objects themselves.
        self._client_timeout = aiohttp.ClientTimeout(
            total=timeout,
            sock_connect=sock_connect,
        )

    async def __aenter__(self):
        """Async context manager entry"""
        self._session = aiohttp.ClientSession(timeout=self._client_timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
        return False

    async def send(self, request: HttpRequest) -> HttpResponse:
        if self._session is None:
            raise RuntimeError("HTTP client not initialized. Use 'async with' context manager.")

        try:
            async with self._session.request(
                request.method,
                request.url,
                data=request.body,
                headers=request.headers,
            ) as response:
                # undecodable bytes must not hide the status code
                text = await response.text(errors="replace")
                return HttpResponse(
                    status=response.status,
                    reason=response.reason,
                    headers=dict(response.headers),
                    body=self._parse_body(text),
                )

        except asyncio.TimeoutError:
            logger.error("Timeout when requesting remote service. URL: %s", request.url)
            raise TransportError(
                f"The request to {request.url} timed out",
                url=request.url,
            )

        except aiohttp.ClientError as client_error:
            logger.error(
                "Connection error when requesting remote service. URL: %s, Error: %s",
                request.url,
                str(client_error),
            )
            raise TransportError(
                f"Connection error when requesting {request.url}: {client_error}",
                url=request.url,
                diagnostic=repr(client_error),
            )

    @staticmethod
    def _parse_body(text: str) -> Any:
        """Parse a JSON body; pass anything else through as raw text."""
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text

    async def close(self) -> None:
        """Close the session"""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
