"""Request wrapper shared by every call to the orchestration service."""

import base64
from typing import Dict, Optional

from tower_runner.core.config import JobRunnerConfig, TowerConnection
from tower_runner.core.exceptions import RemoteError, TransportError
from tower_runner.core.interfaces.http_client import HttpClientPort
from tower_runner.core.interfaces.retry import RetryPort
from tower_runner.core.models.http import HttpRequest, HttpResponse
from tower_runner.core.settings import logger

EMPTY_BODY = ""


def basic_auth_header(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class TowerClient:
    """Applies credentials and body defaults uniformly, then hands off to the transport.

    Only `TransportError` is ever retried, and only when a retry port is
    injected; an HTTP response of any status is returned to the caller.
    """

    def __init__(
        self,
        http_client: HttpClientPort,
        connection: TowerConnection,
        config: JobRunnerConfig,
        retry_port: Optional[RetryPort] = None,
    ) -> None:
        self._http = http_client
        self._connection = connection
        self.config = config
        self._retry = retry_port

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Authorization": basic_auth_header(
                self._connection.username,
                self._connection.password.get_secret_value(),
            )
        }
        if self.config.user_agent:
            headers["User-Agent"] = self.config.user_agent
        return headers

    async def send(self, method: str, url: str, body: Optional[str] = None) -> HttpResponse:
        request = HttpRequest(
            method=method,
            url=url,
            body=body or EMPTY_BODY,
            headers=self._headers(),
        )
        logger.debug("[%s]%s", request.method, request.url)

        if self._retry and self.config.transport_max_attempts > 1:
            return await self._retry.execute(
                self._http.send,
                request,
                attempts=self.config.transport_max_attempts,
                wait_initial=self.config.transport_retry_base_wait,
                wait_max=self.config.transport_retry_max_wait,
                exception_types=(TransportError,),  # never retry HTTP error responses
            )
        return await self._http.send(request)


def remote_error(response: HttpResponse, action: str) -> RemoteError:
    """Build the RemoteError for a response carrying an unexpected status."""
    reason = f" {response.reason}" if response.reason else ""
    return RemoteError(
        status=response.status,
        message=f"{action}. Status: {response.status}{reason}",
        body=response.body,
    )
