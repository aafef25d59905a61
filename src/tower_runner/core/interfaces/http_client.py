# tower_runner/core/interfaces/http_client.py
from abc import ABC, abstractmethod

from tower_runner.core.models.http import HttpRequest, HttpResponse

class HttpClientPort(ABC):
    @abstractmethod
    async def __aenter__(self) -> "HttpClientPort":
        """Async context manager entry method"""
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit method"""
        pass

    @abstractmethod
    async def send(self, request: HttpRequest) -> HttpResponse:
        """Send a request and return the response whatever its status code.

        The body is parsed as JSON when possible and passed through as text
        otherwise. Network-level failures raise TransportError; HTTP error
        statuses are never raised, callers inspect `HttpResponse.status`.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the HTTP client session"""
        pass
