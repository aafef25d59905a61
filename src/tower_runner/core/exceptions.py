from typing import Any, Optional


class TowerRunnerError(Exception):
    """Base exception for every failure that aborts a run.

    Attributes:
        message: Human-readable error description (reported to the pipeline)
        diagnostic: Technical diagnostic information for debugging
    """
    def __init__(self, message: str, diagnostic: Optional[str] = None):
        self.message = message
        self.diagnostic = diagnostic
        super().__init__(message)


class ConfigurationError(TowerRunnerError):
    """Raised when pipeline inputs are missing or invalid."""


class TemplateNotFound(TowerRunnerError):
    """Raised when no job template matches the requested name exactly.

    Attributes:
        template_name: Name that was looked up
    """
    def __init__(self, template_name: str, diagnostic: Optional[str] = None):
        self.template_name = template_name
        message = f"Job template '{template_name}' is not present on the server"
        super().__init__(message=message, diagnostic=diagnostic)


class RemoteError(TowerRunnerError):
    """Raised when the remote service answers with an unexpected status or body.

    Attributes:
        status: HTTP status code received
        body: Response body (parsed JSON or raw text) if available
    """
    def __init__(
        self,
        status: int,
        message: str,
        body: Any = None,
        diagnostic: Optional[str] = None,
    ):
        self.status = status
        self.body = body
        super().__init__(message=message, diagnostic=diagnostic)


class TransportError(TowerRunnerError):
    """Raised when a request never produced an HTTP response (timeout, refused, DNS).

    Attributes:
        url: Request URL that failed
    """
    def __init__(self, message: str, url: Optional[str] = None, diagnostic: Optional[str] = None):
        self.url = url
        super().__init__(message=message, diagnostic=diagnostic)
