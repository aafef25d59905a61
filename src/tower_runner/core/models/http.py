from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class HttpRequest(BaseModel):
    method: str
    url: str
    body: Optional[str] = ""
    headers: Dict[str, str] = Field(default_factory=dict)


class HttpResponse(BaseModel):
    status: int
    reason: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Any = None  # parsed JSON when possible, raw text otherwise

    def json_field(self, key: str, default: Any = None) -> Any:
        """Return a top-level field of a JSON object body, or `default`."""
        if isinstance(self.body, dict):
            return self.body.get(key, default)
        return default
