"""GoCD API exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .client import APIResponse


class GoCDError(Exception):
    """Base exception for GoCD operations."""


class GoCDApiError(GoCDError):
    """Raised when the GoCD API returns a non-success or unreadable response."""

    def __init__(
        self,
        status_code: int,
        status_text: str,
        body: str = "",
        response: APIResponse | None = None,
    ) -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        self.response = response
        super().__init__(f"GoCD API Error {status_code} {status_text}: {body}")


class GoCDAuthError(GoCDApiError):
    """Raised on 401/403 authentication failures."""

    def __init__(
        self, status_code: int, body: str = "", response: APIResponse | None = None
    ) -> None:
        status_text = "Unauthorized" if status_code == 401 else "Forbidden"
        super().__init__(status_code, status_text, body, response)


class GoCDNotFoundError(GoCDApiError):
    """Raised on 404 responses."""

    def __init__(self, body: str = "", response: APIResponse | None = None) -> None:
        super().__init__(404, "Not Found", body, response)


class GoCDWriteDisabledError(GoCDError):
    """Raised when a write operation is attempted in read-only mode."""

    def __init__(self) -> None:
        super().__init__("Write operations are disabled (GOCD_READ_ONLY=true)")
