"""The JSON envelope every handler answers with."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Response:
    """A response body: status, message and optional data or error text."""

    status: int
    message: str
    data: Any = None
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the body as a dict, leaving out empty data and error."""
        body: dict[str, Any] = {"status": self.status, "message": self.message}
        if self.data is not None:
            body["data"] = self.data
        if self.error:
            body["error"] = self.error
        return body


def success(data: Any = None) -> Response:
    """A 200 response carrying ``data``."""
    return Response(200, "Success", data)


def error(status: int, message: str, err: str) -> Response:
    """An error response with a message and the underlying error text."""
    return Response(status, message, error=err)


def success_message(message: str) -> Response:
    """A 200 response with a custom message and no data."""
    return Response(200, message)