"""
Error types surfaced by the Falu client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import ConfigDict

from .serialization import Model

if TYPE_CHECKING:
    from .transport import TransportResponse

__all__ = ["FaluError", "FaluException", "TransportError"]


class FaluError(Model):
    """
    Problem details returned by the API for a failed request.

    ``errors`` maps field names to validation messages and is only populated
    for validation failures.
    """

    model_config = ConfigDict(frozen=True)

    type: Optional[str] = None
    title: Optional[str] = None
    status: Optional[int] = None
    detail: Optional[str] = None
    trace_id: Optional[str] = None
    errors: Optional[Dict[str, List[str]]] = None


class FaluException(Exception):
    """Raised when a response is checked for success and was not successful."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        response: Optional["TransportResponse"] = None,
        request_id: Optional[str] = None,
        trace_id: Optional[str] = None,
        error: Optional[FaluError] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.request_id = request_id
        self.trace_id = trace_id
        self.error = error


class TransportError(Exception):
    """Raised when a request could not be sent or no response was received."""

    def __init__(self, message: str, *, request: Optional[Any] = None) -> None:
        super().__init__(message)
        self.request = request
