"""
Typed wrapper around one HTTP exchange with the Falu API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Generic, List, Mapping, Optional, TypeVar, Union

from pydantic import ValidationError
from requests.structures import CaseInsensitiveDict

from .errors import FaluError, FaluException
from .serialization import Deserializable, Serializer, default_serializer
from .transport import TransportResponse

__all__ = [
    "HEADER_CACHED_RESPONSE",
    "HEADER_CONTINUATION_TOKEN",
    "HEADER_REQUEST_ID",
    "HEADER_TRACE_ID",
    "Failure",
    "ResourceResponse",
    "Result",
    "Success",
]

logger = logging.getLogger(__name__)

HEADER_REQUEST_ID = "X-Request-Id"
HEADER_TRACE_ID = "X-Trace-Id"
HEADER_CONTINUATION_TOKEN = "X-Continuation-Token"
HEADER_CACHED_RESPONSE = "X-Cached-Response"

T = TypeVar("T")


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _bool_header(headers: Mapping[str, str], name: str) -> Optional[bool]:
    value = _header(headers, name)
    if value is None:
        return None
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def _status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown"


@dataclass(frozen=True)
class Success(Generic[T]):
    resource: Optional[T]
    response: "ResourceResponse[T]"

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure(Generic[T]):
    exception: FaluException
    response: "ResourceResponse[T]"

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure[T]]


class ResourceResponse(Generic[T]):
    """
    Model of an API response with a typed resource or a typed error.

    Exactly one of :attr:`resource` and :attr:`error` is populated, chosen by
    the status code. When the body cannot be decoded both stay ``None`` and the
    status and headers remain available for inspection.
    """

    def __init__(
        self,
        response: TransportResponse,
        *,
        resource_type: Optional[Deserializable[T]] = None,
        resource: Optional[T] = None,
        error: Optional[FaluError] = None,
    ) -> None:
        if response is None:
            raise ValueError("'response' cannot be None")
        headers = CaseInsensitiveDict(response.headers)
        self._response = response
        self._status_code = response.status_code
        self._headers = headers
        self._resource_type = resource_type
        self._resource = resource
        self._error = error

        self._request_id = _header(headers, HEADER_REQUEST_ID)
        self._trace_id = _header(headers, HEADER_TRACE_ID) or (error.trace_id if error else None)
        self._continuation_token = _header(headers, HEADER_CONTINUATION_TOKEN)
        self._cached_response = _bool_header(headers, HEADER_CACHED_RESPONSE)

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, name, value)

    @classmethod
    def from_transport(
        cls,
        response: TransportResponse,
        resource_type: Deserializable[T],
        serializer: Serializer = default_serializer,
    ) -> "ResourceResponse[T]":
        """Parse ``response`` into a resource or an error depending on the status."""
        resource = None
        error = None
        successful = 200 <= response.status_code <= 299
        if response.content.strip():
            try:
                if successful:
                    resource = serializer.deserialize(response.content, resource_type)
                else:
                    error = serializer.deserialize(response.content, FaluError)
            except (ValidationError, TypeError, ValueError, RecursionError) as exc:
                logger.warning(
                    "Could not decode %s body for status %d: %s",
                    "resource" if successful else "error",
                    response.status_code,
                    exc,
                )
        return cls(response, resource_type=resource_type, resource=resource, error=error)

    def __repr__(self) -> str:
        return (
            f"ResourceResponse(status_code={self._status_code}, "
            f"request_id={self._request_id!r}, resource={self._resource!r}, "
            f"error={self._error!r})"
        )

    @property
    def response(self) -> TransportResponse:
        """The original transport response."""
        return self._response

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def headers(self) -> Mapping[str, str]:
        """A case-insensitive copy of the response headers."""
        return self._headers.copy()

    @property
    def is_successful(self) -> bool:
        return 200 <= self._status_code <= 299

    @property
    def resource(self) -> Optional[T]:
        return self._resource

    @property
    def error(self) -> Optional[FaluError]:
        return self._error

    @property
    def resource_type(self) -> Optional[Deserializable[T]]:
        return self._resource_type

    @property
    def request_id(self) -> Optional[str]:
        return self._request_id

    @property
    def trace_id(self) -> Optional[str]:
        """Correlates the request between client and server."""
        return self._trace_id

    @property
    def continuation_token(self) -> Optional[str]:
        """Token to pass to the next identical list call to fetch more data."""
        return self._continuation_token

    @property
    def cached_response(self) -> Optional[bool]:
        """
        ``True`` when the server replayed a stored response for a repeated
        idempotency key, ``None`` when the header was absent.
        """
        return self._cached_response

    @property
    def has_more_results(self) -> Optional[bool]:
        """
        ``None`` for single resources, otherwise whether a continuation token
        came back.
        """
        if not getattr(self._resource_type, "is_sequence", False):
            return None
        return self._continuation_token is not None

    def _failure_message(self) -> str:
        phrase = _status_phrase(self._status_code)
        error = self._error
        lines: List[str] = [
            (error.detail if error else None)
            or (error.title if error else None)
            or f"Request failed - {phrase} ({self._status_code})",
            f"StatusCode: {self._status_code} ({phrase})",
        ]
        if self._request_id:
            lines.append(f"RequestId: {self._request_id}")
        if self._trace_id:
            lines.append(f"TraceId: {self._trace_id}")
        if error and error.title:
            lines.append(f"Error: {error.title}")
        if error and error.detail:
            lines.append(f"Message: {error.detail}")
        return "\n".join(lines)

    def to_exception(self) -> Optional[FaluException]:
        if self.is_successful:
            return None
        return FaluException(
            self._failure_message(),
            status_code=self._status_code,
            response=self._response,
            request_id=self._request_id,
            trace_id=self._trace_id,
            error=self._error,
        )

    def ensure_success(self) -> Optional[T]:
        """Return the resource, or raise :class:`FaluException` for a failed request."""
        exception = self.to_exception()
        if exception is not None:
            raise exception
        return self._resource

    def to_result(self) -> "Result[T]":
        """Branch-friendly alternative to :meth:`ensure_success`."""
        exception = self.to_exception()
        if exception is not None:
            return Failure(exception=exception, response=self)
        return Success(resource=self._resource, response=self)
