"""
Assembly of outbound requests from an operation plus client-wide defaults.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .config import SDK_VERSION, ClientOptions
from .query import make_query_string
from .serialization import Serializer

__all__ = [
    "HEADER_API_VERSION",
    "HEADER_IDEMPOTENCY_KEY",
    "HEADER_LIVE_MODE",
    "HEADER_WORKSPACE_ID",
    "PreparedRequest",
    "RequestOptions",
    "build_request",
    "ensure_identifier",
]

HEADER_API_VERSION = "X-Falu-Version"
HEADER_IDEMPOTENCY_KEY = "X-Idempotency-Key"
HEADER_WORKSPACE_ID = "X-Workspace-Id"
HEADER_LIVE_MODE = "X-Live-Mode"

_MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def ensure_identifier(value: Any, name: str = "id") -> str:
    """Reject ``None`` or blank identifiers before anything is sent."""
    if value is None:
        raise ValueError(f"'{name}' cannot be None")
    if not isinstance(value, str):
        raise TypeError(f"'{name}' must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValueError(f"'{name}' cannot be empty or whitespace")
    return value


@dataclass(frozen=True)
class RequestOptions:
    """
    Per-call overrides layered on top of the client defaults.

    ``idempotency_key`` is generated automatically for mutating calls when left
    unset. ``live`` selects live or test mode for workspace-scoped keys.
    """

    idempotency_key: Optional[str] = None
    workspace: Optional[str] = None
    live: Optional[bool] = None
    timeout: Optional[float] = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("'timeout' must be greater than zero")
        if self.idempotency_key is not None and not self.idempotency_key.strip():
            raise ValueError("'idempotency_key' cannot be empty or whitespace")


@dataclass(frozen=True)
class PreparedRequest:
    """A fully addressed request, reused unchanged by every retry attempt."""

    method: str
    url: str
    headers: Mapping[str, str]
    content: Optional[bytes] = None
    timeout: Optional[float] = None

    @property
    def idempotency_key(self) -> Optional[str]:
        return self.headers.get(HEADER_IDEMPOTENCY_KEY)


def _user_agent(options: ClientOptions) -> str:
    agent = f"falu-python/{SDK_VERSION}"
    if options.application is not None:
        agent = f"{agent} {options.application.user_agent_fragment()}"
    return agent


def build_request(
    options: ClientOptions,
    method: str,
    path: str,
    *,
    body: Any = None,
    query: Optional[Mapping[str, Any]] = None,
    request_options: Optional[RequestOptions] = None,
    content_type: str = "application/json",
    serializer: Optional[Serializer] = None,
) -> PreparedRequest:
    """
    Build the request for ``method`` on ``path`` relative to ``options.base_url``.

    A body, when given, is serialized unless it is already ``bytes``.
    """
    method = method.upper()
    if not path.startswith("/"):
        path = "/" + path
    url = f"{options.base_url}{path}{make_query_string(query or {})}"
    request_options = request_options or RequestOptions()

    headers: Dict[str, str] = {
        "Authorization": f"Bearer {options.api_key}",
        HEADER_API_VERSION: options.api_version,
        "User-Agent": _user_agent(options),
        "Accept": "application/json",
    }

    content: Optional[bytes] = None
    if body is not None:
        if isinstance(body, (bytes, bytearray)):
            content = bytes(body)
        else:
            content = (serializer or Serializer(options.serializer)).serialize(body)
        headers["Content-Type"] = content_type

    if method in _MUTATING_METHODS:
        headers[HEADER_IDEMPOTENCY_KEY] = request_options.idempotency_key or str(uuid.uuid4())
    if request_options.workspace:
        headers[HEADER_WORKSPACE_ID] = request_options.workspace
    if request_options.live is not None:
        headers[HEADER_LIVE_MODE] = "true" if request_options.live else "false"
    headers.update(request_options.headers)

    timeout = request_options.timeout if request_options.timeout is not None else options.timeout
    return PreparedRequest(
        method=method,
        url=url,
        headers=MappingProxyType(headers),
        content=content,
        timeout=timeout,
    )
