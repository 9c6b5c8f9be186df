"""
Transport adapters that put a :class:`PreparedRequest` on the wire.

The runtime only needs something that can send a request and hand back the
status, headers and body. :class:`HttpxTransport` is the default;
:class:`RequestsTransport` lets integrators reuse an existing
``requests.Session``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

import httpx
import requests
from requests.structures import CaseInsensitiveDict

from .errors import TransportError
from .request import PreparedRequest

__all__ = [
    "HttpxTransport",
    "RequestsTransport",
    "Transport",
    "TransportResponse",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    headers: Mapping[str, str]
    content: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", CaseInsensitiveDict(self.headers))

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class Transport(Protocol):
    async def send(self, request: PreparedRequest) -> TransportResponse:
        ...

    async def aclose(self) -> None:
        ...


class HttpxTransport:
    """
    Sends requests through a shared ``httpx.AsyncClient``.

    A client passed in by the caller is left open on :meth:`aclose`.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    async def send(self, request: PreparedRequest) -> TransportResponse:
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                content=request.content,
                timeout=request.timeout,
            )
        except httpx.RequestError as exc:
            raise TransportError(
                f"{request.method} {request.url} failed: {exc}", request=request
            ) from exc
        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
        )

    async def aclose(self) -> None:
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()


class RequestsTransport:
    """
    Sends requests through a blocking ``requests.Session`` on a worker thread.

    Cancelling the awaiting task returns control immediately; the worker
    thread finishes the exchange in the background and its result is dropped.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._owns_session = session is None
        self.session = session or requests.Session()

    def _send_blocking(self, request: PreparedRequest) -> TransportResponse:
        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                data=request.content,
                timeout=request.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(
                f"{request.method} {request.url} failed: {exc}", request=request
            ) from exc
        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
        )

    async def send(self, request: PreparedRequest) -> TransportResponse:
        return await asyncio.to_thread(self._send_blocking, request)

    async def aclose(self) -> None:
        if self._owns_session:
            logger.debug("Closing owned requests session")
            self.session.close()
