"""
Shared plumbing for the per-resource service classes.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Mapping, Optional, TypeVar
from urllib.parse import quote

from .config import ClientOptions
from .envelope import ResourceResponse
from .patch import JSON_PATCH_CONTENT_TYPE, PatchDocument, encode_patch
from .query import ListOptions, QueryValues
from .request import RequestOptions, build_request, ensure_identifier
from .retry import RetryPolicy, send_with_retries
from .serialization import Deserializable, ListOf, Serializer
from .transport import Transport

__all__ = ["BaseService"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseService:
    """
    Sends requests for one REST resource rooted at :attr:`base_path`.

    Subclasses only describe paths and types; building, retrying and parsing
    live here.
    """

    base_path: ClassVar[str] = ""

    def __init__(
        self,
        options: ClientOptions,
        transport: Transport,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        serializer: Optional[Serializer] = None,
    ) -> None:
        self.options = options
        self.transport = transport
        self.retry_policy = retry_policy or RetryPolicy.from_options(options)
        self.serializer = serializer or Serializer(options.serializer)

    def _make_path(self, suffix: str = "") -> str:
        if suffix and not suffix.startswith("/"):
            suffix = "/" + suffix
        return f"{self.base_path}{suffix}"

    async def _request(
        self,
        method: str,
        path: str,
        resource_type: Deserializable[T],
        *,
        body: Any = None,
        query: Optional[Mapping[str, Any]] = None,
        request_options: Optional[RequestOptions] = None,
        content_type: str = "application/json",
    ) -> ResourceResponse[T]:
        request = build_request(
            self.options,
            method,
            path,
            body=body,
            query=query,
            request_options=request_options,
            content_type=content_type,
            serializer=self.serializer,
        )
        logger.info("Sending %s %s", request.method, request.url)
        response = await send_with_retries(self.transport, request, self.retry_policy)
        envelope = ResourceResponse.from_transport(response, resource_type, self.serializer)
        logger.debug(
            "%s %s returned %d (request id %s)",
            request.method,
            request.url,
            envelope.status_code,
            envelope.request_id,
        )
        return envelope

    async def _list_resources(
        self,
        item_type: type,
        options: Optional[ListOptions] = None,
        request_options: Optional[RequestOptions] = None,
        path: str = "",
    ) -> ResourceResponse[list]:
        values = QueryValues()
        if options is not None:
            options.populate_query_values(values)
        return await self._request(
            "GET",
            self._make_path(path),
            ListOf(item_type),
            query=values,
            request_options=request_options,
        )

    async def _get_resource(
        self,
        id: str,
        resource_type: Deserializable[T],
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[T]:
        ensure_identifier(id, "id")
        return await self._request(
            "GET",
            self._make_path(quote(id, safe="")),
            resource_type,
            request_options=request_options,
        )

    async def _create_resource(
        self,
        body: Any,
        resource_type: Deserializable[T],
        request_options: Optional[RequestOptions] = None,
        path: str = "",
    ) -> ResourceResponse[T]:
        if body is None:
            raise ValueError("'body' cannot be None")
        return await self._request(
            "POST",
            self._make_path(path),
            resource_type,
            body=body,
            request_options=request_options,
        )

    async def _update_resource(
        self,
        id: str,
        patch: PatchDocument[Any],
        patch_model: type,
        resource_type: Deserializable[T],
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[T]:
        ensure_identifier(id, "id")
        if patch is None:
            raise ValueError("'patch' cannot be None")
        content = encode_patch(patch, patch_model, serializer=self.serializer)
        return await self._request(
            "PATCH",
            self._make_path(quote(id, safe="")),
            resource_type,
            body=content,
            request_options=request_options,
            content_type=JSON_PATCH_CONTENT_TYPE,
        )
