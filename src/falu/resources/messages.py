"""
Messages: sending SMS, individually or in bulk, and tracking their status.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from ..core.envelope import ResourceResponse
from ..core.patch import PatchDocument
from ..core.query import ListOptions, QueryValues
from ..core.request import RequestOptions
from ..core.serialization import ListOf, Model, WireEnum
from ..core.service import BaseService

__all__ = [
    "MAX_BATCH_SIZE",
    "Message",
    "MessageCreateRequest",
    "MessagePatchModel",
    "MessageStatus",
    "MessageTemplateReference",
    "MessagesListOptions",
    "MessagesService",
]

MAX_BATCH_SIZE = 10_000


class MessageStatus(WireEnum):
    ACCEPTED = "accepted"
    SENT = "sent"
    FAILED = "failed"
    DELIVERED = "delivered"


class MessagePatchModel(Model):
    metadata: Optional[Dict[str, str]] = None


class MessageTemplateReference(Model):
    """Template to render the message from, by id or alias."""

    id: Optional[str] = None
    alias: Optional[str] = None
    language: Optional[str] = None
    model: Optional[Any] = None


class MessageCreateRequest(MessagePatchModel):
    to: Optional[str] = None
    stream: Optional[str] = None
    body: Optional[str] = None
    template: Optional[MessageTemplateReference] = None
    schedule: Optional[datetime] = None


class Message(MessagePatchModel):
    id: Optional[str] = None
    to: Optional[str] = None
    stream: Optional[str] = None
    body: Optional[str] = None
    status: Optional[MessageStatus] = None
    template: Optional[MessageTemplateReference] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    delivered: Optional[datetime] = None
    workspace_id: Optional[str] = None
    live: Optional[bool] = None
    etag: Optional[str] = None


@dataclass(frozen=True)
class MessagesListOptions(ListOptions):
    status: Optional[Sequence[MessageStatus]] = None
    stream: Optional[Sequence[str]] = None
    to: Optional[str] = None

    def populate_query_values(self, values: QueryValues) -> None:
        super().populate_query_values(values)
        values.add("status", self.status)
        values.add("stream", self.stream)
        values.add("to", self.to)


def _check_template_model(request: MessageCreateRequest) -> None:
    template = request.template
    if template is None or template.model is None:
        return
    model = template.model
    if isinstance(model, (Mapping, BaseModel)):
        return
    if dataclasses.is_dataclass(model) and not isinstance(model, type):
        return
    raise ValueError(
        f"Template model must be an object, not {type(model).__name__}"
    )


def _check_create_request(request: Any) -> None:
    if request is None:
        raise ValueError("'message' cannot be None")
    if not isinstance(request, MessageCreateRequest):
        raise TypeError("Expected a MessageCreateRequest")
    _check_template_model(request)


class MessagesService(BaseService):
    base_path = "/v1/messages"

    async def list(
        self,
        options: Optional[MessagesListOptions] = None,
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[List[Message]]:
        """List messages, newest first unless ``options.sorting`` says otherwise."""
        return await self._list_resources(Message, options, request_options)

    async def get(
        self,
        id: str,
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[Message]:
        return await self._get_resource(id, Message, request_options)

    async def create(
        self,
        message: MessageCreateRequest,
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[Message]:
        _check_create_request(message)
        return await self._create_resource(message, Message, request_options)

    async def update(
        self,
        id: str,
        patch: PatchDocument[MessagePatchModel],
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[Message]:
        return await self._update_resource(
            id, patch, MessagePatchModel, Message, request_options
        )

    async def create_batch(
        self,
        messages: Sequence[MessageCreateRequest],
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[List[Message]]:
        """Send up to 10,000 messages in one request."""
        if messages is None:
            raise ValueError("'messages' cannot be None")
        if len(messages) > MAX_BATCH_SIZE:
            raise ValueError(
                "The service does not support more than 10,000 (10k) messages"
            )
        for message in messages:
            _check_create_request(message)
        return await self._create_resource(
            list(messages), ListOf(Message), request_options, path="/bulk"
        )
