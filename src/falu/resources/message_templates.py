"""
Message templates: server-side validation of template content.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.envelope import ResourceResponse
from ..core.request import RequestOptions
from ..core.serialization import JsonValue, Model
from ..core.service import BaseService

__all__ = ["MessageTemplatesService", "TemplateValidationRequest"]


class TemplateValidationRequest(Model):
    """
    Template body to validate, with an optional model used to render a test
    message.
    """

    body: Optional[str] = None
    test_render_model: Optional[Dict[str, Any]] = None


class MessageTemplatesService(BaseService):
    base_path = "/v1/message_templates"

    async def validate(
        self,
        request: TemplateValidationRequest,
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[Any]:
        if request is None:
            raise ValueError("'request' cannot be None")
        if not request.body or not request.body.strip():
            raise ValueError("'body' cannot be empty or whitespace")
        return await self._create_resource(
            request, JsonValue, request_options, path="/validate"
        )
