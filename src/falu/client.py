"""
Entry point for talking to the Falu API.
"""

from __future__ import annotations

import logging
from typing import Optional

from .core.config import ClientOptions
from .core.retry import RetryPolicy
from .core.serialization import Serializer
from .core.transport import HttpxTransport, Transport
from .resources.evaluations import EvaluationsService
from .resources.message_templates import MessageTemplatesService
from .resources.messages import MessagesService
from .resources.money_balances import MoneyBalancesService
from .resources.payment_reversals import PaymentReversalsService

__all__ = ["FaluClient"]

logger = logging.getLogger(__name__)


class FaluClient:
    """
    Official client for the Falu API.

    Every service shares the same options, transport, retry policy and
    serializer. The transport is closed by :meth:`aclose` only when the client
    created it.
    """

    def __init__(
        self,
        options: ClientOptions,
        *,
        transport: Optional[Transport] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        if options is None:
            raise ValueError("'options' cannot be None")
        self.options = options
        self._owns_transport = transport is None
        self.transport: Transport = transport or HttpxTransport()
        self.retry_policy = retry_policy or RetryPolicy.from_options(options)
        self.serializer = Serializer(options.serializer)

        shared = dict(retry_policy=self.retry_policy, serializer=self.serializer)
        self.evaluations = EvaluationsService(options, self.transport, **shared)
        self.messages = MessagesService(options, self.transport, **shared)
        self.message_templates = MessageTemplatesService(options, self.transport, **shared)
        self.money_balances = MoneyBalancesService(options, self.transport, **shared)
        self.payment_reversals = PaymentReversalsService(options, self.transport, **shared)

    async def aclose(self) -> None:
        if self._owns_transport:
            logger.debug("Closing Falu client transport")
            await self.transport.aclose()

    async def __aenter__(self) -> "FaluClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
