"""
Money balances held by the workspace across payment providers.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from ..core.envelope import ResourceResponse
from ..core.request import RequestOptions
from ..core.serialization import JsonValue, Model
from ..core.service import BaseService

__all__ = ["MoneyBalances", "MoneyBalancesService"]


class MoneyBalances(Model):
    """Balances in the smallest currency unit, keyed by business code."""

    mpesa: Optional[Dict[str, int]] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    etag: Optional[str] = None


class MoneyBalancesService(BaseService):
    base_path = "/v1/money_balances"

    async def get(
        self,
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[MoneyBalances]:
        return await self._request(
            "GET",
            self._make_path(),
            MoneyBalances,
            request_options=request_options,
        )

    async def refresh(
        self,
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[Any]:
        """Ask the server to fetch fresh balances from the providers."""
        return await self._request(
            "POST",
            self._make_path("/refresh"),
            JsonValue,
            body={},
            request_options=request_options,
        )
