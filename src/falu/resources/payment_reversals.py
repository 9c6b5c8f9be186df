"""
Payment reversals: returning money received through a payment.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ..core.envelope import ResourceResponse
from ..core.patch import PatchDocument
from ..core.query import ListOptions, QueryValues
from ..core.request import RequestOptions, ensure_identifier
from ..core.serialization import Model, WireEnum
from ..core.service import BaseService

__all__ = [
    "PaymentReversal",
    "PaymentReversalFailureDetails",
    "PaymentReversalMpesaDetails",
    "PaymentReversalPatchModel",
    "PaymentReversalReason",
    "PaymentReversalRequest",
    "PaymentReversalStatus",
    "PaymentReversalsListOptions",
    "PaymentReversalsService",
]


class PaymentReversalReason(WireEnum):
    DUPLICATE = "duplicate"
    FRAUDULENT = "fraudulent"
    REQUESTED_BY_CUSTOMER = "requestedByCustomer"
    OTHER = "other"


class PaymentReversalStatus(WireEnum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PaymentReversalPatchModel(Model):
    description: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None


class PaymentReversalRequest(PaymentReversalPatchModel):
    payment_id: Optional[str] = None
    reason: Optional[PaymentReversalReason] = None


class PaymentReversalMpesaDetails(Model):
    """Provider details for a reversal of a payment made through M-PESA."""

    type: Optional[str] = None
    business_short_code: Optional[str] = None
    receipt: Optional[str] = None
    request_id: Optional[str] = None
    charge: Optional[int] = None


class PaymentReversalFailureDetails(Model):
    reason: Optional[str] = None
    detail: Optional[str] = None
    timestamp: Optional[datetime] = None


class PaymentReversal(PaymentReversalPatchModel):
    id: Optional[str] = None
    payment_id: Optional[str] = None
    currency: Optional[str] = None
    amount: Optional[int] = None
    reason: Optional[PaymentReversalReason] = None
    status: Optional[PaymentReversalStatus] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    succeeded: Optional[datetime] = None
    mpesa: Optional[PaymentReversalMpesaDetails] = None
    failure: Optional[PaymentReversalFailureDetails] = None
    workspace_id: Optional[str] = None
    live: Optional[bool] = None
    etag: Optional[str] = None


@dataclass(frozen=True)
class PaymentReversalsListOptions(ListOptions):
    status: Optional[Sequence[PaymentReversalStatus]] = None
    payment: Optional[Sequence[str]] = None

    def populate_query_values(self, values: QueryValues) -> None:
        super().populate_query_values(values)
        values.add("status", self.status)
        values.add("payment", self.payment)


class PaymentReversalsService(BaseService):
    base_path = "/v1/payment_reversals"

    async def list(
        self,
        options: Optional[PaymentReversalsListOptions] = None,
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[List[PaymentReversal]]:
        return await self._list_resources(PaymentReversal, options, request_options)

    async def get(
        self,
        id: str,
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[PaymentReversal]:
        return await self._get_resource(id, PaymentReversal, request_options)

    async def create(
        self,
        request: PaymentReversalRequest,
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[PaymentReversal]:
        if request is None:
            raise ValueError("'request' cannot be None")
        ensure_identifier(request.payment_id, "payment_id")
        return await self._create_resource(request, PaymentReversal, request_options)

    async def update(
        self,
        id: str,
        patch: PatchDocument[PaymentReversalPatchModel],
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[PaymentReversal]:
        return await self._update_resource(
            id, patch, PaymentReversalPatchModel, PaymentReversal, request_options
        )
