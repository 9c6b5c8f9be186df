"""
Evaluations: credit scoring computed from uploaded statements.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ..core.envelope import ResourceResponse
from ..core.patch import PatchDocument
from ..core.query import ListOptions, QueryValues
from ..core.request import RequestOptions
from ..core.serialization import Model, WireEnum
from ..core.service import BaseService

__all__ = [
    "Evaluation",
    "EvaluationPatchModel",
    "EvaluationScoringOutputs",
    "EvaluationStatus",
    "EvaluationsListOptions",
    "EvaluationsService",
    "Period",
]


class EvaluationStatus(WireEnum):
    CREATED = "created"
    SCORED = "scored"
    FAILED = "failed"


class Period(Model):
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class EvaluationScoringOutputs(Model):
    """
    Outputs of the scoring done for an evaluation.

    ``risk`` is a probability where higher means riskier; ``limit`` is the
    advised lending limit in the smallest currency unit.
    """

    statement_provider: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    generated: Optional[datetime] = None
    period: Optional[Period] = None
    risk: Optional[float] = None
    limit: Optional[int] = None
    expires: Optional[datetime] = None


class EvaluationPatchModel(Model):
    description: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None


class Evaluation(EvaluationPatchModel):
    id: Optional[str] = None
    currency: Optional[str] = None
    status: Optional[EvaluationStatus] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    scoring: Optional[EvaluationScoringOutputs] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    workspace_id: Optional[str] = None
    live: Optional[bool] = None
    etag: Optional[str] = None


@dataclass(frozen=True)
class EvaluationsListOptions(ListOptions):
    status: Optional[Sequence[EvaluationStatus]] = None

    def populate_query_values(self, values: QueryValues) -> None:
        super().populate_query_values(values)
        values.add("status", self.status)


class EvaluationsService(BaseService):
    base_path = "/v1/evaluations"

    async def list(
        self,
        options: Optional[EvaluationsListOptions] = None,
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[List[Evaluation]]:
        return await self._list_resources(Evaluation, options, request_options)

    async def get(
        self,
        id: str,
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[Evaluation]:
        return await self._get_resource(id, Evaluation, request_options)

    async def update(
        self,
        id: str,
        patch: PatchDocument[EvaluationPatchModel],
        request_options: Optional[RequestOptions] = None,
    ) -> ResourceResponse[Evaluation]:
        return await self._update_resource(
            id, patch, EvaluationPatchModel, Evaluation, request_options
        )
