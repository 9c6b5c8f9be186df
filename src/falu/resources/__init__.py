"""
Models and services for the individual Falu API resources.
"""

from .evaluations import (
    Evaluation,
    EvaluationPatchModel,
    EvaluationScoringOutputs,
    EvaluationsListOptions,
    EvaluationsService,
    EvaluationStatus,
    Period,
)
from .message_templates import MessageTemplatesService, TemplateValidationRequest
from .messages import (
    MAX_BATCH_SIZE,
    Message,
    MessageCreateRequest,
    MessagePatchModel,
    MessagesListOptions,
    MessagesService,
    MessageStatus,
    MessageTemplateReference,
)
from .money_balances import MoneyBalances, MoneyBalancesService
from .payment_reversals import (
    PaymentReversal,
    PaymentReversalFailureDetails,
    PaymentReversalMpesaDetails,
    PaymentReversalPatchModel,
    PaymentReversalReason,
    PaymentReversalRequest,
    PaymentReversalsListOptions,
    PaymentReversalsService,
    PaymentReversalStatus,
)

__all__ = [
    "MAX_BATCH_SIZE",
    "Evaluation",
    "EvaluationPatchModel",
    "EvaluationScoringOutputs",
    "EvaluationStatus",
    "EvaluationsListOptions",
    "EvaluationsService",
    "Message",
    "MessageCreateRequest",
    "MessagePatchModel",
    "MessageStatus",
    "MessageTemplateReference",
    "MessageTemplatesService",
    "MessagesListOptions",
    "MessagesService",
    "MoneyBalances",
    "MoneyBalancesService",
    "PaymentReversal",
    "PaymentReversalFailureDetails",
    "PaymentReversalMpesaDetails",
    "PaymentReversalPatchModel",
    "PaymentReversalReason",
    "PaymentReversalRequest",
    "PaymentReversalStatus",
    "PaymentReversalsListOptions",
    "PaymentReversalsService",
    "Period",
    "TemplateValidationRequest",
]
