"""
Public facade for the Falu SDK.

The module re-exports the most useful pieces for integrators so they can
``from falu import ...`` without navigating the package.
"""

from .api import create_client
from .client import FaluClient
from .core import (
    SDK_VERSION,
    ApplicationInformation,
    ClientOptions,
    ClientParameters,
    ConfigError,
    Failure,
    FaluError,
    FaluException,
    HttpxTransport,
    ListOptions,
    PatchDocument,
    RangeFilter,
    RequestOptions,
    RequestsTransport,
    ResourceResponse,
    RetryPolicy,
    Success,
    TransportError,
    load_client_options,
)
from .resources import (
    Evaluation,
    EvaluationPatchModel,
    EvaluationsListOptions,
    Message,
    MessageCreateRequest,
    MessagePatchModel,
    MessagesListOptions,
    MessageStatus,
    MessageTemplateReference,
    MoneyBalances,
    PaymentReversal,
    PaymentReversalPatchModel,
    PaymentReversalReason,
    PaymentReversalRequest,
    PaymentReversalsListOptions,
    TemplateValidationRequest,
)

__version__ = SDK_VERSION

__all__ = (
    "ApplicationInformation",
    "ClientOptions",
    "ClientParameters",
    "ConfigError",
    "Evaluation",
    "EvaluationPatchModel",
    "EvaluationsListOptions",
    "FaluClient",
    "FaluError",
    "FaluException",
    "Failure",
    "HttpxTransport",
    "ListOptions",
    "Message",
    "MessageCreateRequest",
    "MessagePatchModel",
    "MessageStatus",
    "MessageTemplateReference",
    "MessagesListOptions",
    "MoneyBalances",
    "PatchDocument",
    "PaymentReversal",
    "PaymentReversalPatchModel",
    "PaymentReversalReason",
    "PaymentReversalRequest",
    "PaymentReversalsListOptions",
    "RangeFilter",
    "RequestOptions",
    "RequestsTransport",
    "ResourceResponse",
    "RetryPolicy",
    "Success",
    "TemplateValidationRequest",
    "TransportError",
    "create_client",
    "load_client_options",
)
