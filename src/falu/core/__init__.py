"""
Request/response runtime shared by every Falu resource service.
"""

from .config import (
    API_VERSION,
    SDK_VERSION,
    ApplicationInformation,
    ClientOptions,
    ClientParameters,
    ConfigError,
    SerializerOptions,
    load_client_options,
)
from .envelope import Failure, ResourceResponse, Result, Success
from .errors import FaluError, FaluException, TransportError
from .patch import PatchDocument, PatchOperation, encode_patch
from .query import ListOptions, QueryValues, RangeFilter, make_query_string
from .request import PreparedRequest, RequestOptions, build_request, ensure_identifier
from .retry import RetryPolicy, send_with_retries
from .serialization import Deserializable, JsonValue, ListOf, Model, Serializer, WireEnum
from .service import BaseService
from .transport import HttpxTransport, RequestsTransport, Transport, TransportResponse

__all__ = [
    "API_VERSION",
    "SDK_VERSION",
    "ApplicationInformation",
    "BaseService",
    "ClientOptions",
    "ClientParameters",
    "ConfigError",
    "Deserializable",
    "Failure",
    "FaluError",
    "FaluException",
    "HttpxTransport",
    "JsonValue",
    "ListOf",
    "ListOptions",
    "Model",
    "PatchDocument",
    "PatchOperation",
    "PreparedRequest",
    "QueryValues",
    "RangeFilter",
    "RequestOptions",
    "RequestsTransport",
    "ResourceResponse",
    "Result",
    "RetryPolicy",
    "Serializer",
    "SerializerOptions",
    "Success",
    "Transport",
    "TransportError",
    "TransportResponse",
    "WireEnum",
    "build_request",
    "encode_patch",
    "ensure_identifier",
    "load_client_options",
    "make_query_string",
    "send_with_retries",
]
