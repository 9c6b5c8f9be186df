"""
JSON conversion between wire payloads and the typed SDK models.

Models are pydantic models whose fields travel under lower camel case
aliases. :class:`Serializer` adds the policy pydantic does not cover on its
own: bodies may carry comments and trailing commas, field names match
case-insensitively, and ``None`` values are left out when writing. Resource
types take part by satisfying :class:`Deserializable`: :class:`Model`
subclasses, :class:`ListOf` and :class:`JsonValue` all do.
"""

from __future__ import annotations

import enum
import json
from functools import lru_cache
from typing import Any, ClassVar, Dict, Generic, List, Optional, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationInfo, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import to_jsonable_python

from .config import SerializerOptions

__all__ = [
    "Deserializable",
    "JsonValue",
    "ListOf",
    "Model",
    "Serializer",
    "WireEnum",
    "default_serializer",
    "loads_tolerant",
    "to_camel",
    "type_adapter",
]

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

CASE_INSENSITIVE = "case_insensitive"


class Deserializable(Protocol[T_co]):
    """Anything that can turn a decoded JSON payload into a typed value."""

    is_sequence: bool

    def from_payload(self, payload: Any, serializer: "Serializer") -> T_co:
        ...


def _strip_comments(text: str) -> str:
    out: List[str] = []
    i, n = 0, len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue
        if ch == '"':
            in_string = True
        elif ch == "/" and i + 1 < n and text[i + 1] == "/":
            end = text.find("\n", i)
            i = n if end == -1 else end
            continue
        elif ch == "/" and i + 1 < n and text[i + 1] == "*":
            end = text.find("*/", i + 2)
            if end == -1:
                raise ValueError("Unterminated comment in JSON document")
            i = end + 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _strip_trailing_commas(text: str) -> str:
    out: List[str] = []
    i, n = 0, len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue
        if ch == '"':
            in_string = True
        elif ch == ",":
            j = i + 1
            while j < n and text[j] in " \t\r\n":
                j += 1
            if j < n and text[j] in "}]":
                i += 1
                continue
        out.append(ch)
        i += 1
    return "".join(out)


def loads_tolerant(
    data: bytes | str,
    *,
    allow_comments: bool = True,
    allow_trailing_commas: bool = True,
) -> Any:
    """
    Parse JSON that may contain ``//`` or ``/* */`` comments and trailing
    commas before a closing bracket.
    """
    text = data.decode("utf-8-sig") if isinstance(data, (bytes, bytearray)) else data
    if allow_comments:
        text = _strip_comments(text)
    if allow_trailing_commas:
        text = _strip_trailing_commas(text)
    return json.loads(text)


@lru_cache(maxsize=None)
def type_adapter(hint: Any) -> TypeAdapter:
    return TypeAdapter(hint)


class WireEnum(str, enum.Enum):
    """
    String enum whose values are the camelCased member names used on the wire.

    Lookups also accept other spellings of a member name, so
    ``"requested_by_customer"`` and ``"RequestedByCustomer"`` both resolve.
    """

    @classmethod
    def _missing_(cls, value: object) -> Optional["WireEnum"]:
        if not isinstance(value, str):
            return None
        wanted = value.replace("_", "").lower()
        for member in cls:
            if member.value.lower() == wanted or member.name.replace("_", "").lower() == wanted:
                return member
        return None


class Model(BaseModel):
    """
    Base for resource and request models.

    The class itself is usable as a single-resource type tag.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    is_sequence: ClassVar[bool] = False

    @model_validator(mode="before")
    @classmethod
    def match_wire_names(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data
        context = info.context or {}
        if not context.get(CASE_INSENSITIVE, True):
            return data
        spellings: Dict[str, str] = {}
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            spellings[name.lower()] = alias
            spellings[alias.lower()] = alias
        return {spellings.get(str(key).lower(), key): value for key, value in data.items()}

    @classmethod
    def from_payload(cls, payload: Any, serializer: Optional["Serializer"] = None):
        return (serializer or default_serializer).validate(cls, payload)


class Serializer:
    """
    Converts models to and from JSON bodies according to ``options``.
    """

    def __init__(self, options: Optional[SerializerOptions] = None) -> None:
        self.options = options or SerializerOptions()

    def to_payload(self, value: Any) -> Any:
        """Convert ``value`` into plain JSON-compatible data using wire names."""
        return to_jsonable_python(
            value,
            by_alias=True,
            exclude_none=self.options.omit_null,
        )

    def serialize(self, value: Any) -> bytes:
        return self.dumps(self.to_payload(value))

    def dumps(self, payload: Any) -> bytes:
        """Encode data that is already JSON-compatible."""
        return json.dumps(
            payload,
            separators=(",", ":"),
            ensure_ascii=False,
        ).encode("utf-8")

    def loads(self, data: bytes | str) -> Any:
        return loads_tolerant(
            data,
            allow_comments=self.options.skip_comments,
            allow_trailing_commas=self.options.allow_trailing_commas,
        )

    def validate(self, hint: Any, payload: Any) -> Any:
        """Validate a decoded JSON value as ``hint``, raising ``ValidationError``."""
        return type_adapter(hint).validate_python(
            payload,
            context={CASE_INSENSITIVE: self.options.case_insensitive},
        )

    def deserialize(self, data: bytes | str, resource_type: Deserializable[T]) -> T:
        return resource_type.from_payload(self.loads(data), self)


default_serializer = Serializer()


class ListOf(Generic[T]):
    """Type tag for sequence-shaped responses such as list operations."""

    is_sequence = True

    def __init__(self, item_type: type) -> None:
        self.item_type = item_type

    def __repr__(self) -> str:
        return f"ListOf({self.item_type.__name__})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ListOf) and other.item_type is self.item_type

    def __hash__(self) -> int:
        return hash((ListOf, self.item_type))

    def from_payload(self, payload: Any, serializer: Optional[Serializer] = None) -> List[T]:
        return (serializer or default_serializer).validate(List[self.item_type], payload)


class JsonValue:
    """Type tag for responses returned as untyped JSON."""

    is_sequence: ClassVar[bool] = False

    @classmethod
    def from_payload(cls, payload: Any, serializer: Optional[Serializer] = None) -> Any:
        return payload
