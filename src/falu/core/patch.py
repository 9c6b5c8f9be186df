"""
JSON Patch (RFC 6902) documents restricted to a resource's patch model.

A patch model is a pydantic model listing the fields that may be changed through
a partial update. Paths are checked against it while the document is built,
so a bad path never reaches the network.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from pydantic import BaseModel

from .serialization import Serializer, default_serializer

__all__ = [
    "JSON_PATCH_CONTENT_TYPE",
    "PatchDocument",
    "PatchOperation",
    "encode_patch",
]

JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"

T = TypeVar("T")
PathLike = Union[str, Sequence[str]]

_VALUE_OPS = ("add", "replace")
_ALL_OPS = ("add", "replace", "remove")


@dataclass(frozen=True)
class PatchOperation:
    op: str
    path: str
    value: Any = None

    def to_payload(self, serializer: Serializer) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"op": self.op, "path": self.path}
        if self.op in _VALUE_OPS:
            payload["value"] = serializer.to_payload(self.value)
        return payload


def _escape(segment: str) -> str:
    return segment.replace("~", "~0").replace("/", "~1")


def _split(path: PathLike) -> List[str]:
    if isinstance(path, str):
        segments = path[1:].split("/") if path.startswith("/") else path.split("/")
    else:
        segments = [_escape(str(segment)) for segment in path]
    if not segments or not segments[0]:
        raise ValueError("Patch path must name a field")
    return segments


def _patchable_fields(model: type) -> Dict[str, Tuple[str, bool]]:
    """Map every accepted spelling of a field to (wire name, accepts sub-paths)."""
    fields: Dict[str, Tuple[str, bool]] = {}
    for name, info in model.model_fields.items():
        wire = info.alias or name
        nested = _is_container(info.annotation)
        fields[name.lower()] = (wire, nested)
        fields[wire.lower()] = (wire, nested)
    return fields


def _is_container(hint: Any) -> bool:
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        return any(_is_container(arg) for arg in get_args(hint))
    if origin in (dict, list):
        return True
    return isinstance(hint, type) and issubclass(hint, BaseModel)


def _resolve_path(model: type, path: PathLike) -> str:
    segments = _split(path)
    fields = _patchable_fields(model)
    try:
        wire, nested = fields[segments[0].lower()]
    except KeyError:
        raise ValueError(
            f"'{segments[0]}' is not a patchable field of {model.__name__}"
        ) from None
    if len(segments) > 1 and not nested:
        raise ValueError(
            f"'{wire}' on {model.__name__} does not accept nested patch paths"
        )
    return "/" + "/".join([wire, *segments[1:]])


class PatchDocument(Generic[T]):
    """
    Immutable, ordered list of patch operations against ``model``.

    Builder methods return a new document::

        patch = PatchDocument(MessagePatchModel).replace("metadata/ref", "123")
    """

    def __init__(
        self,
        model: type,
        operations: Sequence[PatchOperation] = (),
    ) -> None:
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise TypeError("Patch model must be a pydantic model class")
        self._model = model
        self._operations: Tuple[PatchOperation, ...] = tuple(operations)

    @property
    def model(self) -> type:
        return self._model

    @property
    def operations(self) -> Tuple[PatchOperation, ...]:
        return self._operations

    def __iter__(self) -> Iterator[PatchOperation]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __repr__(self) -> str:
        return f"PatchDocument({self._model.__name__}, {list(self._operations)!r})"

    def _append(self, op: str, path: PathLike, value: Any = None) -> "PatchDocument[T]":
        resolved = _resolve_path(self._model, path)
        operation = PatchOperation(op=op, path=resolved, value=value)
        return PatchDocument(self._model, self._operations + (operation,))

    def add(self, path: PathLike, value: Any) -> "PatchDocument[T]":
        return self._append("add", path, value)

    def replace(self, path: PathLike, value: Any) -> "PatchDocument[T]":
        return self._append("replace", path, value)

    def remove(self, path: PathLike) -> "PatchDocument[T]":
        return self._append("remove", path)


def encode_patch(
    document: PatchDocument[Any],
    model: Optional[type] = None,
    *,
    serializer: Serializer = default_serializer,
) -> bytes:
    """
    Serialize ``document`` as a JSON Patch body, keeping operation order.

    ``model`` is the patch model the target endpoint expects; a document built
    for another model is rejected.
    """
    if not isinstance(document, PatchDocument):
        raise TypeError("Expected a PatchDocument")
    if model is not None and document.model is not model:
        raise ValueError(
            f"Patch built for {document.model.__name__} cannot be applied "
            f"as {model.__name__}"
        )
    payload = []
    for operation in document:
        if operation.op not in _ALL_OPS:
            raise ValueError(f"Unsupported patch operation '{operation.op}'")
        _resolve_path(document.model, operation.path)
        payload.append(operation.to_payload(serializer))
    return serializer.dumps(payload)
