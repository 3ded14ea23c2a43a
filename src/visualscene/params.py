"""Object parameters: typed, scored, named values attached to an Object."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

import numpy as np


class ParamKind(str, Enum):
    """Closed set of value kinds an ObjectParam can carry.

    OPAQUE is the escape hatch for arbitrary payloads; such params compare
    and look up like any other but cannot be encoded.
    """

    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    BLOB = "blob"
    OPAQUE = "opaque"


ParamValue = Union[int, float, str, bool, bytes, Any]


def param_kind_of(value: Any) -> ParamKind:
    """Classify a value into its ParamKind."""
    # bool before number: bool is a subclass of int
    if isinstance(value, (bool, np.bool_)):
        return ParamKind.BOOLEAN
    if isinstance(value, (int, float, np.integer, np.floating)):
        return ParamKind.NUMBER
    if isinstance(value, str):
        return ParamKind.TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ParamKind.BLOB
    return ParamKind.OPAQUE


def _canonical(value: Any, kind: ParamKind) -> Any:
    if kind is ParamKind.BOOLEAN:
        return bool(value)
    if kind is ParamKind.NUMBER and isinstance(value, np.generic):
        return value.item()
    if kind is ParamKind.BLOB:
        return bytes(value)
    return value


@dataclass(frozen=True)
class ObjectParam:
    """Metadata attached to an Object.

    Params are not coordinate data: conversions between pixel and
    relative space pass them through untouched.

    Attributes:
        type_id: Lookup key. Not guaranteed unique within a collection.
        value: Number, text, boolean, binary blob, or an opaque payload.
        score: Confidence of the value, default 1.0.
        kind: Derived from ``value``.

    Example:
        >>> ObjectParam("age", 31).kind
        <ParamKind.NUMBER: 'number'>
    """

    type_id: str
    value: ParamValue
    score: float = 1.0
    kind: ParamKind = field(init=False)

    def __post_init__(self) -> None:
        kind = param_kind_of(self.value)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", _canonical(self.value, kind))
        object.__setattr__(self, "score", float(self.score))

    @property
    def is_opaque(self) -> bool:
        return self.kind is ParamKind.OPAQUE


__all__ = ["ObjectParam", "ParamKind", "ParamValue", "param_kind_of"]
