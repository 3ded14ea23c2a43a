"""Lookup helpers over collections of landmarks, objects and params.

These are shallow: they search a single sequence, never the tree. Use
``Object.walk()`` to flatten a tree first when a recursive search is
needed. A ``None`` collection behaves like an empty one.

Example:
    >>> eyes = get_by_type_prefix(face.landmarks, "eye_")
    >>> person = get_by_tracking_id(scene.objects, "person-7")
    >>> age = get_param_value(person.params, "age", default=0)
"""

from typing import Any, Iterable, List, Optional, Protocol, TypeVar

from visualscene.objects import Object
from visualscene.params import ObjectParam


class _Typed(Protocol):
    type_id: str


T = TypeVar("T", bound=_Typed)


def get_by_type(items: Optional[Iterable[T]], type_id: str) -> List[T]:
    """All items whose ``type_id`` equals ``type_id``, in order."""
    if items is None:
        return []
    return [item for item in items if item.type_id == type_id]


def get_by_type_prefix(items: Optional[Iterable[T]], prefix: str) -> List[T]:
    """All items whose ``type_id`` starts with ``prefix``, in order.

    ``prefix`` is a plain string, not a pattern.
    """
    if items is None:
        return []
    return [item for item in items if item.type_id.startswith(prefix)]


def get_by_tracking_id(
    objects: Optional[Iterable[Object]], tracking_id: str
) -> Optional[Object]:
    """First object with the given tracking id, or None."""
    if objects is None:
        return None
    return next((obj for obj in objects if obj.tracking_id == tracking_id), None)


def get_param(
    params: Optional[Iterable[ObjectParam]], type_id: str
) -> Optional[ObjectParam]:
    """First param with the given type id, or None."""
    if params is None:
        return None
    return next((param for param in params if param.type_id == type_id), None)


def get_param_value(
    params: Optional[Iterable[ObjectParam]], type_id: str, default: Any = None
) -> Any:
    """Value of the first param with the given type id, else ``default``."""
    param = get_param(params, type_id)
    return default if param is None else param.value


__all__ = [
    "get_by_type",
    "get_by_type_prefix",
    "get_by_tracking_id",
    "get_param",
    "get_param_value",
]
