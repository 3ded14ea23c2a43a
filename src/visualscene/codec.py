"""Scene codec.

Encodes entities to JSON-compatible dicts and back. Blob params are
base64-encoded; opaque params have no wire form and are rejected.

Example:
    >>> data = encode_scene(scene)
    >>> restored = decode_scene(data)
    >>> save_scene(scene, "frame_0001.json")
"""

from __future__ import annotations

import base64
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from visualscene.landmark import Landmark
from visualscene.objects import Object, ObjectKind, SceneInfo
from visualscene.params import ObjectParam, ParamKind
from visualscene.point import Point3D
from visualscene.rect import BoundingRect
from visualscene.space import CoordinateSpace

FORMAT_VERSION = 1


def encode_point(point: Point3D) -> list[float]:
    return [point.x, point.y, point.z]


def decode_point(data: list[float]) -> Point3D:
    return Point3D.from_array(data)


def encode_rect(rect: BoundingRect) -> list[float]:
    return list(rect.as_tuple())


def decode_rect(data: list[float]) -> BoundingRect:
    if len(data) != 4:
        raise ValueError(f"Bounding rect needs 4 values, got {len(data)}")
    return BoundingRect(*data)


def encode_landmark(landmark: Landmark) -> Dict[str, Any]:
    return {
        "type_id": landmark.type_id,
        "location": encode_point(landmark.location),
        "score": landmark.score,
        "space": landmark.space.value,
    }


def decode_landmark(data: Dict[str, Any]) -> Landmark:
    return Landmark(
        type_id=data["type_id"],
        location=decode_point(data["location"]),
        score=data.get("score", 1.0),
        space=CoordinateSpace(data.get("space", CoordinateSpace.PIXEL.value)),
    )


def encode_param(param: ObjectParam) -> Dict[str, Any]:
    """Encode a param.

    Raises:
        ValueError: If the param is opaque.
    """
    if param.kind is ParamKind.OPAQUE:
        raise ValueError(f"Opaque param '{param.type_id}' cannot be encoded")
    value = param.value
    if param.kind is ParamKind.BLOB:
        value = base64.b64encode(value).decode("ascii")
    return {
        "type_id": param.type_id,
        "kind": param.kind.value,
        "value": value,
        "score": param.score,
    }


def decode_param(data: Dict[str, Any]) -> ObjectParam:
    """Decode a param.

    Raises:
        ValueError: If the kind is unknown, opaque, or does not match the
            decoded value.
    """
    kind = ParamKind(data["kind"])
    value = data["value"]
    if kind is ParamKind.OPAQUE:
        raise ValueError(f"Opaque param '{data['type_id']}' cannot be decoded")
    if kind is ParamKind.BLOB:
        value = base64.b64decode(value)

    param = ObjectParam(data["type_id"], value, data.get("score", 1.0))
    if param.kind is not kind:
        raise ValueError(
            f"Param '{param.type_id}' declared {kind.value} but holds {param.kind.value}"
        )
    return param


def encode_object(obj: Object) -> Dict[str, Any]:
    """Encode an object and its whole subtree."""
    data: Dict[str, Any] = {
        "type_id": obj.type_id,
        "tracking_id": obj.tracking_id,
        "kind": obj.kind.value,
        "space": obj.space.value,
        "bounding": encode_rect(obj.bounding),
        "landmarks": [encode_landmark(lm) for lm in obj.landmarks],
        "objects": [encode_object(child) for child in obj.objects],
        "params": [encode_param(p) for p in obj.params],
    }
    if obj.scene is not None:
        data["scene"] = {
            "original_width": obj.scene.original_width,
            "original_height": obj.scene.original_height,
            "source": obj.scene.source,
        }
    return data


def decode_object(data: Dict[str, Any]) -> Object:
    """Decode an object and its whole subtree.

    Raises:
        ValueError: If the data violates Object invariants.
    """
    scene_data = data.get("scene")
    scene = None
    if scene_data is not None:
        scene = SceneInfo(
            original_width=int(scene_data["original_width"]),
            original_height=int(scene_data["original_height"]),
            source=scene_data.get("source"),
        )
    return Object(
        type_id=data["type_id"],
        tracking_id=data["tracking_id"],
        bounding=decode_rect(data["bounding"]),
        landmarks=tuple(decode_landmark(lm) for lm in data.get("landmarks", [])),
        objects=tuple(decode_object(child) for child in data.get("objects", [])),
        params=tuple(decode_param(p) for p in data.get("params", [])),
        space=CoordinateSpace(data.get("space", CoordinateSpace.PIXEL.value)),
        kind=ObjectKind(data.get("kind", ObjectKind.PLAIN.value)),
        scene=scene,
    )


def encode_scene(scene: Object) -> Dict[str, Any]:
    """Encode a scene.

    Raises:
        TypeError: If ``scene`` is not a scene.
    """
    if not scene.is_scene:
        raise TypeError(f"Expected a scene, got object '{scene.tracking_id}'")
    return encode_object(scene)


def decode_scene(data: Dict[str, Any]) -> Object:
    """Decode a scene.

    Raises:
        TypeError: If the data describes a plain object.
    """
    obj = decode_object(data)
    if not obj.is_scene:
        raise TypeError(f"Expected a scene, got object '{obj.tracking_id}'")
    return obj


def save_scene(scene: Object, path: str | Path) -> None:
    """Save a scene to a JSON file, with _version metadata.

    Args:
        scene: Scene to save.
        path: Output JSON file path. Parent directories are created.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = encode_scene(scene)
    data["_version"] = {
        "format": FORMAT_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    # A failed dump must not leave a partial file behind
    text = json.dumps(data, indent=2, ensure_ascii=False)

    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def load_scene(path: str | Path) -> Object:
    """Load a scene saved with save_scene().

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file has an unsupported format version.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scene file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    version = data.pop("_version", {}).get("format", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported scene format version: {version}")
    return decode_scene(data)


__all__ = [
    "encode_point",
    "decode_point",
    "encode_rect",
    "decode_rect",
    "encode_landmark",
    "decode_landmark",
    "encode_param",
    "decode_param",
    "encode_object",
    "decode_object",
    "encode_scene",
    "decode_scene",
    "save_scene",
    "load_scene",
]
