"""Scenes: the root object holding one frame's detections.

A scene is an :class:`~visualscene.objects.Object` with kind SCENE, the
sentinel ids ``"@scene"``/``"#scene"`` and a bounding box equal to the
original image size. Several detectors running over the same frame each
produce a scene; :func:`compose_scene_from_processing_results` merges them.

Example:
    >>> faces = make_scene(640, 480, objects=[face], source="face.detect")
    >>> hands = make_scene(640, 480, landmarks=hand_points, source="hand.detect")
    >>> merged = faces + hands
    >>> normalized = scene_to_normalized(merged)
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Sequence

from visualscene.config import InvalidPolicy, NormalizationConfig
from visualscene.errors import (
    CoordinateSpaceError,
    DimensionMismatchError,
    InvalidArgumentError,
)
from visualscene.landmark import Landmark
from visualscene.objects import (
    SCENE_TRACKING_ID,
    SCENE_TYPE_ID,
    Object,
    ObjectKind,
    SceneInfo,
)
from visualscene.params import ObjectParam
from visualscene.space import CoordinateSpace

logger = logging.getLogger(__name__)


def _pixel_size(value: Any, name: str) -> int:
    size = int(value)
    if size != value:
        raise InvalidArgumentError(f"Image {name} must be a whole number of pixels, got {value}")
    return size


def make_scene(
    original_width: int,
    original_height: int,
    landmarks: Sequence[Landmark] = (),
    objects: Sequence[Object] = (),
    params: Sequence[ObjectParam] = (),
    source: Optional[str] = None,
    space: CoordinateSpace = CoordinateSpace.PIXEL,
) -> Object:
    """Create a scene for an image of the given size.

    Args:
        original_width: Image width in pixels.
        original_height: Image height in pixels.
        landmarks: Top-level landmarks.
        objects: Top-level objects.
        params: Scene-level params.
        source: Name of the producing processor.
        space: Coordinate space of the contents.

    Raises:
        InvalidArgumentError: If a size is not a whole number of pixels.
    """
    info = SceneInfo(
        original_width=_pixel_size(original_width, "width"),
        original_height=_pixel_size(original_height, "height"),
        source=source,
    )
    return Object(
        type_id=SCENE_TYPE_ID,
        tracking_id=SCENE_TRACKING_ID,
        bounding=info.bounding,
        landmarks=tuple(landmarks),
        objects=tuple(objects),
        params=tuple(params),
        space=space,
        kind=ObjectKind.SCENE,
        scene=info,
    )


def is_scene(value: Any) -> bool:
    """True if ``value`` is a scene object."""
    return isinstance(value, Object) and value.is_scene


def _require_scene(value: Any, name: str) -> SceneInfo:
    if not is_scene(value):
        raise TypeError(f"{name} must be a scene, got {type(value).__name__}")
    return value.scene


def combine(scene_a: Object, scene_b: Object) -> Object:
    """Merge two scenes of the same image.

    Landmarks, objects and params are concatenated, A's first. Nothing is
    deduplicated, duplicate tracking ids pass through. The result keeps
    A's source.

    Raises:
        TypeError: If either argument is not a scene.
        DimensionMismatchError: If the original image sizes differ.
        CoordinateSpaceError: If the scenes are in different spaces.
    """
    info_a = _require_scene(scene_a, "scene_a")
    info_b = _require_scene(scene_b, "scene_b")
    if (
        info_a.original_width != info_b.original_width
        or info_a.original_height != info_b.original_height
    ):
        raise DimensionMismatchError(
            "Scenes must have the same dimensions to be combined: "
            f"{info_a.original_width}x{info_a.original_height} vs "
            f"{info_b.original_width}x{info_b.original_height}"
        )
    if scene_a.space is not scene_b.space:
        raise CoordinateSpaceError(
            f"Cannot combine {scene_a.space.value} and {scene_b.space.value} scenes"
        )

    return make_scene(
        info_a.original_width,
        info_a.original_height,
        landmarks=scene_a.landmarks + scene_b.landmarks,
        objects=scene_a.objects + scene_b.objects,
        params=scene_a.params + scene_b.params,
        source=info_a.source,
        space=scene_a.space,
    )


def compose_scene_from_processing_results(results: Any) -> Optional[Object]:
    """Fold every scene in a batch of processing results into one.

    Args:
        results: Mapping of result name to value, or an iterable of values.
            Values that are not scenes are ignored.

    Returns:
        The merged scene in encounter order, or None if there was none.

    Raises:
        DimensionMismatchError: If the scenes come from different image
            sizes. All results for one frame must share one image.
    """
    values: Iterable[Any] = results.values() if isinstance(results, Mapping) else results

    composed: Optional[Object] = None
    count = 0
    for value in values:
        if not is_scene(value):
            continue
        count += 1
        composed = value if composed is None else combine(composed, value)

    logger.debug("Composed %d scene(s) from processing results", count)
    return composed


def scene_to_normalized(scene: Object, pixel_depth_scale: Optional[float] = None) -> Object:
    """Convert a pixel scene to relative space.

    Args:
        scene: Pixel-space scene.
        pixel_depth_scale: Divisor for z. Defaults to the original width.

    Raises:
        TypeError: If ``scene`` is not a scene.
        InvalidArgumentError: If the original size is not positive.
    """
    info = _require_scene(scene, "scene")
    return scene.to_normalized(info.original_width, info.original_height, pixel_depth_scale)


def scene_to_pixel(scene: Object, pixel_depth_scale: Optional[float] = None) -> Object:
    """Convert a relative scene back to pixel space."""
    info = _require_scene(scene, "scene")
    return scene.to_pixel(info.original_width, info.original_height, pixel_depth_scale)


def is_valid_normalized_scene(scene: Object, check_z: bool = False) -> bool:
    """True if every landmark and object of a relative scene is in [0, 1]."""
    return is_scene(scene) and scene.is_valid_normalized(check_z)


def normalize_scene(
    scene: Object, config: Optional[NormalizationConfig] = None
) -> Object:
    """Convert a pixel scene to relative space following ``config``.

    Args:
        scene: Pixel-space scene.
        config: Normalization settings. Defaults to NormalizationConfig().

    Returns:
        The normalized scene, clamped if the policy says so.

    Raises:
        ValueError: If the result is invalid and the policy is RAISE.
    """
    config = config or NormalizationConfig()
    normalized = scene_to_normalized(scene, config.pixel_depth_scale)
    if is_valid_normalized_scene(normalized, config.check_z):
        return normalized

    source = normalized.scene.source
    if config.on_invalid is InvalidPolicy.RAISE:
        raise ValueError(f"Normalized scene from {source or 'unknown source'} is out of bounds")
    if config.on_invalid is InvalidPolicy.CLAMP:
        logger.debug("Clamping out-of-bounds scene from %s", source)
        return normalized.clamp_to_relative_bounds(config.clamp_z)

    logger.warning("Normalized scene from %s has coordinates outside [0, 1]", source)
    return normalized


__all__ = [
    "SCENE_TYPE_ID",
    "SCENE_TRACKING_ID",
    "make_scene",
    "is_scene",
    "combine",
    "compose_scene_from_processing_results",
    "scene_to_normalized",
    "scene_to_pixel",
    "is_valid_normalized_scene",
    "normalize_scene",
]
