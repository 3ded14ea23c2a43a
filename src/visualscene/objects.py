"""Object: a tracked bounding region owning landmarks, params and children.

Objects form a recursive tree. Every node carries the coordinate space
of its whole subtree, so a relative tree stays relative at every depth.
A scene is an Object with ``kind == ObjectKind.SCENE`` and a
:class:`SceneInfo` payload; see :mod:`visualscene.scene` for helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Optional

from visualscene.errors import CoordinateSpaceError
from visualscene.landmark import Landmark
from visualscene.normalizer import (
    calculate_aspect_ratio,
    clamp_rect_to_relative_bounds,
    is_valid_relative_rect,
    rect_to_pixel,
    rect_to_relative,
    validate_dimensions,
)
from visualscene.params import ObjectParam
from visualscene.rect import BoundingRect
from visualscene.space import CoordinateSpace

# Sentinel ids that mark the scene node in a mixed collection
SCENE_TYPE_ID = "@scene"
SCENE_TRACKING_ID = "#scene"


class ObjectKind(str, Enum):
    """Discriminant between ordinary objects and whole-frame scenes."""

    PLAIN = "plain"
    SCENE = "scene"


@dataclass(frozen=True)
class SceneInfo:
    """Scene-only payload.

    Attributes:
        original_width: Width of the image the scene was detected on.
        original_height: Height of that image.
        source: Name of the producing processor. A non-owning handle used
            for provenance only.
    """

    original_width: int
    original_height: int
    source: Optional[str] = None

    @property
    def bounding(self) -> BoundingRect:
        return BoundingRect(0.0, 0.0, self.original_width, self.original_height)

    @property
    def aspect_ratio(self) -> float:
        return calculate_aspect_ratio(self.original_width, self.original_height)


@dataclass(frozen=True)
class Object:
    """A detected object and everything detected inside it.

    Attributes:
        type_id: Category key (e.g. "face"). Not unique per instance.
        tracking_id: Identity of this physical instance across frames.
            Expected unique among siblings, not enforced.
        bounding: Region in the object's coordinate space.
        landmarks: Keypoints owned by this object.
        objects: Nested child objects.
        params: Arbitrary metadata; never touched by conversions.
        space: Coordinate space of this node and its whole subtree.
        kind: PLAIN, or SCENE for the root of a frame's detections.
        scene: Scene payload, present iff ``kind`` is SCENE.

    Raises:
        CoordinateSpaceError: If a landmark or child is in another space.
        ValueError: If ``kind``, ``scene`` and the sentinel ids disagree.
    """

    type_id: str
    tracking_id: str
    bounding: BoundingRect
    landmarks: tuple[Landmark, ...] = ()
    objects: tuple[Object, ...] = ()
    params: tuple[ObjectParam, ...] = ()
    space: CoordinateSpace = CoordinateSpace.PIXEL
    kind: ObjectKind = ObjectKind.PLAIN
    scene: Optional[SceneInfo] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "landmarks", tuple(self.landmarks))
        object.__setattr__(self, "objects", tuple(self.objects))
        object.__setattr__(self, "params", tuple(self.params))
        object.__setattr__(self, "space", CoordinateSpace(self.space))
        object.__setattr__(self, "kind", ObjectKind(self.kind))

        if self.kind is ObjectKind.SCENE:
            if self.scene is None:
                raise ValueError("Scene objects require a SceneInfo payload")
            if self.type_id != SCENE_TYPE_ID or self.tracking_id != SCENE_TRACKING_ID:
                raise ValueError(
                    f"Scene objects must use ids {SCENE_TYPE_ID!r}/{SCENE_TRACKING_ID!r}"
                )
            if self.bounding != self.scene.bounding:
                raise ValueError("Scene bounding is derived from the original image size")
        elif self.scene is not None:
            raise ValueError("Only scene objects carry a SceneInfo payload")

        for landmark in self.landmarks:
            if landmark.space is not self.space:
                raise CoordinateSpaceError(
                    f"Landmark '{landmark.type_id}' is {landmark.space.value}, "
                    f"object '{self.tracking_id}' is {self.space.value}"
                )
        for child in self.objects:
            if child.space is not self.space:
                raise CoordinateSpaceError(
                    f"Child '{child.tracking_id}' is {child.space.value}, "
                    f"object '{self.tracking_id}' is {self.space.value}"
                )

    @property
    def width(self) -> float:
        return self.bounding.width

    @property
    def height(self) -> float:
        return self.bounding.height

    @property
    def is_normalized(self) -> bool:
        return self.space is CoordinateSpace.RELATIVE

    @property
    def is_scene(self) -> bool:
        return self.kind is ObjectKind.SCENE

    def __add__(self, other: object) -> Object:
        if not isinstance(other, Object) or not (self.is_scene and other.is_scene):
            return NotImplemented
        from visualscene.scene import combine

        return combine(self, other)

    # --- tree helpers ---

    def walk(self) -> Iterator[Object]:
        """Yield this object and every descendant, pre-order."""
        yield self
        for child in self.objects:
            yield from child.walk()

    def depth(self) -> int:
        """Number of levels in this subtree (a leaf has depth 1)."""
        if not self.objects:
            return 1
        return 1 + max(child.depth() for child in self.objects)

    # --- coordinate conversion ---

    def to_normalized(
        self,
        image_width: int,
        image_height: int,
        pixel_depth_scale: Optional[float] = None,
    ) -> Object:
        """Convert this subtree to relative space.

        The bounding box is divided per axis, landmarks and children are
        converted recursively and params are shared unchanged.

        Args:
            image_width: Source image width in pixels.
            image_height: Source image height in pixels.
            pixel_depth_scale: Divisor for landmark z. Defaults to
                ``image_width``.

        Raises:
            InvalidArgumentError: If width or height is not positive. The
                whole call fails; no partially converted tree is returned.
            CoordinateSpaceError: If the object is already relative.
        """
        if self.is_normalized:
            raise CoordinateSpaceError(f"Object '{self.tracking_id}' is already normalized")
        return self._convert(
            CoordinateSpace.RELATIVE, image_width, image_height, pixel_depth_scale
        )

    def to_pixel(
        self,
        image_width: int,
        image_height: int,
        pixel_depth_scale: Optional[float] = None,
    ) -> Object:
        """Convert a relative subtree back to pixel space.

        Structural inverse of :meth:`to_normalized`.

        Raises:
            InvalidArgumentError: If width or height is not positive.
            CoordinateSpaceError: If the object is already in pixel space.
        """
        if not self.is_normalized:
            raise CoordinateSpaceError(f"Object '{self.tracking_id}' is already in pixel space")
        return self._convert(
            CoordinateSpace.PIXEL, image_width, image_height, pixel_depth_scale
        )

    def _convert(
        self,
        target: CoordinateSpace,
        image_width: int,
        image_height: int,
        pixel_depth_scale: Optional[float],
    ) -> Object:
        validate_dimensions(image_width, image_height)
        if target is CoordinateSpace.RELATIVE:
            landmarks = [
                lm.to_normalized(image_width, image_height, pixel_depth_scale)
                for lm in self.landmarks
            ]
            rect_fn = rect_to_relative
        else:
            landmarks = [
                lm.to_pixel(image_width, image_height, pixel_depth_scale)
                for lm in self.landmarks
            ]
            rect_fn = rect_to_pixel

        # Scene bounding is the original image size in both spaces
        if self.is_scene:
            bounding = self.bounding
        else:
            bounding = rect_fn(self.bounding, image_width, image_height)

        objects = [
            child._convert(target, image_width, image_height, pixel_depth_scale)
            for child in self.objects
        ]
        return replace(
            self,
            bounding=bounding,
            landmarks=tuple(landmarks),
            objects=tuple(objects),
            space=target,
        )

    def is_valid_normalized(self, check_z: bool = False) -> bool:
        """True if the whole subtree is relative and within [0, 1].

        Checks, stopping at the first failure: the bounding box (skipped
        for scene nodes), every landmark, then every child recursively.
        Pixel-space objects report False.
        """
        if not self.is_normalized:
            return False
        if not self.is_scene and not is_valid_relative_rect(self.bounding):
            return False
        if not all(lm.is_valid_normalized(check_z) for lm in self.landmarks):
            return False
        return all(child.is_valid_normalized(check_z) for child in self.objects)

    def clamp_to_relative_bounds(self, clamp_z: bool = False) -> Object:
        """Return a copy of this relative subtree clamped into [0, 1].

        Raises:
            CoordinateSpaceError: If the object is in pixel space.
        """
        if not self.is_normalized:
            raise CoordinateSpaceError("Only relative objects can be clamped")
        bounding = (
            self.bounding if self.is_scene else clamp_rect_to_relative_bounds(self.bounding)
        )
        return replace(
            self,
            bounding=bounding,
            landmarks=tuple(lm.clamp_to_relative_bounds(clamp_z) for lm in self.landmarks),
            objects=tuple(child.clamp_to_relative_bounds(clamp_z) for child in self.objects),
        )


__all__ = [
    "Object",
    "ObjectKind",
    "SceneInfo",
    "SCENE_TYPE_ID",
    "SCENE_TRACKING_ID",
]
