"""Landmark: a typed, scored point of interest."""

from dataclasses import dataclass, replace
from typing import Optional

from visualscene.errors import CoordinateSpaceError
from visualscene.normalizer import (
    clamp_to_relative_bounds,
    is_valid_relative_point,
    pixel_to_relative,
    relative_to_pixel,
)
from visualscene.point import Point3D
from visualscene.space import CoordinateSpace


@dataclass(frozen=True)
class Landmark:
    """A single detected keypoint.

    Attributes:
        type_id: Classification key (e.g. "left_eye"). Not unique within a
            collection.
        location: Point in the coordinate space given by ``space``.
        score: Detection confidence, conventionally [0, 1].
        space: PIXEL for detector output, RELATIVE once normalized.
    """

    type_id: str
    location: Point3D
    score: float
    space: CoordinateSpace = CoordinateSpace.PIXEL

    def __post_init__(self) -> None:
        object.__setattr__(self, "space", CoordinateSpace(self.space))
        object.__setattr__(self, "score", float(self.score))

    @property
    def is_normalized(self) -> bool:
        return self.space is CoordinateSpace.RELATIVE

    def to_normalized(
        self,
        image_width: int,
        image_height: int,
        pixel_depth_scale: Optional[float] = None,
    ) -> "Landmark":
        """Convert to relative space.

        Args:
            image_width: Source image width in pixels.
            image_height: Source image height in pixels.
            pixel_depth_scale: Divisor for z. Defaults to ``image_width``.

        Raises:
            InvalidArgumentError: If width or height is not positive.
            CoordinateSpaceError: If the landmark is already relative.
        """
        if self.is_normalized:
            raise CoordinateSpaceError(f"Landmark '{self.type_id}' is already normalized")
        location = pixel_to_relative(
            self.location, image_width, image_height, pixel_depth_scale
        )
        return replace(self, location=location, space=CoordinateSpace.RELATIVE)

    def to_pixel(
        self,
        image_width: int,
        image_height: int,
        pixel_depth_scale: Optional[float] = None,
    ) -> "Landmark":
        """Convert a relative landmark back to pixel space.

        Raises:
            InvalidArgumentError: If width or height is not positive.
            CoordinateSpaceError: If the landmark is already in pixel space.
        """
        if not self.is_normalized:
            raise CoordinateSpaceError(f"Landmark '{self.type_id}' is already in pixel space")
        location = relative_to_pixel(
            self.location, image_width, image_height, pixel_depth_scale
        )
        return replace(self, location=location, space=CoordinateSpace.PIXEL)

    def is_valid_normalized(self, check_z: bool = False) -> bool:
        """True if this is a relative landmark with its location in [0, 1].

        Pixel-space landmarks are never valid normalized landmarks.
        """
        if not self.is_normalized:
            return False
        return is_valid_relative_point(self.location, check_z)

    def clamp_to_relative_bounds(self, clamp_z: bool = False) -> "Landmark":
        """Return a copy with its location clamped into [0, 1].

        Raises:
            CoordinateSpaceError: If the landmark is in pixel space.
        """
        if not self.is_normalized:
            raise CoordinateSpaceError("Only relative landmarks can be clamped")
        return replace(self, location=clamp_to_relative_bounds(self.location, clamp_z))


__all__ = ["Landmark"]
