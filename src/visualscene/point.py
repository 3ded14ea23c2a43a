"""Immutable 3D point value."""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np


def to_f32(value: float) -> float:
    """Round a number through float32 and return it as a Python float."""
    return float(np.float32(value))


@dataclass(frozen=True)
class Point3D:
    """A 3-component coordinate stored with float32 precision.

    The same type is used for pixel and relative coordinates; the owning
    entity's ``space`` says which one applies.

    Attributes:
        x: Horizontal coordinate.
        y: Vertical coordinate.
        z: Depth. In relative space it is scaled by ``pixel_depth_scale``
            (image width by default), following the MediaPipe convention.
    """

    x: float
    y: float
    z: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", to_f32(self.x))
        object.__setattr__(self, "y", to_f32(self.y))
        object.__setattr__(self, "z", to_f32(self.z))

    def as_array(self) -> np.ndarray:
        """Return ``[x, y, z]`` as a float32 array."""
        return np.array([self.x, self.y, self.z], dtype=np.float32)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def from_array(cls, values: Sequence[float]) -> "Point3D":
        """Build a point from 2 or 3 components (z defaults to 0).

        Raises:
            ValueError: If ``values`` does not have 2 or 3 components.
        """
        flat = np.asarray(values, dtype=np.float32).reshape(-1)
        if flat.size == 2:
            return cls(float(flat[0]), float(flat[1]))
        if flat.size == 3:
            return cls(float(flat[0]), float(flat[1]), float(flat[2]))
        raise ValueError(f"Point3D needs 2 or 3 components, got {flat.size}")

    def to_relative(
        self,
        image_width: int,
        image_height: int,
        pixel_depth_scale: Optional[float] = None,
    ) -> "Point3D":
        """Pixel point to relative; see :func:`visualscene.normalizer.pixel_to_relative`."""
        from visualscene.normalizer import pixel_to_relative

        return pixel_to_relative(self, image_width, image_height, pixel_depth_scale)

    def to_pixel(
        self,
        image_width: int,
        image_height: int,
        pixel_depth_scale: Optional[float] = None,
    ) -> "Point3D":
        """Relative point to pixel; see :func:`visualscene.normalizer.relative_to_pixel`."""
        from visualscene.normalizer import relative_to_pixel

        return relative_to_pixel(self, image_width, image_height, pixel_depth_scale)


__all__ = ["Point3D", "to_f32"]
