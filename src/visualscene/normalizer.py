"""Pixel <-> relative coordinate transforms.

All functions are pure. Relative coordinates express a position as a
fraction of the image size, so ``x / width`` and ``y / height``. Depth is
divided by ``pixel_depth_scale``, which defaults to the image *width*:
depth then scales with horizontal pixel density, matching the depth
convention of MediaPipe pose/face landmarks.

Example:
    >>> p = pixel_to_relative(Point3D(320, 240, 160), 640, 480)
    >>> (p.x, p.y, p.z)
    (0.5, 0.5, 0.25)
"""

import math
from typing import Optional

from visualscene.errors import InvalidArgumentError
from visualscene.point import Point3D
from visualscene.rect import BoundingRect
from visualscene.space import COORDINATE_MAX, COORDINATE_MIN


def validate_dimensions(image_width: int, image_height: int) -> None:
    """Raise InvalidArgumentError unless both dimensions are positive."""
    if image_width <= 0:
        raise InvalidArgumentError(f"Image width must be positive, got {image_width}")
    if image_height <= 0:
        raise InvalidArgumentError(f"Image height must be positive, got {image_height}")


def _depth_scale(image_width: int, pixel_depth_scale: Optional[float]) -> float:
    return float(image_width) if pixel_depth_scale is None else float(pixel_depth_scale)


def _in_bounds(value: float) -> bool:
    # NaN fails both comparisons
    return COORDINATE_MIN <= value <= COORDINATE_MAX


def _clamp(value: float) -> float:
    if math.isnan(value):
        return COORDINATE_MIN
    return min(max(value, COORDINATE_MIN), COORDINATE_MAX)


def pixel_to_relative(
    point: Point3D,
    image_width: int,
    image_height: int,
    pixel_depth_scale: Optional[float] = None,
) -> Point3D:
    """Convert a pixel-space point to relative coordinates.

    Args:
        point: Point in pixel units.
        image_width: Source image width in pixels.
        image_height: Source image height in pixels.
        pixel_depth_scale: Divisor for z. Defaults to ``image_width``.

    Returns:
        New point with ``(x / W, y / H, z / pixel_depth_scale)``.

    Raises:
        InvalidArgumentError: If width or height is not positive, or the
            depth scale is zero.
    """
    validate_dimensions(image_width, image_height)
    depth = _depth_scale(image_width, pixel_depth_scale)
    if depth == 0:
        raise InvalidArgumentError("Pixel depth scale must be non-zero")
    return Point3D(
        point.x / image_width,
        point.y / image_height,
        point.z / depth,
    )


def relative_to_pixel(
    point: Point3D,
    image_width: int,
    image_height: int,
    pixel_depth_scale: Optional[float] = None,
) -> Point3D:
    """Convert a relative point back to pixel units.

    Inverse of :func:`pixel_to_relative` for the same arguments.

    Raises:
        InvalidArgumentError: If width or height is not positive.
    """
    validate_dimensions(image_width, image_height)
    depth = _depth_scale(image_width, pixel_depth_scale)
    return Point3D(
        point.x * image_width,
        point.y * image_height,
        point.z * depth,
    )


def calculate_aspect_ratio(image_width: int, image_height: int) -> float:
    """Return ``height / width``.

    Raises:
        InvalidArgumentError: If width or height is not positive.
    """
    validate_dimensions(image_width, image_height)
    return float(image_height) / float(image_width)


def is_valid_relative_point(point: Point3D, check_z: bool = False) -> bool:
    """Check that x and y (and z when ``check_z``) lie in [0, 1]."""
    if not (_in_bounds(point.x) and _in_bounds(point.y)):
        return False
    return _in_bounds(point.z) if check_z else True


def clamp_to_relative_bounds(point: Point3D, clamp_z: bool = False) -> Point3D:
    """Clamp x and y (and z when ``clamp_z``) into [0, 1].

    NaN components clamp to 0 so the result always validates.
    """
    return Point3D(
        _clamp(point.x),
        _clamp(point.y),
        _clamp(point.z) if clamp_z else point.z,
    )


def rect_to_relative(
    rect: BoundingRect, image_width: int, image_height: int
) -> BoundingRect:
    """Divide each rect edge by the image size along its axis.

    Raises:
        InvalidArgumentError: If width or height is not positive.
    """
    validate_dimensions(image_width, image_height)
    return BoundingRect(
        rect.left / image_width,
        rect.top / image_height,
        rect.right / image_width,
        rect.bottom / image_height,
    )


def rect_to_pixel(
    rect: BoundingRect, image_width: int, image_height: int
) -> BoundingRect:
    """Inverse of :func:`rect_to_relative`."""
    validate_dimensions(image_width, image_height)
    return BoundingRect(
        rect.left * image_width,
        rect.top * image_height,
        rect.right * image_width,
        rect.bottom * image_height,
    )


def is_valid_relative_rect(rect: BoundingRect) -> bool:
    """Check that all four edges lie in [0, 1]."""
    return all(_in_bounds(v) for v in rect.as_tuple())


def clamp_rect_to_relative_bounds(rect: BoundingRect) -> BoundingRect:
    return BoundingRect(*(_clamp(v) for v in rect.as_tuple()))


__all__ = [
    "validate_dimensions",
    "pixel_to_relative",
    "relative_to_pixel",
    "calculate_aspect_ratio",
    "is_valid_relative_point",
    "clamp_to_relative_bounds",
    "rect_to_relative",
    "rect_to_pixel",
    "is_valid_relative_rect",
    "clamp_rect_to_relative_bounds",
]
