"""Coordinate space tag shared by every entity."""

from enum import Enum

# Relative coordinates live in [COORDINATE_MIN, COORDINATE_MAX]
COORDINATE_MIN = 0.0
COORDINATE_MAX = 1.0
COORDINATE_RANGE = COORDINATE_MAX - COORDINATE_MIN


class CoordinateSpace(str, Enum):
    """Which space an entity's coordinates are expressed in.

    PIXEL: absolute pixel units of a specific image.
    RELATIVE: fractions of image width/height, nominally [0, 1].
    """

    PIXEL = "pixel"
    RELATIVE = "relative"

    @classmethod
    def from_string(cls, s: str) -> "CoordinateSpace":
        """Parse a coordinate space from its name.

        Args:
            s: "pixel" or "relative" (case-insensitive). "normalized" is
                accepted as an alias of "relative".

        Raises:
            ValueError: If the name is unknown.
        """
        mapping = {
            "pixel": cls.PIXEL,
            "relative": cls.RELATIVE,
            "normalized": cls.RELATIVE,
        }
        s_lower = s.lower()
        if s_lower not in mapping:
            raise ValueError(
                f"Unknown coordinate space: {s}. "
                f"Valid spaces: {', '.join(mapping.keys())}"
            )
        return mapping[s_lower]


__all__ = [
    "CoordinateSpace",
    "COORDINATE_MIN",
    "COORDINATE_MAX",
    "COORDINATE_RANGE",
]
