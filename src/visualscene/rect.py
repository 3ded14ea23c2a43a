"""Axis-aligned bounding rectangle."""

from dataclasses import dataclass

from visualscene.point import to_f32


@dataclass(frozen=True)
class BoundingRect:
    """Rectangle given by its edges, float32 precision.

    ``width`` and ``height`` are derived. A rect with ``left > right`` can
    be represented but is semantically invalid.
    """

    left: float
    top: float
    right: float
    bottom: float

    def __post_init__(self) -> None:
        for name in ("left", "top", "right", "bottom"):
            object.__setattr__(self, name, to_f32(getattr(self, name)))

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> tuple[float, float]:
        return (0.5 * (self.left + self.right), 0.5 * (self.top + self.bottom))

    @property
    def area(self) -> float:
        return self.width * self.height

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return ``(left, top, right, bottom)``."""
        return (self.left, self.top, self.right, self.bottom)

    @classmethod
    def from_xywh(cls, x: float, y: float, w: float, h: float) -> "BoundingRect":
        """Build a rect from top-left corner plus size."""
        return cls(x, y, x + w, y + h)

    def to_xywh(self) -> tuple[float, float, float, float]:
        """Return ``(x, y, width, height)``."""
        return (self.left, self.top, self.width, self.height)


__all__ = ["BoundingRect"]
