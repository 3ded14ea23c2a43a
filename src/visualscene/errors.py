"""Exception types raised by visualscene.

All errors derive from ``ValueError`` so callers that already guard
conversions with ``except ValueError`` keep working.
"""


class InvalidArgumentError(ValueError):
    """Raised when a transform receives non-positive image dimensions."""


class DimensionMismatchError(ValueError):
    """Raised when combining scenes captured from different image sizes."""


class CoordinateSpaceError(ValueError):
    """Raised when pixel and relative entities are mixed or misconverted."""


__all__ = [
    "InvalidArgumentError",
    "DimensionMismatchError",
    "CoordinateSpaceError",
]
