"""Configuration for scene normalization.

Example:
    >>> from visualscene.config import NormalizationConfig, InvalidPolicy
    >>>
    >>> config = NormalizationConfig(
    ...     check_z=True,
    ...     clamp_z=True,
    ...     on_invalid=InvalidPolicy.CLAMP,
    ... )
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class InvalidPolicy(str, Enum):
    """What to do when a normalized scene falls outside [0, 1].

    KEEP: return it as is and log a warning.
    CLAMP: clamp every coordinate into [0, 1].
    RAISE: raise ValueError.
    """

    KEEP = "keep"
    CLAMP = "clamp"
    RAISE = "raise"

    @classmethod
    def from_string(cls, s: str) -> "InvalidPolicy":
        """Parse a policy from its name.

        Raises:
            ValueError: If the name is unknown.
        """
        mapping = {policy.value: policy for policy in cls}
        s_lower = s.lower()
        if s_lower not in mapping:
            raise ValueError(
                f"Unknown invalid policy: {s}. "
                f"Valid policies: {', '.join(mapping.keys())}"
            )
        return mapping[s_lower]


@dataclass(frozen=True)
class NormalizationConfig:
    """How scenes are converted to relative space.

    Attributes:
        pixel_depth_scale: Divisor for z. None uses the scene's original
            width.
        check_z: Also require z in [0, 1] when validating.
        clamp_z: Also clamp z when the CLAMP policy applies.
        on_invalid: Policy for results that fail validation.
    """

    pixel_depth_scale: Optional[float] = None
    check_z: bool = False
    clamp_z: bool = False
    on_invalid: InvalidPolicy = InvalidPolicy.KEEP

    def __post_init__(self) -> None:
        """Accept policy names and reject a zero depth scale."""
        if isinstance(self.on_invalid, str) and not isinstance(self.on_invalid, InvalidPolicy):
            object.__setattr__(self, "on_invalid", InvalidPolicy.from_string(self.on_invalid))
        if self.pixel_depth_scale is not None and self.pixel_depth_scale == 0:
            raise ValueError("pixel_depth_scale must be non-zero")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NormalizationConfig":
        """Build a config from a plain dict, ignoring unknown keys."""
        return cls(
            pixel_depth_scale=data.get("pixel_depth_scale"),
            check_z=bool(data.get("check_z", False)),
            clamp_z=bool(data.get("clamp_z", False)),
            on_invalid=data.get("on_invalid", InvalidPolicy.KEEP),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pixel_depth_scale": self.pixel_depth_scale,
            "check_z": self.check_z,
            "clamp_z": self.clamp_z,
            "on_invalid": self.on_invalid.value,
        }


__all__ = ["NormalizationConfig", "InvalidPolicy"]
