"""
Builder configuration for affine transform composition.

Provides the configuration structure controlling rectangle checks, right-angle
snapping and degenerate matrix detection.
"""

from dataclasses import dataclass

from imxform.constants import (
    DEFAULT_RECTANGLE_POLICY,
    DEFAULT_SNAP_RIGHT_ANGLES,
    DEGENERATE_TOLERANCE,
    VALID_RECTANGLE_POLICIES,
)


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for AffineTransformBuilder.

    Attributes:
        rectangle_policy: Handling of execute() with a foreign rectangle
            ("strict" raises RectangleMismatchError, "warn" logs and keeps
            the construction rectangle)
        snap_right_angles: Use exact sin/cos for rotations at right angles
        degenerate_tolerance: |det| below which appended matrices are rejected
    """

    rectangle_policy: str = DEFAULT_RECTANGLE_POLICY
    snap_right_angles: bool = DEFAULT_SNAP_RIGHT_ANGLES
    degenerate_tolerance: float = DEGENERATE_TOLERANCE

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.rectangle_policy not in VALID_RECTANGLE_POLICIES:
            raise ValueError(
                f"Invalid rectangle_policy: {self.rectangle_policy}. "
                f"Must be one of {VALID_RECTANGLE_POLICIES}"
            )

        if not isinstance(self.snap_right_angles, bool):
            raise TypeError("snap_right_angles must be a bool")

        if not self.degenerate_tolerance >= 0.0:
            raise ValueError("degenerate_tolerance must be non-negative")
