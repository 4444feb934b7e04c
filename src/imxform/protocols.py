"""
Protocol definitions for imxform builder interfaces.

Defines the common interface a transform builder must implement so callers and
tests can work against any builder kind.
"""

from __future__ import annotations

from typing import Protocol, Self, runtime_checkable

import numpy as np


@runtime_checkable
class TransformBuilder(Protocol):
    """
    Protocol for transform builders bound to a source rectangle.

    Builders compose operations either after (append) or before (prepend)
    everything accumulated so far.
    """

    def append_translation(self, vector) -> Self: ...

    def prepend_translation(self, vector) -> Self: ...

    def append_scale(self, factor) -> Self: ...

    def prepend_scale(self, factor) -> Self: ...

    def append_rotation_radians(self, radians: float) -> Self: ...

    def prepend_rotation_radians(self, radians: float) -> Self: ...

    def append_rotation_degrees(self, degrees: float) -> Self: ...

    def build_matrix(self) -> np.ndarray:
        """Return the composed homogeneous matrix."""
        ...

    def execute(self, rectangle, point) -> np.ndarray:
        """
        Map a source point through the composed transform.

        Args:
            rectangle: Rectangle the builder was created for
            point: Source point [2] or points [N, 2]

        Returns:
            Mapped point(s)
        """
        ...

    def __len__(self) -> int:
        """Return number of composed operations."""
        ...
