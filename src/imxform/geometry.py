"""
Geometric value types used by the transform builders.

Provides immutable Size and Rectangle containers. They carry no pixel data;
builders only read their origin, extent and center.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

from imxform.constants import MATRIX_DTYPE


@dataclass(frozen=True)
class Size:
    """
    Width and height of an axis-aligned region.

    Attributes:
        width: Extent along X (non-negative)
        height: Extent along Y (non-negative)
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        """Coerce to float and validate extent."""
        object.__setattr__(self, "width", float(self.width))
        object.__setattr__(self, "height", float(self.height))

        if not (math.isfinite(self.width) and math.isfinite(self.height)):
            raise ValueError(f"Size must be finite, got ({self.width}, {self.height})")
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Size must be non-negative, got ({self.width}, {self.height}). "
                f"Zero is allowed for degenerate regions."
            )

    @property
    def center(self) -> np.ndarray:
        """Center point [x, y] relative to the region origin."""
        return np.array([self.width * 0.5, self.height * 0.5], dtype=MATRIX_DTYPE)

    def as_array(self) -> np.ndarray:
        """Return [width, height] as an array."""
        return np.array([self.width, self.height], dtype=MATRIX_DTYPE)


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned rectangle defined by an origin and a size.

    Attributes:
        x: Origin X (left edge)
        y: Origin Y (top edge)
        width: Extent along X (non-negative)
        height: Extent along Y (non-negative)

    Example:
        >>> rect = Rectangle(10, 20, 100, 50)
        >>> rect.center
        array([60., 45.])
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        """Coerce to float and validate extent."""
        for name in ("x", "y", "width", "height"):
            object.__setattr__(self, name, float(getattr(self, name)))

        if not all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height)):
            raise ValueError(f"Rectangle must be finite, got {self}")
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Rectangle size must be non-negative, got ({self.width}, {self.height})"
            )

    @classmethod
    def from_size(cls, size: Size) -> Rectangle:
        """Rectangle of the given size located at the origin."""
        return cls(0.0, 0.0, size.width, size.height)

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> Rectangle:
        """Rectangle from its edge coordinates."""
        return cls(left, top, right - left, bottom - top)

    @property
    def location(self) -> np.ndarray:
        """Origin [x, y]."""
        return np.array([self.x, self.y], dtype=MATRIX_DTYPE)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> np.ndarray:
        """Absolute center point [x, y]."""
        return np.array(
            [self.x + self.width * 0.5, self.y + self.height * 0.5], dtype=MATRIX_DTYPE
        )

    def corners(self) -> np.ndarray:
        """Corner points [4, 2] in order top-left, top-right, bottom-right, bottom-left."""
        return np.array(
            [
                [self.left, self.top],
                [self.right, self.top],
                [self.right, self.bottom],
                [self.left, self.bottom],
            ],
            dtype=MATRIX_DTYPE,
        )


RectangleLike: TypeAlias = Rectangle | Size | tuple | list


def as_rectangle(value: RectangleLike) -> Rectangle:
    """
    Normalize a rectangle-like value to a Rectangle.

    Args:
        value: Rectangle, Size (origin at (0, 0)), (width, height) or (x, y, width, height)

    Returns:
        Rectangle instance

    Raises:
        TypeError: If value is not rectangle-like
        ValueError: If a sequence has the wrong length
    """
    if isinstance(value, Rectangle):
        return value
    if isinstance(value, Size):
        return Rectangle.from_size(value)
    if isinstance(value, (tuple, list)):
        if len(value) == 2:
            return Rectangle(0.0, 0.0, value[0], value[1])
        if len(value) == 4:
            return Rectangle(*value)
        raise ValueError(
            f"Expected (width, height) or (x, y, width, height), got {len(value)} values"
        )
    raise TypeError(f"Expected Rectangle, Size or tuple, got {type(value).__name__}")


def as_size(value: Size | tuple | list) -> Size:
    """Normalize a size-like value to a Size."""
    if isinstance(value, Size):
        return value
    if isinstance(value, Rectangle):
        return value.size
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return Size(value[0], value[1])
    raise TypeError(f"Expected Size or (width, height), got {value!r}")
