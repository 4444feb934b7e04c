"""
AffineTransformBuilder: Incremental composition of 2D affine transforms.

This module provides a fluent API for accumulating translation, scale, rotation,
skew and raw matrix operations into a single 3x3 affine matrix bound to a source
rectangle.

Key Features:
- Append (applied after existing operations) and prepend (applied before them)
- Every operation is fused into the accumulated matrix immediately
- Rotation and skew centered on the source rectangle
- Implicit location offset so operations are expressed in rectangle-local coordinates
- Single-point and batched evaluation (Numba kernel for batches)
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Self, TypeAlias

import numpy as np

from imxform.config import BuilderConfig
from imxform.constants import MATRIX_DTYPE, RECTANGLE_POLICY_STRICT
from imxform.exceptions import RectangleMismatchError
from imxform.geometry import Rectangle, RectangleLike, Size, as_rectangle
from imxform.transform.api import (
    _build_translation_matrix_3x3_numpy,
    create_rotation_matrix_radians,
    create_scale_matrix,
    create_skew_matrix_radians,
    create_translation_matrix,
    ensure_affine,
    to_radians,
    transform_points,
)
from imxform.validators import validate_finite, validate_type

logger = logging.getLogger(__name__)

# Type aliases for better readability (Python 3.12+ syntax)
ArrayLike: TypeAlias = np.ndarray | tuple | list

_ARRAY_TYPES = (np.ndarray, list, tuple)


class AffineTransformBuilder:
    """
    Builder composing 2D affine operations into one matrix for a source rectangle.

    Append operations are applied after everything accumulated so far (M = op @ M);
    prepend operations are applied before it (M = M @ op). Consequently
    append(A), append(B), append(C) yields the same matrix as
    prepend(C), prepend(B), prepend(A).

    The rectangle origin (x, y) becomes a translation by (-x, -y) that always runs
    first, ahead of any prepended operation. Rotations and skews are centered on
    (width / 2, height / 2) in that rectangle-local frame.

    Supported Operations:
    - append_translation / prepend_translation
    - append_scale / prepend_scale
    - append_rotation_radians / prepend_rotation_radians (and _degrees variants)
    - append_skew_radians / prepend_skew_radians (and _degrees variants)
    - append_matrix / prepend_matrix

    Example:
        >>> builder = (AffineTransformBuilder(Size(200, 100))
        ...     .append_scale((2.0, 0.5))
        ...     .append_translation([3.0, 1.0])
        ... )
        >>> builder.execute(Size(200, 100), [10.0, 20.0])
        array([23., 11.])
    """

    __slots__ = (
        "_rectangle",
        "_config",
        "_matrix",
        "_location_offset",
        "_num_operations",
    )

    def __init__(self, rectangle: RectangleLike, config: BuilderConfig | None = None):
        """
        Initialize the builder for a source rectangle.

        Args:
            rectangle: Rectangle, Size (origin at (0, 0)), (width, height) or (x, y, width, height)
            config: Optional BuilderConfig (defaults are used if omitted)
        """
        if config is not None and not isinstance(config, BuilderConfig):
            raise TypeError(f"config must be BuilderConfig, got {type(config).__name__}")

        self._rectangle: Rectangle = as_rectangle(rectangle)
        self._config: BuilderConfig = config if config is not None else BuilderConfig()

        # Accumulated explicit operations
        self._matrix: np.ndarray = np.eye(3, dtype=MATRIX_DTYPE)

        # Applied ahead of every explicit operation
        self._location_offset: np.ndarray = _build_translation_matrix_3x3_numpy(
            -self._rectangle.location
        )

        self._num_operations: int = 0

        logger.info("[AffineTransformBuilder] Initialized for %s", self._rectangle)

    # ------------------------------------------------------------------
    # Composition primitives
    # ------------------------------------------------------------------

    def _append(self, op: np.ndarray, name: str) -> Self:
        self._matrix = op @ self._matrix
        self._num_operations += 1
        logger.debug("[AffineTransformBuilder] Appended %s", name)
        return self

    def _prepend(self, op: np.ndarray, name: str) -> Self:
        self._matrix = self._matrix @ op
        self._num_operations += 1
        logger.debug("[AffineTransformBuilder] Prepended %s", name)
        return self

    def _rotation(self, radians: float) -> np.ndarray:
        return create_rotation_matrix_radians(
            radians, self._rectangle.size.center, snap=self._config.snap_right_angles
        )

    def _skew(self, radians_x: float, radians_y: float) -> np.ndarray:
        return create_skew_matrix_radians(radians_x, radians_y, self._rectangle.size.center)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    @validate_type(_ARRAY_TYPES, "vector")
    def append_translation(self, vector: ArrayLike) -> Self:
        """
        Append a translation, applied after all accumulated operations.

        Args:
            vector: Translation [dx, dy]

        Returns:
            Self for method chaining
        """
        return self._append(create_translation_matrix(vector), "translation")

    @validate_type(_ARRAY_TYPES, "vector")
    def prepend_translation(self, vector: ArrayLike) -> Self:
        """
        Prepend a translation, applied before all accumulated operations.

        Args:
            vector: Translation [dx, dy]

        Returns:
            Self for method chaining
        """
        return self._prepend(create_translation_matrix(vector), "translation")

    # ------------------------------------------------------------------
    # Scale
    # ------------------------------------------------------------------

    def append_scale(self, factor: float | ArrayLike | Size) -> Self:
        """
        Append a scaling about the local origin.

        Args:
            factor: Uniform scale (float) or per-axis scale [sx, sy] / Size

        Returns:
            Self for method chaining
        """
        return self._append(create_scale_matrix(factor), "scale")

    def prepend_scale(self, factor: float | ArrayLike | Size) -> Self:
        """
        Prepend a scaling about the local origin.

        Args:
            factor: Uniform scale (float) or per-axis scale [sx, sy] / Size

        Returns:
            Self for method chaining
        """
        return self._prepend(create_scale_matrix(factor), "scale")

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------

    @validate_finite("radians")
    def append_rotation_radians(self, radians: float) -> Self:
        """
        Append a counter-clockwise rotation centered on the rectangle.

        Args:
            radians: Rotation angle in radians

        Returns:
            Self for method chaining

        Example:
            >>> AffineTransformBuilder(Size(100, 100)).append_rotation_radians(np.pi / 2)
        """
        return self._append(self._rotation(radians), f"rotation ({radians:.6f} rad)")

    @validate_finite("radians")
    def prepend_rotation_radians(self, radians: float) -> Self:
        """
        Prepend a counter-clockwise rotation centered on the rectangle.

        Args:
            radians: Rotation angle in radians

        Returns:
            Self for method chaining
        """
        return self._prepend(self._rotation(radians), f"rotation ({radians:.6f} rad)")

    @validate_finite("degrees")
    def append_rotation_degrees(self, degrees: float) -> Self:
        """Append a centered rotation given in degrees."""
        return self.append_rotation_radians(to_radians(degrees))

    @validate_finite("degrees")
    def prepend_rotation_degrees(self, degrees: float) -> Self:
        """Prepend a centered rotation given in degrees."""
        return self.prepend_rotation_radians(to_radians(degrees))

    # ------------------------------------------------------------------
    # Skew
    # ------------------------------------------------------------------

    @validate_finite("radians_x", 1)
    @validate_finite("radians_y", 2)
    def append_skew_radians(self, radians_x: float, radians_y: float) -> Self:
        """
        Append a skew centered on the rectangle.

        Args:
            radians_x: Skew angle along X in radians
            radians_y: Skew angle along Y in radians

        Returns:
            Self for method chaining
        """
        return self._append(self._skew(radians_x, radians_y), "skew")

    @validate_finite("radians_x", 1)
    @validate_finite("radians_y", 2)
    def prepend_skew_radians(self, radians_x: float, radians_y: float) -> Self:
        """
        Prepend a skew centered on the rectangle.

        Args:
            radians_x: Skew angle along X in radians
            radians_y: Skew angle along Y in radians

        Returns:
            Self for method chaining
        """
        return self._prepend(self._skew(radians_x, radians_y), "skew")

    @validate_finite("degrees_x", 1)
    @validate_finite("degrees_y", 2)
    def append_skew_degrees(self, degrees_x: float, degrees_y: float) -> Self:
        return self.append_skew_radians(to_radians(degrees_x), to_radians(degrees_y))

    @validate_finite("degrees_x", 1)
    @validate_finite("degrees_y", 2)
    def prepend_skew_degrees(self, degrees_x: float, degrees_y: float) -> Self:
        return self.prepend_skew_radians(to_radians(degrees_x), to_radians(degrees_y))

    # ------------------------------------------------------------------
    # Raw matrices
    # ------------------------------------------------------------------

    @validate_type(_ARRAY_TYPES, "matrix")
    def append_matrix(self, matrix: ArrayLike) -> Self:
        """
        Append an arbitrary affine matrix.

        Args:
            matrix: 2x3 or 3x3 affine matrix (column-vector convention)

        Returns:
            Self for method chaining

        Raises:
            ValueError: If the matrix is not affine
            DegenerateTransformError: If the matrix is not invertible
        """
        M = ensure_affine(matrix, self._config.degenerate_tolerance)
        return self._append(M, "matrix")

    @validate_type(_ARRAY_TYPES, "matrix")
    def prepend_matrix(self, matrix: ArrayLike) -> Self:
        """
        Prepend an arbitrary affine matrix.

        Args:
            matrix: 2x3 or 3x3 affine matrix (column-vector convention)

        Returns:
            Self for method chaining

        Raises:
            ValueError: If the matrix is not affine
            DegenerateTransformError: If the matrix is not invertible
        """
        M = ensure_affine(matrix, self._config.degenerate_tolerance)
        return self._prepend(M, "matrix")

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def build_matrix(self) -> np.ndarray:
        """
        Get the composed 3x3 matrix, including the location offset.

        Returns:
            New 3x3 float64 array (safe to modify)
        """
        M = self._matrix @ self._location_offset
        logger.debug("[AffineTransformBuilder] Built matrix from %d operations", self._num_operations)
        return M

    def _check_rectangle(self, rectangle: RectangleLike | None) -> None:
        if rectangle is None:
            return

        requested = as_rectangle(rectangle)
        if requested == self._rectangle:
            return

        if self._config.rectangle_policy == RECTANGLE_POLICY_STRICT:
            raise RectangleMismatchError(
                f"Builder was created for {self._rectangle}, cannot execute against {requested}. "
                f"Create a new builder or use BuilderConfig(rectangle_policy='warn')."
            )

        logger.warning(
            "[AffineTransformBuilder] Execute called with %s, using construction rectangle %s",
            requested,
            self._rectangle,
        )

    def execute(self, rectangle: RectangleLike | None, point: ArrayLike) -> np.ndarray:
        """
        Map a point (or points) through the composed transform.

        Args:
            rectangle: Rectangle to evaluate against; must match the construction
                rectangle (None uses it directly)
            point: Source point [2] or points [N, 2]

        Returns:
            Mapped point(s), same shape as input

        Raises:
            RectangleMismatchError: If rectangle differs and the policy is "strict"
        """
        self._check_rectangle(rectangle)
        return transform_points(point, self.build_matrix())

    def transform_points(self, points: ArrayLike, out: np.ndarray | None = None) -> np.ndarray:
        """
        Map points through the composed transform.

        Args:
            points: Source point [2] or points [N, 2]
            out: Optional pre-allocated float64 output buffer [N, 2]

        Returns:
            Mapped point(s)
        """
        return transform_points(points, self.build_matrix(), out=out)

    def is_identity(self) -> bool:
        """Check if the composed transform maps every point to itself."""
        return bool(np.array_equal(self._matrix @ self._location_offset, np.eye(3)))

    # ------------------------------------------------------------------
    # Introspection and copying
    # ------------------------------------------------------------------

    @property
    def rectangle(self) -> Rectangle:
        """Source rectangle the builder is bound to."""
        return self._rectangle

    @property
    def size(self) -> Size:
        return self._rectangle.size

    @property
    def config(self) -> BuilderConfig:
        return self._config

    @property
    def num_operations(self) -> int:
        """Number of operations composed so far."""
        return self._num_operations

    def copy(self) -> Self:
        """
        Create a deep copy of the builder.

        Returns:
            New AffineTransformBuilder with copied state
        """
        return deepcopy(self)

    def __copy__(self) -> Self:
        """Shallow copy (creates deep copy for safety)."""
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        """Deep copy implementation."""
        new_obj = self.__class__(self._rectangle, self._config)
        new_obj._matrix = self._matrix.copy()
        new_obj._num_operations = self._num_operations
        return new_obj

    def __repr__(self) -> str:
        r = self._rectangle
        return (
            f"AffineTransformBuilder({self._num_operations} operations) "
            f"[rectangle=({r.x:g}, {r.y:g}, {r.width:g}, {r.height:g})]"
        )

    def __len__(self) -> int:
        """Number of operations composed so far."""
        return self._num_operations
