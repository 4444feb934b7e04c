"""
2D Affine Matrix Construction and Application

All matrices are 3x3 homogeneous float64 arrays in column-vector convention:
p' = M @ [x, y, 1]. Composition therefore reads right-to-left, A @ B applies B first.

Functions:
- create_*_matrix(): translation, scale, rotation and skew builders
  (rotation and skew optionally centered on a point)
- create_rotation_matrix_degrees(): rotation centered on a size, as used by builders
- transform_points(): apply a matrix to one point or a batch (Numba kernel for batches)
- get_transformed_bounding_rectangle() / get_transformed_size(): output canvas helpers
"""

from __future__ import annotations

import math
from typing import TypeAlias

import numpy as np

from imxform.constants import (
    DEGENERATE_TOLERANCE,
    HOMOGENEOUS_DIMS,
    MATRIX_DTYPE,
    RIGHT_ANGLE_EPSILON,
    SPATIAL_DIMS,
)
from imxform.exceptions import DegenerateTransformError
from imxform.geometry import Rectangle, Size, as_size
from imxform.transform.kernels import affine_transform_points_numba

# Type aliases for better readability (Python 3.12+ syntax)
ArrayLike: TypeAlias = np.ndarray | tuple | list

# ============================================================================
# 3x3 Homogeneous Matrix Building (NumPy)
# ============================================================================


def _build_translation_matrix_3x3_numpy(translation: np.ndarray) -> np.ndarray:
    """Build 3x3 translation matrix."""
    T = np.eye(3, dtype=MATRIX_DTYPE)
    T[:2, 2] = translation
    return T


def _build_scale_matrix_3x3_numpy(scale_factor: np.ndarray) -> np.ndarray:
    """Build 3x3 scale matrix."""
    S = np.eye(3, dtype=MATRIX_DTYPE)
    S[0, 0] = scale_factor[0]
    S[1, 1] = scale_factor[1]
    return S


def _build_linear_matrix_3x3_numpy(linear_2x2: np.ndarray) -> np.ndarray:
    """Build 3x3 matrix from a 2x2 linear part."""
    L = np.eye(3, dtype=MATRIX_DTYPE)
    L[:2, :2] = linear_2x2
    return L


def _center_matrix_numpy(matrix: np.ndarray, center: np.ndarray | None) -> np.ndarray:
    """Conjugate matrix by a translation so that center is its fixed point."""
    if center is None:
        return matrix
    # T(center) @ M @ T(-center)
    T_center = _build_translation_matrix_3x3_numpy(center)
    T_neg_center = _build_translation_matrix_3x3_numpy(-center)
    return T_center @ matrix @ T_neg_center


def _sin_cos(radians: float, snap: bool = True) -> tuple[float, float]:
    """
    Sine and cosine of an angle, exact at right angles when snap is enabled.

    Angles within RIGHT_ANGLE_EPSILON of 0, pi/2, pi or -pi/2 (after wrapping to
    [-pi, pi]) return exact 0/1/-1 values, so quarter turns introduce no rounding.
    """
    if snap:
        wrapped = math.remainder(radians, math.tau)
        if abs(wrapped) < RIGHT_ANGLE_EPSILON:
            return 0.0, 1.0
        if abs(wrapped - math.pi / 2) < RIGHT_ANGLE_EPSILON:
            return 1.0, 0.0
        if abs(wrapped + math.pi / 2) < RIGHT_ANGLE_EPSILON:
            return -1.0, 0.0
        if math.pi - abs(wrapped) < RIGHT_ANGLE_EPSILON:
            return 0.0, -1.0
    return math.sin(radians), math.cos(radians)


# ============================================================================
# Argument Normalization
# ============================================================================


def _as_vector2(value: ArrayLike, name: str = "vector") -> np.ndarray:
    """Convert a 2-element array-like to a float64 [2] array."""
    if not isinstance(value, (np.ndarray, list, tuple)):
        raise TypeError(f"{name} must be array-like, got {type(value).__name__}")

    vec = np.asarray(value, dtype=MATRIX_DTYPE).reshape(-1)
    if vec.shape != (SPATIAL_DIMS,):
        raise ValueError(f"{name} must have {SPATIAL_DIMS} elements, got shape {vec.shape}")
    if not np.all(np.isfinite(vec)):
        raise ValueError(f"{name} must be finite, got {vec}")
    return vec


def _as_scale_vector(factor: float | ArrayLike | Size) -> np.ndarray:
    """Convert a uniform or per-axis scale factor to a float64 [2] array."""
    if isinstance(factor, Size):
        return factor.as_array()
    if isinstance(factor, (int, float, np.integer, np.floating)) and not isinstance(factor, bool):
        if not math.isfinite(factor):
            raise ValueError(f"scale factor must be finite, got {factor}")
        return np.array([factor, factor], dtype=MATRIX_DTYPE)
    return _as_vector2(factor, "scale factor")


def _as_affine_matrix(matrix: ArrayLike) -> np.ndarray:
    """
    Convert a 2x3 or 3x3 matrix to a float64 3x3 affine matrix.

    Raises:
        ValueError: If the shape is wrong, values are non-finite, or the matrix is projective
    """
    M = np.asarray(matrix, dtype=MATRIX_DTYPE)

    if M.shape == (SPATIAL_DIMS, HOMOGENEOUS_DIMS):
        M = np.vstack([M, np.array([0.0, 0.0, 1.0], dtype=MATRIX_DTYPE)])
    elif M.shape != (HOMOGENEOUS_DIMS, HOMOGENEOUS_DIMS):
        raise ValueError(f"matrix must be [2, 3] or [3, 3], got shape {M.shape}")

    if not np.all(np.isfinite(M)):
        raise ValueError("matrix must contain only finite values")

    if not np.array_equal(M[2], np.array([0.0, 0.0, 1.0])):
        raise ValueError(
            f"matrix last row must be [0, 0, 1] for an affine transform, got {M[2]}. "
            f"Projective transforms are not supported."
        )
    return M


# ============================================================================
# Public API - Matrix Builders
# ============================================================================


def to_radians(degrees: float) -> float:
    """Convert degrees to radians (degrees * pi / 180)."""
    return degrees * math.pi / 180.0


def create_translation_matrix(vector: ArrayLike) -> np.ndarray:
    """
    Create a translation matrix.

    Args:
        vector: Translation [dx, dy]

    Returns:
        3x3 homogeneous matrix
    """
    return _build_translation_matrix_3x3_numpy(_as_vector2(vector, "translation"))


def create_scale_matrix(
    factor: float | ArrayLike | Size, center: ArrayLike | None = None
) -> np.ndarray:
    """
    Create a scale matrix.

    Args:
        factor: Uniform scale (float) or per-axis scale [sx, sy]
        center: Optional fixed point of the scaling

    Returns:
        3x3 homogeneous matrix
    """
    S = _build_scale_matrix_3x3_numpy(_as_scale_vector(factor))
    return _center_matrix_numpy(S, None if center is None else _as_vector2(center, "center"))


def create_rotation_matrix_radians(
    radians: float, center: ArrayLike | None = None, snap: bool = True
) -> np.ndarray:
    """
    Create a counter-clockwise rotation matrix.

    Args:
        radians: Rotation angle in radians (positive = counter-clockwise)
        center: Optional center of rotation [x, y]
        snap: Use exact values for right angles

    Returns:
        3x3 homogeneous matrix

    Example:
        >>> R = create_rotation_matrix_radians(np.pi / 2)
        >>> transform_points([1.0, 0.0], R)
        array([0., 1.])
    """
    s, c = _sin_cos(radians, snap)
    R = _build_linear_matrix_3x3_numpy(np.array([[c, -s], [s, c]], dtype=MATRIX_DTYPE))
    return _center_matrix_numpy(R, None if center is None else _as_vector2(center, "center"))


def create_rotation_matrix_degrees(
    degrees: float, size: Size | tuple | list, snap: bool = True
) -> np.ndarray:
    """
    Create a rotation matrix centered on a region of the given size.

    This is the matrix a builder composes for append_rotation_degrees() on a
    rectangle of this size, in the rectangle-local frame.

    Args:
        degrees: Rotation angle in degrees (positive = counter-clockwise)
        size: Region size; rotation center is (width / 2, height / 2)
        snap: Use exact values for right angles

    Returns:
        3x3 homogeneous matrix
    """
    return create_rotation_matrix_radians(to_radians(degrees), as_size(size).center, snap=snap)


def create_skew_matrix_radians(
    radians_x: float, radians_y: float, center: ArrayLike | None = None
) -> np.ndarray:
    """
    Create a skew (shear) matrix: x' = x + y*tan(radians_x), y' = x*tan(radians_y) + y.

    Args:
        radians_x: Skew angle along X in radians
        radians_y: Skew angle along Y in radians
        center: Optional fixed point of the skew

    Returns:
        3x3 homogeneous matrix
    """
    K = _build_linear_matrix_3x3_numpy(
        np.array([[1.0, math.tan(radians_x)], [math.tan(radians_y), 1.0]], dtype=MATRIX_DTYPE)
    )
    return _center_matrix_numpy(K, None if center is None else _as_vector2(center, "center"))


def create_skew_matrix_degrees(
    degrees_x: float, degrees_y: float, size: Size | tuple | list
) -> np.ndarray:
    """Create a skew matrix centered on a region of the given size (angles in degrees)."""
    return create_skew_matrix_radians(
        to_radians(degrees_x), to_radians(degrees_y), as_size(size).center
    )


def is_degenerate(matrix: ArrayLike, tolerance: float = DEGENERATE_TOLERANCE) -> bool:
    """
    Check whether an affine matrix is singular or contains NaN.

    Args:
        matrix: 2x3 or 3x3 matrix
        tolerance: Determinant magnitude treated as zero

    Returns:
        True if the linear part cannot be inverted
    """
    M = np.asarray(matrix, dtype=MATRIX_DTYPE)
    if np.any(np.isnan(M)):
        return True
    det = M[0, 0] * M[1, 1] - M[0, 1] * M[1, 0]
    return abs(det) < tolerance


def ensure_affine(matrix: ArrayLike, tolerance: float = DEGENERATE_TOLERANCE) -> np.ndarray:
    """
    Validate a user-supplied matrix and return it as a 3x3 affine matrix.

    Raises:
        ValueError: If the matrix has the wrong shape or is projective
        DegenerateTransformError: If the matrix is not invertible
    """
    M = _as_affine_matrix(matrix)
    if is_degenerate(M, tolerance):
        raise DegenerateTransformError(
            f"matrix is degenerate (|det| < {tolerance}): {M[:2].tolist()}"
        )
    return M


# ============================================================================
# Public API - Application
# ============================================================================


def transform_points(
    points: ArrayLike, matrix: np.ndarray, out: np.ndarray | None = None
) -> np.ndarray:
    """
    Apply a 3x3 affine matrix to one point [2] or a batch of points [N, 2].

    Batches go through the parallel Numba kernel; single points use NumPy directly.

    Args:
        points: Input point [2] or points [N, 2]
        matrix: 3x3 homogeneous matrix
        out: Optional pre-allocated output buffer [N, 2] float64 (batches only)

    Returns:
        Transformed point(s), same shape as input (same as `out` if provided)
    """
    pts = np.asarray(points, dtype=MATRIX_DTYPE)
    M = np.ascontiguousarray(matrix, dtype=MATRIX_DTYPE)

    if pts.ndim == 1:
        if pts.shape != (SPATIAL_DIMS,):
            raise ValueError(f"point must have {SPATIAL_DIMS} elements, got shape {pts.shape}")
        return M[:2, :2] @ pts + M[:2, 2]

    if pts.ndim != 2 or pts.shape[1] != SPATIAL_DIMS:
        raise ValueError(f"points must be [N, {SPATIAL_DIMS}], got shape {pts.shape}")

    pts = np.ascontiguousarray(pts)
    if out is None:
        out = np.empty_like(pts)
    elif out.shape != pts.shape or out.dtype != MATRIX_DTYPE:
        raise ValueError(
            f"out must be float64 with shape {pts.shape}, got {out.dtype} {out.shape}"
        )

    affine_transform_points_numba(pts, M, out)
    return out


def get_transformed_bounding_rectangle(rectangle: Rectangle, matrix: np.ndarray) -> Rectangle:
    """
    Axis-aligned bounds of a rectangle after transformation.

    Args:
        rectangle: Source rectangle
        matrix: 3x3 homogeneous matrix

    Returns:
        Rectangle enclosing the four transformed corners
    """
    corners = transform_points(rectangle.corners(), matrix)
    left, top = corners.min(axis=0)
    right, bottom = corners.max(axis=0)
    return Rectangle.from_ltrb(left, top, right, bottom)


def get_transformed_size(size: Size | tuple | list, matrix: np.ndarray) -> Size:
    """
    Integer canvas size required to hold a region of `size` after transformation.

    Translations into positive space grow the canvas; translations into negative
    space are clipped away. Falls back to the bounding extent when the region is
    pushed entirely into negative space.

    Args:
        size: Source size
        matrix: 3x3 homogeneous matrix

    Returns:
        Size with integral width and height
    """
    size = as_size(size)
    if np.array_equal(np.asarray(matrix, dtype=MATRIX_DTYPE), np.eye(3)):
        return size

    bounds = get_transformed_bounding_rectangle(Rectangle.from_size(size), matrix)
    # Round half to even, edge positions follow the rounded origin and extent
    x, y = np.rint(bounds.x), np.rint(bounds.y)
    width, height = np.rint(bounds.width), np.rint(bounds.height)
    right, bottom = x + width, y + height

    new_width = right if x < 0 else max(width, right)
    new_height = bottom if y < 0 else max(height, bottom)

    if new_width <= 0:
        new_width = width
    if new_height <= 0:
        new_height = height

    return Size(float(new_width), float(new_height))
