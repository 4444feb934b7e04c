"""
Numba-optimized kernels for 2D affine point transforms.

Provides JIT-compiled kernels for mapping large point batches through a
composed 3x3 homogeneous matrix.
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def affine_transform_points_numba(
    points: NDArray[np.float64], matrix: NDArray[np.float64], out: NDArray[np.float64]
) -> None:
    """
    Apply a 3x3 affine matrix to an array of 2D points.

    Args:
        points: Input points [N, 2]
        matrix: 3x3 homogeneous matrix (column-vector convention, last row [0, 0, 1])
        out: Output array [N, 2] (pre-allocated, may alias points)

    Note: Modifies out in-place for efficiency
    """
    m00, m01, m02 = matrix[0, 0], matrix[0, 1], matrix[0, 2]
    m10, m11, m12 = matrix[1, 0], matrix[1, 1], matrix[1, 2]

    N = points.shape[0]
    for i in prange(N):
        x = points[i, 0]
        y = points[i, 1]

        out[i, 0] = m00 * x + m01 * y + m02
        out[i, 1] = m10 * x + m11 * y + m12
