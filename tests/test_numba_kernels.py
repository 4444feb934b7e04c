"""
Tests for Numba-optimized point kernels.
"""

import numpy as np
import pytest

from imxform.transform.api import create_rotation_matrix_radians, create_translation_matrix

# Import Numba kernels - tests will be skipped if not available
transform_kernels = pytest.importorskip(
    "imxform.transform.kernels",
    reason="Numba not installed"
)


class TestNumbaKernels:
    """Test Numba-optimized kernels for correctness."""

    def test_affine_transform_points(self):
        """Kernel matches the NumPy reference."""
        N = 1000
        points = np.random.randn(N, 2)
        matrix = create_translation_matrix([1.5, -2.0]) @ create_rotation_matrix_radians(0.4)

        out = np.empty_like(points)
        transform_kernels.affine_transform_points_numba(points, matrix, out)

        expected = points @ matrix[:2, :2].T + matrix[:2, 2]
        np.testing.assert_allclose(out, expected, atol=1e-9)

    def test_affine_transform_points_in_place(self):
        """Output may alias the input."""
        points = np.array([[1.0, 0.0], [0.0, 1.0]])
        matrix = create_rotation_matrix_radians(np.pi / 2)

        transform_kernels.affine_transform_points_numba(points, matrix, points)

        np.testing.assert_allclose(points, [[0.0, 1.0], [-1.0, 0.0]], atol=1e-12)
