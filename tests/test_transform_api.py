"""
Tests for affine matrix construction and application helpers.
"""

import math

import numpy as np
import pytest

from imxform import (
    DegenerateTransformError,
    Rectangle,
    Size,
    create_rotation_matrix_degrees,
    create_rotation_matrix_radians,
    create_scale_matrix,
    create_skew_matrix_degrees,
    create_skew_matrix_radians,
    create_translation_matrix,
    get_transformed_bounding_rectangle,
    get_transformed_size,
    is_degenerate,
    to_radians,
    transform_points,
)
from imxform.transform import ensure_affine

# ============================================================================
# Matrix Builders
# ============================================================================


def test_to_radians():
    """Degrees convert with pi / 180."""
    assert to_radians(180) == pytest.approx(math.pi)
    assert to_radians(-90) == pytest.approx(-math.pi / 2)
    assert to_radians(0) == 0.0


def test_translation_matrix():
    """Translation occupies the last column."""
    T = create_translation_matrix([3, -4])

    expected = np.array([[1, 0, 3], [0, 1, -4], [0, 0, 1]], dtype=np.float64)
    np.testing.assert_array_equal(T, expected)
    assert T.dtype == np.float64


def test_scale_matrix_uniform_and_per_axis():
    """Uniform factors expand to both axes."""
    np.testing.assert_array_equal(create_scale_matrix(2.0), np.diag([2.0, 2.0, 1.0]))
    np.testing.assert_array_equal(create_scale_matrix((2, 0.5)), np.diag([2.0, 0.5, 1.0]))
    np.testing.assert_array_equal(create_scale_matrix(Size(3, 4)), np.diag([3.0, 4.0, 1.0]))


def test_scale_matrix_center_is_fixed():
    S = create_scale_matrix(4.0, center=[10, 10])

    np.testing.assert_allclose(transform_points([10, 10], S), [10, 10], atol=1e-9)
    np.testing.assert_allclose(transform_points([11, 10], S), [14, 10], atol=1e-9)


def test_rotation_matrix_counter_clockwise():
    """Rotation follows x' = x cos - y sin, y' = x sin + y cos."""
    theta = 0.3
    R = create_rotation_matrix_radians(theta)

    expected = np.array([math.cos(theta) * 2 - math.sin(theta) * 5, math.sin(theta) * 2 + math.cos(theta) * 5])
    np.testing.assert_allclose(transform_points([2, 5], R), expected, atol=1e-12)


@pytest.mark.parametrize(
    "radians, sin, cos",
    [
        (0.0, 0.0, 1.0),
        (math.pi / 2, 1.0, 0.0),
        (math.pi, 0.0, -1.0),
        (-math.pi / 2, -1.0, 0.0),
        (3 * math.pi / 2, -1.0, 0.0),
        (-math.pi, 0.0, -1.0),
        (2 * math.pi, 0.0, 1.0),
    ],
)
def test_rotation_snaps_right_angles(radians, sin, cos):
    """Right angles produce exact matrix entries."""
    R = create_rotation_matrix_radians(radians)

    expected = np.array([[cos, -sin, 0], [sin, cos, 0], [0, 0, 1]], dtype=np.float64)
    np.testing.assert_array_equal(R, expected)


def test_rotation_snapping_can_be_disabled():
    """Without snapping, pi keeps the floating-point sine residue."""
    R = create_rotation_matrix_radians(math.pi, snap=False)

    assert R[1, 0] != 0.0
    assert R[1, 0] == pytest.approx(0.0, abs=1e-15)


def test_rotation_matrix_degrees_is_centered_on_size():
    """Rotation for a size equals T(c) R T(-c) with c at half the size."""
    size = Size(200, 100)
    degrees = 37.0

    M = create_rotation_matrix_degrees(degrees, size)

    T_c = create_translation_matrix([100, 50])
    T_neg_c = create_translation_matrix([-100, -50])
    expected = T_c @ create_rotation_matrix_radians(to_radians(degrees)) @ T_neg_c
    np.testing.assert_allclose(M, expected, atol=1e-12)
    np.testing.assert_allclose(transform_points([100, 50], M), [100, 50], atol=1e-9)


def test_rotation_matrix_degrees_accepts_tuple_size():
    np.testing.assert_array_equal(
        create_rotation_matrix_degrees(15, (40, 20)),
        create_rotation_matrix_degrees(15, Size(40, 20)),
    )


def test_skew_matrix():
    """Skew follows x' = x + y tan(ax), y' = x tan(ay) + y."""
    K = create_skew_matrix_radians(0.2, -0.1)

    expected = [3 + 4 * math.tan(0.2), 3 * math.tan(-0.1) + 4]
    np.testing.assert_allclose(transform_points([3, 4], K), expected, atol=1e-12)


def test_skew_matrix_degrees_is_centered():
    K = create_skew_matrix_degrees(20, 10, Size(30, 60))

    np.testing.assert_allclose(transform_points([15, 30], K), [15, 30], atol=1e-9)


# ============================================================================
# Degeneracy and Validation
# ============================================================================


def test_is_degenerate():
    """Singular or NaN matrices are degenerate."""
    assert not is_degenerate(np.eye(3))
    assert is_degenerate(create_scale_matrix((0.0, 1.0)))
    assert is_degenerate([[1, 2, 0], [2, 4, 0]])
    assert is_degenerate([[np.nan, 0, 0], [0, 1, 0]])


def test_ensure_affine_promotes_2x3():
    M = ensure_affine([[1, 0, 5], [0, 1, 6]])

    assert M.shape == (3, 3)
    np.testing.assert_array_equal(M[2], [0, 0, 1])


@pytest.mark.parametrize(
    "matrix, error",
    [
        (np.eye(2), ValueError),
        (np.ones((3, 3)), ValueError),
        ([[1, 0, np.inf], [0, 1, 0]], ValueError),
        ([[0, 0, 1], [0, 0, 1]], DegenerateTransformError),
    ],
)
def test_ensure_affine_rejects(matrix, error):
    with pytest.raises(error):
        ensure_affine(matrix)


def test_translation_wrong_length_raises():
    with pytest.raises(ValueError):
        create_translation_matrix([1, 2, 3])


def test_non_finite_scale_raises():
    with pytest.raises(ValueError):
        create_scale_matrix(float("nan"))


# ============================================================================
# Point Application
# ============================================================================


class TestTransformPoints:
    """Test applying matrices to points."""

    def test_single_point_shape(self):
        result = transform_points([1, 2], create_translation_matrix([1, 1]))

        assert result.shape == (2,)
        np.testing.assert_allclose(result, [2, 3])

    def test_batch_matches_homogeneous_product(self):
        """Batch kernel agrees with a full homogeneous product."""
        rng = np.random.default_rng(0)
        points = rng.standard_normal((1000, 2))
        M = create_translation_matrix([4, -2]) @ create_rotation_matrix_radians(0.7) @ create_scale_matrix((2, 3))

        homogeneous = np.hstack([points, np.ones((1000, 1))])
        expected = (homogeneous @ M.T)[:, :2]

        np.testing.assert_allclose(transform_points(points, M), expected, atol=1e-9)

    def test_integer_points_are_promoted(self):
        result = transform_points(np.array([[1, 2], [3, 4]]), create_scale_matrix(0.5))

        assert result.dtype == np.float64
        np.testing.assert_allclose(result, [[0.5, 1.0], [1.5, 2.0]])

    def test_empty_batch(self):
        result = transform_points(np.empty((0, 2)), np.eye(3))

        assert result.shape == (0, 2)

    @pytest.mark.parametrize("points", [np.zeros(3), np.zeros((4, 3)), np.zeros((2, 2, 2))])
    def test_wrong_shape_raises(self, points):
        with pytest.raises(ValueError):
            transform_points(points, np.eye(3))

    def test_wrong_out_buffer_raises(self):
        with pytest.raises(ValueError):
            transform_points(np.zeros((4, 2)), np.eye(3), out=np.zeros((4, 2), dtype=np.float32))


# ============================================================================
# Bounding Helpers
# ============================================================================


class TestBounds:
    """Test transformed bounding rectangles and canvas sizes."""

    def test_bounding_rectangle_quarter_turn(self):
        """Quarter turn about the origin swaps extents into negative X."""
        bounds = get_transformed_bounding_rectangle(
            Rectangle(0, 0, 200, 100), create_rotation_matrix_radians(math.pi / 2)
        )

        assert bounds == Rectangle(-100, 0, 100, 200)

    def test_bounding_rectangle_of_offset_rectangle(self):
        bounds = get_transformed_bounding_rectangle(
            Rectangle(10, 20, 30, 40), create_translation_matrix([1, 1])
        )

        assert bounds == Rectangle(11, 21, 30, 40)

    def test_identity_keeps_size(self):
        assert get_transformed_size(Size(200, 100), np.eye(3)) == Size(200, 100)

    @pytest.mark.parametrize(
        "matrix, expected",
        [
            (create_scale_matrix(2.0), Size(400, 200)),
            (create_translation_matrix([10, 5]), Size(210, 105)),
            (create_translation_matrix([-50, 0]), Size(150, 100)),
            (create_translation_matrix([-300, 0]), Size(200, 100)),
            (create_rotation_matrix_degrees(90, Size(200, 100)), Size(150, 150)),
        ],
    )
    def test_transformed_size(self, matrix, expected):
        assert get_transformed_size(Size(200, 100), matrix) == expected

    def test_transformed_size_is_integral(self):
        size = get_transformed_size((100, 100), create_rotation_matrix_degrees(30, (100, 100)))

        assert size.width == round(size.width)
        assert size.height == round(size.height)
