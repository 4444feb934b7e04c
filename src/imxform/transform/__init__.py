"""
2D affine transform module.

Provides affine matrix construction helpers and a builder composing append and
prepend operations into a single matrix bound to a source rectangle.
"""

from imxform.transform.api import (
    create_rotation_matrix_degrees,
    create_rotation_matrix_radians,
    create_scale_matrix,
    create_skew_matrix_degrees,
    create_skew_matrix_radians,
    create_translation_matrix,
    ensure_affine,
    get_transformed_bounding_rectangle,
    get_transformed_size,
    is_degenerate,
    to_radians,
    transform_points,
)
from imxform.transform.builder import AffineTransformBuilder

__all__ = [
    "AffineTransformBuilder",
    "create_translation_matrix",
    "create_scale_matrix",
    "create_rotation_matrix_radians",
    "create_rotation_matrix_degrees",
    "create_skew_matrix_radians",
    "create_skew_matrix_degrees",
    "ensure_affine",
    "is_degenerate",
    "to_radians",
    "transform_points",
    "get_transformed_bounding_rectangle",
    "get_transformed_size",
]
