"""
imxform - Image Geometry Transforms

Composable 2D affine transforms for image geometry operations.

Features:
- AffineTransformBuilder: accumulate translate, scale, rotate, skew and raw matrices
- Append (after existing operations) and prepend (before existing operations)
- Rotation and skew centered on the source rectangle
- Implicit location offset for rectangles with a non-zero origin
- Double-precision accumulation, Numba-parallel batch point mapping
- Canvas helpers: transformed bounding rectangle and output size

Example - Builder:
    >>> from imxform import AffineTransformBuilder, Rectangle
    >>>
    >>> rect = Rectangle(0, 0, 200, 100)
    >>> builder = (
    ...     AffineTransformBuilder(rect)
    ...     .append_rotation_degrees(30)
    ...     .append_scale(0.5)
    ...     .append_translation([10, 0])
    ... )
    >>> builder.execute(rect, [42.0, 84.0])

Example - Matrix helpers:
    >>> from imxform import Size, create_rotation_matrix_degrees, transform_points
    >>>
    >>> R = create_rotation_matrix_degrees(90, Size(200, 100))
    >>> transform_points([[0, 0], [200, 100]], R)
"""

__version__ = "0.1.0"

# Configuration
from imxform.config import BuilderConfig

# Errors
from imxform.exceptions import DegenerateTransformError, RectangleMismatchError

# Geometry value types
from imxform.geometry import Rectangle, Size

# Protocols
from imxform.protocols import TransformBuilder

# Matrix helpers
from imxform.transform.api import (
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

# Builder
from imxform.transform.builder import AffineTransformBuilder

__all__ = [
    # Version
    "__version__",
    # Builders
    "AffineTransformBuilder",
    "BuilderConfig",
    # Protocols
    "TransformBuilder",
    # Geometry
    "Rectangle",
    "Size",
    # Errors
    "DegenerateTransformError",
    "RectangleMismatchError",
    # Matrix helpers
    "create_translation_matrix",
    "create_scale_matrix",
    "create_rotation_matrix_radians",
    "create_rotation_matrix_degrees",
    "create_skew_matrix_radians",
    "create_skew_matrix_degrees",
    "is_degenerate",
    "to_radians",
    "transform_points",
    "get_transformed_bounding_rectangle",
    "get_transformed_size",
]
