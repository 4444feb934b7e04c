"""
Example: composing image geometry transforms.

Demonstrates how to use AffineTransformBuilder for:
- Append vs prepend ordering
- Centered rotation
- Rectangles with a non-zero origin
- Output canvas size for a transform
"""

import logging

import numpy as np

from imxform import (
    AffineTransformBuilder,
    Rectangle,
    Size,
    get_transformed_size,
)

# Configure logging to see builder activity
logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")


def example_1_ordering():
    """Scale-then-translate differs from translate-then-scale."""
    print("\n=== Example 1: Append ordering ===")
    size = Size(123, 321)

    a = AffineTransformBuilder(size).append_scale((2, 0.5)).append_translation([3, 1])
    b = AffineTransformBuilder(size).append_translation([3, 1]).append_scale((2, 0.5))

    print(f"scale -> translate: {a.execute(size, [10, 20])}")  # [23. 11.]
    print(f"translate -> scale: {b.execute(size, [10, 20])}")  # [26.  10.5]


def example_2_prepend():
    """Prepending in reverse order gives the same transform."""
    print("\n=== Example 2: Append / prepend duality ===")
    rect = Rectangle(-1, -1, 3, 3)

    forwards = (
        AffineTransformBuilder(rect)
        .append_rotation_radians(np.pi)
        .append_scale((2, 0.5))
        .append_translation([123, 321])
    )
    backwards = (
        AffineTransformBuilder(rect)
        .prepend_translation([123, 321])
        .prepend_scale((2, 0.5))
        .prepend_rotation_radians(np.pi)
    )

    print(f"forwards:  {forwards.execute(rect, [32, 65])}")
    print(f"backwards: {backwards.execute(rect, [32, 65])}")


def example_3_rotation_canvas():
    """Rotate an image about its center and size the output canvas."""
    print("\n=== Example 3: Centered rotation ===")
    size = Size(200, 100)
    builder = AffineTransformBuilder(size).append_rotation_degrees(90)

    print(f"center maps to: {builder.execute(size, [100, 50])}")
    print(f"corners map to:\n{builder.transform_points(Rectangle.from_size(size).corners())}")
    print(f"output canvas:  {get_transformed_size(size, builder.build_matrix())}")


if __name__ == "__main__":
    example_1_ordering()
    example_2_prepend()
    example_3_rotation_canvas()
