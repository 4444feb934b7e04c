"""
Constants and default values for imxform builders.

Centralizes tolerances and configuration defaults for better maintainability.
"""

from __future__ import annotations

import math

import numpy as np

# =============================================================================
# Numerics
# =============================================================================

# All matrices are accumulated in double precision
MATRIX_DTYPE = np.float64

# Absolute tolerance for comparing mapped points
DEFAULT_TOLERANCE = 1e-6

# |det| of the linear part below which a user matrix is rejected
DEGENERATE_TOLERANCE = 1e-12

# Angles this close (0.001 degrees) to a right angle use exact sin/cos values
RIGHT_ANGLE_EPSILON = 0.001 * math.pi / 180.0

# =============================================================================
# Builder Defaults
# =============================================================================

# Policy for execute() with a rectangle other than the construction one
RECTANGLE_POLICY_STRICT = "strict"  # Raise RectangleMismatchError
RECTANGLE_POLICY_WARN = "warn"  # Log a warning, keep the construction rectangle
DEFAULT_RECTANGLE_POLICY = RECTANGLE_POLICY_STRICT
VALID_RECTANGLE_POLICIES = {RECTANGLE_POLICY_STRICT, RECTANGLE_POLICY_WARN}

DEFAULT_SNAP_RIGHT_ANGLES = True

# =============================================================================
# General Constants
# =============================================================================

# Spatial dimensions
SPATIAL_DIMS = 2  # X, Y
HOMOGENEOUS_DIMS = 3  # X, Y, W
