"""
Exception types raised by imxform.

Both derive from ValueError so callers validating inputs generically keep working.
"""

from __future__ import annotations


class DegenerateTransformError(ValueError):
    """Raised when a supplied affine matrix is singular (not invertible)."""


class RectangleMismatchError(ValueError):
    """Raised when a builder is evaluated against a rectangle it was not built for."""
