"""Exceptions raised by :mod:`densematrix`.

Every error derives from :class:`ValueError` so callers that only care about
"bad input" can keep catching the builtin, while the subclasses keep the
failure kinds apart.
"""

from __future__ import annotations


class MatrixError(ValueError):
    """Base class for all matrix errors."""


class DimensionError(MatrixError):
    """Invalid dimensions, size mismatch or incompatible operand shapes."""


class NullOperandError(DimensionError):
    """A required matrix operand was ``None``."""


class SingularMatrixError(MatrixError):
    """The matrix has a (numerically) zero determinant."""
