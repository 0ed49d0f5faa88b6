"""densematrix: small dense real matrices in plain Python.

The package offers a single value type, :class:`Matrix`, with elementary
arithmetic, cofactor determinants, Gauss–Jordan inverses, rank, trace,
tolerance-based equality and aligned text rendering.
"""

from .errors import DimensionError, MatrixError, NullOperandError, SingularMatrixError
from .matrix import Matrix

__all__ = [
    "Matrix",
    "MatrixError",
    "DimensionError",
    "NullOperandError",
    "SingularMatrixError",
]
