"""The :class:`Matrix` value type."""

from __future__ import annotations

import numbers
import operator
from typing import Iterable, Optional, Tuple

import numpy as np

from . import linalg
from .config import TOLERANCE
from .errors import DimensionError, NullOperandError
from .formatting import format_grid, grid_precision
from .linalg import Grid


class Matrix:
    """Dense ``rows x cols`` matrix of ``float`` values.

    ``Matrix(rows, cols, values)`` lays out a flat row-major sequence and
    ``Matrix(rows, cols)`` builds the zero matrix; :meth:`from_ints`,
    :meth:`from_grid`, :meth:`identity` and :meth:`from_numpy` cover the
    other sources.  Instances never change after construction: every
    operation returns a new matrix and :attr:`grid` is a tuple snapshot.

    Equality (``==`` and :meth:`equals`) is a tolerance comparison, two
    matrices of the same shape are equal when every pair of entries differs
    by less than ``1e-10``.  Because of that, matrices are not hashable.
    """

    def __init__(self, rows: int, cols: int, values: Optional[Iterable[float]] = None) -> None:
        if values is None:
            grid = linalg.zeros(rows, cols)
        else:
            grid = linalg.reshape(values, rows, cols)
        self._set_grid(grid)

    def _set_grid(self, grid: Grid) -> None:
        self._grid = grid
        self._rows, self._cols = linalg.shape(grid)
        self._precision = grid_precision(grid)

    @classmethod
    def _wrap(cls, grid: Grid) -> "Matrix":
        matrix = cls.__new__(cls)
        matrix._set_grid(grid)
        return matrix

    # ------------------------------------------------------------------
    # Construction -------------------------------------------------------
    # ------------------------------------------------------------------
    @classmethod
    def from_ints(cls, rows: int, cols: int, values: Iterable[int]) -> "Matrix":
        """Build a matrix from flat integers; anything else is a ``TypeError``."""

        return cls(rows, cols, [operator.index(v) for v in values])

    @classmethod
    def from_grid(cls, grid: Iterable[Iterable[float]]) -> "Matrix":
        return cls._wrap(linalg.as_grid(grid))

    @classmethod
    def identity(cls, size: int) -> "Matrix":
        return cls._wrap(linalg.eye(size))

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "Matrix":
        arr = np.asarray(array, dtype=float)
        if arr.ndim != 2:
            raise DimensionError(f"expected a 2D array, got {arr.ndim}D")
        return cls._wrap(linalg.as_grid(arr.tolist()))

    def to_numpy(self) -> np.ndarray:
        return np.array(self._grid, dtype=float)

    # ------------------------------------------------------------------
    # Accessors ----------------------------------------------------------
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def precision_digits(self) -> int:
        """Decimal digits shown by :meth:`format`, between 0 and 5."""

        return self._precision

    def __getitem__(self, index: Tuple[int, int]) -> float:
        i, j = index
        return self._grid[i][j]

    @staticmethod
    def _require_matrix(other: Optional["Matrix"], operation: str) -> "Matrix":
        if other is None:
            raise NullOperandError(f"{operation} requires a matrix operand, got None")
        if not isinstance(other, Matrix):
            raise TypeError(f"{operation} expects a Matrix, got {type(other).__name__}")
        return other

    # ------------------------------------------------------------------
    # Arithmetic ---------------------------------------------------------
    # ------------------------------------------------------------------
    def add(self, other: "Matrix") -> "Matrix":
        other = self._require_matrix(other, "addition")
        return Matrix._wrap(linalg.add(self._grid, other._grid))

    def subtract(self, other: "Matrix") -> "Matrix":
        other = self._require_matrix(other, "subtraction")
        return Matrix._wrap(linalg.subtract(self._grid, other._grid))

    def scalar_multiply(self, k: float) -> "Matrix":
        return Matrix._wrap(linalg.scale(self._grid, k))

    def left_multiply(self, right: "Matrix") -> "Matrix":
        """Return ``self @ right``."""

        right = self._require_matrix(right, "left multiplication")
        return Matrix._wrap(linalg.matmul(self._grid, right._grid))

    def right_multiply(self, left: "Matrix") -> "Matrix":
        """Return ``left @ self``."""

        left = self._require_matrix(left, "right multiplication")
        return Matrix._wrap(linalg.matmul(left._grid, self._grid))

    def transpose(self) -> "Matrix":
        return Matrix._wrap(linalg.transpose(self._grid))

    # ------------------------------------------------------------------
    # Elimination --------------------------------------------------------
    # ------------------------------------------------------------------
    def determinant(self) -> float:
        return linalg.determinant(self._grid)

    def minor(self, row: int, col: int) -> "Matrix":
        """Return the matrix left after deleting *row* and *col*."""

        return Matrix._wrap(linalg.minor(self._grid, row, col))

    def inverse(self) -> "Matrix":
        return Matrix._wrap(linalg.inverse(self._grid))

    def trace(self) -> float:
        return linalg.trace(self._grid)

    def rank(self) -> int:
        return linalg.matrix_rank(self._grid)

    # ------------------------------------------------------------------
    # Comparison and display --------------------------------------------
    # ------------------------------------------------------------------
    def equals(self, other: Optional["Matrix"], atol: float = TOLERANCE) -> bool:
        if not isinstance(other, Matrix):
            return False
        return linalg.almost_equal(self._grid, other._grid, atol)

    def format(self) -> str:
        return format_grid(self._grid, self._precision)

    def print_matrix(self) -> None:
        print(self.format(), end="")

    # ------------------------------------------------------------------
    # Python protocol ----------------------------------------------------
    # ------------------------------------------------------------------
    def __add__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.left_multiply(other)

    def __mul__(self, scalar: object) -> "Matrix":
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self.scalar_multiply(scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Matrix":
        return self.scalar_multiply(-1)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix.from_grid({self._grid!r})"

    def __str__(self) -> str:
        return self.format().rstrip("\n")
