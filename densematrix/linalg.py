"""Dense linear algebra on plain Python containers.

Every helper in this module works on a *grid*: a tuple of equally long tuples
of ``float`` values stored row-major.  Tuples avoid accidental aliasing when a
grid is shared between several :class:`~densematrix.matrix.Matrix` objects,
and the explicit representation keeps the arithmetic deterministic and easy
to unit test without any compiled extension.

The elimination routines deliberately follow the classical textbook
procedures (cofactor expansion for the determinant, Gauss–Jordan with partial
pivoting for the inverse, row-echelon reduction for the rank) so that their
rounding behaviour is reproducible element for element.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import SINGULAR_TOLERANCE, TOLERANCE
from .errors import DimensionError, SingularMatrixError

logger = logging.getLogger(__name__)

Row = Tuple[float, ...]
Grid = Tuple[Row, ...]


def as_row(values: Iterable[float]) -> Row:
    return tuple(float(v) for v in values)


def as_grid(rows: Optional[Iterable[Iterable[float]]]) -> Grid:
    """Convert *rows* into the canonical grid representation.

    Any iterable of iterables is accepted, including nested lists and 2D
    :mod:`numpy` arrays.  A :class:`DimensionError` is raised when *rows* is
    ``None``, has no rows, starts with an empty row or when the row widths
    differ.
    """

    if rows is None:
        raise DimensionError("invalid matrix array")
    converted: List[Row] = [as_row(row) for row in rows]
    if not converted or not converted[0]:
        raise DimensionError("invalid matrix array")
    width = len(converted[0])
    for index, row in enumerate(converted):
        if len(row) != width:
            raise DimensionError(f"inconsistent row width: row {index} has {len(row)} columns, expected {width}")
    return tuple(converted)


def check_dimensions(rows: int, cols: int) -> None:
    if rows < 1 or cols < 1:
        raise DimensionError(f"invalid dimensions {rows}x{cols}")


def reshape(values: Iterable[float], rows: int, cols: int) -> Grid:
    """Lay out a flat row-major sequence as a ``rows x cols`` grid."""

    check_dimensions(rows, cols)
    flat = as_row(values)
    if len(flat) != rows * cols:
        raise DimensionError(f"size mismatch: {len(flat)} values for a {rows}x{cols} matrix")
    return tuple(flat[i * cols : (i + 1) * cols] for i in range(rows))


def zeros(rows: int, cols: int) -> Grid:
    check_dimensions(rows, cols)
    return tuple(tuple(0.0 for _ in range(cols)) for _ in range(rows))


def eye(size: int) -> Grid:
    check_dimensions(size, size)
    rows: List[Row] = []
    for i in range(size):
        row = [0.0] * size
        row[i] = 1.0
        rows.append(tuple(row))
    return tuple(rows)


def shape(grid: Grid) -> Tuple[int, int]:
    return len(grid), len(grid[0])


def require_square(grid: Grid, operation: str) -> int:
    height, width = shape(grid)
    if height != width:
        raise DimensionError(f"{operation} requires a square matrix, got {height}x{width}")
    return height


def _require_same_shape(lhs: Grid, rhs: Grid, operation: str) -> None:
    if shape(lhs) != shape(rhs):
        raise DimensionError(
            "dimension mismatch in {}: {}x{} vs {}x{}".format(operation, *shape(lhs), *shape(rhs))
        )


def add(lhs: Grid, rhs: Grid) -> Grid:
    _require_same_shape(lhs, rhs, "addition")
    return tuple(tuple(a + b for a, b in zip(row_a, row_b)) for row_a, row_b in zip(lhs, rhs))


def subtract(lhs: Grid, rhs: Grid) -> Grid:
    _require_same_shape(lhs, rhs, "subtraction")
    return tuple(tuple(a - b for a, b in zip(row_a, row_b)) for row_a, row_b in zip(lhs, rhs))


def scale(grid: Grid, scalar: float) -> Grid:
    return tuple(tuple(v * scalar for v in row) for row in grid)


def dot(lhs: Sequence[float], rhs: Sequence[float]) -> float:
    return sum(a * b for a, b in zip(lhs, rhs))


def matmul(lhs: Grid, rhs: Grid) -> Grid:
    """Return ``lhs @ rhs``, accumulating each entry over ``k`` in order."""

    if len(lhs[0]) != len(rhs):
        raise DimensionError(
            "dimension mismatch in matmul: {}x{} @ {}x{}".format(*shape(lhs), *shape(rhs))
        )
    rhs_t = transpose(rhs)
    return tuple(tuple(dot(row, col) for col in rhs_t) for row in lhs)


def transpose(grid: Grid) -> Grid:
    height, width = shape(grid)
    cols: List[List[float]] = [[0.0] * height for _ in range(width)]
    for i, row in enumerate(grid):
        for j, value in enumerate(row):
            cols[j][i] = value
    return tuple(tuple(col) for col in cols)


def minor(grid: Grid, row_to_remove: int, col_to_remove: int) -> Grid:
    """Drop one row and one column of a square grid.

    The remaining rows and columns keep their relative order.
    """

    n = require_square(grid, "minor")
    if n < 2:
        raise DimensionError("minor of a 1x1 matrix is empty")
    if not (0 <= row_to_remove < n and 0 <= col_to_remove < n):
        raise IndexError(f"minor index ({row_to_remove}, {col_to_remove}) out of range for {n}x{n} matrix")
    return tuple(
        tuple(value for j, value in enumerate(row) if j != col_to_remove)
        for i, row in enumerate(grid)
        if i != row_to_remove
    )


def determinant(grid: Grid) -> float:
    """Determinant by cofactor expansion along the first row.

    This is the O(n!) textbook recursion, closed forms are only used for the
    1x1 and 2x2 cases.
    """

    require_square(grid, "determinant")
    return _cofactor_expansion(grid)


def _cofactor_expansion(grid: Grid) -> float:
    n = len(grid)
    if n == 1:
        return grid[0][0]
    if n == 2:
        return grid[0][0] * grid[1][1] - grid[0][1] * grid[1][0]
    result = 0.0
    for i in range(n):
        result += (-1.0) ** i * grid[0][i] * _cofactor_expansion(minor(grid, 0, i))
    return result


def inverse(grid: Grid, atol: float = SINGULAR_TOLERANCE) -> Grid:
    """Invert a square grid with Gauss–Jordan elimination.

    The determinant is checked first; a :class:`SingularMatrixError` is
    raised when its magnitude is below *atol*.  Elimination runs on the
    augmented grid ``[A | I]`` using partial pivoting: for every column the
    first row holding the largest magnitude candidate becomes the pivot row.
    """

    det = determinant(grid)
    if abs(det) < atol:
        logger.debug("Refusing to invert: |det| = %.3e below %.1e", abs(det), atol)
        raise SingularMatrixError("matrix is singular and cannot be inverted")
    n = len(grid)
    width = 2 * n
    m = [list(row) + list(unit) for row, unit in zip(grid, eye(n))]
    for col in range(n):
        pivot = max(range(col, n), key=lambda r: abs(m[r][col]))
        if pivot != col:
            logger.debug("Pivoting column %d: swapping rows %d and %d", col, col, pivot)
            m[col], m[pivot] = m[pivot], m[col]
        pivot_val = m[col][col]
        for c in range(width):
            m[col][c] /= pivot_val
        for r in range(n):
            if r == col:
                continue
            factor = m[r][col]
            for c in range(width):
                m[r][c] -= factor * m[col][c]
    return tuple(tuple(row[n:]) for row in m)


def matrix_rank(grid: Grid, atol: float = TOLERANCE) -> int:
    """Return the numerical rank using row-echelon reduction.

    Entries with magnitude below *atol* are not accepted as pivots.  When a
    column has no pivot at or below the current row the search moves to the
    next column without consuming the row.
    """

    m = [list(row) for row in grid]
    height, width = shape(grid)
    rank = 0
    lead = 0
    row = 0
    while row < height and lead < width:
        pivot = next((r for r in range(row, height) if abs(m[r][lead]) >= atol), None)
        if pivot is None:
            lead += 1
            continue
        if pivot != row:
            m[row], m[pivot] = m[pivot], m[row]
        factor = m[row][lead]
        for c in range(lead, width):
            m[row][c] /= factor
        for r in range(height):
            if r == row:
                continue
            factor = m[r][lead]
            for c in range(lead, width):
                m[r][c] -= factor * m[row][c]
        rank += 1
        lead += 1
        row += 1
    logger.debug("Rank of %dx%d grid is %d", height, width, rank)
    return rank


def trace(grid: Grid) -> float:
    n = require_square(grid, "trace")
    return sum(grid[i][i] for i in range(n))


def is_close(lhs: float, rhs: float, atol: float = TOLERANCE) -> bool:
    return abs(lhs - rhs) < atol


def almost_equal(lhs: Grid, rhs: Grid, atol: float = TOLERANCE) -> bool:
    """Return ``True`` iff both grids share a shape and every entry is close."""

    if shape(lhs) != shape(rhs):
        return False
    return all(is_close(a, b, atol) for row_a, row_b in zip(lhs, rhs) for a, b in zip(row_a, row_b))
