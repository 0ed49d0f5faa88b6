"""Text rendering of matrices.

Every cell of a matrix shares one width and one precision, both derived from
the whole matrix.  Rows are wrapped in braces and cells separated by commas::

    { 1.50,-2.00}
    { 3.00, 0.25}

The output is meant for humans reading diagnostics, it is not a
serialisation format.  Cells whose integer part is wider than the column
simply overflow it, so such rows do not line up.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal

from .config import MAX_PRECISION_DIGITS
from .linalg import Grid

# Wide enough to quantize any finite float to a few decimal places exactly
_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def _shortest_decimal(value: float) -> Decimal:
    return Decimal(repr(value))


def precision_digits(value: float, cap: int = MAX_PRECISION_DIGITS) -> int:
    """Count the non-zero digits after the decimal point of *value*.

    Digits are taken from the shortest decimal expansion that reproduces
    *value*, so ``0.1`` counts a single digit even though its binary value
    is not exactly one tenth, and ``1.23e-20`` counts three.  The result is
    capped at *cap*; ``nan`` and the infinities count as zero.
    """

    if not math.isfinite(value):
        return 0
    _, digits, exponent = _shortest_decimal(value).as_tuple()
    if exponent >= 0:
        return 0
    fractional = digits[max(0, len(digits) + exponent) :]
    return min(sum(1 for digit in fractional if digit), cap)


def grid_precision(grid: Grid, cap: int = MAX_PRECISION_DIGITS) -> int:
    return max(precision_digits(value, cap) for row in grid for value in row)


def integer_exponent(grid: Grid) -> int:
    """Largest decimal exponent among the entries, never below zero.

    Exact zeros are measured as one so their logarithm is zero.
    """

    exponent = 0
    for row in grid:
        for value in row:
            magnitude = abs(value) if value != 0 else 1.0
            log = math.log10(magnitude)
            if not math.isfinite(log):
                continue
            if log > exponent:
                exponent = int(log)
    return exponent


def column_width(exponent: int, precision: int) -> int:
    # Integer-valued matrices get no decimal point, hence the -1.
    fraction = precision if precision != 0 else -1
    return exponent + 1 + fraction + 1


def format_cell(value: float, precision: int, spec: str) -> str:
    """Round *value* half-up at *precision* places and apply *spec*.

    Rounding works on the shortest decimal expansion, so ``2.05`` and
    ``1.05`` both round up at one place.
    """

    if not math.isfinite(value):
        return format(value, spec)
    quantum = Decimal(1).scaleb(-precision)
    rounded = _shortest_decimal(value).quantize(quantum, context=_CONTEXT)
    return format(rounded, spec)


def format_grid(grid: Grid, precision: int) -> str:
    """Render *grid* as a block of brace-delimited rows, one per line.

    Once any entry is negative every cell reserves a leading space for the
    sign so the columns stay aligned.
    """

    width = column_width(integer_exponent(grid), precision)
    sign = " " if any(value < 0 for row in grid for value in row) else ""
    spec = f"{sign}{width}.{precision}f"
    lines = []
    for row in grid:
        lines.append("{" + ",".join(format_cell(value, precision, spec) for value in row) + "}")
    return "\n".join(lines) + "\n"
