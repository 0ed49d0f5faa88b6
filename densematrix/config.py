"""Numeric tolerances and formatting constants shared by the package."""

from __future__ import annotations

# Element-wise equality and rank pivot threshold
TOLERANCE: float = 1e-10
# |det| below this is treated as singular by the inverse
SINGULAR_TOLERANCE: float = 1e-10

# Display: non-zero decimal digits shown at most
MAX_PRECISION_DIGITS: int = 5

# Random seed used by the experiment scripts
SEED: int = 2025
