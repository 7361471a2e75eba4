"""Shared constants."""

from typing import Final

# Pseudo-element carrying charge in parsed species and coefficient matrices.
ELECTRON: Final[str] = "e-"
# Symbol of an electron token inside a formula, e.g. "e-" or "e2".
ELECTRON_SYMBOL: Final[str] = "e"

DEFAULT_ZERO_TOLERANCE: Final[float] = 1e-8
DEFAULT_MAX_DENOMINATOR: Final[int] = 100
