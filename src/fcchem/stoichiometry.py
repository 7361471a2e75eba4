"""Reaction balancing.

The balancer finds integer coefficients ``nu`` such that every element, and
charge through the pseudo-element ``"e-"``, is conserved:

    sum_i nu_i * A[i, k] = 0    for every element k

where ``A`` is the species-by-element coefficient matrix. ``nu`` spans the
left null space of ``A``, which is read from its singular value decomposition.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Mapping, Sequence

import numpy as np
from scipy import linalg

from fcchem.constants import DEFAULT_MAX_DENOMINATOR, DEFAULT_ZERO_TOLERANCE
from fcchem.errors import Diagnosis, IllPosedReactionError
from fcchem.formula import read_species

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceOptions:
    """Numeric settings of :func:`stoich`.

    Attributes:
        zero_tolerance: Magnitude below which an entry of the balancing vector,
            or a singular value relative to the largest one, counts as zero.
        max_denominator: Largest denominator accepted when the normalized
            coefficients are converted to fractions.
    """

    zero_tolerance: float = DEFAULT_ZERO_TOLERANCE
    max_denominator: int = DEFAULT_MAX_DENOMINATOR

    def __post_init__(self):
        if not self.zero_tolerance > 0.0:
            raise ValueError(f"zero_tolerance must be positive, got {self.zero_tolerance}")
        if self.max_denominator < 1:
            raise ValueError(f"max_denominator must be at least 1, got {self.max_denominator}")


def element_universe(species: Iterable[Mapping[str, int]]) -> list[str]:
    """All symbols of the given species, in order of first appearance."""
    universe: dict[str, None] = {}
    for elements in species:
        for symbol in elements:
            universe.setdefault(symbol, None)
    return list(universe)


def coefficient_matrix(formulas: Sequence[str]) -> tuple[np.ndarray, list[str]]:
    """Build the species-by-element coefficient matrix.

    Returns:
        Tuple ``(matrix, universe)``. Row ``i`` belongs to ``formulas[i]`` and
        column ``k`` to ``universe[k]``.
    """
    species = [read_species(formula) for formula in formulas]
    universe = element_universe(species)
    columns = {symbol: k for k, symbol in enumerate(universe)}

    matrix = np.zeros((len(species), len(universe)))
    for row, elements in enumerate(species):
        for symbol, coefficient in elements.items():
            matrix[row, columns[symbol]] = coefficient
    return matrix, universe


def stoich(formulas: Iterable[str], options: BalanceOptions | None = None) -> list[int]:
    """Balance a reaction among the given species.

    The reaction is well posed only if there is exactly one more species than
    there are elements (counting charge as ``"e-"``). The overall sign of the
    result is arbitrary.

    Args:
        formulas: One formula per species, reactants and products alike.
        options: Numeric settings; defaults to :class:`BalanceOptions()`.

    Returns:
        One signed integer coefficient per formula, in input order.

    Raises:
        FormulaError: If a formula cannot be parsed.
        IllPosedReactionError: If the species cannot be balanced uniquely.

    Example:
        4 e- + 4 H+ + O2 -> 2 H2O, up to sign:

        >>> [abs(nu) for nu in stoich(["e-", "H+", "O2", "H2O"])]
        [4, 4, 1, 2]
    """
    options = options or BalanceOptions()
    formulas = list(formulas)
    matrix, universe = coefficient_matrix(formulas)
    n_species, n_elements = matrix.shape
    logger.debug("Balancing %s over elements %s", formulas, universe)

    if n_species > n_elements + 1:
        raise IllPosedReactionError(
            formulas,
            Diagnosis.REDUNDANT,
            f"{n_species} species for {n_elements} elements",
        )
    if n_species < n_elements + 1:
        raise IllPosedReactionError(
            formulas,
            Diagnosis.MISSING,
            f"{n_species} species for {n_elements} elements",
        )

    # The zero column keeps the matrix square, so the last left singular
    # vector always belongs to a zero singular value.
    augmented = np.hstack([matrix, np.zeros((n_species, 1))])
    left, singular_values, _ = linalg.svd(augmented)
    direction = left[:, -1]
    logger.debug("Singular values %s", singular_values)

    smallest = float(np.min(np.abs(direction)))
    degenerate = n_species > 1 and (
        singular_values[-2] <= options.zero_tolerance * singular_values[0]
    )
    if smallest <= options.zero_tolerance or degenerate:
        raise IllPosedReactionError(formulas, Diagnosis.UNRELATED)

    scaled = direction / smallest
    fractions = [Fraction(float(value)).limit_denominator(options.max_denominator) for value in scaled]
    multiple = math.lcm(*(fraction.denominator for fraction in fractions))
    coefficients = [int(math.floor(value * multiple + 0.5)) for value in scaled]
    logger.debug("Normalized %s to %s", scaled, coefficients)

    if np.any(np.asarray(coefficients, dtype=float) @ matrix != 0.0):
        raise IllPosedReactionError(formulas, Diagnosis.NON_INTEGRAL, f"rounded to {coefficients}")
    return coefficients
