"""fcchem core package."""

from fcchem.errors import ChemistryError, Diagnosis, FormulaError, IllPosedReactionError
from fcchem.formula import (
    ElementToken,
    charge,
    count_elements,
    read_charge,
    read_element,
    read_species,
    tokenize,
)
from fcchem.models import Reaction, Species
from fcchem.stoichiometry import BalanceOptions, coefficient_matrix, element_universe, stoich

__all__ = [
    "ChemistryError",
    "Diagnosis",
    "FormulaError",
    "IllPosedReactionError",
    "ElementToken",
    "charge",
    "count_elements",
    "read_charge",
    "read_element",
    "read_species",
    "tokenize",
    "Reaction",
    "Species",
    "BalanceOptions",
    "coefficient_matrix",
    "element_universe",
    "stoich",
]
