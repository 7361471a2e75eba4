"""Exceptions raised by the chemistry utilities."""

from __future__ import annotations

from enum import Enum
from typing import Sequence


class ChemistryError(ValueError):
    """Base class for invalid chemical input."""


class FormulaError(ChemistryError):
    """A formula does not follow the element/coefficient/charge grammar.

    Attributes:
        formula: The complete formula that was being parsed.
        position: Offset of the first character that could not be read.
    """

    def __init__(self, formula: str, position: int, message: str | None = None):
        self.formula = formula
        self.position = position
        detail = message or f"unexpected text {formula[position:]!r} at position {position}"
        super().__init__(f"Invalid formula {formula!r}: {detail}")


class Diagnosis(Enum):
    REDUNDANT = "duplicate or redundant species"
    MISSING = "missing or unmatched species"
    UNRELATED = "unrelated species"
    NON_INTEGRAL = "coefficients are not small integers"


class IllPosedReactionError(ChemistryError):
    """The species of a reaction cannot be balanced uniquely."""

    def __init__(self, formulas: Sequence[str], diagnosis: Diagnosis, detail: str | None = None):
        self.formulas = list(formulas)
        self.diagnosis = diagnosis
        message = f"Ill-posed reaction among {self.formulas}: {diagnosis.value}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
