"""Chemical formula parsing.

A formula is read as a run of element tokens. Each token is a symbol, an
optional coefficient and an optional charge, e.g. ``"Hg2+2"`` is mercury with
coefficient 2 and charge +2. The bare symbol ``e`` denotes electrons.

The net charge of a species is carried by the pseudo-element ``"e-"``:
``read_species("H+")`` gives ``{"H": 1, "e-": -1}``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fcchem.constants import ELECTRON, ELECTRON_SYMBOL
from fcchem.errors import FormulaError

logger = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class ElementToken:
    symbol: str
    coefficient: int = 1
    charge: int = 0

    @property
    def is_electron(self) -> bool:
        return self.symbol == ELECTRON_SYMBOL

    @property
    def net_charge(self) -> int:
        """Charge this token contributes to its formula.

        A bare electron token (``"e"``, ``"e2"``) implies a charge of -1 per
        electron; an explicit charge suffix takes precedence.
        """
        if self.is_electron and self.charge == 0:
            return -self.coefficient
        return self.charge


def _read_digits(text: str) -> tuple[str, str]:
    end = 0
    while end < len(text) and text[end] in _DIGITS:
        end += 1
    return text[:end], text[end:]


def read_charge(text: str) -> tuple[int, str]:
    """Read an optional charge annotation at the start of ``text``.

    ``"+"`` is +1, ``"-"`` is -1 and a sign followed by digits is that signed
    magnitude. Without a leading sign nothing is consumed and the charge is 0.

    Returns:
        Tuple ``(charge, remainder)``.
    """
    if not text or text[0] not in "+-":
        return 0, text
    sign = 1 if text[0] == "+" else -1
    digits, remainder = _read_digits(text[1:])
    magnitude = int(digits) if digits else 1
    return sign * magnitude, remainder


def read_element(formula: str) -> tuple[str, int, int, str]:
    """Read one leading element token from ``formula``.

    Leading whitespace is skipped. The symbol is an uppercase letter followed
    by any number of lowercase letters, or the electron symbol ``e``. An
    optional coefficient (no leading zero) and charge may follow.

    Parse failures are not raised. They are signalled by an empty symbol, in
    which case the remainder is the unconsumed ``formula``.

    Args:
        formula: Text starting with an element token.

    Returns:
        Tuple ``(symbol, coefficient, charge, remainder)``.

    Example:
        >>> read_element("Hg2+2")
        ('Hg', 2, 2, '')
    """
    text = formula.lstrip()
    if not text:
        return "", 0, 0, formula

    first = text[0]
    if first == ELECTRON_SYMBOL:
        end = 1
    elif first.isascii() and first.isupper():
        end = 1
        while end < len(text) and text[end].isascii() and text[end].islower():
            end += 1
    else:
        return "", 0, 0, formula
    symbol = text[:end]

    digits, rest = _read_digits(text[end:])
    if digits.startswith("0"):
        return "", 0, 0, formula
    coefficient = int(digits) if digits else 1

    charge_, remainder = read_charge(rest)
    return symbol, coefficient, charge_, remainder


def tokenize(formula: str) -> list[ElementToken]:
    """Split a whole formula into element tokens.

    Raises:
        FormulaError: If the formula is blank or any token cannot be read.
    """
    if not formula.strip():
        raise FormulaError(formula, 0, "formula is empty")

    tokens = []
    remainder = formula
    while remainder.strip():
        symbol, coefficient, charge_, remainder_ = read_element(remainder)
        if not symbol:
            position = len(formula) - len(remainder.lstrip())
            raise FormulaError(formula, position)
        tokens.append(ElementToken(symbol, coefficient, charge_))
        remainder = remainder_
    return tokens


def count_elements(formula: str) -> int:
    """Number of entries ``read_species(formula)`` produces.

    That is the number of distinct element symbols, plus one for the electron
    entry when the net charge is nonzero.
    """
    tokens = tokenize(formula)
    symbols = {token.symbol for token in tokens if not token.is_electron}
    net_charge = sum(token.net_charge for token in tokens)
    return len(symbols) + (1 if net_charge else 0)


def read_species(formula: str) -> dict[str, int]:
    """Expand a formula into a mapping of element symbol to coefficient.

    Repeated symbols are summed, so ``"CH3COOH"`` gives ``{"C": 2, "H": 4,
    "O": 2}``. Electron tokens add no entry of their own; the net charge of
    the formula is stored as ``"e-"`` with coefficient ``-charge``.

    Raises:
        FormulaError: If the formula cannot be parsed.

    Example:
        >>> read_species("C19HF37O5S-")
        {'C': 19, 'H': 1, 'F': 37, 'O': 5, 'S': 1, 'e-': 1}
    """
    elements: dict[str, int] = {}
    net_charge = 0
    for token in tokenize(formula):
        net_charge += token.net_charge
        if token.is_electron:
            continue
        elements[token.symbol] = elements.get(token.symbol, 0) + token.coefficient

    if net_charge:
        elements[ELECTRON] = -net_charge
    logger.debug("Parsed %r as %s", formula, elements)
    return elements


def charge(formula: str, strict: bool = False) -> int:
    """Net charge of a formula.

    With ``strict=False`` an unparsable formula has a charge of 0, which
    cannot be told apart from a neutral species. Pass ``strict=True`` to get
    a :class:`FormulaError` instead.

    Example:
        >>> charge("Hg2+2")
        2
    """
    try:
        tokens = tokenize(formula)
    except FormulaError:
        if strict:
            raise
        logger.debug("Cannot parse %r; reporting zero charge", formula)
        return 0
    return sum(token.net_charge for token in tokens)
