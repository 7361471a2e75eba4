"""Data structures for species and reactions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from fcchem.formula import charge, read_species
from fcchem.stoichiometry import BalanceOptions, stoich


@dataclass(frozen=True)
class Species:
    name: str
    formula: str
    phase: str = "gas"

    @property
    def elements(self) -> dict[str, int]:
        return read_species(self.formula)

    @property
    def charge(self) -> int:
        return charge(self.formula, strict=True)


@dataclass(frozen=True)
class Reaction:
    """A reaction as signed stoichiometric coefficients per species name.

    Reactants have negative coefficients and products positive ones.
    """

    name: str
    stoichiometry: Mapping[str, int]
    reversible: bool = False

    @classmethod
    def balance(
        cls,
        name: str,
        species: Sequence[Species],
        options: BalanceOptions | None = None,
        reversible: bool = False,
    ) -> Reaction:
        """Balance a reaction among ``species``.

        The first species is taken as a reactant, which fixes the otherwise
        arbitrary sign of the balanced coefficients.
        """
        coefficients = stoich([s.formula for s in species], options)
        names = [s.name for s in species]
        if len(set(names)) != len(names):
            raise ValueError(f"Species names must be unique, got {names}")

        if coefficients and coefficients[0] > 0:
            coefficients = [-c for c in coefficients]
        return cls(
            name=name,
            stoichiometry=dict(zip(names, coefficients, strict=True)),
            reversible=reversible,
        )

    @property
    def reactants(self) -> list[str]:
        return [name for name, nu in self.stoichiometry.items() if nu < 0]

    @property
    def products(self) -> list[str]:
        return [name for name, nu in self.stoichiometry.items() if nu > 0]

    def is_balanced(self, species: Sequence[Species]) -> bool:
        """Check exact conservation of every element and of charge."""
        by_name = {s.name: s for s in species}
        missing = set(self.stoichiometry) - set(by_name)
        if missing:
            raise ValueError(f"No species given for {sorted(missing)}")

        totals: dict[str, int] = {}
        for name, nu in self.stoichiometry.items():
            for symbol, count in by_name[name].elements.items():
                totals[symbol] = totals.get(symbol, 0) + nu * count
        return all(total == 0 for total in totals.values())

    def equation(self) -> str:
        def side(names: list[str]) -> str:
            terms = []
            for name in names:
                nu = abs(self.stoichiometry[name])
                terms.append(name if nu == 1 else f"{nu} {name}")
            return " + ".join(terms)

        arrow = "<=>" if self.reversible else "->"
        return f"{side(self.reactants)} {arrow} {side(self.products)}"
