"""Data structures for molecules and equations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from chembalance.constants import CANONICAL_ARROW, TERM_JOINER


@dataclass(frozen=True)
class Molecule:
    formula: str
    elements: Mapping[str, int]


@dataclass(frozen=True)
class Equation:
    reactants: tuple[Molecule, ...]
    products: tuple[Molecule, ...]

    @property
    def molecules(self) -> tuple[Molecule, ...]:
        return self.reactants + self.products

    @property
    def elements(self) -> list[str]:
        """Distinct elements in first-seen order, reactants then products."""
        seen: dict[str, None] = {}
        for molecule in self.molecules:
            for symbol in molecule.elements:
                seen.setdefault(symbol, None)
        return list(seen)


@dataclass(frozen=True)
class BalancedEquation:
    equation: Equation
    coefficients: tuple[int, ...]

    @property
    def reactant_coefficients(self) -> tuple[int, ...]:
        return self.coefficients[: len(self.equation.reactants)]

    @property
    def product_coefficients(self) -> tuple[int, ...]:
        return self.coefficients[len(self.equation.reactants) :]

    def format(self, arrow: str = CANONICAL_ARROW) -> str:
        left = _render_side(self.equation.reactants, self.reactant_coefficients)
        right = _render_side(self.equation.products, self.product_coefficients)
        return f"{left} {arrow} {right}"

    def __str__(self) -> str:
        return self.format()


def _render_side(molecules: tuple[Molecule, ...], coefficients: tuple[int, ...]) -> str:
    terms = []
    for molecule, coefficient in zip(molecules, coefficients, strict=True):
        prefix = str(coefficient) if coefficient != 1 else ""
        terms.append(f"{prefix}{molecule.formula}")
    return TERM_JOINER.join(terms)
