"""Splitting raw equation text into reactant and product formulas."""

from __future__ import annotations

import re

from chembalance.constants import SEPARATORS
from chembalance.errors import FormatError
from chembalance.formula import parse_molecule
from chembalance.models import Equation

_WHITESPACE = re.compile(r"\s+")
_SEPARATOR = re.compile("|".join(re.escape(token) for token in SEPARATORS))
_LEADING_COEFFICIENT = re.compile(r"^\d+(?=\D)", re.ASCII)


def split_equation(text: str) -> tuple[list[str], list[str]]:
    """Return the reactant and product formulas of ``text``.

    Whitespace is ignored and leading integer coefficients are stripped, so
    ``"2H2 + O2 -> 2H2O"`` splits into ``(["H2", "O2"], ["H2O"])``.
    """
    clean = _WHITESPACE.sub("", text)
    sides = _SEPARATOR.split(clean)
    if len(sides) == 1:
        expected = ", ".join(repr(token) for token in SEPARATORS)
        raise FormatError(f"No reaction separator found in {text!r}; use one of {expected}.")
    if len(sides) > 2:
        raise FormatError(f"More than one reaction separator in {text!r}.")

    left, right = (_split_side(side) for side in sides)
    if not left:
        raise FormatError(f"No reactants in {text!r}.")
    if not right:
        raise FormatError(f"No products in {text!r}.")
    return left, right


def parse_equation(text: str) -> Equation:
    reactants, products = split_equation(text)
    return Equation(
        reactants=tuple(parse_molecule(formula) for formula in reactants),
        products=tuple(parse_molecule(formula) for formula in products),
    )


def _split_side(side: str) -> list[str]:
    return [_LEADING_COEFFICIENT.sub("", term) for term in side.split("+") if term]
