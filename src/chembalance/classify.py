"""Reaction-type classification and validation from the shape of an equation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from chembalance.equation import split_equation
from chembalance.errors import ParseError
from chembalance.formula import parse_formula


class ReactionType(str, Enum):
    SYNTHESIS = "synthesis"
    DECOMPOSITION = "decomposition"
    COMBUSTION = "combustion"
    SINGLE_REPLACEMENT = "single_replacement"
    DOUBLE_REPLACEMENT = "double_replacement"
    UNKNOWN = "unknown"


def predict_reaction_type(reactants: Sequence[str], products: Sequence[str]) -> ReactionType:
    """Guess the reaction type from reactant and product formulas.

    Rules are checked in order: synthesis (A + B -> AB), decomposition
    (AB -> A + B), hydrocarbon combustion, then single or double
    replacement for two-in two-out equations.
    """
    if len(reactants) == 2 and len(products) == 1:
        return ReactionType.SYNTHESIS
    if len(reactants) == 1 and len(products) == 2:
        return ReactionType.DECOMPOSITION

    reactant_elements = [parse_formula(formula) for formula in reactants]
    if _is_combustion(reactants, reactant_elements, products):
        return ReactionType.COMBUSTION

    if len(reactants) == 2 and len(products) == 2:
        if any(len(elements) == 1 for elements in reactant_elements):
            return ReactionType.SINGLE_REPLACEMENT
        return ReactionType.DOUBLE_REPLACEMENT
    return ReactionType.UNKNOWN


def classify_equation(text: str) -> ReactionType:
    reactants, products = split_equation(text)
    return predict_reaction_type(reactants, products)


@dataclass(frozen=True)
class ReactionValidation:
    is_possible: bool
    reason: str


def validate_reaction(reactants: Sequence[str], products: Sequence[str]) -> ReactionValidation:
    """Check that every formula is well formed and both sides share elements.

    Unknown element symbols and malformed formulas are reported through
    the parser's message; an element found on one side only is reported
    by symbol.
    """
    try:
        reactant_elements = _element_set(reactants)
        product_elements = _element_set(products)
    except ParseError as error:
        return ReactionValidation(is_possible=False, reason=error.message)

    only_reactants = sorted(reactant_elements - product_elements)
    only_products = sorted(product_elements - reactant_elements)
    if only_reactants or only_products:
        details = []
        if only_reactants:
            details.append(f"only among reactants: {', '.join(only_reactants)}")
        if only_products:
            details.append(f"only among products: {', '.join(only_products)}")
        return ReactionValidation(
            is_possible=False,
            reason=f"Elements not conserved ({'; '.join(details)}).",
        )
    return ReactionValidation(is_possible=True, reason="Reaction appears chemically valid.")


def validate_equation(text: str) -> ReactionValidation:
    reactants, products = split_equation(text)
    return validate_reaction(reactants, products)


def _element_set(formulas: Sequence[str]) -> set[str]:
    elements: set[str] = set()
    for formula in formulas:
        elements.update(parse_formula(formula))
    return elements


def _is_combustion(
    reactants: Sequence[str],
    reactant_elements: Sequence[dict[str, int]],
    products: Sequence[str],
) -> bool:
    has_hydrocarbon = any("C" in elements and "H" in elements for elements in reactant_elements)
    # Substring matches: "H2O2" counts as an oxygen source.
    return (
        has_hydrocarbon
        and any("O2" in formula for formula in reactants)
        and any("CO2" in formula for formula in products)
        and any("H2O" in formula for formula in products)
    )
