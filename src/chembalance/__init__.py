"""chembalance core package."""

from chembalance.balancer import balance, balance_equation, rationalize
from chembalance.classify import (
    ReactionType,
    ReactionValidation,
    classify_equation,
    predict_reaction_type,
    validate_equation,
    validate_reaction,
)
from chembalance.config import BalancerConfiguration, configure_logging, load_configuration
from chembalance.elements import ELEMENT_SYMBOLS, is_element
from chembalance.equation import parse_equation, split_equation
from chembalance.errors import (
    BalanceError,
    DegenerateError,
    FormatError,
    ParseError,
    UnbalanceableError,
)
from chembalance.fallback import BalanceOutcome, EquationSolver, balance_with_fallback
from chembalance.formula import parse_formula, parse_molecule
from chembalance.models import BalancedEquation, Equation, Molecule

__all__ = [
    "balance",
    "balance_equation",
    "rationalize",
    "ReactionType",
    "classify_equation",
    "predict_reaction_type",
    "ReactionValidation",
    "validate_equation",
    "validate_reaction",
    "ELEMENT_SYMBOLS",
    "is_element",
    "BalancerConfiguration",
    "configure_logging",
    "load_configuration",
    "parse_equation",
    "split_equation",
    "BalanceError",
    "DegenerateError",
    "FormatError",
    "ParseError",
    "UnbalanceableError",
    "BalanceOutcome",
    "EquationSolver",
    "balance_with_fallback",
    "parse_formula",
    "parse_molecule",
    "BalancedEquation",
    "Equation",
    "Molecule",
]
