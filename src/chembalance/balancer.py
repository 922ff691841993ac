"""Chemical equation balancing.

The balancer turns ``"Al + O2 -> Al2O3"`` into ``"4Al + 3O2 \\rightarrow 2Al2O3"``:

1. Split the equation and parse every formula.
2. Build the stoichiometric matrix (elements by molecules, products negated).
3. Reduce it to row-echelon form and read off the one-dimensional null space.
4. Normalize so the last formula has coefficient 1, then scale by the least
   common multiple of the denominators to reach the smallest integers.

Every failure raises a ``BalanceError`` subclass so callers can tell a
malformed equation from one that has no positive solution.
"""

from __future__ import annotations

import logging
import math
from fractions import Fraction
from typing import Sequence

import numpy as np

from chembalance.config import BalancerConfiguration
from chembalance.equation import parse_equation
from chembalance.errors import BalanceError, DegenerateError, UnbalanceableError
from chembalance.linalg import build_matrix, conserves_atoms, null_vector, row_reduce
from chembalance.models import BalancedEquation, Equation

logger = logging.getLogger(__name__)


def balance(text: str, configuration: BalancerConfiguration | None = None) -> BalancedEquation:
    """Balance ``text`` and return the equation with its coefficients.

    Raises:
        FormatError: the text has no single separator or an empty side.
        ParseError: a formula is malformed.
        UnbalanceableError: no unique positive solution exists.
        DegenerateError: the derived coefficients are not positive integers.
    """
    configuration = configuration or BalancerConfiguration()
    try:
        equation = parse_equation(text)
        coefficients = solve_coefficients(equation, configuration)
    except BalanceError as error:
        logger.info("Could not balance %r (%s): %s", text, error.kind, error)
        raise
    return BalancedEquation(equation=equation, coefficients=coefficients)


def balance_equation(text: str, configuration: BalancerConfiguration | None = None) -> str:
    """Balance ``text`` and return the canonical rendering."""
    return balance(text, configuration).format()


def solve_coefficients(
    equation: Equation, configuration: BalancerConfiguration
) -> tuple[int, ...]:
    matrix = build_matrix(equation, exact=configuration.exact)
    tolerance = 0.0 if configuration.exact else configuration.zero_tolerance
    reduced, pivot_columns = row_reduce(matrix, zero_tolerance=tolerance)
    logger.debug(
        "Reduced %dx%d matrix for %s to rank %d",
        matrix.shape[0],
        matrix.shape[1],
        equation.elements,
        len(pivot_columns),
    )
    vector = null_vector(reduced, pivot_columns)

    coefficients = rationalize(vector, configuration)

    divisor = math.gcd(*coefficients)
    if divisor > 1:
        coefficients = [value // divisor for value in coefficients]

    if any(value <= 0 for value in coefficients):
        raise DegenerateError(f"Coefficients {coefficients} are not all positive.")
    if not conserves_atoms(matrix, coefficients, tolerance=configuration.integer_tolerance):
        raise DegenerateError(f"Coefficients {coefficients} do not conserve atoms.")
    return tuple(coefficients)


def rationalize(vector: np.ndarray, configuration: BalancerConfiguration) -> list[int]:
    """Scale a null-space vector to integer coefficients.

    The vector is first normalized so its last entry is 1.

    Raises:
        DegenerateError: if the last entry is zero, or, in float mode, if a
            scaled coefficient is not within ``integer_tolerance`` of an
            integer.
        UnbalanceableError: if a float coefficient has no denominator up to
            ``max_denominator``.
    """
    if configuration.exact:
        return _rationalize_exact(vector)
    return _rationalize_float(vector, configuration)


def _rationalize_exact(vector: np.ndarray) -> list[int]:
    last = Fraction(vector[-1])
    if last == 0:
        raise DegenerateError("The last formula would need a zero coefficient.")
    values = [Fraction(value) / last for value in vector]
    multiple = math.lcm(*(value.denominator for value in values))
    return [int(value * multiple) for value in values]


def _rationalize_float(vector: np.ndarray, configuration: BalancerConfiguration) -> list[int]:
    last = float(vector[-1])
    if abs(last) <= configuration.integer_tolerance:
        raise DegenerateError("The last formula would need a zero coefficient.")
    values = [float(value) / last for value in vector]
    if any(abs(value) <= configuration.integer_tolerance for value in values):
        raise DegenerateError("A formula would need a zero coefficient.")

    multiple = math.lcm(*(_smallest_denominator(value, configuration) for value in values))
    return _scale_to_integers(values, multiple, configuration)


def _smallest_denominator(value: float, configuration: BalancerConfiguration) -> int:
    for denominator in range(1, configuration.max_denominator + 1):
        product = value * denominator
        if abs(product - round(product)) <= configuration.denominator_tolerance:
            return denominator
    raise UnbalanceableError(
        f"Coefficient {value:.6g} has no denominator up to {configuration.max_denominator}."
    )


def _scale_to_integers(
    values: Sequence[float], multiple: int, configuration: BalancerConfiguration
) -> list[int]:
    coefficients = []
    for value in values:
        scaled = value * multiple
        rounded = round(scaled)
        if abs(scaled - rounded) > configuration.integer_tolerance:
            raise DegenerateError(f"Coefficient {scaled:.6g} is not close to an integer.")
        coefficients.append(int(rounded))
    return coefficients
