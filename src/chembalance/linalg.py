"""Stoichiometric matrix construction and Gauss-Jordan elimination.

Matrices are numpy arrays. Exact arithmetic stores ``fractions.Fraction``
objects (``dtype=object``) so elimination never loses precision; float
arithmetic stores ``float64`` and relies on an explicit zero tolerance when
searching for pivots.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Sequence

import numpy as np

from chembalance.errors import UnbalanceableError
from chembalance.models import Equation


def build_matrix(equation: Equation, exact: bool = True) -> np.ndarray:
    """Build the element-by-molecule matrix of ``equation``.

    Rows follow ``equation.elements``; columns are the reactants followed by
    the products. Product entries are negated atom counts.

    Raises:
        UnbalanceableError: if an element occurs on one side only.
    """
    elements = equation.elements
    reactant_count = len(equation.reactants)

    rows = []
    for symbol in elements:
        row = []
        for index, molecule in enumerate(equation.molecules):
            count = molecule.elements.get(symbol, 0)
            row.append(count if index < reactant_count else -count)
        rows.append(row)

    if exact:
        matrix = np.array([[Fraction(value) for value in row] for row in rows], dtype=object)
    else:
        matrix = np.array(rows, dtype=float)

    for symbol, row in zip(elements, matrix, strict=True):
        has_reactant = any(value > 0 for value in row)
        has_product = any(value < 0 for value in row)
        if not has_reactant and not has_product:
            raise UnbalanceableError(f"Element {symbol} has no atoms on either side.")
        if not has_product:
            raise UnbalanceableError(f"Element {symbol} appears only among the reactants.")
        if not has_reactant:
            raise UnbalanceableError(f"Element {symbol} appears only among the products.")
    return matrix


def row_reduce(matrix: np.ndarray, zero_tolerance: float = 0.0) -> tuple[np.ndarray, list[int]]:
    """Reduce a copy of ``matrix`` to reduced row-echelon form.

    Pivots are searched column by column, downward from the current row.
    Entries with magnitude at or below ``zero_tolerance`` count as zero.

    Returns:
        The reduced matrix and the pivot column of each nonzero row.
    """
    reduced = matrix.copy()
    rows, columns = reduced.shape
    pivot_columns: list[int] = []

    lead = 0
    for row in range(rows):
        pivot_row = None
        while lead < columns:
            pivot_row = next(
                (i for i in range(row, rows) if abs(reduced[i, lead]) > zero_tolerance),
                None,
            )
            if pivot_row is not None:
                break
            lead += 1
        if pivot_row is None:
            break

        if pivot_row != row:
            reduced[[row, pivot_row]] = reduced[[pivot_row, row]]
        reduced[row] = reduced[row] / reduced[row, lead]
        for other in range(rows):
            if other != row:
                reduced[other] = reduced[other] - reduced[other, lead] * reduced[row]

        pivot_columns.append(lead)
        lead += 1

    return reduced, pivot_columns


def null_vector(reduced: np.ndarray, pivot_columns: Sequence[int]) -> np.ndarray:
    """Return the null-space basis vector of a reduced matrix.

    The single free variable is fixed to 1 and every pivot variable is the
    negation of its row's entry in the free column.

    Raises:
        UnbalanceableError: unless the null space is one-dimensional.
    """
    columns = reduced.shape[1]
    free_columns = [column for column in range(columns) if column not in pivot_columns]
    if not free_columns:
        raise UnbalanceableError(
            "Only the all-zero solution conserves every element; no coefficients exist."
        )
    if len(free_columns) > 1:
        raise UnbalanceableError(
            f"Equation is under-determined: {len(free_columns)} independent solutions exist."
        )

    free = free_columns[0]
    vector = np.zeros(columns, dtype=reduced.dtype)
    vector[free] = Fraction(1) if reduced.dtype == object else 1.0
    for row, column in enumerate(pivot_columns):
        vector[column] = -reduced[row, free]
    return vector


def conserves_atoms(matrix: np.ndarray, coefficients: Sequence[int], tolerance: float = 0.0) -> bool:
    """Check that every element row sums to zero under ``coefficients``."""
    residual = matrix.dot(np.array(coefficients, dtype=matrix.dtype))
    return all(abs(value) <= tolerance for value in residual)
