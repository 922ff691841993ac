"""Molecular formula parsing.

Formulas are built from element symbols (an uppercase letter optionally
followed by a lowercase one), positive integer counts and parenthesized
groups with an optional trailing multiplier, e.g. ``Al2(SO4)3``. Groups nest
and multiply transitively.
"""

from __future__ import annotations

import re
from collections import Counter

from chembalance.elements import is_element
from chembalance.errors import ParseError
from chembalance.models import Molecule

_TOKEN = re.compile(
    r"(?P<element>[A-Z][a-z]?)|(?P<count>\d+)|(?P<open>\()|(?P<close>\))", re.ASCII
)
_COUNT = re.compile(r"\d+", re.ASCII)


def parse_formula(formula: str) -> dict[str, int]:
    """Return the element counts of ``formula``.

    Raises:
        ParseError: if the formula is empty, has unbalanced or empty groups,
            contains a zero count, a dangling number, a lowercase-initial
            token, an unknown element symbol or any character outside the
            formula grammar. Counts are ASCII digits only.
    """
    if not formula:
        raise ParseError("Empty formula.")

    stack: list[Counter[str]] = [Counter()]
    position = 0
    while position < len(formula):
        match = _TOKEN.match(formula, position)
        if match is None:
            raise ParseError(_unexpected_character(formula, position))
        kind = match.lastgroup
        position = match.end()

        if kind == "count":
            raise ParseError(
                f"Number {match.group()!r} at position {match.start()} in {formula!r}"
                " does not follow an element or group."
            )
        if kind == "open":
            stack.append(Counter())
            continue

        count, position = _read_count(formula, position)
        if kind == "element":
            symbol = match.group()
            if not is_element(symbol):
                raise ParseError(
                    f"Unknown element symbol {symbol!r} at position {match.start()} in {formula!r}."
                )
            stack[-1][symbol] += count
            continue

        if len(stack) == 1:
            raise ParseError(f"Unmatched ')' at position {match.start()} in {formula!r}.")
        group = stack.pop()
        if not group:
            raise ParseError(f"Empty group ending at position {match.start()} in {formula!r}.")
        for symbol, group_count in group.items():
            stack[-1][symbol] += group_count * count

    if len(stack) != 1:
        raise ParseError(f"Unmatched '(' in {formula!r}.")
    return dict(stack[0])


def parse_molecule(formula: str) -> Molecule:
    return Molecule(formula=formula, elements=parse_formula(formula))


def _read_count(formula: str, position: int) -> tuple[int, int]:
    match = _COUNT.match(formula, position)
    if match is None:
        return 1, position
    count = int(match.group())
    if count == 0:
        raise ParseError(f"Zero count at position {position} in {formula!r}.")
    return count, match.end()


def _unexpected_character(formula: str, position: int) -> str:
    character = formula[position]
    if character.islower():
        return (
            f"Token starting with lowercase {character!r} at position {position}"
            f" in {formula!r}; element symbols start with an uppercase letter."
        )
    return f"Unexpected character {character!r} at position {position} in {formula!r}."
