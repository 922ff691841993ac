"""Shared constants for equation parsing and balancing."""

from __future__ import annotations

CANONICAL_ARROW = r"\rightarrow"
# Longer tokens first so "=>" is not split on "=".
SEPARATORS: tuple[str, ...] = (CANONICAL_ARROW, "->", "=>", "→", "⟶", "=")
TERM_JOINER = " + "

ZERO_TOLERANCE = 1e-9
INTEGER_TOLERANCE = 1e-6
DENOMINATOR_TOLERANCE = 1e-4
MAX_DENOMINATOR = 1000
