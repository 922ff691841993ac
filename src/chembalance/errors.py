"""Error taxonomy for the balancer."""

from __future__ import annotations


class BalanceError(ValueError):
    """Base class for every recoverable balancing failure."""

    kind = "balance"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FormatError(BalanceError):
    """The equation does not have the ``reactants -> products`` shape."""

    kind = "format"


class ParseError(BalanceError):
    """A molecular formula is malformed."""

    kind = "parse"


class UnbalanceableError(BalanceError):
    """The stoichiometric system has no single positive solution."""

    kind = "unbalanceable"


class DegenerateError(BalanceError):
    """The derived coefficients are zero, negative or not integral."""

    kind = "degenerate"
