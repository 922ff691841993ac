"""Local balancing with an optional external solver as fallback.

The external solver (typically a language-model service) is an injected
collaborator: it receives the raw equation and a language code and returns
an already rendered answer, or an empty string when it has none.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from chembalance.balancer import balance_equation
from chembalance.config import BalancerConfiguration
from chembalance.errors import BalanceError

logger = logging.getLogger(__name__)

FAILURE_MESSAGES = {
    "en": "Could not balance equation.",
    "ar": "تعذر موازنة المعادلة.",
}


class EquationSolver(Protocol):
    def solve(self, equation: str, language: str) -> str:
        """Return a rendered balanced equation, or an empty string."""
        ...


@dataclass(frozen=True)
class BalanceOutcome:
    text: str
    method: str
    error: BalanceError | None = None
    is_error: bool = False


def balance_with_fallback(
    text: str,
    solver: EquationSolver | None = None,
    language: str = "en",
    configuration: BalancerConfiguration | None = None,
) -> BalanceOutcome:
    """Balance locally, consulting ``solver`` only when that fails."""
    try:
        return BalanceOutcome(text=balance_equation(text, configuration), method="local")
    except BalanceError as error:
        local_error = error

    failure = BalanceOutcome(
        text=FAILURE_MESSAGES.get(language, FAILURE_MESSAGES["en"]),
        method="local",
        error=local_error,
        is_error=True,
    )
    if solver is None:
        return failure

    logger.warning(
        "Local balancing failed (%s); asking fallback solver: %s", local_error.kind, local_error
    )
    try:
        answer = solver.solve(text, language)
    except Exception:
        logger.exception("Fallback solver raised for %r", text)
        return failure

    answer = (answer or "").strip()
    if not answer:
        return failure
    return BalanceOutcome(text=answer, method="fallback", error=local_error)
