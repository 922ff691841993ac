import unittest

from chembalance.errors import UnbalanceableError
from chembalance.fallback import FAILURE_MESSAGES, balance_with_fallback


class RecordingSolver:
    def __init__(self, answer=""):
        self.answer = answer
        self.calls = []

    def solve(self, equation, language):
        self.calls.append((equation, language))
        return self.answer


class FailingSolver:
    def solve(self, equation, language):
        raise RuntimeError("service unavailable")


class TestBalanceWithFallback(unittest.TestCase):
    def test_local_success_skips_solver(self):
        solver = RecordingSolver("unused")
        outcome = balance_with_fallback("H2 + O2 -> H2O", solver)
        self.assertEqual(outcome.text, r"2H2 + O2 \rightarrow 2H2O")
        self.assertEqual(outcome.method, "local")
        self.assertIsNone(outcome.error)
        self.assertFalse(outcome.is_error)
        self.assertEqual(solver.calls, [])

    def test_solver_answer_is_used(self):
        solver = RecordingSolver("  Au \\rightarrow Pb  ")
        with self.assertLogs("chembalance.fallback", level="WARNING"):
            outcome = balance_with_fallback("Au -> Pb", solver, language="ar")
        self.assertEqual(outcome.text, "Au \\rightarrow Pb")
        self.assertEqual(outcome.method, "fallback")
        self.assertFalse(outcome.is_error)
        self.assertIsInstance(outcome.error, UnbalanceableError)
        self.assertEqual(solver.calls, [("Au -> Pb", "ar")])

    def test_no_solver(self):
        outcome = balance_with_fallback("H2 O2 H2O")
        self.assertTrue(outcome.is_error)
        self.assertEqual(outcome.text, FAILURE_MESSAGES["en"])
        self.assertEqual(outcome.error.kind, "format")

    def test_empty_answer_is_a_failure(self):
        outcome = balance_with_fallback("Au -> Pb", RecordingSolver(""), language="ar")
        self.assertTrue(outcome.is_error)
        self.assertEqual(outcome.text, FAILURE_MESSAGES["ar"])

    def test_solver_exception_is_a_failure(self):
        with self.assertLogs("chembalance.fallback", level="ERROR"):
            outcome = balance_with_fallback("Au -> Pb", FailingSolver())
        self.assertTrue(outcome.is_error)
        self.assertEqual(outcome.text, FAILURE_MESSAGES["en"])

    def test_unknown_language_uses_english(self):
        outcome = balance_with_fallback("Au -> Pb", language="fr")
        self.assertEqual(outcome.text, FAILURE_MESSAGES["en"])


if __name__ == '__main__':
    unittest.main()
