import unittest

from chembalance.elements import ELEMENT_SYMBOLS, is_element
from chembalance.errors import BalanceError, ParseError
from chembalance.formula import parse_formula, parse_molecule


class TestParseFormula(unittest.TestCase):
    def test_simple_formulas(self):
        self.assertEqual(parse_formula("H2O"), {"H": 2, "O": 1})
        self.assertEqual(parse_formula("NaCl"), {"Na": 1, "Cl": 1})
        self.assertEqual(parse_formula("C6H12O6"), {"C": 6, "H": 12, "O": 6})

    def test_repeated_elements_are_summed(self):
        self.assertEqual(parse_formula("CH3COOH"), {"C": 2, "H": 4, "O": 2})

    def test_group_multiplier(self):
        self.assertEqual(parse_formula("Al2(SO4)3"), {"Al": 2, "S": 3, "O": 12})
        self.assertEqual(parse_formula("Ca(OH)2"), {"Ca": 1, "O": 2, "H": 2})

    def test_group_without_multiplier(self):
        self.assertEqual(parse_formula("(NH4)Cl"), {"N": 1, "H": 4, "Cl": 1})

    def test_nested_groups_multiply_transitively(self):
        self.assertEqual(
            parse_formula("K4(ON(SO3)2)2"), {"K": 4, "O": 14, "N": 2, "S": 4}
        )

    def test_multi_digit_counts(self):
        self.assertEqual(parse_formula("C12H22O11"), {"C": 12, "H": 22, "O": 11})

    def test_malformed_formulas(self):
        malformed = [
            "",
            "Ca(OH",
            "CaOH)2",
            "h2o",
            "H2O!",
            "()",
            "H0",
            "(OH)0",
            "2H2",
            "H 2O",
        ]
        for formula in malformed:
            with self.subTest(formula=formula):
                with self.assertRaises(ParseError):
                    parse_formula(formula)

    def test_unknown_element_symbols(self):
        for formula in ("Xx", "Q2", "HQ", "Ca(Zz)2"):
            with self.subTest(formula=formula):
                with self.assertRaises(ParseError) as context:
                    parse_formula(formula)
                self.assertIn("Unknown element symbol", str(context.exception))

    def test_counts_are_ascii_digits(self):
        for formula in ("H\u0662O", "H\uff12O", "(OH)\u0662"):
            with self.subTest(formula=formula):
                with self.assertRaises(ParseError):
                    parse_formula(formula)

    def test_element_table(self):
        self.assertEqual(len(ELEMENT_SYMBOLS), 118)
        self.assertTrue(is_element("Og"))
        self.assertFalse(is_element("Xx"))

    def test_parse_error_is_a_balance_error(self):
        with self.assertRaises(BalanceError) as context:
            parse_formula("Xy(")
        self.assertEqual(context.exception.kind, "parse")

    def test_lowercase_message(self):
        with self.assertRaises(ParseError) as context:
            parse_formula("co2")
        self.assertIn("uppercase", str(context.exception))

    def test_parse_molecule_keeps_formula(self):
        molecule = parse_molecule("Fe2O3")
        self.assertEqual(molecule.formula, "Fe2O3")
        self.assertEqual(dict(molecule.elements), {"Fe": 2, "O": 3})


if __name__ == '__main__':
    unittest.main()
