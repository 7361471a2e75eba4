import unittest

import numpy as np
import numpy.testing as npt

from fcchem.errors import Diagnosis, FormulaError, IllPosedReactionError
from fcchem.stoichiometry import BalanceOptions, coefficient_matrix, element_universe, stoich


class TestCoefficientMatrix(unittest.TestCase):
    def test_universe_order(self):
        species = [{"H": 1, "e-": -1}, {"H": 2, "O": 1}]
        self.assertEqual(element_universe(species), ["H", "e-", "O"])

    def test_matrix(self):
        matrix, universe = coefficient_matrix(["H+", "H2O"])
        self.assertEqual(universe, ["H", "e-", "O"])
        npt.assert_array_equal(matrix, np.array([[1, -1, 0], [2, 0, 1]]))


class TestStoich(unittest.TestCase):
    def assertBalanced(self, formulas, expected):
        # The overall sign of the result is arbitrary.
        result = stoich(formulas)
        self.assertIn(result, (expected, [-nu for nu in expected]))

    def test_oxygen_reduction(self):
        # 4 e- + 4 H+ + O2 -> 2 H2O
        self.assertBalanced(["e-", "H+", "O2", "H2O"], [-4, -4, -1, 2])

    def test_hydrogen_oxidation(self):
        # H2 -> 2 H+ + 2 e-
        self.assertBalanced(["H2", "H+", "e-"], [-1, 2, 2])

    def test_water_formation(self):
        self.assertBalanced(["H2", "O2", "H2O"], [2, 1, -2])

    def test_methane_combustion(self):
        self.assertBalanced(["CH4", "O2", "CO2", "H2O"], [-1, -2, 1, 2])

    def test_fractional_ratio(self):
        # 4 Fe + 3 O2 -> 2 Fe2O3; the smallest coefficient does not divide the others.
        self.assertBalanced(["Fe", "O2", "Fe2O3"], [4, 3, -2])

    def test_accepts_iterables(self):
        result = stoich(formula for formula in ["H2", "O2", "H2O"])
        self.assertEqual(len(result), 3)

    def test_redundant_species(self):
        with self.assertRaises(IllPosedReactionError) as context:
            stoich(["H2", "O2", "H2O", "H2O2", "O3"])
        self.assertIs(context.exception.diagnosis, Diagnosis.REDUNDANT)
        self.assertIn("duplicate or redundant species", str(context.exception))

    def test_missing_species(self):
        with self.assertRaises(IllPosedReactionError) as context:
            stoich(["H2", "H2O"])
        self.assertIs(context.exception.diagnosis, Diagnosis.MISSING)
        self.assertIn("missing or unmatched species", str(context.exception))

    def test_no_species(self):
        with self.assertRaises(IllPosedReactionError) as context:
            stoich([])
        self.assertIs(context.exception.diagnosis, Diagnosis.MISSING)

    def test_unrelated_species(self):
        for formulas in (["H2", "O2", "H2O", "He"], ["H2", "O2", "H2O", "e-"]):
            with self.subTest(formulas=formulas):
                with self.assertRaises(IllPosedReactionError) as context:
                    stoich(formulas)
                self.assertIs(context.exception.diagnosis, Diagnosis.UNRELATED)
                self.assertEqual(context.exception.formulas, formulas)

    def test_two_independent_reactions(self):
        # NO <-> N2O2 and H2 <-> 2 H share no elements.
        with self.assertRaises(IllPosedReactionError) as context:
            stoich(["NO", "N2O2", "H2", "H"])
        self.assertIs(context.exception.diagnosis, Diagnosis.UNRELATED)

    def test_non_integral(self):
        with self.assertRaises(IllPosedReactionError) as context:
            stoich(["Fe", "O2", "Fe2O3"], BalanceOptions(max_denominator=1))
        self.assertIs(context.exception.diagnosis, Diagnosis.NON_INTEGRAL)

    def test_invalid_formula(self):
        with self.assertRaises(FormulaError):
            stoich(["H2", "O2", "h2o"])


class TestBalanceOptions(unittest.TestCase):
    def test_defaults(self):
        options = BalanceOptions()
        self.assertEqual(options.zero_tolerance, 1e-8)
        self.assertEqual(options.max_denominator, 100)

    def test_validation(self):
        with self.assertRaises(ValueError):
            BalanceOptions(zero_tolerance=0.0)
        with self.assertRaises(ValueError):
            BalanceOptions(max_denominator=0)


if __name__ == '__main__':
    unittest.main()
