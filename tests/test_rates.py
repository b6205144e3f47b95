"""
Rate table lookup and amount-tier adjustment.
Run from the project root: python -m pytest tests/test_rates.py -v
"""
import unittest
from decimal import Decimal

from schemas.enums import LoanType
from services.rates import BASE_RATES, adjust_rate, base_rate, quote_rate


class TestBaseRate(unittest.TestCase):
    def test_every_loan_type_has_a_rate(self):
        self.assertEqual(set(BASE_RATES), set(LoanType))

    def test_table_values(self):
        expected = {
            LoanType.PERSONAL: Decimal("0.12"),
            LoanType.AUTO: Decimal("0.08"),
            LoanType.HOME: Decimal("0.06"),
            LoanType.STUDENT: Decimal("0.05"),
            LoanType.BUSINESS: Decimal("0.10"),
        }
        for loan_type, rate in expected.items():
            with self.subTest(loan_type=loan_type):
                self.assertEqual(base_rate(loan_type), rate)
                self.assertEqual(base_rate(loan_type), base_rate(loan_type))

    def test_accepts_enum_value_string(self):
        self.assertEqual(base_rate("HOME"), Decimal("0.06"))


class TestAdjustRate(unittest.TestCase):
    rate = Decimal("0.12")

    def test_thresholds_are_exclusive(self):
        self.assertEqual(adjust_rate(self.rate, Decimal("50000")), self.rate)
        self.assertEqual(adjust_rate(self.rate, Decimal("10000")), self.rate)

    def test_large_loan_discount(self):
        self.assertEqual(adjust_rate(self.rate, Decimal("50001")), Decimal("0.115"))
        self.assertEqual(adjust_rate(self.rate, Decimal("50000.01")), Decimal("0.115"))

    def test_small_loan_premium(self):
        self.assertEqual(adjust_rate(self.rate, Decimal("9999")), Decimal("0.13"))
        self.assertEqual(adjust_rate(self.rate, Decimal("9999.99")), Decimal("0.13"))

    def test_mid_range_unchanged(self):
        self.assertEqual(adjust_rate(self.rate, Decimal("25000")), self.rate)

    def test_quote_combines_table_and_adjustment(self):
        self.assertEqual(quote_rate(LoanType.HOME, Decimal("250000")), Decimal("0.055"))
        self.assertEqual(quote_rate(LoanType.STUDENT, Decimal("5000")), Decimal("0.06"))


if __name__ == "__main__":
    unittest.main()
