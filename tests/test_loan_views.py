"""
Unit tests for the loan object, schedule summaries and array views.

Version: 0.1.0
Last Updated: 2026-10-18
Status: Active

================================================================================
FUNCTIONS UNDER TEST:
================================================================================
- LoanParameters / payment_from_loan / amortize_loan
- summarize_amortization
- amortization_arrays / compound_arrays
- compare_schedules
================================================================================
"""

import unittest
import numpy as np
from decimal import Decimal

from tvm_standard_formulas.errors import DomainError
from tvm_standard_formulas.recurrence import (
    LoanParameters,
    payment_from_loan,
    amortize,
    amortize_loan,
    compound_interest,
    summarize_amortization,
    amortization_arrays,
    compound_arrays,
    compare_schedules,
)

from tests.utilities import (
    SAMPLE_LOAN_AMT,
    SAMPLE_RATE,
    SAMPLE_TERM,
    SAMPLE_PMTS_PER_YEAR,
    SAMPLE_PAYMENT,
    SAMPLE_FINAL_ENDING,
)


class TestLoanParameters(unittest.TestCase):

    def test_normalises_inputs(self):
        loan = LoanParameters(85000, 10.58, 3)
        self.assertEqual(loan.loan_amount, Decimal("85000.00"))
        self.assertEqual(loan.annual_rate, Decimal("10.58"))
        self.assertEqual(loan.payments_per_year, 12)
        self.assertEqual(loan.num_payments, 36)
        self.assertEqual(loan.rate_per_period, Decimal("10.58") / 12 / 100)

    def test_is_immutable(self):
        loan = LoanParameters(SAMPLE_LOAN_AMT, SAMPLE_RATE, SAMPLE_TERM)
        with self.assertRaises(AttributeError):
            loan.term_years = 5

    def test_validation(self):
        bad = [
            dict(loan_amount=Decimal("-1"), annual_rate=SAMPLE_RATE, term_years=3),
            dict(loan_amount=SAMPLE_LOAN_AMT, annual_rate=SAMPLE_RATE, term_years=0),
            dict(loan_amount=SAMPLE_LOAN_AMT, annual_rate=SAMPLE_RATE, term_years=3, payments_per_year=0),
            dict(loan_amount=SAMPLE_LOAN_AMT, annual_rate="ten", term_years=3),
        ]
        for kwargs in bad:
            with self.subTest(**{k: str(v) for k, v in kwargs.items()}):
                with self.assertRaises(DomainError):
                    LoanParameters(**kwargs)

    def test_wrappers_match_functions(self):
        loan = LoanParameters(SAMPLE_LOAN_AMT, SAMPLE_RATE, SAMPLE_TERM, SAMPLE_PMTS_PER_YEAR)
        self.assertEqual(payment_from_loan(loan), SAMPLE_PAYMENT)
        self.assertEqual(
            amortize_loan(loan),
            amortize(SAMPLE_LOAN_AMT, SAMPLE_RATE, SAMPLE_TERM, SAMPLE_PMTS_PER_YEAR),
        )


class TestSummarizeAmortization(unittest.TestCase):

    def test_sample_totals(self):
        schedule = amortize(SAMPLE_LOAN_AMT, SAMPLE_RATE, SAMPLE_TERM, SAMPLE_PMTS_PER_YEAR)
        summary = summarize_amortization(schedule)
        self.assertEqual(summary.num_payments, 36)
        self.assertEqual(summary.total_payments, SAMPLE_PAYMENT * 36)
        self.assertEqual(summary.residual_balance, SAMPLE_FINAL_ENDING)
        self.assertEqual(summary.total_principal + summary.residual_balance, Decimal("85000.00"))
        self.assertEqual(summary.total_interest, summary.total_payments - summary.total_principal)

    def test_empty_schedule_raises(self):
        with self.assertRaises(DomainError):
            summarize_amortization([])


class TestArrayViews(unittest.TestCase):

    def test_amortization_arrays(self):
        schedule = amortize(SAMPLE_LOAN_AMT, SAMPLE_RATE, SAMPLE_TERM, SAMPLE_PMTS_PER_YEAR)
        arrays = amortization_arrays(schedule)
        self.assertEqual(arrays.period.shape, (36,))
        self.assertEqual(arrays.period[0], 1)
        self.assertEqual(arrays.period[-1], 36)
        self.assertAlmostEqual(arrays.principal[0], 85000.0, places=6)
        self.assertTrue(np.allclose(arrays.principal_paid, arrays.principal - arrays.ending_principal))
        self.assertTrue(np.allclose(arrays.principal[1:], arrays.ending_principal[:-1]))
        self.assertTrue(np.all(np.diff(arrays.interest) < 0))

    def test_compound_arrays(self):
        schedule = compound_interest(SAMPLE_LOAN_AMT, SAMPLE_RATE, SAMPLE_TERM, SAMPLE_PMTS_PER_YEAR)
        arrays = compound_arrays(schedule)
        self.assertEqual(len(arrays.new_principal), 36)
        self.assertTrue(np.all(np.diff(arrays.new_principal) > 0))
        self.assertTrue(np.allclose(arrays.new_principal, arrays.starting_principal + arrays.interest_earned))


class TestCompareSchedules(unittest.TestCase):

    def test_identical_schedules(self):
        schedule = amortize(SAMPLE_LOAN_AMT, SAMPLE_RATE, SAMPLE_TERM, SAMPLE_PMTS_PER_YEAR)
        all_close, max_diff, worst = compare_schedules(schedule, list(schedule), "ending_principal")
        self.assertTrue(all_close)
        self.assertEqual(max_diff, 0.0)
        self.assertEqual(worst, 1)

    def test_different_rates_detected(self):
        base = compound_interest(SAMPLE_LOAN_AMT, SAMPLE_RATE, SAMPLE_TERM, SAMPLE_PMTS_PER_YEAR)
        other = compound_interest(SAMPLE_LOAN_AMT, Decimal("10.59"), SAMPLE_TERM, SAMPLE_PMTS_PER_YEAR)
        all_close, max_diff, worst = compare_schedules(base, other, "new_principal")
        self.assertFalse(all_close)
        self.assertGreater(max_diff, 0.01)
        self.assertEqual(worst, 36)

    def test_common_length_only(self):
        short = amortize(SAMPLE_LOAN_AMT, SAMPLE_RATE, 1, SAMPLE_PMTS_PER_YEAR)
        self.assertEqual(compare_schedules(short, [], "payment"), (True, 0.0, 0))

    def test_unknown_field_raises(self):
        schedule = compound_interest(SAMPLE_LOAN_AMT, SAMPLE_RATE, 1)
        with self.assertRaises(DomainError):
            compare_schedules(schedule, schedule, "principal_paid")


if __name__ == '__main__':
    unittest.main()
