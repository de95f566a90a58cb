# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import warnings
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import TypeVar

import numpy as np

from tvm_standard_formulas.closed_form import payment
from tvm_standard_formulas.conventions import (
    DECIMAL_CONTEXT,
    DEFAULT_PERIODS_PER_YEAR,
    HUNDRED,
    ONE,
    ZERO,
    periodic_rate,
    require_count,
    to_currency,
    to_decimal,
)
from tvm_standard_formulas.errors import DomainError

__version__ = "0.1.0"

R = TypeVar("R")


# =============================================================================
# Period records
# =============================================================================

@dataclass(frozen=True)
class AmortizationRecord:
    """
    One period of a level-payment amortization schedule.

    principal is the balance at the START of the period; ending_principal is
    the balance after the payment. All amounts are Decimal at cents.

        ending_principal = principal + interest - payment
    """
    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    ending_principal: Decimal

    @property
    def principal_paid(self) -> Decimal:
        """Share of the payment that reduces the balance (payment - interest)."""
        return self.payment - self.interest


@dataclass(frozen=True)
class CompoundRecord:
    """
    One compounding period.

        new_principal = starting_principal + interest_earned
    """
    period: int
    starting_principal: Decimal
    interest_earned: Decimal
    new_principal: Decimal


# =============================================================================
# Generic period scan
# =============================================================================
#
# Both schedules are a left-to-right scan over periods 1..N:
#
#   start(1) = seed
#   start(k) = end(k-1)                  for k > 1
#   (record(k), end(k)) = step(k, start(k))
#
# The seed rule applies to period 1 only; every later period reads the value
# carried out of its predecessor. The result is a fully materialised list so
# a single period can be looked up by index.
# =============================================================================

def scan_periods(
        count: int,
        seed: Decimal,
        step: Callable[[int, Decimal], tuple[R, Decimal]]
) -> list[R]:
    """
    Build count period records, threading each period's ending value into the next.

    Args:
        count: Number of periods N (must be positive)
        seed: Starting value for period 1
        step: step(period, starting_value) -> (record, ending_value)

    Returns:
        List of N records, ordered by period (record for period k at index k-1)

    Raises:
        DomainError: If count is not a positive integer
    """
    require_count(count, "period count")
    records: list[R] = []
    carried = seed
    for period in range(1, count + 1):
        record, carried = step(period, carried)
        records.append(record)
    return records


# =============================================================================
# Amortization
# =============================================================================

def amortize(
        loan_amt: Decimal | int | float | str,
        annual_rate_pct: Decimal | int | float | str,
        term_years: int,
        payments_per_year: int = DEFAULT_PERIODS_PER_YEAR
) -> list[AmortizationRecord]:
    """
    Generate the level-payment amortization schedule for a fixed-rate loan.

    The payment is computed once with payment() and held constant. For each
    period k = 1..N (N = term_years × payments_per_year):

        PRINCIPALₖ = L                       (k = 1)
                   = ENDING PRINCIPALₖ₋₁     (k > 1)
        INTERESTₖ  = round(PRINCIPALₖ × r)
        ENDING PRINCIPALₖ = PRINCIPALₖ + INTERESTₖ - PMT

    Where r = annual_rate_pct / payments_per_year / 100 and round() is
    half-up to cents. Interest is the only per-period rounding step; the
    ending principal is a sum of cent amounts and therefore exact.

    Because PMT is rounded to cents, the final ending principal is not
    generally zero. Each period contributes at most one cent of rounding,
    carried forward at the periodic rate, so

        |ENDING PRINCIPAL_N| <= 0.01 × [(1 + r)^N - 1] / r

    Args:
        loan_amt: Loan amount (currency)
        annual_rate_pct: Annual rate as percentage (e.g., 10.58)
        term_years: Term in whole years
        payments_per_year: Payments per year (default 12)

    Returns:
        List of N AmortizationRecord, period 1 first

    Raises:
        DomainError: If term_years or payments_per_year is not a positive integer
        DomainError: If loan_amt is negative
        DomainError: If the rate is zero (propagated from payment)
        DomainError: If a balance outgrows the working precision

    Example:
        >>> schedule = amortize(85000, 10.58, 3, 12)
        >>> schedule[0]
        AmortizationRecord(period=1, payment=Decimal('2765.92'),
            principal=Decimal('85000.00'), interest=Decimal('749.42'),
            ending_principal=Decimal('82983.50'))
    """
    require_count(payments_per_year, "payments_per_year")
    require_count(term_years, "term_years")
    loan = to_currency(loan_amt, "loan_amt")
    if loan < ZERO:
        raise DomainError(f"loan_amt must be non-negative, got {loan}")
    rate_pct = to_decimal(annual_rate_pct, "annual_rate_pct")
    pmt = payment(loan, rate_pct, term_years, payments_per_year)

    with localcontext(DECIMAL_CONTEXT):
        r = periodic_rate(rate_pct, payments_per_year)

    def step(period: int, principal: Decimal) -> tuple[AmortizationRecord, Decimal]:
        with localcontext(DECIMAL_CONTEXT):
            interest = to_currency(principal * r)
            ending = to_currency(principal + interest - pmt)
        return AmortizationRecord(
            period=period,
            payment=pmt,
            principal=principal,
            interest=interest,
            ending_principal=ending,
        ), ending

    return scan_periods(term_years * payments_per_year, loan, step)


# =============================================================================
# Compound interest
# =============================================================================

def compound_interest(
        principal: Decimal | int | float | str,
        annual_rate_pct: Decimal | int | float | str,
        term_years: int,
        periods_per_year: int = DEFAULT_PERIODS_PER_YEAR
) -> list[CompoundRecord]:
    """
    Generate the period-by-period growth of a principal under compound interest.

    For each period k = 1..N (N = term_years × periods_per_year):

        STARTₖ    = P                 (k = 1)
                  = NEWₖ₋₁            (k > 1)
        INTERESTₖ = round(STARTₖ × annual_rate_pct / periods_per_year / 100)
        NEWₖ      = STARTₖ + INTERESTₖ

    A zero rate is valid: the principal is carried unchanged through every
    period (a UserWarning is issued).

    Args:
        principal: Initial principal (currency)
        annual_rate_pct: Annual rate as percentage
        term_years: Term in whole years
        periods_per_year: Compounding periods per year (default 12)

    Returns:
        List of N CompoundRecord, period 1 first

    Raises:
        DomainError: If term_years or periods_per_year is not a positive integer
        DomainError: If the periodic rate is at or below -100%
        DomainError: If a balance outgrows the working precision
        Warning: If annual_rate_pct is zero
    """
    require_count(periods_per_year, "periods_per_year")
    require_count(term_years, "term_years")
    start = to_currency(principal, "principal")
    rate_pct = to_decimal(annual_rate_pct, "annual_rate_pct")
    if rate_pct == ZERO:
        warnings.warn("annual_rate_pct is zero, principal is carried unchanged", UserWarning)

    with localcontext(DECIMAL_CONTEXT):
        r = periodic_rate(rate_pct, periods_per_year)
        if ONE + r <= ZERO:
            raise DomainError(f"periodic rate must exceed -100%, got {r * HUNDRED}%")

    def step(period: int, starting: Decimal) -> tuple[CompoundRecord, Decimal]:
        with localcontext(DECIMAL_CONTEXT):
            earned = to_currency(starting * r)
            new = to_currency(starting + earned)
        return CompoundRecord(
            period=period,
            starting_principal=starting,
            interest_earned=earned,
            new_principal=new,
        ), new

    return scan_periods(term_years * periods_per_year, start, step)


# =============================================================================
# Loan Object
# =============================================================================

@dataclass(frozen=True)
class LoanParameters:
    """
    Inputs for one fixed-rate amortization.

    Rate convention: annual_rate is a percentage (10.58 for 10.58%).
    loan_amount is stored at cents.
    """
    loan_amount: Decimal
    annual_rate: Decimal
    term_years: int
    payments_per_year: int = DEFAULT_PERIODS_PER_YEAR

    def __post_init__(self) -> None:
        """Normalise amounts to Decimal and validate counts."""
        # frozen: normalised values are written through object.__setattr__
        object.__setattr__(self, "loan_amount", to_currency(self.loan_amount, "loan_amount"))
        object.__setattr__(self, "annual_rate", to_decimal(self.annual_rate, "annual_rate"))
        if self.loan_amount < ZERO:
            raise DomainError(f"loan_amount must be non-negative, got {self.loan_amount}")
        require_count(self.term_years, "term_years")
        require_count(self.payments_per_year, "payments_per_year")

    @property
    def num_payments(self) -> int:
        """Total number of payments (term_years × payments_per_year)."""
        return self.term_years * self.payments_per_year

    @property
    def rate_per_period(self) -> Decimal:
        """Rate per payment period as a fraction."""
        with localcontext(DECIMAL_CONTEXT):
            return periodic_rate(self.annual_rate, self.payments_per_year)


def payment_from_loan(loan: LoanParameters) -> Decimal:
    """Level payment for a LoanParameters object. See payment()."""
    return payment(loan.loan_amount, loan.annual_rate, loan.term_years, loan.payments_per_year)


def amortize_loan(loan: LoanParameters) -> list[AmortizationRecord]:
    """Amortization schedule for a LoanParameters object. See amortize()."""
    return amortize(loan.loan_amount, loan.annual_rate, loan.term_years, loan.payments_per_year)


# =============================================================================
# Schedule summaries and array views
# =============================================================================

@dataclass(frozen=True)
class AmortizationSummary:
    """Totals over an amortization schedule."""
    num_payments: int
    total_payments: Decimal
    total_interest: Decimal
    total_principal: Decimal
    residual_balance: Decimal


def summarize_amortization(schedule: Sequence[AmortizationRecord]) -> AmortizationSummary:
    """
    Total the payments, interest and principal of an amortization schedule.

    total_principal is the balance reduction actually achieved, so
    total_principal + residual_balance equals the opening principal.

    Raises:
        DomainError: If schedule is empty
    """
    if not schedule:
        raise DomainError("schedule must contain at least one period")
    total_payments = sum((rec.payment for rec in schedule), ZERO)
    total_interest = sum((rec.interest for rec in schedule), ZERO)
    return AmortizationSummary(
        num_payments=len(schedule),
        total_payments=total_payments,
        total_interest=total_interest,
        total_principal=schedule[0].principal - schedule[-1].ending_principal,
        residual_balance=schedule[-1].ending_principal,
    )


@dataclass
class AmortizationArrays:
    """Column view of an amortization schedule (float64 arrays, index k-1 = period k)."""
    period: np.ndarray
    payment: np.ndarray
    principal: np.ndarray
    interest: np.ndarray
    principal_paid: np.ndarray
    ending_principal: np.ndarray


@dataclass
class CompoundArrays:
    """Column view of a compound-interest schedule (float64 arrays, index k-1 = period k)."""
    period: np.ndarray
    starting_principal: np.ndarray
    interest_earned: np.ndarray
    new_principal: np.ndarray


def _column(schedule: Sequence[object], name: str) -> np.ndarray:
    return np.array([float(getattr(rec, name)) for rec in schedule], dtype=float)


def amortization_arrays(schedule: Sequence[AmortizationRecord]) -> AmortizationArrays:
    """Convert an amortization schedule to numpy arrays for vectorised analysis."""
    return AmortizationArrays(
        period=np.array([rec.period for rec in schedule], dtype=int),
        payment=_column(schedule, "payment"),
        principal=_column(schedule, "principal"),
        interest=_column(schedule, "interest"),
        principal_paid=_column(schedule, "principal_paid"),
        ending_principal=_column(schedule, "ending_principal"),
    )


def compound_arrays(schedule: Sequence[CompoundRecord]) -> CompoundArrays:
    """Convert a compound-interest schedule to numpy arrays for vectorised analysis."""
    return CompoundArrays(
        period=np.array([rec.period for rec in schedule], dtype=int),
        starting_principal=_column(schedule, "starting_principal"),
        interest_earned=_column(schedule, "interest_earned"),
        new_principal=_column(schedule, "new_principal"),
    )


def compare_schedules(
        expected: Sequence[AmortizationRecord] | Sequence[CompoundRecord],
        actual: Sequence[AmortizationRecord] | Sequence[CompoundRecord],
        field: str,
        atol: float = 0.01
) -> tuple[bool, float, int]:
    """
    Compare one field of two schedules over their common length.

    Args:
        expected: Reference schedule
        actual: Schedule under test
        field: Record attribute to compare (e.g. "ending_principal")
        atol: Absolute tolerance in currency units (default one cent)

    Returns:
        Tuple of (all_close, max_abs_diff, worst_period); worst_period is
        1-based, 0 when the common length is zero

    Raises:
        DomainError: If field is not an attribute of the records
    """
    min_len = min(len(expected), len(actual))
    if min_len == 0:
        return True, 0.0, 0
    if not hasattr(expected[0], field):
        raise DomainError(f"unknown schedule field {field!r}")
    exp = _column(expected[:min_len], field)
    act = _column(actual[:min_len], field)
    abs_diff = np.abs(exp - act)
    max_abs_diff = float(np.max(abs_diff))
    worst_period = int(np.argmax(abs_diff)) + 1
    all_close = bool(np.allclose(exp, act, rtol=1e-12, atol=atol))
    return all_close, max_abs_diff, worst_period
