# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

from decimal import Decimal, localcontext

from scipy.optimize import brentq

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
from tvm_standard_formulas.errors import DomainError, decimal_error_guard

__version__ = "0.1.0"


# =============================================================================
# Closed-form formulas: payment, simple interest, present value
# =============================================================================

def payment(
        loan_amt: Decimal | int | float | str,
        annual_rate_pct: Decimal | int | float | str,
        term_years: int,
        payments_per_year: int = DEFAULT_PERIODS_PER_YEAR
) -> Decimal:
    """
    Calculate the level periodic payment that fully amortizes a fixed-rate loan.

    Formula:
        PMT = L × r × (1 + r)^n / [(1 + r)^n - 1]

    Where:
        L   = Loan amount
        r   = Periodic rate (annual_rate_pct / payments_per_year / 100)
        n   = Number of payments (term_years × payments_per_year)

    The growth factor G = (1 + r)^n is computed once at working precision;
    only the final payment is rounded to cents (half-up).

    Author's Note:
    --------------
    Dividing numerator and denominator by G gives the annuity-factor form

        PMT = L × r / [1 - (1 + r)^-n]

    i.e. the loan amount divided by the present value of n payments of 1.
    At r = 0 both forms are 0/0; this function does not substitute the
    straight-line amount L / n for that case.

    IMPLEMENTATION:
    ---------------
    Args:
        loan_amt: Loan amount (currency, rounded to cents on entry)
        annual_rate_pct: Annual rate as percentage (e.g., 10.58 for 10.58%)
        term_years: Term in whole years
        payments_per_year: Payments per year (default 12)

    Returns:
        Periodic payment rounded to 2 decimals

    Raises:
        DomainError: If payments_per_year or term_years is not a positive integer
        DomainError: If the periodic rate is zero ((1 + r)^n == 1)
        DomainError: If the periodic rate is -100% or lower
        DomainError: If the loan or growth factor exceeds the working precision

    Example:
        >>> payment(85000, 10.58, 3, 12)
        Decimal('2765.92')
    """
    loan = to_currency(loan_amt, "loan_amt")
    rate_pct = to_decimal(annual_rate_pct, "annual_rate_pct")
    require_count(payments_per_year, "payments_per_year")
    require_count(term_years, "term_years")
    num_payments = term_years * payments_per_year

    with localcontext(DECIMAL_CONTEXT):
        r = periodic_rate(rate_pct, payments_per_year)
        if ONE + r <= ZERO:
            raise DomainError(f"periodic rate must exceed -100%, got {r * HUNDRED}%")
        with decimal_error_guard(f"growth factor (1 + {r})^{num_payments}"):
            growth = (ONE + r) ** num_payments
        if growth == ONE:
            raise DomainError(
                f"payment is undefined when (1 + r)^n == 1, "
                f"got annual_rate_pct={rate_pct}, n={num_payments}"
            )
        amount = loan * r * growth / (growth - ONE)
        return to_currency(amount)


def simple_interest(
        principal: Decimal | int | float | str,
        annual_rate_pct: Decimal | int | float | str
) -> Decimal:
    """
    Principal plus one year of simple interest.

    Formula:
        A = P × (1 + annual_rate_pct / 100)

    Args:
        principal: Principal (currency)
        annual_rate_pct: Annual rate as percentage

    Returns:
        Accumulated amount at currency precision
    """
    p = to_currency(principal, "principal")
    rate_pct = to_decimal(annual_rate_pct, "annual_rate_pct")
    with localcontext(DECIMAL_CONTEXT):
        return to_currency(p * (ONE + rate_pct / HUNDRED))


def present_value(
        future_val: Decimal | int | float | str,
        rate_per_period: Decimal | int | float | str,
        periods: int
) -> Decimal:
    """
    Discount a single future amount back over a whole number of periods.

    Formula:
        PV = FV / (1 + i/100)^N

    Where:
        i   = Rate per period as percentage
        N   = Number of periods (0 returns FV unchanged)

    Args:
        future_val: Future amount (currency)
        rate_per_period: Rate per period as percentage (e.g., 10.58)
        periods: Number of periods, N >= 0

    Returns:
        Present value rounded to 2 decimals

    Raises:
        DomainError: If periods is not a non-negative integer
        DomainError: If rate_per_period is -100% or lower
        DomainError: If the discount factor overflows the working precision

    Example:
        >>> present_value(100000, 10.58, 12)
        Decimal('29914.45')
    """
    fv = to_currency(future_val, "future_val")
    rate_pct = to_decimal(rate_per_period, "rate_per_period")
    require_count(periods, "periods", minimum=0)

    with localcontext(DECIMAL_CONTEXT):
        base = ONE + rate_pct / HUNDRED
        if base <= ZERO:
            raise DomainError(f"rate_per_period must exceed -100%, got {rate_pct}%")
        with decimal_error_guard(f"discount factor {base}^{periods}"):
            discounted = fv / base ** periods
        return to_currency(discounted)


def net_present_value(
        future_val: Decimal | int | float | str,
        rate_per_period: Decimal | int | float | str,
        periods: int,
        original_investment: Decimal | int | float | str
) -> Decimal:
    """
    Present value of a future amount less the original investment.

    Formula:
        NPV = PV(FV, i, N) - I₀

    Both terms are held at cents, so the difference carries no further
    rounding: net_present_value(fv, i, n, inv) == present_value(fv, i, n) - inv.

    Args:
        future_val: Future amount (currency)
        rate_per_period: Rate per period as percentage
        periods: Number of periods, N >= 0
        original_investment: Amount invested today (currency)

    Returns:
        Net present value rounded to 2 decimals (negative when the
        investment exceeds the discounted future amount)

    Raises:
        DomainError: Propagated from present_value

    Example:
        >>> net_present_value(100000, 10.58, 12, 80000)
        Decimal('-50085.55')
    """
    investment = to_currency(original_investment, "original_investment")
    pv = present_value(future_val, rate_per_period, periods)
    with localcontext(DECIMAL_CONTEXT):
        return to_currency(pv - investment)


# =============================================================================
# Implied rate (inverse of payment)
# =============================================================================

def _level_payment(
        annual_rate_pct: float,
        loan_amt: float,
        num_payments: int,
        payments_per_year: int
) -> float:
    """Unrounded level payment in float arithmetic (straight-line at 0%)."""
    r = annual_rate_pct / payments_per_year / 100.0
    if r == 0.0:
        return loan_amt / num_payments
    return loan_amt * r / (1.0 - (1.0 + r) ** (-num_payments))


def implied_annual_rate(
        loan_amt: Decimal | int | float | str,
        payment_amt: Decimal | int | float | str,
        term_years: int,
        payments_per_year: int = DEFAULT_PERIODS_PER_YEAR,
        tolerance: float = 1e-10,
        max_iterations: int = 200
) -> float:
    """
    Solve for the annual rate at which a level payment amortizes a loan.

    This inverts payment(): find rate such that

        L × r / [1 - (1 + r)^-n] - PMT = 0,   r = rate / payments_per_year / 100

    The left side is strictly increasing in rate, equal to L/n - PMT at 0%,
    so a root exists in (0, 1000]% whenever PMT > L/n. Brent's method
    (scipy.optimize.brentq) is used for the search.

    Since payment() rounds to cents, payment(L, implied_annual_rate(L, P, t), t)
    reproduces P, while the returned rate itself is not rounded.

    Args:
        loan_amt: Loan amount (currency), must be positive
        payment_amt: Periodic payment (currency)
        term_years: Term in whole years
        payments_per_year: Payments per year (default 12)
        tolerance: Absolute tolerance on the rate, in percentage points
        max_iterations: Maximum iterations for Brent's method

    Returns:
        Annual rate as percentage (e.g., 10.58)

    Raises:
        DomainError: If loan_amt is not positive
        DomainError: If payment_amt does not exceed loan_amt / n
        DomainError: If no rate in (0, 1000]% reproduces the payment
    """
    loan = to_currency(loan_amt, "loan_amt")
    pmt = to_currency(payment_amt, "payment_amt")
    require_count(payments_per_year, "payments_per_year")
    require_count(term_years, "term_years")
    num_payments = term_years * payments_per_year

    if loan <= ZERO:
        raise DomainError(f"loan_amt must be positive, got {loan}")
    if pmt * num_payments <= loan:
        raise DomainError(
            f"payment_amt {pmt} does not exceed straight-line repayment of "
            f"{loan} over {num_payments} payments; no positive rate exists"
        )

    def objective(rate: float) -> float:
        return _level_payment(rate, float(loan), num_payments, payments_per_year) - float(pmt)

    try:
        return brentq(objective, 0.0, 1000.0, xtol=tolerance, maxiter=max_iterations)
    except (ValueError, RuntimeError) as e:
        # brentq raises ValueError when the bracket has no sign change and
        # RuntimeError when it fails to converge
        raise DomainError(
            f"Could not find an annual rate for loan_amt={loan}, payment_amt={pmt}, "
            f"n={num_payments}. Original error: {e}"
        ) from e
