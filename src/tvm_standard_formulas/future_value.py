# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

from decimal import Decimal

from tvm_standard_formulas.conventions import DEFAULT_PERIODS_PER_YEAR
from tvm_standard_formulas.errors import PeriodIndexError
from tvm_standard_formulas.recurrence import compound_interest

__version__ = "0.1.0"


def future_value(
        principal: Decimal | int | float | str,
        annual_rate_pct: Decimal | int | float | str,
        term_years: int,
        periods_per_year: int = DEFAULT_PERIODS_PER_YEAR,
        period: int | None = None
) -> Decimal:
    """
    Value of a principal after a given number of compounding periods.

    Runs compound_interest() for the full term and returns NEW PRINCIPAL of
    the record for the requested period. The schedule is rebuilt on every
    call; nothing is cached.

    Args:
        principal: Initial principal (currency)
        annual_rate_pct: Annual rate as percentage
        term_years: Term in whole years
        periods_per_year: Compounding periods per year (default 12)
        period: 1-based period to read (default None = last period of the term)

    Returns:
        New principal at the end of the requested period

    Raises:
        DomainError: If term_years or periods_per_year is not a positive integer
        PeriodIndexError: If period < 1 or period > term_years × periods_per_year

    Example:
        >>> future_value(85000, 10.58, 3, 12, 13)
        Decimal('95274.81')
    """
    schedule = compound_interest(principal, annual_rate_pct, term_years, periods_per_year)
    if period is None:
        return schedule[-1].new_principal
    if isinstance(period, bool) or not isinstance(period, int):
        raise PeriodIndexError(f"period must be an integer, got {period!r}")
    if not 1 <= period <= len(schedule):
        raise PeriodIndexError(f"period must be in [1, {len(schedule)}], got {period}")
    return schedule[period - 1].new_principal
