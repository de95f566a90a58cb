# Requires Python 3.12+
"""
TVM Standard Formulas — loan payments, amortization, compound interest,
present value and future value.

Currency amounts are decimal.Decimal at cents (half-up); rates are
percentages (10.58 for 10.58%).
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from tvm_standard_formulas.errors import (
    DomainError,
    PeriodIndexError,
    TVM_ERRORS,
)

# Conventions
from tvm_standard_formulas.conventions import (
    CENT,
    CURRENCY_ROUNDING,
    DEFAULT_PERIODS_PER_YEAR,
    to_currency,
)

# Closed-form formulas
from tvm_standard_formulas.closed_form import (
    payment,
    simple_interest,
    present_value,
    net_present_value,
    implied_annual_rate,
)

# Period recurrences
from tvm_standard_formulas.recurrence import (
    AmortizationRecord,
    CompoundRecord,
    scan_periods,
    amortize,
    compound_interest,
    LoanParameters,
    payment_from_loan,
    amortize_loan,
    AmortizationSummary,
    summarize_amortization,
    AmortizationArrays,
    CompoundArrays,
    amortization_arrays,
    compound_arrays,
    compare_schedules,
)

# Future value
from tvm_standard_formulas.future_value import future_value

__all__ = [
    "__version__",
    # Errors
    "DomainError",
    "PeriodIndexError",
    "TVM_ERRORS",
    # Conventions
    "CENT",
    "CURRENCY_ROUNDING",
    "DEFAULT_PERIODS_PER_YEAR",
    "to_currency",
    # Closed-form formulas
    "payment",
    "simple_interest",
    "present_value",
    "net_present_value",
    "implied_annual_rate",
    # Period recurrences
    "AmortizationRecord",
    "CompoundRecord",
    "scan_periods",
    "amortize",
    "compound_interest",
    "LoanParameters",
    "payment_from_loan",
    "amortize_loan",
    "AmortizationSummary",
    "summarize_amortization",
    "AmortizationArrays",
    "CompoundArrays",
    "amortization_arrays",
    "compound_arrays",
    "compare_schedules",
    # Future value
    "future_value",
]
