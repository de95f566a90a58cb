# Requires Python 3.12+
"""
Typed errors for the time-value-of-money formulas.

Exports
-------
- DomainError       (a ValueError)
- PeriodIndexError  (an IndexError)
- TVM_ERRORS
- decimal_error_guard(operation)
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import DivisionByZero, InvalidOperation, Overflow

__version__ = "0.1.0"


# =============================================================================
# Exception types
# =============================================================================

class DomainError(ValueError):
    """Parameters for which a formula is undefined.

    Raised for zero or negative payment frequencies and period counts, the
    zero-growth denominator of the payment formula, non-finite inputs and
    implied rates that cannot be solved for.
    """


class PeriodIndexError(IndexError):
    """A 1-based period index outside the generated schedule."""


# Selector tuple for grouped exception handling
TVM_ERRORS = (
    DomainError,
    PeriodIndexError,
)


# =============================================================================
# Guards
# =============================================================================

@contextmanager
def decimal_error_guard(operation: str) -> Iterator[None]:
    """
    Re-raise decimal arithmetic failures as DomainError.

    InvalidOperation (a result needing more digits than the working
    precision), Overflow and DivisionByZero all mean the inputs are outside
    what the formula can represent.
    """
    try:
        yield
    except (InvalidOperation, Overflow, DivisionByZero) as e:
        raise DomainError(
            f"{operation} is not representable at working precision. Original error: {e!r}"
        ) from e


__all__ = [
    "DomainError",
    "PeriodIndexError",
    "TVM_ERRORS",
    "decimal_error_guard",
]
