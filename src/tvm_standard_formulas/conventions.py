# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""
Numeric conventions shared by every formula in the package.

Currency values are held as ``decimal.Decimal`` at two decimal places. Rates
are annual (or per-period) percentages, e.g. ``10.58`` for 10.58%. Term,
frequency and period counts are plain integers.

All formula arithmetic runs inside ``localcontext(DECIMAL_CONTEXT)`` so the
caller's global decimal context never changes a result.
"""

from __future__ import annotations

from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_EVEN, ROUND_HALF_UP, localcontext

from tvm_standard_formulas.errors import DomainError, decimal_error_guard

__version__ = "0.1.0"


# =============================================================================
# Configuration
# =============================================================================

CENT = Decimal("0.01")                  # currency quantum
CURRENCY_ROUNDING = ROUND_HALF_UP       # applied to every stored currency value
DEFAULT_PERIODS_PER_YEAR = 12

# Working precision for intermediate results (growth factors, periodic rates).
# Only currency results are rounded, with CURRENCY_ROUNDING.
DECIMAL_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")


# =============================================================================
# Coercion and validation
# =============================================================================

def to_decimal(value: Decimal | int | float | str, name: str = "value") -> Decimal:
    """
    Convert a numeric input to Decimal.

    Floats are converted through their shortest repr, so ``10.58`` becomes
    ``Decimal("10.58")`` rather than its binary expansion.

    Raises:
        DomainError: If value is a bool, not numeric, NaN or infinite
    """
    if isinstance(value, bool):
        raise DomainError(f"{name} must be numeric, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise DomainError(f"{name} must be numeric, got {value!r}") from e
    else:
        raise DomainError(f"{name} must be numeric, got {type(value).__name__}")
    if not result.is_finite():
        raise DomainError(f"{name} must be finite, got {value!r}")
    return result


def to_currency(value: Decimal | int | float | str, name: str = "value") -> Decimal:
    """
    Round a value to currency precision (2 decimals, half-up).

    Quantizing runs in DECIMAL_CONTEXT, so amounts up to 26 integer digits
    are accepted whatever the caller's context.

    Raises:
        DomainError: If value is not numeric or finite
        DomainError: If value has more integer digits than the working precision allows
    """
    amount = to_decimal(value, name)
    with localcontext(DECIMAL_CONTEXT), decimal_error_guard(f"{name}={amount}"):
        return amount.quantize(CENT, rounding=CURRENCY_ROUNDING)


def require_count(value: int, name: str, minimum: int = 1) -> int:
    """
    Validate an integer count (term, frequency or period index).

    Raises:
        DomainError: If value is not an int (bools and floats are rejected)
        DomainError: If value is below minimum
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise DomainError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise DomainError(f"{name} must be >= {minimum}, got {value}")
    return value


def periodic_rate(annual_rate_pct: Decimal, periods_per_year: int) -> Decimal:
    """Per-period rate as a fraction: annual % / periods per year / 100."""
    return annual_rate_pct / Decimal(periods_per_year) / HUNDRED
