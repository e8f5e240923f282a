"""
Domain service: Compound growth simulation.

Projects the value of an investment over a number of months from an
annual rate. The projection is three sequential steps, each rounded to
two decimal places before the next one consumes it:

    1. monthly rate  = ((1 + annual/100) ** (1/12) - 1) * 100
    2. final value   = amount * (1 + monthly/100) ** months
    3. yield percent = (final - amount) / amount * 100

Dropping any intermediate rounding changes the published figures.
All arithmetic is done in Decimal; no floats are involved.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext

from app.domain.advisory.entities import GrowthProjection
from app.domain.advisory.errors import InvalidAmountError, InvalidTermError

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")
ONE = Decimal("1")
MONTHS_PER_YEAR = Decimal("12")
CALCULATION_PRECISION = 28


def round_money(value: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Round a value to two decimal places.

    Args:
        value: Value to round.
        rounding: A ``decimal`` rounding constant. ROUND_HALF_UP rounds
            ties away from zero; ROUND_HALF_EVEN is banker's rounding.
    """
    return value.quantize(CENTS, rounding=rounding)


def has_whole_cents(amount: Decimal) -> bool:
    """Return True if the amount has no more than two decimal places."""
    return amount.normalize().as_tuple().exponent >= -2


def annual_to_monthly_rate(annual_rate: Decimal) -> Decimal:
    """Convert an annual percentage rate to the equivalent monthly rate.

    The result is unrounded.

    Raises:
        ValueError: If the annual rate is below -100%.
    """
    base = ONE + annual_rate / HUNDRED
    if base < 0:
        raise ValueError(f"Annual rate below -100%: {annual_rate}")
    if base == 0:
        return -HUNDRED
    with localcontext() as ctx:
        ctx.prec = CALCULATION_PRECISION
        return (base ** (ONE / MONTHS_PER_YEAR) - ONE) * HUNDRED


def simulate_growth(
    amount: Decimal,
    annual_rate: Decimal,
    term_months: int,
    rounding: str = ROUND_HALF_UP,
) -> GrowthProjection:
    """Project final value and effective yield of an investment.

    Args:
        amount: Principal invested. Must be positive.
        annual_rate: Annual rate in percent; may be negative.
        term_months: Number of months. Must be positive.
        rounding: ``decimal`` rounding constant applied at every step.

    Returns:
        GrowthProjection with every figure rounded to two places.

    Raises:
        InvalidAmountError: If amount is zero or negative.
        InvalidTermError: If term_months is zero or negative.
    """
    if amount <= 0:
        raise InvalidAmountError(amount)
    if term_months <= 0:
        raise InvalidTermError(term_months)

    with localcontext() as ctx:
        ctx.prec = CALCULATION_PRECISION

        monthly_rate = round_money(annual_to_monthly_rate(annual_rate), rounding)
        growth_factor = (ONE + monthly_rate / HUNDRED) ** term_months
        final_value = round_money(amount * growth_factor, rounding)
        effective_yield = round_money(
            (final_value - amount) / amount * HUNDRED, rounding
        )

    return GrowthProjection(
        monthly_rate=monthly_rate,
        final_value=final_value,
        effective_yield=effective_yield,
        term_months=term_months,
    )
