"""
Domain service: Adaptive risk-limit adjustment.

Nudges a client's maximum permitted risk once per recorded investment.

Two branches, each gated on the client's current ceiling:
    - conservative client (ceiling <= 1.5) investing above the ceiling:
      ceiling rises when medium/high exposure outweighs low exposure.
    - aggressive client (ceiling > 3.0) investing below the ceiling:
      ceiling falls when medium/low exposure outweighs high exposure.

Exposure is measured twice, by invested amount and by number of
investments, and each measure contributes its own 0.05 step.
Everything else leaves the ceiling untouched.
"""

from decimal import Decimal

from app.domain.advisory.entities import PortfolioTierSummary, TierTotals

STEP = Decimal("0.05")
NO_STEP = Decimal("0")
CONSERVATIVE_CEILING = Decimal("1.5")
AGGRESSIVE_FLOOR = Decimal("3.0")
MIN_ADJUSTED_RISK = Decimal("1.5")
MAX_RISK = Decimal("5.0")
TWO = Decimal("2")


def _step(
    counterweight: TierTotals, neighbour: TierTotals, dominant: TierTotals
) -> Decimal:
    """Return the size of the nudge for one branch.

    ``neighbour`` counts once, ``dominant`` counts double, and both are
    compared with ``counterweight``.
    """
    invested_ratio = (
        neighbour.total + TWO * dominant.total
    ) / counterweight.divisor_total
    movement_ratio = Decimal(
        neighbour.count + 2 * dominant.count
    ) / Decimal(counterweight.divisor_count)

    step = STEP if invested_ratio > 1 else NO_STEP
    step += STEP if movement_ratio > 1 else NO_STEP
    return step


def adjust_max_risk(
    current_max_risk: Decimal,
    proposed_risk: Decimal,
    summary: PortfolioTierSummary,
) -> Decimal:
    """Compute a client's new maximum risk.

    Args:
        current_max_risk: The client's current ceiling.
        proposed_risk: Risk score of the product being invested in.
        summary: The client's existing investments by tier.

    Returns:
        The new ceiling. Equal to ``current_max_risk`` when no rule applies.
    """
    if proposed_risk > current_max_risk and current_max_risk <= CONSERVATIVE_CEILING:
        increment = _step(summary.low, summary.medium, summary.high)
        return min(current_max_risk + increment, MAX_RISK)

    if proposed_risk < current_max_risk and current_max_risk > AGGRESSIVE_FLOOR:
        decrement = _step(summary.high, summary.medium, summary.low)
        return max(current_max_risk - decrement, MIN_ADJUSTED_RISK)

    return current_max_risk
