"""
Domain service: Portfolio tier aggregation.

Summarizes a client's investment history per risk tier. Works on an
already materialized list of investments; fetching them is the
caller's job.
"""

from collections.abc import Iterable
from decimal import Decimal

from app.domain.advisory.entities import (
    InvestmentRecord,
    PortfolioTierSummary,
    RiskTier,
    TierTotals,
)
from app.domain.advisory.risk_tiers import classify_risk


def aggregate_by_tier(
    investments: Iterable[InvestmentRecord],
) -> PortfolioTierSummary:
    """Sum invested amounts and investment counts per risk tier.

    Args:
        investments: Investments carrying their product's risk score.

    Returns:
        PortfolioTierSummary; tiers with no investments are (0, 0).
    """
    totals: dict[RiskTier, Decimal] = {tier: Decimal("0") for tier in RiskTier}
    counts: dict[RiskTier, int] = {tier: 0 for tier in RiskTier}

    for investment in investments:
        tier = classify_risk(investment.product_risk)
        totals[tier] += investment.amount
        counts[tier] += 1

    return PortfolioTierSummary(
        low=TierTotals(totals[RiskTier.LOW], counts[RiskTier.LOW]),
        medium=TierTotals(totals[RiskTier.MEDIUM], counts[RiskTier.MEDIUM]),
        high=TierTotals(totals[RiskTier.HIGH], counts[RiskTier.HIGH]),
    )
