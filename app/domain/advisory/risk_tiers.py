"""
Domain service: Risk tier classification.

Maps a continuous product risk score onto the three fixed tiers.
Both thresholds are inclusive on the lower tier.
"""

from decimal import Decimal

from app.domain.advisory.entities import RiskTier

LOW_RISK_CEILING = Decimal("1.5")
MEDIUM_RISK_CEILING = Decimal("3.0")


def classify_risk(risk: Decimal) -> RiskTier:
    """Return the risk tier of a risk score.

    Args:
        risk: Product risk score.

    Returns:
        LOW up to 1.5, MEDIUM up to 3.0, HIGH above.
    """
    if risk <= LOW_RISK_CEILING:
        return RiskTier.LOW
    if risk <= MEDIUM_RISK_CEILING:
        return RiskTier.MEDIUM
    return RiskTier.HIGH
