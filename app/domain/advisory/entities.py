"""
Domain entities for the advisory bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
Monetary amounts, rates and risk scores are always Decimal.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0")


class ProductCategory(Enum):
    """Category of a financial product in the catalog."""

    CDB = "CDB"
    RDB = "RDB"
    LCI = "LCI"
    LCA = "LCA"
    FUND = "Fund"

    @classmethod
    def parse(cls, raw: str) -> "ProductCategory":
        """Resolve a category from its name or value, ignoring case.

        Raises:
            ValueError: If no category matches.
        """
        wanted = raw.strip().lower()
        for category in cls:
            if wanted in (category.name.lower(), category.value.lower()):
                return category
        raise ValueError(f"Unknown product category: {raw}")


class RiskTier(Enum):
    """Discrete risk tier derived from a continuous risk score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class YieldBand:
    """Annual rate applicable to an inclusive range of invested amounts."""

    id: int
    product_id: int
    annual_rate: Decimal
    range_min: Decimal
    range_max: Decimal

    def covers(self, amount: Decimal) -> bool:
        """Return True if the amount lies within [range_min, range_max]."""
        return self.range_min <= amount <= self.range_max


@dataclass(frozen=True)
class Product:
    """A financial product with its risk score and ordered yield bands."""

    id: int
    name: str
    category: ProductCategory
    risk: Decimal
    bands: tuple[YieldBand, ...] = ()


@dataclass(frozen=True)
class RiskProfile:
    """A named risk profile and the ceiling risk its clients start from."""

    id: int
    name: str
    description: str
    max_risk: Decimal


@dataclass(frozen=True)
class Client:
    """A client linked to a risk profile.

    ``max_risk`` is seeded from the profile's ceiling when the client is
    registered and afterwards drifts on its own through risk-limit
    adjustments. The profile itself is never modified.

    ``version`` counts the investments recorded for the client and
    guards concurrent adjustments.
    """

    id: int
    profile_id: int
    max_risk: Decimal
    version: int = 0


@dataclass(frozen=True)
class InvestmentRecord:
    """A recorded investment with a snapshot of its product's risk."""

    client_id: int
    product_id: int
    amount: Decimal
    yield_rate: Decimal
    invested_at: datetime
    product_category: ProductCategory
    product_risk: Decimal
    id: Optional[int] = None


@dataclass(frozen=True)
class SimulationRecord:
    """Audit trail entry for a single investment simulation."""

    client_id: int
    product_id: int
    product_name: str
    amount: Decimal
    final_value: Decimal
    effective_yield: Decimal
    term_months: int
    simulated_on: date
    id: Optional[int] = None


@dataclass(frozen=True)
class TierTotals:
    """Sum of invested amounts and number of investments for one tier."""

    total: Decimal = ZERO
    count: int = 0

    @property
    def divisor_total(self) -> Decimal:
        """Total usable as a denominator: 1 when no amount was invested."""
        return self.total if self.total != ZERO else Decimal("1")

    @property
    def divisor_count(self) -> int:
        """Count usable as a denominator: 1 when there are no investments."""
        return self.count if self.count != 0 else 1


@dataclass(frozen=True)
class PortfolioTierSummary:
    """A client's historical investments broken down by risk tier."""

    low: TierTotals = field(default_factory=TierTotals)
    medium: TierTotals = field(default_factory=TierTotals)
    high: TierTotals = field(default_factory=TierTotals)


@dataclass(frozen=True)
class GrowthProjection:
    """Result of a compound growth simulation.

    All values are already rounded to two decimal places.
    """

    monthly_rate: Decimal
    final_value: Decimal
    effective_yield: Decimal
    term_months: int


@dataclass(frozen=True)
class SimulationDailySummary:
    """Simulations of one product on one day, grouped for reporting."""

    product_name: str
    simulated_on: date
    simulation_count: int
    average_final_value: Decimal
