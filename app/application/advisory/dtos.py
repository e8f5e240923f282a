"""
Data Transfer Objects for the advisory application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


# ------------------------------------------------------------------
# Investment DTOs
# ------------------------------------------------------------------


@dataclass(frozen=True)
class RecordInvestmentCommand:
    """Input DTO for recording an investment.

    Attributes:
        client_id: ID of the investing client.
        product_id: ID of the product invested in.
        amount: Amount invested (> 0).
        invested_at: When the investment happened. Defaults to now (UTC).
        yield_rate: Assigned yield. Defaults to the applicable band's rate.
    """

    client_id: int
    product_id: int
    amount: Decimal
    invested_at: datetime | None = None
    yield_rate: Decimal | None = None


@dataclass(frozen=True)
class InvestmentResult:
    """Output DTO for a single investment history entry.

    Attributes:
        id: Investment ID.
        client_id: ID of the owning client.
        product_category: Category of the product invested in.
        amount: Amount invested.
        yield_rate: Assigned yield.
        invested_on: Date of the investment.
    """

    id: int
    client_id: int
    product_category: str
    amount: Decimal
    yield_rate: Decimal
    invested_on: date


@dataclass(frozen=True)
class RecordInvestmentResult:
    """Output DTO for a recorded investment.

    Attributes:
        investment: The persisted investment.
        previous_max_risk: Client ceiling before the investment.
        new_max_risk: Client ceiling after the adjustment.
    """

    investment: InvestmentResult
    previous_max_risk: Decimal
    new_max_risk: Decimal


@dataclass(frozen=True)
class GetInvestmentHistoryQuery:
    """Input DTO for a client's investment history.

    Attributes:
        client_id: ID of the client.
        investment_id: Optional single investment to return.
    """

    client_id: int
    investment_id: int | None = None


# ------------------------------------------------------------------
# Simulation DTOs
# ------------------------------------------------------------------


@dataclass(frozen=True)
class SimulateInvestmentCommand:
    """Input DTO for simulating an investment.

    Exactly one of ``product_id`` and ``product_category`` must be set.

    Attributes:
        client_id: ID of the client requesting the simulation.
        amount: Amount to invest (> 0).
        term_months: Investment term in months (> 0).
        product_id: Specific product to simulate.
        product_category: Category whose first product is simulated.
    """

    client_id: int
    amount: Decimal
    term_months: int
    product_id: int | None = None
    product_category: str | None = None


@dataclass(frozen=True)
class ValidatedProductResult:
    """Product used by a simulation.

    Attributes:
        id: Product ID.
        name: Product name.
        category: Product category.
        annual_rate: Applicable annual rate, rounded to two places.
        risk_tier: Risk tier label (Low/Medium/High).
    """

    id: int
    name: str
    category: str
    annual_rate: Decimal
    risk_tier: str


@dataclass(frozen=True)
class ProjectionResult:
    """Projected outcome of a simulation.

    Attributes:
        final_value: Projected value at the end of the term.
        effective_yield: Percentage gain over the term.
        term_months: Term in months.
    """

    final_value: Decimal
    effective_yield: Decimal
    term_months: int


@dataclass(frozen=True)
class SimulationOutcome:
    """Output DTO for a simulation.

    Attributes:
        product: The validated product.
        projection: The projected result.
        simulated_at: When the simulation ran.
        audit_recorded: False if the audit record could not be stored.
    """

    product: ValidatedProductResult
    projection: ProjectionResult
    simulated_at: datetime
    audit_recorded: bool


@dataclass(frozen=True)
class SimulationHistoryResult:
    """Output DTO for one simulation audit record."""

    id: int
    client_id: int
    product_name: str
    amount: Decimal
    final_value: Decimal
    term_months: int
    simulated_on: date


@dataclass(frozen=True)
class SimulationDailyResult:
    """Output DTO for simulations grouped by product and day."""

    product_name: str
    simulated_on: date
    simulation_count: int
    average_final_value: Decimal


# ------------------------------------------------------------------
# Client profile DTOs
# ------------------------------------------------------------------


@dataclass(frozen=True)
class ClientProfileCommand:
    """Input DTO for registering a client or changing its profile.

    Attributes:
        client_id: ID of the client.
        profile_id: ID of the risk profile.
    """

    client_id: int
    profile_id: int


@dataclass(frozen=True)
class ClientProfileResult:
    """Output DTO describing a client's risk profile.

    Attributes:
        client_id: ID of the client.
        profile_name: Name of the linked profile.
        profile_max_risk: Ceiling defined by the profile.
        description: Profile description.
        max_risk: The client's own, possibly drifted, ceiling.
    """

    client_id: int
    profile_name: str | None
    profile_max_risk: Decimal | None
    description: str | None
    max_risk: Decimal


# ------------------------------------------------------------------
# Product DTOs
# ------------------------------------------------------------------


@dataclass(frozen=True)
class YieldBandResult:
    """Output DTO for a yield band."""

    annual_rate: Decimal
    range_min: Decimal
    range_max: Decimal


@dataclass(frozen=True)
class ProductResult:
    """Output DTO for a catalog product."""

    id: int
    name: str
    category: str
    risk: Decimal
    risk_tier: str
    bands: list[YieldBandResult]


@dataclass(frozen=True)
class RecommendedProductResult:
    """Output DTO for a product recommended to a risk profile.

    Attributes:
        id: Product ID.
        name: Product name.
        category: Product category.
        twelve_month_yield: Rate of the product's first yield band.
        risk_tier: Risk tier label (Low/Medium/High).
    """

    id: int
    name: str
    category: str
    twelve_month_yield: Decimal
    risk_tier: str
