"""
Pydantic schemas for advisory API request/response validation.

These schemas enforce input validation and define the API contract.
No business logic belongs here.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

MAX_TERM_MONTHS = 600


class ErrorResponse(BaseModel):
    """Standard error response returned by the error handlers."""

    error: str
    detail: str | None = None


class HealthResponse(BaseModel):
    """Response schema for the health endpoint."""

    status: str
    version: str
    database: str


# ------------------------------------------------------------------
# Product schemas
# ------------------------------------------------------------------


class YieldBandItem(BaseModel):
    """A yield band of a product."""

    annual_rate: Decimal
    range_min: Decimal
    range_max: Decimal


class ProductItem(BaseModel):
    """A catalog product with its yield bands in configured order."""

    id: int
    name: str
    category: str
    risk: Decimal
    risk_tier: str
    bands: list[YieldBandItem]


class RecommendedProductItem(BaseModel):
    """A product suitable for a risk profile."""

    id: int
    name: str
    category: str
    twelve_month_yield: Decimal
    risk_tier: str


# ------------------------------------------------------------------
# Client profile schemas
# ------------------------------------------------------------------


class RegisterClientRequest(BaseModel):
    """Request schema for registering a client under a risk profile.

    Attributes:
        client_id: ID of the new client.
        profile_id: ID of the risk profile to link.
    """

    client_id: int = Field(..., gt=0, description="Client ID")
    profile_id: int = Field(..., gt=0, description="Risk profile ID")


class ChangeClientProfileRequest(BaseModel):
    """Request schema for linking a client to another risk profile."""

    profile_id: int = Field(..., gt=0, description="Risk profile ID")


class ClientProfileResponse(BaseModel):
    """A client's risk profile and effective ceiling."""

    client_id: int
    profile_name: str | None
    profile_max_risk: Decimal | None
    description: str | None
    max_risk: Decimal


# ------------------------------------------------------------------
# Investment schemas
# ------------------------------------------------------------------


class RecordInvestmentRequest(BaseModel):
    """Request schema for recording an investment.

    Attributes:
        client_id: ID of the investing client.
        product_id: ID of the product.
        amount: Amount invested (> 0).
        yield_rate: Assigned yield. Defaults to the applicable band rate.
        invested_at: When the investment happened. Defaults to now.
    """

    client_id: int = Field(..., gt=0, description="Client ID")
    product_id: int = Field(..., gt=0, description="Product ID")
    amount: Decimal = Field(
        ..., gt=0, decimal_places=2, description="Amount invested"
    )
    yield_rate: Decimal | None = Field(
        default=None, description="Assigned annual yield in percent"
    )
    invested_at: datetime | None = Field(
        default=None, description="Investment timestamp"
    )


class InvestmentItem(BaseModel):
    """A single investment history entry."""

    id: int
    client_id: int
    product_category: str
    amount: Decimal
    yield_rate: Decimal
    invested_on: date


class RecordInvestmentResponse(BaseModel):
    """Response schema for a recorded investment."""

    investment: InvestmentItem
    previous_max_risk: Decimal
    new_max_risk: Decimal


# ------------------------------------------------------------------
# Simulation schemas
# ------------------------------------------------------------------


class SimulateByCategoryRequest(BaseModel):
    """Request schema for simulating the first product of a category.

    Attributes:
        client_id: ID of the client.
        amount: Amount to invest (> 0).
        term_months: Term in months.
        product_category: Category name, case-insensitive (e.g. ``CDB``).
    """

    client_id: int = Field(..., gt=0, description="Client ID")
    amount: Decimal = Field(
        ..., gt=0, decimal_places=2, description="Amount to invest"
    )
    term_months: int = Field(
        ..., ge=1, le=MAX_TERM_MONTHS, description="Term in months"
    )
    product_category: str = Field(
        ..., min_length=1, max_length=20, description="Product category"
    )


class SimulateByProductRequest(BaseModel):
    """Request schema for simulating a specific product."""

    client_id: int = Field(..., gt=0, description="Client ID")
    amount: Decimal = Field(
        ..., gt=0, decimal_places=2, description="Amount to invest"
    )
    term_months: int = Field(
        ..., ge=1, le=MAX_TERM_MONTHS, description="Term in months"
    )
    product_id: int = Field(..., gt=0, description="Product ID")


class ValidatedProductItem(BaseModel):
    """The product a simulation ran against."""

    id: int
    name: str
    category: str
    annual_rate: Decimal
    risk_tier: str


class ProjectionItem(BaseModel):
    """Projected outcome of a simulation."""

    final_value: Decimal
    effective_yield: Decimal
    term_months: int


class SimulationResponse(BaseModel):
    """Response schema for simulation endpoints.

    ``audit_recorded`` is false when the result was computed but could
    not be stored in the audit trail.
    """

    validated_product: ValidatedProductItem
    projection: ProjectionItem
    simulated_at: datetime
    audit_recorded: bool


class SimulationHistoryItem(BaseModel):
    """One stored simulation."""

    id: int
    client_id: int
    product_name: str
    amount: Decimal
    final_value: Decimal
    term_months: int
    simulated_on: date


class SimulationDailyItem(BaseModel):
    """Simulations of one product on one day."""

    product_name: str
    simulated_on: date
    simulation_count: int
    average_final_value: Decimal
