"""
FastAPI router for the advisory bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, Request

from app.application.advisory.change_client_profile import ChangeClientProfileUseCase
from app.application.advisory.dtos import (
    ClientProfileCommand,
    ClientProfileResult,
    GetInvestmentHistoryQuery,
    InvestmentResult,
    RecordInvestmentCommand,
    SimulateInvestmentCommand,
    SimulationOutcome,
)
from app.application.advisory.get_client_profile import GetClientProfileUseCase
from app.application.advisory.get_investment_history import (
    GetInvestmentHistoryUseCase,
)
from app.application.advisory.get_recommended_products import (
    GetRecommendedProductsUseCase,
)
from app.application.advisory.get_simulations_by_product_day import (
    GetSimulationsByProductDayUseCase,
)
from app.application.advisory.list_client_profiles import ListClientProfilesUseCase
from app.application.advisory.list_products import ListProductsUseCase
from app.application.advisory.list_simulations import ListSimulationsUseCase
from app.application.advisory.record_investment import RecordInvestmentUseCase
from app.application.advisory.register_client import RegisterClientUseCase
from app.application.advisory.simulate_investment import SimulateInvestmentUseCase
from app.interfaces.advisory.dependencies import (
    get_change_client_profile_use_case,
    get_client_profile_use_case,
    get_investment_history_use_case,
    get_list_client_profiles_use_case,
    get_list_products_use_case,
    get_list_simulations_use_case,
    get_recommended_products_use_case,
    get_record_investment_use_case,
    get_register_client_use_case,
    get_simulate_investment_use_case,
    get_simulations_by_product_day_use_case,
)
from app.interfaces.advisory.schemas import (
    ChangeClientProfileRequest,
    ClientProfileResponse,
    ErrorResponse,
    InvestmentItem,
    ProductItem,
    ProjectionItem,
    RecommendedProductItem,
    RecordInvestmentRequest,
    RecordInvestmentResponse,
    RegisterClientRequest,
    SimulateByCategoryRequest,
    SimulateByProductRequest,
    SimulationDailyItem,
    SimulationHistoryItem,
    SimulationResponse,
    ValidatedProductItem,
    YieldBandItem,
)
from app.shared.security.rate_limiting import HEAVY_RATE_LIMIT, limiter

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}
INVALID = {422: {"model": ErrorResponse}}
CONFLICT = {409: {"model": ErrorResponse}}


def _to_profile_response(result: ClientProfileResult) -> ClientProfileResponse:
    return ClientProfileResponse(
        client_id=result.client_id,
        profile_name=result.profile_name,
        profile_max_risk=result.profile_max_risk,
        description=result.description,
        max_risk=result.max_risk,
    )


def _to_investment_item(result: InvestmentResult) -> InvestmentItem:
    return InvestmentItem(
        id=result.id,
        client_id=result.client_id,
        product_category=result.product_category,
        amount=result.amount,
        yield_rate=result.yield_rate,
        invested_on=result.invested_on,
    )


def _to_simulation_response(outcome: SimulationOutcome) -> SimulationResponse:
    return SimulationResponse(
        validated_product=ValidatedProductItem(
            id=outcome.product.id,
            name=outcome.product.name,
            category=outcome.product.category,
            annual_rate=outcome.product.annual_rate,
            risk_tier=outcome.product.risk_tier,
        ),
        projection=ProjectionItem(
            final_value=outcome.projection.final_value,
            effective_yield=outcome.projection.effective_yield,
            term_months=outcome.projection.term_months,
        ),
        simulated_at=outcome.simulated_at,
        audit_recorded=outcome.audit_recorded,
    )


# ------------------------------------------------------------------
# Products
# ------------------------------------------------------------------


@router.get(
    "/products",
    response_model=list[ProductItem],
    tags=["products"],
    summary="List products",
    description="Return the product catalog with yield bands in configured order.",
)
def list_products(
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
) -> list[ProductItem]:
    """Return every product with its yield bands."""
    return [
        ProductItem(
            id=p.id,
            name=p.name,
            category=p.category,
            risk=p.risk,
            risk_tier=p.risk_tier,
            bands=[
                YieldBandItem(
                    annual_rate=b.annual_rate,
                    range_min=b.range_min,
                    range_max=b.range_max,
                )
                for b in p.bands
            ],
        )
        for p in use_case.execute()
    ]


@router.get(
    "/products/recommended/{profile_id}",
    response_model=list[RecommendedProductItem],
    responses={**NOT_FOUND, **INVALID},
    tags=["products"],
    summary="Recommend products for a risk profile",
    description="Return products whose risk does not exceed the profile ceiling.",
)
def recommended_products(
    profile_id: int,
    use_case: GetRecommendedProductsUseCase = Depends(
        get_recommended_products_use_case
    ),
) -> list[RecommendedProductItem]:
    """Return products suitable for a risk profile."""
    return [
        RecommendedProductItem(
            id=r.id,
            name=r.name,
            category=r.category,
            twelve_month_yield=r.twelve_month_yield,
            risk_tier=r.risk_tier,
        )
        for r in use_case.execute(profile_id)
    ]


# ------------------------------------------------------------------
# Client risk profiles
# ------------------------------------------------------------------


@router.get(
    "/risk-profiles/clients",
    response_model=list[ClientProfileResponse],
    tags=["risk-profiles"],
    summary="List client risk profiles",
)
def list_client_profiles(
    use_case: ListClientProfilesUseCase = Depends(get_list_client_profiles_use_case),
) -> list[ClientProfileResponse]:
    """Return the risk profile and ceiling of every client."""
    return [_to_profile_response(r) for r in use_case.execute()]


@router.get(
    "/risk-profiles/clients/{client_id}",
    response_model=ClientProfileResponse,
    responses={**NOT_FOUND, **INVALID},
    tags=["risk-profiles"],
    summary="Get a client's risk profile",
)
def get_client_profile(
    client_id: int,
    use_case: GetClientProfileUseCase = Depends(get_client_profile_use_case),
) -> ClientProfileResponse:
    """Return a client's profile and effective ceiling."""
    return _to_profile_response(use_case.execute(client_id))


@router.post(
    "/risk-profiles/clients",
    response_model=ClientProfileResponse,
    status_code=201,
    responses={**NOT_FOUND, **CONFLICT},
    tags=["risk-profiles"],
    summary="Register a client",
    description="Create a client whose ceiling starts at the profile's ceiling.",
)
def register_client(
    request: RegisterClientRequest,
    use_case: RegisterClientUseCase = Depends(get_register_client_use_case),
) -> ClientProfileResponse:
    """Register a client under a risk profile."""
    command = ClientProfileCommand(
        client_id=request.client_id,
        profile_id=request.profile_id,
    )
    return _to_profile_response(use_case.execute(command))


@router.put(
    "/risk-profiles/clients/{client_id}",
    response_model=ClientProfileResponse,
    responses={**NOT_FOUND, **INVALID},
    tags=["risk-profiles"],
    summary="Change a client's risk profile",
    description="Re-link the client. The current ceiling is kept as is.",
)
def change_client_profile(
    client_id: int,
    request: ChangeClientProfileRequest,
    use_case: ChangeClientProfileUseCase = Depends(
        get_change_client_profile_use_case
    ),
) -> ClientProfileResponse:
    """Link a client to another risk profile."""
    command = ClientProfileCommand(client_id=client_id, profile_id=request.profile_id)
    return _to_profile_response(use_case.execute(command))


# ------------------------------------------------------------------
# Investments
# ------------------------------------------------------------------


@router.post(
    "/investments",
    response_model=RecordInvestmentResponse,
    status_code=201,
    responses={**NOT_FOUND, **INVALID, **CONFLICT},
    tags=["investments"],
    summary="Record an investment",
    description=(
        "Append an investment to the client's ledger and adjust the "
        "client's maximum risk from their history."
    ),
)
def record_investment(
    request: RecordInvestmentRequest,
    use_case: RecordInvestmentUseCase = Depends(get_record_investment_use_case),
) -> RecordInvestmentResponse:
    """Record an investment for a client."""
    command = RecordInvestmentCommand(
        client_id=request.client_id,
        product_id=request.product_id,
        amount=request.amount,
        invested_at=request.invested_at,
        yield_rate=request.yield_rate,
    )
    result = use_case.execute(command)
    return RecordInvestmentResponse(
        investment=_to_investment_item(result.investment),
        previous_max_risk=result.previous_max_risk,
        new_max_risk=result.new_max_risk,
    )


@router.get(
    "/investments/{client_id}",
    response_model=list[InvestmentItem],
    responses=INVALID,
    tags=["investments"],
    summary="Investment history",
)
def investment_history(
    client_id: int,
    use_case: GetInvestmentHistoryUseCase = Depends(get_investment_history_use_case),
) -> list[InvestmentItem]:
    """Return every investment of a client."""
    results = use_case.execute(GetInvestmentHistoryQuery(client_id=client_id))
    return [_to_investment_item(r) for r in results]


@router.get(
    "/investments/{client_id}/{investment_id}",
    response_model=InvestmentItem,
    responses={**NOT_FOUND, **INVALID},
    tags=["investments"],
    summary="Single investment",
)
def get_investment(
    client_id: int,
    investment_id: int,
    use_case: GetInvestmentHistoryUseCase = Depends(get_investment_history_use_case),
) -> InvestmentItem:
    """Return one investment of a client."""
    results = use_case.execute(
        GetInvestmentHistoryQuery(client_id=client_id, investment_id=investment_id)
    )
    return _to_investment_item(results[0])


# ------------------------------------------------------------------
# Simulations
# ------------------------------------------------------------------


@router.post(
    "/simulations",
    response_model=SimulationResponse,
    responses={**NOT_FOUND, **INVALID},
    tags=["simulations"],
    summary="Simulate an investment by category",
    description=(
        "Project the growth of an amount in the first catalog product "
        "of the given category."
    ),
)
@limiter.limit(HEAVY_RATE_LIMIT)
def simulate_by_category(
    request: Request,
    body: SimulateByCategoryRequest,
    use_case: SimulateInvestmentUseCase = Depends(get_simulate_investment_use_case),
) -> SimulationResponse:
    """Simulate an investment in the first product of a category."""
    command = SimulateInvestmentCommand(
        client_id=body.client_id,
        amount=body.amount,
        term_months=body.term_months,
        product_category=body.product_category,
    )
    return _to_simulation_response(use_case.execute(command))


@router.post(
    "/simulations/product",
    response_model=SimulationResponse,
    responses={**NOT_FOUND, **INVALID},
    tags=["simulations"],
    summary="Simulate an investment in a product",
)
@limiter.limit(HEAVY_RATE_LIMIT)
def simulate_by_product(
    request: Request,
    body: SimulateByProductRequest,
    use_case: SimulateInvestmentUseCase = Depends(get_simulate_investment_use_case),
) -> SimulationResponse:
    """Simulate an investment in a specific product."""
    command = SimulateInvestmentCommand(
        client_id=body.client_id,
        amount=body.amount,
        term_months=body.term_months,
        product_id=body.product_id,
    )
    return _to_simulation_response(use_case.execute(command))


@router.get(
    "/simulations",
    response_model=list[SimulationHistoryItem],
    tags=["simulations"],
    summary="List stored simulations",
)
def list_simulations(
    use_case: ListSimulationsUseCase = Depends(get_list_simulations_use_case),
) -> list[SimulationHistoryItem]:
    """Return the simulation audit trail."""
    return [
        SimulationHistoryItem(
            id=s.id,
            client_id=s.client_id,
            product_name=s.product_name,
            amount=s.amount,
            final_value=s.final_value,
            term_months=s.term_months,
            simulated_on=s.simulated_on,
        )
        for s in use_case.execute()
    ]


@router.get(
    "/simulations/by-product-day",
    response_model=list[SimulationDailyItem],
    tags=["simulations"],
    summary="Simulations per product and day",
)
def simulations_by_product_day(
    use_case: GetSimulationsByProductDayUseCase = Depends(
        get_simulations_by_product_day_use_case
    ),
) -> list[SimulationDailyItem]:
    """Return simulation count and average final value per product and day."""
    return [
        SimulationDailyItem(
            product_name=d.product_name,
            simulated_on=d.simulated_on,
            simulation_count=d.simulation_count,
            average_final_value=d.average_final_value,
        )
        for d in use_case.execute()
    ]
