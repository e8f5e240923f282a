"""
Dependency injection for the advisory bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the advisory context.
"""

from functools import lru_cache

from sqlalchemy.engine import Engine

from app.application.advisory.change_client_profile import ChangeClientProfileUseCase
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
from app.core.config import settings
from app.infrastructure.advisory.catalog_repository import (
    ProductRepositoryAdapter,
    RiskProfileRepositoryAdapter,
)
from app.infrastructure.advisory.client_locks import ClientLockRegistry
from app.infrastructure.advisory.client_repository import ClientRepositoryAdapter
from app.infrastructure.advisory.database import create_db_engine, create_schema
from app.infrastructure.advisory.investment_repository import (
    InvestmentRepositoryAdapter,
)
from app.infrastructure.advisory.simulation_repository import (
    SimulationRepositoryAdapter,
)

# One registry per process so every request sees the same client locks.
_client_locks = ClientLockRegistry()


@lru_cache(maxsize=1)
def get_db_engine() -> Engine:
    """Build the SQLAlchemy engine from settings and ensure the schema."""
    engine = create_db_engine(settings.database_url, echo=settings.database_echo)
    create_schema(engine)
    return engine


def get_list_products_use_case() -> ListProductsUseCase:
    """Build ListProductsUseCase with its infrastructure dependencies."""
    return ListProductsUseCase(
        product_repo=ProductRepositoryAdapter(engine=get_db_engine()),
    )


def get_recommended_products_use_case() -> GetRecommendedProductsUseCase:
    """Build GetRecommendedProductsUseCase with its infrastructure dependencies."""
    engine = get_db_engine()
    return GetRecommendedProductsUseCase(
        profile_repo=RiskProfileRepositoryAdapter(engine=engine),
        product_repo=ProductRepositoryAdapter(engine=engine),
    )


def get_list_client_profiles_use_case() -> ListClientProfilesUseCase:
    """Build ListClientProfilesUseCase with its infrastructure dependencies."""
    engine = get_db_engine()
    return ListClientProfilesUseCase(
        client_repo=ClientRepositoryAdapter(engine=engine),
        profile_repo=RiskProfileRepositoryAdapter(engine=engine),
    )


def get_client_profile_use_case() -> GetClientProfileUseCase:
    """Build GetClientProfileUseCase with its infrastructure dependencies."""
    engine = get_db_engine()
    return GetClientProfileUseCase(
        client_repo=ClientRepositoryAdapter(engine=engine),
        profile_repo=RiskProfileRepositoryAdapter(engine=engine),
    )


def get_register_client_use_case() -> RegisterClientUseCase:
    """Build RegisterClientUseCase with its infrastructure dependencies."""
    engine = get_db_engine()
    return RegisterClientUseCase(
        client_repo=ClientRepositoryAdapter(engine=engine),
        profile_repo=RiskProfileRepositoryAdapter(engine=engine),
    )


def get_change_client_profile_use_case() -> ChangeClientProfileUseCase:
    """Build ChangeClientProfileUseCase with its infrastructure dependencies."""
    engine = get_db_engine()
    return ChangeClientProfileUseCase(
        client_repo=ClientRepositoryAdapter(engine=engine),
        profile_repo=RiskProfileRepositoryAdapter(engine=engine),
    )


def get_record_investment_use_case() -> RecordInvestmentUseCase:
    """Build RecordInvestmentUseCase with its infrastructure dependencies."""
    engine = get_db_engine()
    return RecordInvestmentUseCase(
        client_repo=ClientRepositoryAdapter(engine=engine),
        product_repo=ProductRepositoryAdapter(engine=engine),
        investment_repo=InvestmentRepositoryAdapter(engine=engine),
        client_locks=_client_locks,
    )


def get_investment_history_use_case() -> GetInvestmentHistoryUseCase:
    """Build GetInvestmentHistoryUseCase with its infrastructure dependencies."""
    return GetInvestmentHistoryUseCase(
        investment_repo=InvestmentRepositoryAdapter(engine=get_db_engine()),
    )


def get_simulate_investment_use_case() -> SimulateInvestmentUseCase:
    """Build SimulateInvestmentUseCase with its infrastructure dependencies."""
    engine = get_db_engine()
    return SimulateInvestmentUseCase(
        client_repo=ClientRepositoryAdapter(engine=engine),
        product_repo=ProductRepositoryAdapter(engine=engine),
        simulation_repo=SimulationRepositoryAdapter(engine=engine),
        rounding=settings.get_rounding(),
    )


def get_list_simulations_use_case() -> ListSimulationsUseCase:
    """Build ListSimulationsUseCase with its infrastructure dependencies."""
    return ListSimulationsUseCase(
        simulation_repo=SimulationRepositoryAdapter(engine=get_db_engine()),
    )


def get_simulations_by_product_day_use_case() -> GetSimulationsByProductDayUseCase:
    """Build GetSimulationsByProductDayUseCase with its infrastructure dependencies."""
    return GetSimulationsByProductDayUseCase(
        simulation_repo=SimulationRepositoryAdapter(engine=get_db_engine()),
        rounding=settings.get_rounding(),
    )
