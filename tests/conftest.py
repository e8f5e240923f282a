"""
Shared fixtures for the advisory test suite.

Provides in-memory fakes of the domain ports for use case tests and a
seeded SQLite database for adapter and API tests.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from contextlib import contextmanager
from dataclasses import replace
from decimal import Decimal
from typing import Iterator, Optional

import pytest
from sqlalchemy.engine import Engine

from app.domain.advisory.entities import (
    Client,
    InvestmentRecord,
    Product,
    ProductCategory,
    RiskProfile,
    SimulationDailySummary,
    SimulationRecord,
    YieldBand,
)
from app.domain.advisory.errors import (
    PersistenceConflictError,
    PersistenceError,
)
from app.domain.advisory.ports import (
    ClientLockPort,
    ClientRepository,
    InvestmentRepository,
    ProductRepository,
    RiskProfileRepository,
    SimulationRepository,
)
from app.infrastructure.advisory.database import (
    create_db_engine,
    create_schema,
    products,
    risk_profiles,
    yield_bands,
)

D = Decimal

PROFILES = (
    RiskProfile(1, "Conservative", "Capital preservation first", D("1.5")),
    RiskProfile(2, "Moderate", "Balanced growth and safety", D("3.0")),
    RiskProfile(3, "Aggressive", "Growth over stability", D("5.0")),
)


def _band(band_id: int, product_id: int, rate: str, low: str, high: str) -> YieldBand:
    return YieldBand(band_id, product_id, D(rate), D(low), D(high))


PRODUCTS = (
    Product(
        1,
        "CDB Caixa 2026",
        ProductCategory.CDB,
        D("1.0"),
        (
            _band(1, 1, "12.37445", "0", "99999.99"),
            _band(2, 1, "13.00000", "100000", "9999999.99"),
        ),
    ),
    Product(
        2,
        "LCA Agro Plus",
        ProductCategory.LCA,
        D("2.0"),
        (_band(3, 2, "10.50000", "1000", "500000"),),
    ),
    Product(
        3,
        "Equity Growth Fund",
        ProductCategory.FUND,
        D("4.5"),
        (_band(4, 3, "18.00000", "500", "1000000"),),
    ),
    Product(4, "LCI Habitacional", ProductCategory.LCI, D("1.2")),
)


# ------------------------------------------------------------------
# In-memory port implementations
# ------------------------------------------------------------------


class InMemoryRiskProfileRepository(RiskProfileRepository):
    def __init__(self, profiles=PROFILES) -> None:
        self._profiles = {p.id: p for p in profiles}

    def get_by_id(self, profile_id: int) -> Optional[RiskProfile]:
        return self._profiles.get(profile_id)


class InMemoryClientRepository(ClientRepository):
    def __init__(self) -> None:
        self.clients: dict[int, Client] = {}

    def get_by_id(self, client_id: int) -> Optional[Client]:
        return self.clients.get(client_id)

    def list_all(self) -> list[Client]:
        return [self.clients[k] for k in sorted(self.clients)]

    def add(self, client: Client) -> None:
        self.clients[client.id] = client

    def update_profile(self, client_id: int, profile_id: int) -> None:
        self.clients[client_id] = replace(self.clients[client_id], profile_id=profile_id)


class InMemoryProductRepository(ProductRepository):
    def __init__(self, products=PRODUCTS) -> None:
        self._products = {p.id: p for p in products}

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self._products.get(product_id)

    def get_first_by_category(self, category: ProductCategory) -> Optional[Product]:
        return next((p for p in self.list_all() if p.category is category), None)

    def list_all(self) -> list[Product]:
        return [self._products[k] for k in sorted(self._products)]

    def list_up_to_risk(self, max_risk: Decimal) -> list[Product]:
        return [p for p in self.list_all() if p.risk <= max_risk]


class InMemoryInvestmentRepository(InvestmentRepository):
    """Ledger that applies the optimistic version check against a client repo."""

    def __init__(self, clients: InMemoryClientRepository) -> None:
        self._clients = clients
        self.records: list[InvestmentRecord] = []

    def list_for_client(self, client_id: int) -> list[InvestmentRecord]:
        return [r for r in self.records if r.client_id == client_id]

    def save_with_risk_update(
        self,
        investment: InvestmentRecord,
        expected_version: int,
        new_max_risk: Decimal,
    ) -> InvestmentRecord:
        client = self._clients.get_by_id(investment.client_id)
        if client is None or client.version != expected_version:
            raise PersistenceConflictError("stale client version")
        self._clients.add(
            replace(client, max_risk=new_max_risk, version=client.version + 1)
        )
        saved = replace(investment, id=len(self.records) + 1)
        self.records.append(saved)
        return saved


class InMemorySimulationRepository(SimulationRepository):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.records: list[SimulationRecord] = []

    def save(self, simulation: SimulationRecord) -> SimulationRecord:
        if self.fail:
            raise PersistenceError("disk full")
        saved = replace(simulation, id=len(self.records) + 1)
        self.records.append(saved)
        return saved

    def list_all(self) -> list[SimulationRecord]:
        return list(self.records)

    def summarize_by_product_day(self) -> list[SimulationDailySummary]:
        groups: dict[tuple, list[SimulationRecord]] = {}
        for record in self.records:
            groups.setdefault((record.product_name, record.simulated_on), []).append(
                record
            )
        return [
            SimulationDailySummary(
                product_name=name,
                simulated_on=day,
                simulation_count=len(rows),
                average_final_value=sum(r.final_value for r in rows) / len(rows),
            )
            for (name, day), rows in sorted(groups.items())
        ]


class RecordingClientLocks(ClientLockPort):
    """Lock port that records which clients were locked."""

    def __init__(self) -> None:
        self.held: list[int] = []
        self.active: set[int] = set()

    @contextmanager
    def hold(self, client_id: int) -> Iterator[None]:
        self.held.append(client_id)
        self.active.add(client_id)
        try:
            yield
        finally:
            self.active.discard(client_id)


# ------------------------------------------------------------------
# Fixtures
# ------------------------------------------------------------------


@pytest.fixture
def profile_repo() -> InMemoryRiskProfileRepository:
    return InMemoryRiskProfileRepository()


@pytest.fixture
def client_repo() -> InMemoryClientRepository:
    repo = InMemoryClientRepository()
    repo.add(Client(id=10, profile_id=1, max_risk=D("1.5")))
    repo.add(Client(id=20, profile_id=3, max_risk=D("5.0")))
    return repo


@pytest.fixture
def product_repo() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def investment_repo(client_repo) -> InMemoryInvestmentRepository:
    return InMemoryInvestmentRepository(client_repo)


@pytest.fixture
def simulation_repo() -> InMemorySimulationRepository:
    return InMemorySimulationRepository()


@pytest.fixture
def failing_simulation_repo() -> InMemorySimulationRepository:
    return InMemorySimulationRepository(fail=True)


@pytest.fixture
def client_locks() -> RecordingClientLocks:
    return RecordingClientLocks()


def seed_catalog(engine: Engine) -> None:
    """Store the reference profiles and products in a database."""
    with engine.begin() as conn:
        for profile in PROFILES:
            conn.execute(
                risk_profiles.insert().values(
                    id=profile.id,
                    name=profile.name,
                    description=profile.description,
                    max_risk=profile.max_risk,
                )
            )
        for product in PRODUCTS:
            conn.execute(
                products.insert().values(
                    id=product.id,
                    name=product.name,
                    category=product.category.name,
                    risk=product.risk,
                )
            )
            for position, band in enumerate(product.bands):
                conn.execute(
                    yield_bands.insert().values(
                        product_id=product.id,
                        position=position,
                        annual_rate=band.annual_rate,
                        range_min=band.range_min,
                        range_max=band.range_max,
                    )
                )


@pytest.fixture
def sql_engine() -> Iterator[Engine]:
    """Fresh in-memory SQLite database with the reference catalog."""
    engine = create_db_engine("sqlite://")
    create_schema(engine)
    seed_catalog(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def file_engine(tmp_path) -> Iterator[Engine]:
    """SQLite database on disk, for tests that use several connections."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'advisory.db'}")
    create_schema(engine)
    seed_catalog(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def api_engine() -> Iterator[Engine]:
    """Seeded database behind the application's own engine factory."""
    from app.interfaces.advisory.dependencies import get_db_engine
    from app.shared.security.rate_limiting import limiter

    get_db_engine.cache_clear()
    engine = get_db_engine()
    seed_catalog(engine)
    limiter.reset()
    yield engine
    engine.dispose()
    get_db_engine.cache_clear()
