"""
Relational schema and engine factory for the advisory context.

Tables are declared with SQLAlchemy Core on a shared MetaData so every
adapter builds its statements against the same column types. Money and
rates are Numeric and come back as Decimal.

Risk profiles, products and yield bands are reference data: the schema
is created here but their rows are provisioned outside the service.
"""

import logging

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

metadata = MetaData()

risk_profiles = Table(
    "risk_profiles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("name", String(50), nullable=False),
    Column("description", String(100), nullable=False),
    Column("max_risk", Numeric(4, 2), nullable=False),
)

clients = Table(
    "clients",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("profile_id", Integer, ForeignKey("risk_profiles.id"), nullable=False),
    Column("max_risk", Numeric(4, 2), nullable=False),
    Column("version", Integer, nullable=False, default=0),
)

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("name", String(50), nullable=False),
    Column("category", String(10), nullable=False),
    Column("risk", Numeric(4, 2), nullable=False),
)

yield_bands = Table(
    "yield_bands",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False),
    Column("position", Integer, nullable=False, default=0),
    Column("annual_rate", Numeric(12, 6), nullable=False),
    Column("range_min", Numeric(18, 2), nullable=False),
    Column("range_max", Numeric(18, 2), nullable=False),
)

investments = Table(
    "investments",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("client_id", Integer, ForeignKey("clients.id"), nullable=False),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False),
    Column("amount", Numeric(18, 2), nullable=False),
    Column("yield_rate", Numeric(12, 6), nullable=False),
    Column("invested_at", DateTime, nullable=False),
)

simulations = Table(
    "simulations",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("client_id", Integer, ForeignKey("clients.id"), nullable=False),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False),
    Column("amount", Numeric(18, 2), nullable=False),
    Column("final_value", Numeric(18, 2), nullable=False),
    Column("effective_yield", Numeric(12, 2), nullable=False),
    Column("term_months", Integer, nullable=False),
    Column("simulated_on", Date, nullable=False),
)


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Build a SQLAlchemy engine for the given URL.

    In-memory SQLite databases share a single connection so that every
    adapter sees the same data.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)
    return create_engine(url, echo=echo, pool_pre_ping=True)


def create_schema(engine: Engine) -> None:
    """Create all advisory tables that do not exist yet."""
    metadata.create_all(engine)
    logger.debug("Advisory schema ensured on %s", engine.url.render_as_string())
