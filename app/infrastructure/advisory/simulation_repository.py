"""
Adapter: Simulation audit repository.

Implements SimulationRepository port.
Appends simulation records and reports them per product and day.
"""

import logging
from dataclasses import replace
from decimal import Decimal

from sqlalchemy import Numeric, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.domain.advisory.entities import SimulationDailySummary, SimulationRecord
from app.domain.advisory.errors import PersistenceError
from app.domain.advisory.ports import SimulationRepository
from app.infrastructure.advisory.database import products, simulations

logger = logging.getLogger(__name__)


class SimulationRepositoryAdapter(SimulationRepository):
    """SQL implementation of the simulation audit trail."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def save(self, simulation: SimulationRecord) -> SimulationRecord:
        """Persist a simulation and return it with its assigned ID."""
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    simulations.insert().values(
                        client_id=simulation.client_id,
                        product_id=simulation.product_id,
                        amount=simulation.amount,
                        final_value=simulation.final_value,
                        effective_yield=simulation.effective_yield,
                        term_months=simulation.term_months,
                        simulated_on=simulation.simulated_on,
                    )
                )
                simulation_id = result.inserted_primary_key[0]
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"could not record simulation for client {simulation.client_id}"
            ) from exc

        logger.debug(
            "Saved simulation: id=%d client=%d product=%d",
            simulation_id,
            simulation.client_id,
            simulation.product_id,
        )
        return replace(simulation, id=simulation_id)

    def list_all(self) -> list[SimulationRecord]:
        """Return every simulation ordered by ID."""
        stmt = (
            select(simulations, products.c.name.label("product_name"))
            .join(products, simulations.c.product_id == products.c.id)
            .order_by(simulations.c.id)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as exc:
            raise PersistenceError("could not list simulations") from exc

        return [
            SimulationRecord(
                id=row.id,
                client_id=row.client_id,
                product_id=row.product_id,
                product_name=row.product_name,
                amount=row.amount,
                final_value=row.final_value,
                effective_yield=row.effective_yield,
                term_months=row.term_months,
                simulated_on=row.simulated_on,
            )
            for row in rows
        ]

    def summarize_by_product_day(self) -> list[SimulationDailySummary]:
        """Return simulation count and unrounded mean final value per product and day."""
        stmt = (
            select(
                products.c.name,
                simulations.c.simulated_on,
                func.count(simulations.c.id).label("simulation_count"),
                func.sum(simulations.c.final_value, type_=Numeric(18, 2)).label(
                    "final_value_total"
                ),
            )
            .join(products, simulations.c.product_id == products.c.id)
            .group_by(products.c.name, simulations.c.simulated_on)
            .order_by(simulations.c.simulated_on, products.c.name)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as exc:
            raise PersistenceError("could not summarize simulations") from exc

        return [
            SimulationDailySummary(
                product_name=row.name,
                simulated_on=row.simulated_on,
                simulation_count=row.simulation_count,
                average_final_value=Decimal(row.final_value_total)
                / row.simulation_count,
            )
            for row in rows
        ]
