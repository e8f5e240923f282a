"""
Adapter: Investment ledger repository.

Implements InvestmentRepository port.
Recording an investment and storing the client's adjusted ceiling
happen in a single database transaction. The ceiling update carries an
optimistic check on the client version the adjustment was computed
from. Every recorded investment bumps the version, so a writer whose
history snapshot is stale writes nothing, even when the ceiling value
itself did not move.
"""

import logging
from dataclasses import replace
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.domain.advisory.entities import InvestmentRecord, ProductCategory
from app.domain.advisory.errors import PersistenceConflictError, PersistenceError
from app.domain.advisory.ports import InvestmentRepository
from app.infrastructure.advisory.database import clients, investments, products

logger = logging.getLogger(__name__)


class InvestmentRepositoryAdapter(InvestmentRepository):
    """SQL implementation of the investment ledger."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list_for_client(self, client_id: int) -> list[InvestmentRecord]:
        """Return a client's investments joined with product category and risk."""
        stmt = (
            select(
                investments,
                products.c.category.label("product_category"),
                products.c.risk.label("product_risk"),
            )
            .join(products, investments.c.product_id == products.c.id)
            .where(investments.c.client_id == client_id)
            .order_by(investments.c.id)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"could not read investments of client {client_id}"
            ) from exc

        return [
            InvestmentRecord(
                id=row.id,
                client_id=row.client_id,
                product_id=row.product_id,
                amount=row.amount,
                yield_rate=row.yield_rate,
                invested_at=row.invested_at,
                product_category=ProductCategory[row.product_category],
                product_risk=row.product_risk,
            )
            for row in rows
        ]

    def save_with_risk_update(
        self,
        investment: InvestmentRecord,
        expected_version: int,
        new_max_risk: Decimal,
    ) -> InvestmentRecord:
        """Insert an investment and update the client's ceiling atomically.

        Raises:
            PersistenceConflictError: If the stored client version is no
                longer ``expected_version``.
            PersistenceError: If the transaction could not be committed.
        """
        try:
            with self._engine.begin() as conn:
                updated = conn.execute(
                    clients.update()
                    .where(clients.c.id == investment.client_id)
                    .where(clients.c.version == expected_version)
                    .values(max_risk=new_max_risk, version=clients.c.version + 1)
                )
                if updated.rowcount != 1:
                    raise PersistenceConflictError(
                        f"client {investment.client_id} was updated concurrently"
                    )

                inserted = conn.execute(
                    investments.insert().values(
                        client_id=investment.client_id,
                        product_id=investment.product_id,
                        amount=investment.amount,
                        yield_rate=investment.yield_rate,
                        invested_at=investment.invested_at,
                    )
                )
                investment_id = inserted.inserted_primary_key[0]
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"could not record investment for client {investment.client_id}"
            ) from exc

        logger.debug(
            "Saved investment: id=%d client=%d max_risk=%s",
            investment_id,
            investment.client_id,
            new_max_risk,
        )
        return replace(investment, id=investment_id)
