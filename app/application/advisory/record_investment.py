"""
Use case: Record an investment and adjust the client's risk ceiling.

Input: RecordInvestmentCommand (client_id, product_id, amount, ...)
Output: RecordInvestmentResult
Side effects: Inserts an investment and updates the client's ceiling
    in one transaction.
Failure cases: InvalidIdentifierError, InvalidAmountError,
    ClientNotFoundError, ProductNotFoundError, PersistenceConflictError.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal

from app.application.advisory.dtos import (
    InvestmentResult,
    RecordInvestmentCommand,
    RecordInvestmentResult,
)
from app.domain.advisory.compound_growth import has_whole_cents
from app.domain.advisory.entities import InvestmentRecord, Product
from app.domain.advisory.errors import (
    ClientNotFoundError,
    InvalidAmountError,
    InvalidIdentifierError,
    NoApplicableRateError,
    ProductNotFoundError,
)
from app.domain.advisory.portfolio_tiers import aggregate_by_tier
from app.domain.advisory.ports import (
    ClientLockPort,
    ClientRepository,
    InvestmentRepository,
    ProductRepository,
)
from app.domain.advisory.risk_limit_adjuster import adjust_max_risk
from app.domain.advisory.yield_bands import select_band

logger = logging.getLogger(__name__)


def _default_yield(product: Product, amount: Decimal) -> Decimal:
    """Return the annual rate of the band covering the amount, else zero."""
    try:
        return select_band(product, amount).annual_rate
    except NoApplicableRateError:
        logger.info(
            "No yield band for product=%d amount=%s, recording zero yield",
            product.id,
            amount,
        )
        return Decimal("0")


class RecordInvestmentUseCase:
    """Orchestrates recording an investment.

    Reads the client's history, aggregates it by risk tier, runs the
    risk-limit adjuster and hands both the new investment and the new
    ceiling to the repository for a single atomic write. The whole
    read-compute-write sequence runs under the client's lock.
    """

    def __init__(
        self,
        client_repo: ClientRepository,
        product_repo: ProductRepository,
        investment_repo: InvestmentRepository,
        client_locks: ClientLockPort,
    ) -> None:
        self._client_repo = client_repo
        self._product_repo = product_repo
        self._investment_repo = investment_repo
        self._client_locks = client_locks

    def execute(self, command: RecordInvestmentCommand) -> RecordInvestmentResult:
        """Run the record investment use case.

        Args:
            command: The investment to record.

        Returns:
            The persisted investment with the previous and new ceiling.

        Raises:
            InvalidIdentifierError: If an ID is not positive.
            InvalidAmountError: If the amount is not positive or has more
                than two decimal places.
            ClientNotFoundError: If the client does not exist.
            ProductNotFoundError: If the product does not exist.
            PersistenceConflictError: If another investment for the client was
                recorded concurrently.
        """
        if command.client_id <= 0:
            raise InvalidIdentifierError("client_id", command.client_id)
        if command.product_id <= 0:
            raise InvalidIdentifierError("product_id", command.product_id)
        if command.amount <= 0:
            raise InvalidAmountError(command.amount)
        if not has_whole_cents(command.amount):
            raise InvalidAmountError(
                command.amount, "At most two decimal places are allowed."
            )

        logger.info(
            "Recording investment for client=%d, product=%d",
            command.client_id,
            command.product_id,
        )

        with self._client_locks.hold(command.client_id):
            client = self._client_repo.get_by_id(command.client_id)
            if client is None:
                raise ClientNotFoundError(command.client_id)

            product = self._product_repo.get_by_id(command.product_id)
            if product is None:
                raise ProductNotFoundError(str(command.product_id))

            history = self._investment_repo.list_for_client(client.id)
            summary = aggregate_by_tier(history)
            new_max_risk = adjust_max_risk(client.max_risk, product.risk, summary)

            if new_max_risk != client.max_risk:
                logger.info(
                    "Adjusting max risk for client=%d: %s -> %s",
                    client.id,
                    client.max_risk,
                    new_max_risk,
                )

            yield_rate = command.yield_rate
            if yield_rate is None:
                yield_rate = _default_yield(product, command.amount)

            investment = InvestmentRecord(
                client_id=client.id,
                product_id=product.id,
                amount=command.amount,
                yield_rate=yield_rate,
                invested_at=command.invested_at or datetime.now(timezone.utc),
                product_category=product.category,
                product_risk=product.risk,
            )
            saved = self._investment_repo.save_with_risk_update(
                investment,
                expected_version=client.version,
                new_max_risk=new_max_risk,
            )

        return RecordInvestmentResult(
            investment=InvestmentResult(
                id=saved.id,
                client_id=saved.client_id,
                product_category=saved.product_category.value,
                amount=saved.amount,
                yield_rate=saved.yield_rate,
                invested_on=saved.invested_at.date(),
            ),
            previous_max_risk=client.max_risk,
            new_max_risk=new_max_risk,
        )
