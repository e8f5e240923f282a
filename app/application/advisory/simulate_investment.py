"""
Use case: Simulate an investment.

Input: SimulateInvestmentCommand (client_id, amount, term_months,
    product_id or product_category)
Output: SimulationOutcome
Side effects: Stores a simulation audit record. Failing to store it does
    not fail the simulation; the outcome reports ``audit_recorded=False``.
Failure cases: InvalidAmountError, InvalidTermError,
    InvalidProductSelectorError, ClientNotFoundError, ProductNotFoundError,
    NoApplicableRateError.
"""

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP

from app.application.advisory.dtos import (
    ProjectionResult,
    SimulateInvestmentCommand,
    SimulationOutcome,
    ValidatedProductResult,
)
from app.domain.advisory.compound_growth import (
    has_whole_cents,
    round_money,
    simulate_growth,
)
from app.domain.advisory.entities import Product, ProductCategory, SimulationRecord
from app.domain.advisory.errors import (
    ClientNotFoundError,
    InvalidAmountError,
    InvalidProductSelectorError,
    InvalidTermError,
    PersistenceError,
    ProductNotFoundError,
)
from app.domain.advisory.ports import (
    ClientRepository,
    ProductRepository,
    SimulationRepository,
)
from app.domain.advisory.risk_tiers import classify_risk
from app.domain.advisory.yield_bands import select_band

logger = logging.getLogger(__name__)


class SimulateInvestmentUseCase:
    """Orchestrates an investment simulation.

    Resolves the product, picks the yield band covering the amount,
    projects compound growth and records the simulation for auditing.
    """

    def __init__(
        self,
        client_repo: ClientRepository,
        product_repo: ProductRepository,
        simulation_repo: SimulationRepository,
        rounding: str = ROUND_HALF_UP,
    ) -> None:
        self._client_repo = client_repo
        self._product_repo = product_repo
        self._simulation_repo = simulation_repo
        self._rounding = rounding

    def execute(self, command: SimulateInvestmentCommand) -> SimulationOutcome:
        """Run the simulation use case.

        Args:
            command: The simulation request.

        Returns:
            The simulated product, projection and audit status.
        """
        if command.amount <= 0:
            raise InvalidAmountError(command.amount)
        if not has_whole_cents(command.amount):
            raise InvalidAmountError(
                command.amount, "At most two decimal places are allowed."
            )
        if command.term_months <= 0:
            raise InvalidTermError(command.term_months)
        if (command.product_id is None) == (command.product_category is None):
            raise InvalidProductSelectorError()

        logger.info(
            "Simulating investment for client=%d, product=%s, category=%s, term=%d",
            command.client_id,
            command.product_id,
            command.product_category,
            command.term_months,
        )

        if self._client_repo.get_by_id(command.client_id) is None:
            raise ClientNotFoundError(command.client_id)

        product = self._resolve_product(command)
        band = select_band(product, command.amount)
        projection = simulate_growth(
            command.amount, band.annual_rate, command.term_months, self._rounding
        )
        simulated_at = datetime.now()

        audit_recorded = self._record(
            SimulationRecord(
                client_id=command.client_id,
                product_id=product.id,
                product_name=product.name,
                amount=command.amount,
                final_value=projection.final_value,
                effective_yield=projection.effective_yield,
                term_months=command.term_months,
                simulated_on=simulated_at.date(),
            )
        )

        return SimulationOutcome(
            product=ValidatedProductResult(
                id=product.id,
                name=product.name,
                category=product.category.value,
                annual_rate=round_money(band.annual_rate, self._rounding),
                risk_tier=classify_risk(product.risk).label,
            ),
            projection=ProjectionResult(
                final_value=projection.final_value,
                effective_yield=projection.effective_yield,
                term_months=projection.term_months,
            ),
            simulated_at=simulated_at,
            audit_recorded=audit_recorded,
        )

    def _resolve_product(self, command: SimulateInvestmentCommand) -> Product:
        if command.product_id is not None:
            product = self._product_repo.get_by_id(command.product_id)
            if product is None:
                raise ProductNotFoundError(str(command.product_id))
            return product

        try:
            category = ProductCategory.parse(command.product_category)
        except ValueError:
            raise ProductNotFoundError(command.product_category) from None
        product = self._product_repo.get_first_by_category(category)
        if product is None:
            raise ProductNotFoundError(command.product_category)
        return product

    def _record(self, simulation: SimulationRecord) -> bool:
        """Store the audit record, reporting failure instead of raising."""
        try:
            self._simulation_repo.save(simulation)
        except PersistenceError as exc:
            logger.error(
                "Simulation audit not recorded for client=%d product=%d: %s",
                simulation.client_id,
                simulation.product_id,
                exc.reason,
            )
            return False
        return True
