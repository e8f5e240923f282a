"""
Use case: List every recorded simulation.

Input: None
Output: list[SimulationHistoryResult]
Side effects: None (read-only query).
Failure cases: None.
"""

import logging

from app.application.advisory.dtos import SimulationHistoryResult
from app.domain.advisory.ports import SimulationRepository

logger = logging.getLogger(__name__)


class ListSimulationsUseCase:
    """Returns the simulation audit trail."""

    def __init__(self, simulation_repo: SimulationRepository) -> None:
        self._simulation_repo = simulation_repo

    def execute(self) -> list[SimulationHistoryResult]:
        """Run the list simulations use case."""
        logger.info("Listing simulation history")
        return [
            SimulationHistoryResult(
                id=s.id,
                client_id=s.client_id,
                product_name=s.product_name,
                amount=s.amount,
                final_value=s.final_value,
                term_months=s.term_months,
                simulated_on=s.simulated_on,
            )
            for s in self._simulation_repo.list_all()
        ]
