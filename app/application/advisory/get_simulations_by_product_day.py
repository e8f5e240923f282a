"""
Use case: Summarize simulations per product and day.

Input: None
Output: list[SimulationDailyResult]
Side effects: None (read-only query).
Failure cases: None.
"""

import logging
from decimal import ROUND_HALF_UP

from app.application.advisory.dtos import SimulationDailyResult
from app.domain.advisory.compound_growth import round_money
from app.domain.advisory.ports import SimulationRepository

logger = logging.getLogger(__name__)


class GetSimulationsByProductDayUseCase:
    """Reports how many simulations each product had per day.

    The average final value is rounded with the same rule as the
    simulations themselves.
    """

    def __init__(
        self, simulation_repo: SimulationRepository, rounding: str = ROUND_HALF_UP
    ) -> None:
        self._simulation_repo = simulation_repo
        self._rounding = rounding

    def execute(self) -> list[SimulationDailyResult]:
        """Run the per product and day summary use case."""
        logger.info("Summarizing simulations by product and day")
        return [
            SimulationDailyResult(
                product_name=s.product_name,
                simulated_on=s.simulated_on,
                simulation_count=s.simulation_count,
                average_final_value=round_money(s.average_final_value, self._rounding),
            )
            for s in self._simulation_repo.summarize_by_product_day()
        ]
