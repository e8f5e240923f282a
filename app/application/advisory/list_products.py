"""
Use case: List the product catalog.

Input: None
Output: list[ProductResult]
Side effects: None (read-only query).
Failure cases: None.
"""

import logging

from app.application.advisory.dtos import ProductResult, YieldBandResult
from app.domain.advisory.ports import ProductRepository
from app.domain.advisory.risk_tiers import classify_risk

logger = logging.getLogger(__name__)


class ListProductsUseCase:
    """Returns every product with its risk tier and yield bands."""

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def execute(self) -> list[ProductResult]:
        """Run the list products use case."""
        logger.info("Listing product catalog")
        return [
            ProductResult(
                id=product.id,
                name=product.name,
                category=product.category.value,
                risk=product.risk,
                risk_tier=classify_risk(product.risk).label,
                bands=[
                    YieldBandResult(
                        annual_rate=band.annual_rate,
                        range_min=band.range_min,
                        range_max=band.range_max,
                    )
                    for band in product.bands
                ],
            )
            for product in self._product_repo.list_all()
        ]
