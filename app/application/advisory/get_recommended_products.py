"""
Use case: Recommend products for a risk profile.

Input: profile_id
Output: list[RecommendedProductResult]
Side effects: None (read-only query).
Failure cases: InvalidIdentifierError, RiskProfileNotFoundError.
"""

import logging
from decimal import Decimal

from app.application.advisory.dtos import RecommendedProductResult
from app.domain.advisory.errors import InvalidIdentifierError, RiskProfileNotFoundError
from app.domain.advisory.ports import ProductRepository, RiskProfileRepository
from app.domain.advisory.risk_tiers import classify_risk

logger = logging.getLogger(__name__)


class GetRecommendedProductsUseCase:
    """Selects the products a risk profile may be steered toward.

    A product qualifies when its risk does not exceed the profile's
    ceiling. The advertised yield is the rate of its first band.
    """

    def __init__(
        self,
        profile_repo: RiskProfileRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._profile_repo = profile_repo
        self._product_repo = product_repo

    def execute(self, profile_id: int) -> list[RecommendedProductResult]:
        """Run the recommendation use case.

        Args:
            profile_id: ID of the risk profile.

        Returns:
            Products within the profile's risk ceiling.

        Raises:
            InvalidIdentifierError: If the profile ID is not positive.
            RiskProfileNotFoundError: If the profile does not exist.
        """
        if profile_id <= 0:
            raise InvalidIdentifierError("profile_id", profile_id)

        profile = self._profile_repo.get_by_id(profile_id)
        if profile is None:
            raise RiskProfileNotFoundError(profile_id)

        logger.info(
            "Recommending products for profile=%d (max risk %s)",
            profile.id,
            profile.max_risk,
        )

        return [
            RecommendedProductResult(
                id=product.id,
                name=product.name,
                category=product.category.value,
                twelve_month_yield=(
                    product.bands[0].annual_rate if product.bands else Decimal("0")
                ),
                risk_tier=classify_risk(product.risk).label,
            )
            for product in self._product_repo.list_up_to_risk(profile.max_risk)
        ]
