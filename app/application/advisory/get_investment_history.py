"""
Use case: Retrieve a client's investment history.

Input: GetInvestmentHistoryQuery (client_id, optional investment_id)
Output: list[InvestmentResult]
Side effects: None (read-only query).
Failure cases: InvalidIdentifierError, InvestmentNotFoundError.
"""

import logging

from app.application.advisory.dtos import GetInvestmentHistoryQuery, InvestmentResult
from app.domain.advisory.errors import InvalidIdentifierError, InvestmentNotFoundError
from app.domain.advisory.ports import InvestmentRepository

logger = logging.getLogger(__name__)


class GetInvestmentHistoryUseCase:
    """Orchestrates reading a client's recorded investments.

    A client without investments yields an empty history. Asking for a
    specific investment the client does not own is an error.
    """

    def __init__(self, investment_repo: InvestmentRepository) -> None:
        self._investment_repo = investment_repo

    def execute(self, query: GetInvestmentHistoryQuery) -> list[InvestmentResult]:
        """Run the investment history use case.

        Args:
            query: Client ID and optional investment ID.

        Returns:
            The client's investments ordered by ID.

        Raises:
            InvalidIdentifierError: If an ID is not positive.
            InvestmentNotFoundError: If the requested investment is missing.
        """
        if query.client_id <= 0:
            raise InvalidIdentifierError("client_id", query.client_id)
        if query.investment_id is not None and query.investment_id <= 0:
            raise InvalidIdentifierError("investment_id", query.investment_id)

        logger.info(
            "Retrieving investments for client=%d, investment=%s",
            query.client_id,
            query.investment_id,
        )

        records = self._investment_repo.list_for_client(query.client_id)
        if query.investment_id is not None:
            records = [r for r in records if r.id == query.investment_id]
            if not records:
                raise InvestmentNotFoundError(query.client_id, query.investment_id)

        return [
            InvestmentResult(
                id=record.id,
                client_id=record.client_id,
                product_category=record.product_category.value,
                amount=record.amount,
                yield_rate=record.yield_rate,
                invested_on=record.invested_at.date(),
            )
            for record in records
        ]
