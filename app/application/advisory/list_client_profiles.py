"""
Use case: List the risk profiles of every client.

Input: None
Output: list[ClientProfileResult]
Side effects: None (read-only query).
Failure cases: None.
"""

import logging
from typing import Optional

from app.application.advisory.dtos import ClientProfileResult
from app.application.advisory.get_client_profile import build_client_profile_result
from app.domain.advisory.entities import RiskProfile
from app.domain.advisory.ports import ClientRepository, RiskProfileRepository

logger = logging.getLogger(__name__)


class ListClientProfilesUseCase:
    """Returns every client with its linked profile."""

    def __init__(
        self,
        client_repo: ClientRepository,
        profile_repo: RiskProfileRepository,
    ) -> None:
        self._client_repo = client_repo
        self._profile_repo = profile_repo

    def execute(self) -> list[ClientProfileResult]:
        """Run the list client profiles use case."""
        logger.info("Listing client risk profiles")

        profiles: dict[int, Optional[RiskProfile]] = {}
        results = []
        for client in self._client_repo.list_all():
            if client.profile_id not in profiles:
                profiles[client.profile_id] = self._profile_repo.get_by_id(
                    client.profile_id
                )
            results.append(
                build_client_profile_result(client, profiles[client.profile_id])
            )
        return results
