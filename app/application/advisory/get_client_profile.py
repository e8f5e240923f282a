"""
Use case: Retrieve a client's risk profile.

Input: client_id
Output: ClientProfileResult
Side effects: None (read-only query).
Failure cases: InvalidIdentifierError, ClientNotFoundError.
"""

import logging
from typing import Optional

from app.application.advisory.dtos import ClientProfileResult
from app.domain.advisory.entities import Client, RiskProfile
from app.domain.advisory.errors import ClientNotFoundError, InvalidIdentifierError
from app.domain.advisory.ports import ClientRepository, RiskProfileRepository

logger = logging.getLogger(__name__)


def build_client_profile_result(
    client: Client, profile: Optional[RiskProfile]
) -> ClientProfileResult:
    """Describe a client with its linked profile, if any."""
    return ClientProfileResult(
        client_id=client.id,
        profile_name=profile.name if profile else None,
        profile_max_risk=profile.max_risk if profile else None,
        description=profile.description if profile else None,
        max_risk=client.max_risk,
    )


class GetClientProfileUseCase:
    """Returns the profile a client is linked to and its own ceiling."""

    def __init__(
        self,
        client_repo: ClientRepository,
        profile_repo: RiskProfileRepository,
    ) -> None:
        self._client_repo = client_repo
        self._profile_repo = profile_repo

    def execute(self, client_id: int) -> ClientProfileResult:
        """Run the get client profile use case.

        Raises:
            InvalidIdentifierError: If the client ID is not positive.
            ClientNotFoundError: If the client does not exist.
        """
        if client_id <= 0:
            raise InvalidIdentifierError("client_id", client_id)

        logger.info("Retrieving risk profile for client=%d", client_id)

        client = self._client_repo.get_by_id(client_id)
        if client is None:
            raise ClientNotFoundError(client_id)

        profile = self._profile_repo.get_by_id(client.profile_id)
        return build_client_profile_result(client, profile)
