"""
Use case: Register a client under a risk profile.

Input: ClientProfileCommand (client_id, profile_id)
Output: ClientProfileResult
Side effects: Inserts the client with its ceiling seeded from the profile.
Failure cases: InvalidIdentifierError, RiskProfileNotFoundError,
    ClientAlreadyExistsError.
"""

import logging

from app.application.advisory.dtos import ClientProfileCommand, ClientProfileResult
from app.application.advisory.get_client_profile import build_client_profile_result
from app.domain.advisory.entities import Client
from app.domain.advisory.errors import (
    ClientAlreadyExistsError,
    InvalidIdentifierError,
    RiskProfileNotFoundError,
)
from app.domain.advisory.ports import ClientRepository, RiskProfileRepository

logger = logging.getLogger(__name__)


class RegisterClientUseCase:
    """Creates a client whose ceiling starts at its profile's ceiling."""

    def __init__(
        self,
        client_repo: ClientRepository,
        profile_repo: RiskProfileRepository,
    ) -> None:
        self._client_repo = client_repo
        self._profile_repo = profile_repo

    def execute(self, command: ClientProfileCommand) -> ClientProfileResult:
        """Run the register client use case.

        Raises:
            InvalidIdentifierError: If an ID is not positive.
            RiskProfileNotFoundError: If the profile does not exist.
            ClientAlreadyExistsError: If the client is already registered.
        """
        if command.client_id <= 0:
            raise InvalidIdentifierError("client_id", command.client_id)
        if command.profile_id <= 0:
            raise InvalidIdentifierError("profile_id", command.profile_id)

        profile = self._profile_repo.get_by_id(command.profile_id)
        if profile is None:
            raise RiskProfileNotFoundError(command.profile_id)

        if self._client_repo.get_by_id(command.client_id) is not None:
            raise ClientAlreadyExistsError(command.client_id)

        logger.info(
            "Registering client=%d with profile=%d",
            command.client_id,
            command.profile_id,
        )

        client = Client(
            id=command.client_id,
            profile_id=profile.id,
            max_risk=profile.max_risk,
        )
        self._client_repo.add(client)
        return build_client_profile_result(client, profile)
