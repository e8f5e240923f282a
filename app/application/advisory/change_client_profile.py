"""
Use case: Link a client to another risk profile.

Input: ClientProfileCommand (client_id, profile_id)
Output: ClientProfileResult
Side effects: Updates the client's profile link. The client's own
    ceiling keeps its drifted value.
Failure cases: InvalidIdentifierError, ClientNotFoundError,
    RiskProfileNotFoundError.
"""

import logging
from dataclasses import replace

from app.application.advisory.dtos import ClientProfileCommand, ClientProfileResult
from app.application.advisory.get_client_profile import build_client_profile_result
from app.domain.advisory.errors import (
    ClientNotFoundError,
    InvalidIdentifierError,
    RiskProfileNotFoundError,
)
from app.domain.advisory.ports import ClientRepository, RiskProfileRepository

logger = logging.getLogger(__name__)


class ChangeClientProfileUseCase:
    """Re-links a client to a risk profile."""

    def __init__(
        self,
        client_repo: ClientRepository,
        profile_repo: RiskProfileRepository,
    ) -> None:
        self._client_repo = client_repo
        self._profile_repo = profile_repo

    def execute(self, command: ClientProfileCommand) -> ClientProfileResult:
        """Run the change client profile use case.

        Raises:
            InvalidIdentifierError: If an ID is not positive.
            ClientNotFoundError: If the client does not exist.
            RiskProfileNotFoundError: If the profile does not exist.
        """
        if command.client_id <= 0:
            raise InvalidIdentifierError("client_id", command.client_id)
        if command.profile_id <= 0:
            raise InvalidIdentifierError("profile_id", command.profile_id)

        client = self._client_repo.get_by_id(command.client_id)
        if client is None:
            raise ClientNotFoundError(command.client_id)

        profile = self._profile_repo.get_by_id(command.profile_id)
        if profile is None:
            raise RiskProfileNotFoundError(command.profile_id)

        if client.profile_id != profile.id:
            logger.info(
                "Changing profile of client=%d: %d -> %d",
                client.id,
                client.profile_id,
                profile.id,
            )
            self._client_repo.update_profile(client.id, profile.id)
            client = replace(client, profile_id=profile.id)

        return build_client_profile_result(client, profile)
