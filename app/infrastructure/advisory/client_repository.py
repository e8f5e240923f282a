"""
Adapter: Client repository.

Implements ClientRepository port.
Reads and writes the clients table. The ``version`` column is bumped each
time an investment is recorded and read back into Client, where it
serves as the expected value of the optimistic concurrency check.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.domain.advisory.entities import Client
from app.domain.advisory.errors import (
    ClientAlreadyExistsError,
    ClientNotFoundError,
    PersistenceError,
)
from app.domain.advisory.ports import ClientRepository
from app.infrastructure.advisory.database import clients

logger = logging.getLogger(__name__)


def _row_to_client(row) -> Client:
    return Client(
        id=row.id,
        profile_id=row.profile_id,
        max_risk=row.max_risk,
        version=row.version,
    )


class ClientRepositoryAdapter(ClientRepository):
    """SQL implementation of the client store."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, client_id: int) -> Optional[Client]:
        """Return a client by its ID, or None if not found."""
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(clients).where(clients.c.id == client_id)
                ).fetchone()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"could not read client {client_id}") from exc
        return _row_to_client(row) if row else None

    def list_all(self) -> list[Client]:
        """Return every registered client ordered by ID."""
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(select(clients).order_by(clients.c.id)).fetchall()
        except SQLAlchemyError as exc:
            raise PersistenceError("could not list clients") from exc
        return [_row_to_client(row) for row in rows]

    def add(self, client: Client) -> None:
        """Persist a new client.

        Raises:
            ClientAlreadyExistsError: If the ID is already taken.
        """
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    clients.insert().values(
                        id=client.id,
                        profile_id=client.profile_id,
                        max_risk=client.max_risk,
                        version=0,
                    )
                )
        except IntegrityError as exc:
            raise ClientAlreadyExistsError(client.id) from exc
        except SQLAlchemyError as exc:
            raise PersistenceError(f"could not save client {client.id}") from exc
        logger.debug("Saved client: id=%d profile=%d", client.id, client.profile_id)

    def update_profile(self, client_id: int, profile_id: int) -> None:
        """Link an existing client to another risk profile.

        Raises:
            ClientNotFoundError: If the client vanished.
        """
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    clients.update()
                    .where(clients.c.id == client_id)
                    .values(profile_id=profile_id)
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"could not update client {client_id}") from exc
        if result.rowcount == 0:
            raise ClientNotFoundError(client_id)
        logger.debug("Updated client profile: id=%d profile=%d", client_id, profile_id)
