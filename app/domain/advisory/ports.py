"""
Port interfaces (ABCs) for the advisory bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from decimal import Decimal
from typing import Optional

from app.domain.advisory.entities import (
    Client,
    InvestmentRecord,
    Product,
    ProductCategory,
    RiskProfile,
    SimulationDailySummary,
    SimulationRecord,
)


class RiskProfileRepository(ABC):
    """Port for reading risk profiles."""

    @abstractmethod
    def get_by_id(self, profile_id: int) -> Optional[RiskProfile]:
        """Return a risk profile by its ID, or None if not found."""
        raise NotImplementedError


class ClientRepository(ABC):
    """Port for persisting and retrieving clients."""

    @abstractmethod
    def get_by_id(self, client_id: int) -> Optional[Client]:
        """Return a client by its ID, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Client]:
        """Return every registered client ordered by ID."""
        raise NotImplementedError

    @abstractmethod
    def add(self, client: Client) -> None:
        """Persist a new client.

        Raises:
            ClientAlreadyExistsError: If a client with the same ID exists.
        """
        raise NotImplementedError

    @abstractmethod
    def update_profile(self, client_id: int, profile_id: int) -> None:
        """Link an existing client to another risk profile."""
        raise NotImplementedError


class ProductRepository(ABC):
    """Port for reading the product catalog."""

    @abstractmethod
    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Return a product with its yield bands, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def get_first_by_category(
        self, category: ProductCategory
    ) -> Optional[Product]:
        """Return the first product of a category in catalog order."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return the whole catalog in catalog order."""
        raise NotImplementedError

    @abstractmethod
    def list_up_to_risk(self, max_risk: Decimal) -> list[Product]:
        """Return products whose risk is at most ``max_risk``."""
        raise NotImplementedError


class InvestmentRepository(ABC):
    """Port for the investment ledger."""

    @abstractmethod
    def list_for_client(self, client_id: int) -> list[InvestmentRecord]:
        """Return a client's investments with resolved product risk.

        Args:
            client_id: ID of the client.

        Returns:
            InvestmentRecord list ordered by ID ascending.
        """
        raise NotImplementedError

    @abstractmethod
    def save_with_risk_update(
        self,
        investment: InvestmentRecord,
        expected_version: int,
        new_max_risk: Decimal,
    ) -> InvestmentRecord:
        """Insert an investment and update the client's ceiling atomically.

        Both writes happen in one transaction. The ceiling is only updated
        if the client's stored version still equals ``expected_version``;
        a successful write increments it.

        Args:
            investment: The investment to insert (``id`` is ignored).
            expected_version: Client version the adjustment was computed from.
            new_max_risk: Ceiling to store.

        Returns:
            The persisted investment with its assigned ID.

        Raises:
            PersistenceConflictError: If the client was written meanwhile.
            PersistenceError: If the transaction could not be committed.
        """
        raise NotImplementedError


class SimulationRepository(ABC):
    """Port for the simulation audit trail."""

    @abstractmethod
    def save(self, simulation: SimulationRecord) -> SimulationRecord:
        """Persist a simulation and return it with its assigned ID."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[SimulationRecord]:
        """Return every simulation ordered by ID."""
        raise NotImplementedError

    @abstractmethod
    def summarize_by_product_day(self) -> list[SimulationDailySummary]:
        """Return simulation counts and average final value per product and day."""
        raise NotImplementedError


class ClientLockPort(ABC):
    """Port serializing risk-limit adjustments per client."""

    @abstractmethod
    def hold(self, client_id: int) -> AbstractContextManager[None]:
        """Return a context manager holding the client's exclusive lock."""
        raise NotImplementedError
