"""
Domain-specific errors for the advisory bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""

from decimal import Decimal


class AdvisoryDomainError(Exception):
    """Base error for all advisory domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidAmountError(AdvisoryDomainError):
    """Raised when an amount is not positive or has fractions of a cent."""

    def __init__(
        self, amount: Decimal, reason: str = "Must be greater than zero."
    ) -> None:
        super().__init__(f"Invalid amount: {amount}. {reason}")
        self.amount = amount


class InvalidTermError(AdvisoryDomainError):
    """Raised when a simulation term is not a positive number of months."""

    def __init__(self, term_months: int) -> None:
        super().__init__(
            f"Invalid term: {term_months}. Must be at least one month."
        )
        self.term_months = term_months


class InvalidIdentifierError(AdvisoryDomainError):
    """Raised when an identifier is zero or negative."""

    def __init__(self, field_name: str, value: int) -> None:
        super().__init__(f"Invalid {field_name}: {value}. Must be greater than zero.")
        self.field_name = field_name
        self.value = value


class InvalidProductSelectorError(AdvisoryDomainError):
    """Raised when a simulation names neither or both a product and a category."""

    def __init__(self) -> None:
        super().__init__("Exactly one of product_id or product_category is required.")


class ClientNotFoundError(AdvisoryDomainError):
    """Raised when a client cannot be found."""

    def __init__(self, client_id: int) -> None:
        super().__init__(f"Client not found: {client_id}")
        self.client_id = client_id


class ClientAlreadyExistsError(AdvisoryDomainError):
    """Raised when registering a client that already has a risk profile."""

    def __init__(self, client_id: int) -> None:
        super().__init__(f"Client already registered: {client_id}")
        self.client_id = client_id


class ProductNotFoundError(AdvisoryDomainError):
    """Raised when a product id or category matches nothing in the catalog."""

    def __init__(self, product_ref: str) -> None:
        super().__init__(f"Product not found: {product_ref}")
        self.product_ref = product_ref


class RiskProfileNotFoundError(AdvisoryDomainError):
    """Raised when a risk profile cannot be found."""

    def __init__(self, profile_id: int) -> None:
        super().__init__(f"Risk profile not found: {profile_id}")
        self.profile_id = profile_id


class InvestmentNotFoundError(AdvisoryDomainError):
    """Raised when a client's investment cannot be found."""

    def __init__(self, client_id: int, investment_id: int) -> None:
        super().__init__(
            f"Investment not found: client={client_id}, investment={investment_id}"
        )
        self.client_id = client_id
        self.investment_id = investment_id


class NoApplicableRateError(AdvisoryDomainError):
    """Raised when no yield band of a product covers the requested amount."""

    def __init__(self, product_id: int, amount: Decimal) -> None:
        super().__init__(
            f"No applicable rate for product {product_id} and amount {amount}"
        )
        self.product_id = product_id
        self.amount = amount


class PersistenceConflictError(AdvisoryDomainError):
    """Raised when a concurrent update invalidated the state a write was based on."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Persistence conflict: {reason}")
        self.reason = reason


class PersistenceError(AdvisoryDomainError):
    """Raised when the storage layer fails to read or commit."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Persistence failure: {reason}")
        self.reason = reason
