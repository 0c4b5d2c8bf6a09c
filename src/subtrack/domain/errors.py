"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class StorageError(DomainError):
    """The storage collaborator failed to load or persist data."""


def subscription_not_found(subscription_id: str) -> str:
    """Return message for missing subscription."""
    return f"Subscription {subscription_id} not found"


def invalid_amount(amount: object) -> str:
    """Return message for a non-positive or unparseable amount."""
    return f"Amount must be greater than zero, got {amount}"


def missing_expiry_date(name: str) -> str:
    """Return message when a manual subscription has no renewal date."""
    return f"Subscription '{name}' pays manually and needs an expiry date"


def invalid_choice(field_name: str, value: object, choices) -> str:
    """Return message for a value outside a fixed enumeration."""
    allowed = ", ".join(str(choice) for choice in choices)
    return f"Invalid {field_name} '{value}'. Expected one of: {allowed}"


def too_precise_amount(amount: object) -> str:
    """Return message for an amount with fractions of a cent."""
    return f"Amount must have at most two decimal places, got {amount}"
