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


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class PersistenceError(DomainError):
    """The store failed to write a change."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for duplicate account name."""
    return f"Account with name '{name}' already exists"


def duplicate_category_name(name: str) -> str:
    """Return message for duplicate category name."""
    return f"Category with name '{name}' already exists"


def invalid_choice(field: str, value: object, choices) -> str:
    """Return message for a value outside an enumerated set."""
    allowed = ", ".join(choice.value for choice in choices)
    return f"Invalid {field} '{value}'. Expected one of: {allowed}"


def balance_write_failed(account_id: int) -> str:
    """Return message when balance fields could not be persisted."""
    return f"Could not save balances for account {account_id}"


def _pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def account_delete_blocked(account_id: int, transaction_count: int) -> str:
    """Return message when account has dependent transactions."""
    return (
        f"Cannot delete account {account_id}: it has "
        f"{_pluralize(transaction_count, 'transaction')}. "
        "Please reassign or delete them first."
    )


def category_delete_blocked(category_id: int, transaction_count: int) -> str:
    """Return message when category has dependent transactions."""
    return (
        f"Cannot delete category {category_id}: it has "
        f"{_pluralize(transaction_count, 'transaction')}. "
        "Please reassign or delete them first."
    )
