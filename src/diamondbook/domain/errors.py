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


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def client_name_not_found(name: str) -> str:
    """Return message for missing client by name."""
    return f"Client '{name}' not found"


def duplicate_client_name(name: str) -> str:
    """Return message for duplicate client name."""
    return f"Client with name '{name}' already exists"


def diamond_not_found(diamond_id: int) -> str:
    """Return message for missing diamond entry."""
    return f"Diamond entry {diamond_id} not found"


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def invoice_number_not_found(invoice_number: str) -> str:
    """Return message for missing invoice by number."""
    return f"Invoice '{invoice_number}' not found"


def diamond_already_invoiced(diamond_id: int, invoice_number: str) -> str:
    """Return message when a diamond entry is already on an invoice."""
    return f"Diamond entry {diamond_id} is already on invoice {invoice_number}"


def diamond_client_mismatch(diamond_id: int, client_id: int) -> str:
    """Return message when a diamond entry belongs to a different client."""
    return f"Diamond entry {diamond_id} does not belong to client {client_id}"


def client_delete_blocked(client_id: int, diamond_count: int, invoice_count: int) -> str:
    """Return message when client has dependent diamonds or invoices."""
    parts = []
    if diamond_count > 0:
        parts.append(f"{diamond_count} diamond entr{'ies' if diamond_count != 1 else 'y'}")
    if invoice_count > 0:
        parts.append(f"{invoice_count} invoice{'s' if invoice_count != 1 else ''}")
    return (
        f"Cannot delete client {client_id}: it has {', '.join(parts)}. "
        "Please delete them first."
    )


def diamond_delete_blocked(diamond_id: int, invoice_number: str) -> str:
    """Return message when a diamond entry is still linked to an invoice."""
    return (
        f"Cannot delete diamond entry {diamond_id}: it is on invoice {invoice_number}. "
        "Remove it from the invoice first."
    )
