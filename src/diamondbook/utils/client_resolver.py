"""Utility for resolving client names to IDs."""

from diamondbook.domain.client import ClientService
from diamondbook.domain.errors import NotFoundError, client_name_not_found, client_not_found


def resolve_client(client_service: ClientService, client: str | int) -> int:
    """Resolve client name or ID to client ID.

    Args:
        client_service: ClientService instance
        client: Client name (str) or ID (int or string representation of int)

    Returns:
        Client ID

    Raises:
        NotFoundError: If client is not found
    """
    if isinstance(client, int):
        if client_service.get_client(client) is None:
            raise NotFoundError(client_not_found(client))
        return client

    text = str(client).strip()
    if text.isdigit():
        client_id = int(text)
        if client_service.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))
        return client_id

    # Names match case-insensitively so "sunrise gems" finds "Sunrise Gems"
    for candidate in client_service.list_clients():
        if candidate.name.casefold() == text.casefold():
            return candidate.id

    raise NotFoundError(client_name_not_found(text))
