"""Identifier parsing shared by services."""

from uuid import UUID

from core.exceptions import MalformedIdError


def parse_id(raw_id: str | UUID, resource: str) -> UUID:
    """Parse a document id, raising MalformedIdError if it is not a UUID."""
    if isinstance(raw_id, UUID):
        return raw_id
    try:
        return UUID(str(raw_id))
    except ValueError:
        raise MalformedIdError(resource, str(raw_id)) from None
