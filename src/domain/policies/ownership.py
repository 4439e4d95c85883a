"""Ownership policy: only a resource's owner may modify or delete it."""

from uuid import UUID

from core.exceptions import ForbiddenError


def is_owner(owner_id: UUID | str, user_id: UUID | str) -> bool:
    """Compare owner and caller by their canonical string form."""
    return str(owner_id).lower() == str(user_id).lower()


def assert_owner(
    owner_id: UUID | str,
    user_id: UUID | str,
    message: str = "User not authorized",
) -> None:
    """Raise ForbiddenError unless ``user_id`` owns the resource."""
    if not is_owner(owner_id, user_id):
        raise ForbiddenError(message)
