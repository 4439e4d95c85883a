"""Helpers for classifying driver errors raised through SQLAlchemy."""

from sqlalchemy.exc import IntegrityError


def is_unique_violation(exc: IntegrityError) -> bool:
    """Whether an IntegrityError came from a unique constraint or key.

    NOT NULL and foreign key failures are bugs, not races, and return False.
    """
    orig = str(exc.orig).lower() if exc.orig else ""
    return "unique" in orig or "duplicate" in orig
