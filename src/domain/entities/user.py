"""User domain entity."""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


def gravatar_url(email: str) -> str:
    """Build the Gravatar avatar URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode()).hexdigest()
    return f"https://www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"


@dataclass
class User:
    """Domain entity for a registered account."""

    name: str
    email: str
    password_hash: str = field(repr=False)
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Normalize email and derive the avatar when none was given."""
        self.email = self.email.strip().lower()
        if not self.avatar:
            self.avatar = gravatar_url(self.email)
