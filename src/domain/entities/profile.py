"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

SOCIAL_PLATFORMS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


@dataclass
class Experience:
    """A single experience entry embedded in a profile."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Profile:
    """Domain entity for a user's developer profile (one per user)."""

    user_id: UUID
    status: str
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str] = field(default_factory=list)
    social: dict[str, str] = field(default_factory=dict)
    experience: list[Experience] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def add_experience(self, entry: Experience) -> None:
        """Insert an entry at the head of the experience list."""
        self.experience.insert(0, entry)
        self.updated_at = datetime.utcnow()

    def remove_experience(self, experience_id: UUID) -> bool:
        """Remove the entry with the given id; False if no entry matched."""
        remaining = [e for e in self.experience if e.id != experience_id]
        if len(remaining) == len(self.experience):
            return False
        self.experience = remaining
        self.updated_at = datetime.utcnow()
        return True

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass(frozen=True, slots=True)
class ProfileWithOwner:
    """Read-only value object: a Profile bundled with its owner's display fields."""

    profile: Profile
    name: str
    avatar: str | None
