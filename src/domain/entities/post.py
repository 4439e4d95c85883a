"""Post domain entity with embedded likes and comments."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class Like:
    """A like on a post, keyed by the liking user."""

    user_id: UUID


@dataclass
class Comment:
    """A comment embedded in a post, with an author snapshot."""

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a Post.

    ``name`` and ``avatar`` are a snapshot of the author taken at creation
    and are not kept in sync with later account changes. Likes hold at most
    one entry per user; likes and comments are ordered most recent first.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def is_liked_by(self, user_id: UUID) -> bool:
        """Check whether the user has a like on this post."""
        return any(like.user_id == user_id for like in self.likes)

    def add_like(self, user_id: UUID) -> bool:
        """Add a like at the head; False if the user already liked the post."""
        if self.is_liked_by(user_id):
            return False
        self.likes.insert(0, Like(user_id=user_id))
        return True

    def remove_like(self, user_id: UUID) -> bool:
        """Remove exactly the like keyed by the user; False if none exists."""
        if not self.is_liked_by(user_id):
            return False
        self.likes = [like for like in self.likes if like.user_id != user_id]
        return True

    def add_comment(self, comment: Comment) -> None:
        """Insert a comment at the head of the thread."""
        self.comments.insert(0, comment)

    def find_comment(self, comment_id: UUID) -> Comment | None:
        """Get a comment by its id."""
        return next((c for c in self.comments if c.id == comment_id), None)

    def remove_comment(self, comment_id: UUID) -> bool:
        """Remove the comment with the given id; False if none matched."""
        remaining = [c for c in self.comments if c.id != comment_id]
        if len(remaining) == len(self.comments):
            return False
        self.comments = remaining
        return True
