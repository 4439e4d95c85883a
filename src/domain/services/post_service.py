"""Post service layer: posts, likes and comments."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AlreadyLikedError,
    CommentNotFoundError,
    MalformedIdError,
    NotLikedError,
    PostNotFoundError,
    UserNotFoundError,
)
from core.ids import parse_id
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.policies.ownership import assert_owner
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic.

    Like and comment mutations are read-modify-write on the whole post
    document; concurrent writers to the same post are last-write-wins.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_all(self) -> list[Post]:
        """Get all posts, most recent first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get_by_id(self, raw_post_id: str | UUID) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            return await self._get_post(uow, raw_post_id)

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's name and avatar."""
        async with self._uow_factory() as uow:
            author = await self._get_author(uow, user_id)

            post = Post(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), user_id=str(user_id))
        return created

    async def delete(self, raw_post_id: str | UUID, user_id: UUID) -> None:
        """Delete a post. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._get_post(uow, raw_post_id)
            assert_owner(post.user_id, user_id)

            await uow.posts.delete(post.id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post.id), user_id=str(user_id))

    async def like(self, raw_post_id: str | UUID, user_id: UUID) -> list[Like]:
        """Like a post once per user. Returns the updated likes."""
        async with self._uow_factory() as uow:
            post = await self._get_post(uow, raw_post_id)
            if not post.add_like(user_id):
                raise AlreadyLikedError(str(post.id))

            updated = await uow.posts.update(post)
            await uow.commit()

        logger.info("post_liked", post_id=str(post.id), user_id=str(user_id))
        return updated.likes

    async def unlike(self, raw_post_id: str | UUID, user_id: UUID) -> list[Like]:
        """Remove the caller's like. Returns the updated likes."""
        async with self._uow_factory() as uow:
            post = await self._get_post(uow, raw_post_id)
            if not post.remove_like(user_id):
                raise NotLikedError(str(post.id))

            updated = await uow.posts.update(post)
            await uow.commit()

        logger.info("post_unliked", post_id=str(post.id), user_id=str(user_id))
        return updated.likes

    async def add_comment(
        self, raw_post_id: str | UUID, user_id: UUID, text: str
    ) -> list[Comment]:
        """Add a comment at the head of a post's thread."""
        async with self._uow_factory() as uow:
            author = await self._get_author(uow, user_id)
            post = await self._get_post(uow, raw_post_id)

            comment = Comment(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            post.add_comment(comment)
            updated = await uow.posts.update(post)
            await uow.commit()

        logger.info(
            "comment_added",
            post_id=str(post.id),
            comment_id=str(comment.id),
            user_id=str(user_id),
        )
        return updated.comments

    async def remove_comment(
        self,
        raw_post_id: str | UUID,
        raw_comment_id: str | UUID,
        user_id: UUID,
    ) -> list[Comment]:
        """Delete a comment. Only the comment's author may do so."""
        async with self._uow_factory() as uow:
            post = await self._get_post(uow, raw_post_id)

            try:
                comment_id = parse_id(raw_comment_id, "comment")
            except MalformedIdError:
                raise CommentNotFoundError(str(post.id), str(raw_comment_id)) from None

            comment = post.find_comment(comment_id)
            if not comment:
                raise CommentNotFoundError(str(post.id), str(comment_id))

            # The comment's author, not the post's, owns the comment
            assert_owner(comment.user_id, user_id)

            post.remove_comment(comment.id)
            updated = await uow.posts.update(post)
            await uow.commit()

        logger.info(
            "comment_removed",
            post_id=str(post.id),
            comment_id=str(comment_id),
            user_id=str(user_id),
        )
        return updated.comments

    async def _get_post(self, uow: IUnitOfWork, raw_post_id: str | UUID) -> Post:
        """Load a post, distinguishing malformed ids from missing posts."""
        post_id = parse_id(raw_post_id, "post")
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def _get_author(self, uow: IUnitOfWork, user_id: UUID) -> User:
        """Resolve the author's display fields from the user directory."""
        author = await uow.users.get(user_id)
        if not author:
            raise UserNotFoundError(str(user_id))
        return author
