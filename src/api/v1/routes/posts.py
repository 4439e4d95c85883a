"""Post API routes: posts, likes and comments."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_post_service
from api.v1.schemas.common import AUTH_ERROR_RESPONSES, MessageResponse
from api.v1.schemas.post import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    LikeListResponse,
    LikeResponse,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.post import Comment, Like, Post
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"], responses=AUTH_ERROR_RESPONSES)


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Create a post authored by the caller."""
    post = await service.create(user.id, body.text)
    return PostDetailResponse(data=_build_post_response(post))


@router.get(
    "",
    response_model=PostListResponse,
    summary="Get all posts",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """Get all posts, most recent first."""
    posts = await service.list_all()
    return PostListResponse(data=[_build_post_response(p) for p in posts])


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Get post by ID",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Get a single post."""
    post = await service.get_by_id(post_id)
    return PostDetailResponse(data=_build_post_response(post))


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        403: {"description": "User not authorized"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete a post. Only its author may do so."""
    await service.delete(post_id, user.id)
    return MessageResponse(message="Post removed")


@router.put(
    "/like/{post_id}",
    response_model=LikeListResponse,
    summary="Like a post",
    responses={
        404: {"description": "Post not found"},
        409: {"description": "Post already liked"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> LikeListResponse:
    """Like a post. Each user may like a post once."""
    likes = await service.like(post_id, user.id)
    return LikeListResponse(data=_build_likes(likes))


@router.put(
    "/unlike/{post_id}",
    response_model=LikeListResponse,
    summary="Unlike a post",
    responses={
        404: {"description": "Post not found"},
        409: {"description": "Post has not yet been liked"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> LikeListResponse:
    """Remove the caller's like from a post."""
    likes = await service.unlike(post_id, user.id)
    return LikeListResponse(data=_build_likes(likes))


@router.post(
    "/comment/{post_id}",
    response_model=CommentListResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: str,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> CommentListResponse:
    """Add a comment at the top of a post's thread."""
    comments = await service.add_comment(post_id, user.id, body.text)
    return CommentListResponse(data=_build_comments(comments))


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=CommentListResponse,
    summary="Delete a comment",
    responses={
        403: {"description": "User not authorized"},
        404: {"description": "Post or comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_comment(
    request: Request,
    post_id: str,
    comment_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> CommentListResponse:
    """Delete a comment. Only the comment's author may do so."""
    comments = await service.remove_comment(post_id, comment_id, user.id)
    return CommentListResponse(data=_build_comments(comments))


def _build_likes(likes: list[Like]) -> list[LikeResponse]:
    return [LikeResponse(user=like.user_id) for like in likes]


def _build_comments(comments: list[Comment]) -> list[CommentResponse]:
    return [
        CommentResponse(
            id=c.id,
            user=c.user_id,
            text=c.text,
            name=c.name,
            avatar=c.avatar,
            date=c.created_at,
        )
        for c in comments
    ]


def _build_post_response(post: Post) -> PostResponse:
    """Build a PostResponse from a domain entity."""
    return PostResponse(
        id=post.id,
        user=post.user_id,
        text=post.text,
        name=post.name,
        avatar=post.avatar,
        likes=_build_likes(post.likes),
        comments=_build_comments(post.comments),
        date=post.created_at,
    )
