"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TextBody(BaseModel):
    """Base schema for bodies carrying required text."""

    text: str = Field(..., min_length=1, max_length=5000)

    @field_validator("text")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Text is required")
        return v


class PostCreate(TextBody):
    """Schema for creating a Post."""


class CommentCreate(TextBody):
    """Schema for commenting on a Post."""


class LikeResponse(BaseModel):
    """Schema for a like entry."""

    user: UUID


class CommentResponse(BaseModel):
    """Schema for a comment entry."""

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str | None = None
    date: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user": "456e4567-e89b-12d3-a456-426614174000",
                "text": "hello",
                "name": "Jane Dev",
                "avatar": "https://www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
                "likes": [],
                "comments": [],
                "date": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str | None = None
    likes: list[LikeResponse] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
    date: datetime


class PostDetailResponse(BaseModel):
    """Schema for single Post."""

    data: PostResponse


class PostListResponse(BaseModel):
    """Schema for list of Posts."""

    data: list[PostResponse]


class LikeListResponse(BaseModel):
    """Schema for a post's likes after a like/unlike."""

    data: list[LikeResponse]


class CommentListResponse(BaseModel):
    """Schema for a post's comments after adding/removing one."""

    data: list[CommentResponse]
