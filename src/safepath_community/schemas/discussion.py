"""Discussion-related Pydantic schemas.

These types are the data-shape contract shared by the API server and the API
client: the server serializes ORM rows through them and the client validates
every response against them before anything reaches the feed.
"""
from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from .category import Category, get_category
from .common import CamelModel


class DiscussionCreate(CamelModel):
    """Schema for submitting a new discussion."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=10_000)
    category_id: str = Field(..., description="Id of one of the fixed categories")
    tags: list[str] = Field(default_factory=list)

    @field_validator("title", "content")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("category_id")
    @classmethod
    def _known_category(cls, value: str) -> str:
        if get_category(value) is None:
            raise ValueError(f"unknown category '{value}'")
        return value

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str]) -> list[str]:
        # Tags behave as a set: drop blanks and repeats, keep first-seen order.
        seen: dict[str, None] = {}
        for tag in value:
            tag = tag.strip()
            if tag:
                seen.setdefault(tag, None)
        return list(seen)


class DiscussionResponse(CamelModel):
    """Schema for discussion information returned by the API."""

    id: str
    title: str
    content: str
    category: Category
    tags: list[str] = Field(default_factory=list)
    upvotes: int = Field(0, ge=0)
    downvotes: int = Field(0, ge=0)
    reply_count: int = Field(0, ge=0)
    is_pinned: bool = False
    author_id: str | None = None
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _resolve_category(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            extracted["category"] = getattr(data, "category_id", None)
            data = extracted
        else:
            data = dict(data)

        category = data.get("category")
        if isinstance(category, str):
            resolved = get_category(category)
            data["category"] = resolved if resolved is not None else {"id": category, "name": category}

        if data.get("tags") is None:
            data["tags"] = []

        return data

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without an offset; they are stored as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @property
    def net_score(self) -> int:
        return self.upvotes - self.downvotes


class DiscussionListData(BaseModel):
    """Payload of a discussion list response.

    A missing or null ``discussions`` key is the one place an empty
    collection is substituted; every other shape error is a validation error.
    """

    discussions: list[DiscussionResponse] = Field(default_factory=list)

    @field_validator("discussions", mode="before")
    @classmethod
    def _null_is_empty(cls, value: object) -> object:
        return [] if value is None else value


class DiscussionListEnvelope(BaseModel):
    """``GET /community/discussions`` response envelope."""

    data: DiscussionListData


class DiscussionData(BaseModel):
    """Payload wrapping a single discussion."""

    discussion: DiscussionResponse


class DiscussionEnvelope(BaseModel):
    """``POST /community/discussions`` response envelope."""

    data: DiscussionData
