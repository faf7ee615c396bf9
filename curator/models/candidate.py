"""Candidate article model produced by the aggregator."""

import hashlib
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SourceRef(BaseModel):
    """Publishing source of a candidate."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Source identifier")
    name: str = Field(..., description="Source display name")
    url: Optional[str] = Field(None, description="Source home or feed URL")


class Candidate(BaseModel):
    """Normalized article eligible for curation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Stable hash of URL and title")
    title: str = Field(..., description="Article title")
    url: str = Field(..., description="Article URL")
    excerpt: Optional[str] = Field(None, description="Short excerpt or summary")
    author: Optional[str] = Field(None, description="Article author")
    published_at: datetime = Field(..., alias="publishedAt", description="Publication timestamp")
    source: SourceRef = Field(..., description="Publishing source")
    category: str = Field("general", description="Category tag from the source")
    tags: List[str] = Field(default_factory=list, description="Article tags")
    read_time: Optional[int] = Field(None, alias="readTime", description="Estimated read time in minutes")

    @staticmethod
    def make_id(url: str, title: str) -> str:
        """Build the stable candidate id from URL and title."""
        return hashlib.md5((url + title).encode("utf-8")).hexdigest()

    @model_validator(mode="before")
    @classmethod
    def fill_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id"):
            data = dict(data)
            data["id"] = cls.make_id(data.get("url", ""), data.get("title", ""))
        return data

    @field_validator("published_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, v: Any) -> List[str]:
        """Drop non-string and duplicate tags."""
        if not v:
            return []
        seen = []
        for tag in v:
            if isinstance(tag, str) and tag and tag not in seen:
                seen.append(tag)
        return seen

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v: Any) -> Any:
        return v or "general"
