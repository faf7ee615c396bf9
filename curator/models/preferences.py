"""User preference models."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class TopicPreference(BaseModel):
    """Interest in a single topic."""

    interest_score: float = Field(0.5, description="Topic interest", ge=0.0, le=1.0)
    keywords: List[str] = Field(default_factory=list, description="Keywords signalling the topic")
    subtopics: Optional[Dict[str, float]] = Field(None, description="Subtopic interest scores")

    @field_validator("subtopics")
    @classmethod
    def validate_subtopics(cls, v: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
        if v is None:
            return v
        for name, score in v.items():
            if not 0.0 <= score <= 1.0:
                raise ValueError(f"Subtopic score for '{name}' must be in [0, 1], got {score}")
        return v


class ArticleLengthPreference(BaseModel):
    """Preferred article length mix."""

    short: float = Field(0.3, ge=0.0, le=1.0)
    medium: float = Field(0.6, ge=0.0, le=1.0)
    long: float = Field(0.1, ge=0.0, le=1.0)


class ContentPreferences(BaseModel):
    """Descriptive content preferences (not enforced by the scorer)."""

    article_length: ArticleLengthPreference = Field(default_factory=ArticleLengthPreference)
    content_types: Dict[str, float] = Field(default_factory=dict)


class ReadingPatterns(BaseModel):
    """How the user likes the selection to be shaped."""

    preferred_categories_order: List[str] = Field(default_factory=list)
    max_articles_per_category: int = Field(5, description="Per-category cap", ge=1)
    diversity_vs_focus: float = Field(
        0.7,
        description="0 favours discovery, 1 favours focus",
        ge=0.0,
        le=1.0,
    )


class AuthorPreference(BaseModel):
    """Affinity for an author."""

    score: float = Field(0.5, ge=0.0, le=1.0)


class Preferences(BaseModel):
    """Complete preference document."""

    topics: Dict[str, TopicPreference] = Field(default_factory=dict)
    content_preferences: ContentPreferences = Field(default_factory=ContentPreferences)
    reading_patterns: ReadingPatterns = Field(default_factory=ReadingPatterns)
    authors: Dict[str, AuthorPreference] = Field(default_factory=dict)


def default_preferences() -> Preferences:
    """Seed preferences written by ``curator init``."""
    return Preferences(
        topics={
            "technology": TopicPreference(
                interest_score=0.8,
                keywords=["ai", "artificial intelligence", "software", "tech", "machine learning"],
                subtopics={"artificial_intelligence": 0.8, "open_source": 0.6},
            ),
            "business": TopicPreference(
                interest_score=0.6,
                keywords=["business", "startup", "market", "funding"],
            ),
            "science": TopicPreference(
                interest_score=0.6,
                keywords=["research", "study", "science", "climate"],
            ),
            "general": TopicPreference(
                interest_score=0.5,
                keywords=["news", "world", "breaking"],
            ),
        },
        content_preferences=ContentPreferences(
            content_types={"breaking_news": 0.4, "deep_analysis": 0.5, "opinion_pieces": 0.2},
        ),
        reading_patterns=ReadingPatterns(
            preferred_categories_order=["technology", "business", "science", "general"],
            max_articles_per_category=5,
            diversity_vs_focus=0.7,
        ),
    )
