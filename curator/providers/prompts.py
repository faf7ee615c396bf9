"""Curation prompts for the reasoning services."""

from typing import Sequence

from ..models import Candidate, Preferences

CURATOR_SYSTEM_PROMPT = (
    "You are an expert news curator with deep understanding of content quality, relevance, "
    "and user interests. You provide intelligent article selection with clear reasoning."
)


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def _focus_label(diversity_vs_focus: float) -> str:
    if diversity_vs_focus > 0.7:
        return "Focus-oriented"
    if diversity_vs_focus < 0.3:
        return "Discovery-oriented"
    return "Balanced"


def build_openai_prompt(
    candidates: Sequence[Candidate],
    preferences: Preferences,
    max_articles: int,
) -> str:
    """Prompt asking for a 1-100 scored selection."""
    user_topics = "\n".join(
        f"{topic} (interest: {prefs.interest_score}, keywords: {', '.join(prefs.keywords)})"
        for topic, prefs in preferences.topics.items()
        if prefs.interest_score > 0.4
    )

    articles_text = "\n\n".join(
        f"{index}. [ID: {c.id}]\n"
        f"Title: \"{c.title}\"\n"
        f"Source: {c.source.name}\n"
        f"Category: {c.category}\n"
        f"Published: {c.published_at.isoformat()}\n"
        f"Excerpt: {_truncate(c.excerpt or '', 200)}\n"
        f"Tags: {', '.join(c.tags)}"
        for index, c in enumerate(candidates, 1)
    )

    patterns = preferences.reading_patterns
    return f"""You are curating a personalized daily newsletter. Select the {max_articles} most valuable articles for this user.

## User Profile & Interests:
{user_topics}

## Content Preferences:
- Preferred reading order: {', '.join(patterns.preferred_categories_order)}
- Max per category: {patterns.max_articles_per_category}
- Focus vs diversity balance: {patterns.diversity_vs_focus}

## Today's Articles ({len(candidates)} total):
{articles_text}

## Selection Criteria (prioritized):
1. Relevance: match user interests and provide value
2. Quality: well-written, credible sources, substantial content
3. Timeliness: recent and actionable information
4. Diversity: balanced mix across interests, avoid duplicates

## Required Output Format:
Return ONLY a valid JSON array with at most {max_articles} articles:

[
  {{
    "id": "article_id_here",
    "selection_score": 85,
    "selection_reason": "Highly relevant to AI interests with breaking developments",
    "target_section": "highlights",
    "ai_summary": "One sentence explaining the key insight."
  }}
]

Target sections: "highlights" (top 3), "technology", "business", "science", "general"
Selection scores: 1-100 based on value to this specific user."""


def build_user_profile(preferences: Preferences) -> str:
    """Detailed profile used by the premium tier."""
    topic_lines = []
    for topic, prefs in preferences.topics.items():
        if prefs.interest_score <= 0.3:
            continue
        if prefs.subtopics:
            subtopics = ", ".join(f"{name} ({score})" for name, score in prefs.subtopics.items())
        else:
            subtopics = "Not specified"
        topic_lines.append(
            f"- {topic} (Interest: {prefs.interest_score})\n"
            f"  Keywords: {', '.join(prefs.keywords)}\n"
            f"  Subtopics: {subtopics}"
        )

    patterns = preferences.reading_patterns
    content = preferences.content_preferences
    content_types = ", ".join(f"{name}: {weight}" for name, weight in content.content_types.items())
    length = content.article_length

    return (
        "### Interest Areas:\n"
        + "\n".join(topic_lines)
        + "\n\n### Reading Patterns:\n"
        f"- Preferred category order: {' -> '.join(patterns.preferred_categories_order)}\n"
        f"- Articles per category: {patterns.max_articles_per_category}\n"
        f"- Focus vs Discovery balance: {patterns.diversity_vs_focus} "
        f"({_focus_label(patterns.diversity_vs_focus)})\n\n"
        f"### Content Type Preferences:\n{content_types or 'Not specified'}\n\n"
        f"### Length Preferences:\n"
        f"- Short ({length.short}), Medium ({length.medium}), Long ({length.long})"
    )


def build_claude_prompt(
    candidates: Sequence[Candidate],
    preferences: Preferences,
    max_articles: int,
) -> str:
    """Prompt asking for a 1-10 scored selection with confidence levels."""
    articles_text = "\n\n".join(
        f"{index}. [ID: {c.id}]\n"
        f"Title: \"{c.title}\"\n"
        f"Source: {c.source.name} (Published: {c.published_at.isoformat()})\n"
        f"Category: {c.category} | Tags: {', '.join(c.tags)}\n"
        f"Read Time: {c.read_time if c.read_time is not None else 'Unknown'} minutes\n"
        f"Excerpt: {_truncate(c.excerpt or '', 300)}"
        + (f"\nAuthor: {c.author}" if c.author else "")
        for index, c in enumerate(candidates, 1)
    )

    return f"""You are an expert newsletter curator with exceptional judgment. Select at most {max_articles} articles that will provide maximum value to this specific user.

## Detailed User Profile:
{build_user_profile(preferences)}

## Today's Content Pool ({len(candidates)} articles):
{articles_text}

## Curation Philosophy:
1. Deep relevance to the user's interests
2. Information value and unique insight
3. Timeliness and impact
4. A complementary, coherent selection

## Required Output Format:
Return a JSON array:

[
  {{
    "id": "article_id_here",
    "selection_score": 9.2,
    "selection_reason": "Why this article was selected",
    "target_section": "highlights",
    "ai_summary": "One sentence on the key insight.",
    "confidence_level": 0.95
  }}
]

Selection scores: 1-10. Available sections: "highlights" (top 3-4), "technology", "business", "science", "general", "discovery"."""
