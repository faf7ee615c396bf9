"""Curation strategies and tier selection."""

from .base import DEFAULT_MAX_ARTICLES, CurationProvider, UsageTracker
from .claude_provider import ClaudeProvider
from .factory import (
    ProviderTier,
    TierInfo,
    available_tiers,
    create_provider,
    create_provider_from_config,
    recommend_tier,
    resolve_api_key,
)
from .heuristic import HeuristicProvider
from .llm import LLMCurationProvider
from .openai_provider import OpenAIProvider
from .parsing import ExternalSelection, ResponseParseError, parse_selections

__all__ = [
    "ClaudeProvider",
    "CurationProvider",
    "DEFAULT_MAX_ARTICLES",
    "ExternalSelection",
    "HeuristicProvider",
    "LLMCurationProvider",
    "OpenAIProvider",
    "ProviderTier",
    "ResponseParseError",
    "TierInfo",
    "UsageTracker",
    "available_tiers",
    "create_provider",
    "create_provider_from_config",
    "parse_selections",
    "recommend_tier",
    "resolve_api_key",
]
