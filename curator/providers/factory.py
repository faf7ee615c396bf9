"""Provider selection by tier."""

import os
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel
from rich.console import Console

from ..config.models import ProviderConfig
from .base import CurationProvider
from .claude_provider import ClaudeProvider
from .heuristic import HeuristicProvider
from .openai_provider import OpenAIProvider

console = Console()

API_KEY_ENV = {
    "openai": ["OPENAI_API_KEY"],
    "claude": ["ANTHROPIC_API_KEY", "CLAUDE_API_KEY"],
}

# Rough monthly cost per curated article.
OPENAI_COST_PER_ARTICLE = 0.02
CLAUDE_COST_PER_ARTICLE = 0.04


class ProviderTier(str, Enum):
    FREE = "free"
    OPENAI = "openai"
    CLAUDE = "claude"


class TierInfo(BaseModel):
    """Description of a provider tier."""

    tier: ProviderTier
    name: str
    cost: str
    effectiveness: str
    description: str


def create_provider(
    tier: Union[ProviderTier, str],
    api_key: Optional[str] = None,
    monthly_budget: Optional[float] = None,
    timeout: float = 60.0,
) -> CurationProvider:
    """
    Create the provider for a tier.

    A missing API key, an unknown tier or a failing constructor all result
    in the free heuristic provider; this function does not raise.
    """
    try:
        tier = ProviderTier(str(getattr(tier, "value", tier)).strip().lower())
    except ValueError:
        console.print(f"[yellow]Warning: Unknown provider tier '{tier}', defaulting to free[/yellow]")
        return HeuristicProvider()

    if tier is ProviderTier.FREE:
        return HeuristicProvider()

    if not api_key:
        console.print(
            f"[yellow]Warning: No API key for the {tier.value} tier. "
            f"Using free rule-based provider.[/yellow]"
        )
        return HeuristicProvider()

    try:
        if tier is ProviderTier.OPENAI:
            return OpenAIProvider(api_key, monthly_budget=monthly_budget, timeout=timeout)
        return ClaudeProvider(api_key, monthly_budget=monthly_budget, timeout=timeout)
    except Exception as e:
        console.print(f"[red]Failed to create {tier.value} provider: {e}[/red]")
        console.print("[yellow]Falling back to free tier[/yellow]")
        return HeuristicProvider()


def resolve_api_key(provider_config: ProviderConfig) -> Optional[str]:
    """API key from the configured env var, the tier's default env vars, or the config itself."""
    if provider_config.api_key_env:
        api_key = os.environ.get(provider_config.api_key_env)
        if api_key:
            return api_key

    for env_var in API_KEY_ENV.get(provider_config.tier, []):
        api_key = os.environ.get(env_var)
        if api_key:
            return api_key

    return provider_config.api_key


def create_provider_from_config(provider_config: ProviderConfig) -> CurationProvider:
    """Create the configured provider and report what was chosen."""
    provider = create_provider(
        provider_config.tier,
        api_key=resolve_api_key(provider_config),
        monthly_budget=provider_config.monthly_budget,
        timeout=provider_config.timeout_seconds,
    )

    console.print(f"[green]✓[/green] Curation provider: {provider.name} ({provider.cost_per_month})")
    console.print(f"[dim]Effectiveness: {provider.effectiveness}[/dim]")
    return provider


def available_tiers() -> List[TierInfo]:
    return [
        TierInfo(
            tier=ProviderTier.FREE,
            name=HeuristicProvider.name,
            cost=f"{HeuristicProvider.cost_per_month}/month",
            effectiveness=HeuristicProvider.effectiveness,
            description="Smart keyword matching, source scoring, and trending detection",
        ),
        TierInfo(
            tier=ProviderTier.OPENAI,
            name=OpenAIProvider.name,
            cost=f"{OpenAIProvider.cost_per_month}/month",
            effectiveness=OpenAIProvider.effectiveness,
            description="AI reasoning, personalization, and content summaries",
        ),
        TierInfo(
            tier=ProviderTier.CLAUDE,
            name=ClaudeProvider.name,
            cost=f"{ClaudeProvider.cost_per_month}/month",
            effectiveness=ClaudeProvider.effectiveness,
            description="Superior reasoning, nuanced analysis, and best writing quality",
        ),
    ]


def recommend_tier(
    monthly_budget: float,
    articles_per_day: int = 15,
    days_per_month: int = 30,
) -> ProviderTier:
    """Cheapest-to-best tier whose estimated monthly cost fits the budget."""
    if monthly_budget <= 0:
        return ProviderTier.FREE

    monthly_articles = articles_per_day * days_per_month
    if monthly_budget >= monthly_articles * CLAUDE_COST_PER_ARTICLE and monthly_budget >= 10:
        return ProviderTier.CLAUDE
    if monthly_budget >= monthly_articles * OPENAI_COST_PER_ARTICLE and monthly_budget >= 5:
        return ProviderTier.OPENAI
    return ProviderTier.FREE
