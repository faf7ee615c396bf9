"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

TIERS = ("free", "openai", "claude")


class ProviderConfig(BaseModel):
    """Curation provider configuration."""

    tier: str = Field("free", description="Provider tier (free, openai, claude)")
    api_key_env: Optional[str] = Field(None, description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    monthly_budget: Optional[float] = Field(
        None, description="Monthly budget in USD (provider default when unset)", ge=0.0
    )
    timeout_seconds: float = Field(60.0, description="External request timeout", gt=0.0)

    @field_validator("tier")
    @classmethod
    def validate_tier(cls, v: str) -> str:
        """Normalize tier name."""
        v = v.strip().lower()
        if v not in TIERS:
            raise ValueError(f"Unknown provider tier '{v}', expected one of {', '.join(TIERS)}")
        return v


class CurationDefaults(BaseModel):
    """Default curation parameters."""

    max_articles: int = Field(15, description="Max articles per run", ge=1, le=100)


class ConfigModel(BaseModel):
    """Main configuration model."""

    data_dir: str = Field("~/DailyCurator", description="Root directory for preferences and results")
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    curation: CurationDefaults = Field(default_factory=CurationDefaults)
