"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) - single instance per process
    - max_urls >= 1 and at least one URL scheme is recognized
    - builtin_groups are validated by the same core rules as user input

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box for local dev
    - builtin_groups is a JSON list in the environment (pydantic-settings parses
      complex types as JSON)
"""

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from knowledge_base.core.domain_types import DEFAULT_MAX_URLS, DEFAULT_URL_SCHEMES
from knowledge_base.core.group_store import GroupSeed


class BuiltinGroup(BaseModel):
    """Seed group declared in configuration."""
    name: str = Field(min_length=1, max_length=100)
    urls: list[str] = Field(default_factory=list)
    is_editable: bool = False

    def to_seed(self) -> GroupSeed:
        return GroupSeed(name=self.name, urls=list(self.urls), is_editable=self.is_editable)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Membership rules
    max_urls: int = Field(DEFAULT_MAX_URLS, ge=1)
    allowed_url_schemes: list[str] = list(DEFAULT_URL_SCHEMES)

    @field_validator("allowed_url_schemes")
    @classmethod
    def normalize_schemes(cls, v: list[str]) -> list[str]:
        schemes = [s.strip().lower() for s in v if s.strip()]
        if not schemes:
            raise ValueError("allowed_url_schemes cannot be empty")
        return schemes

    # Groups seeded on startup (first one starts active)
    builtin_groups: list[BuiltinGroup] = [
        BuiltinGroup(name="Getting Started", urls=[], is_editable=False),
    ]

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
