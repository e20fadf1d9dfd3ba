"""Centralized configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from analysis.scoring import DEFAULT_POLICY, ScoringPolicy

DEFAULT_LENGTH_WORDS: dict[str, int] = {"short": 400, "medium": 800, "long": 1500}


@dataclass(frozen=True)
class GenerationSettings:
    """Explicit settings handed to the article assembler.

    Nothing in the analysis core reads the environment; everything it needs
    arrives through this structure.
    """

    model: str = "claude-sonnet-4-6"
    length_words: dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_LENGTH_WORDS)
    )
    default_words: int = 800
    words_per_minute: int = 200
    fallback_title: str = "Untitled Blog"
    meta_max_length: int = 160
    policy: ScoringPolicy = DEFAULT_POLICY

    def target_words(self, length: str) -> int:
        return self.length_words.get(length, self.default_words)


@dataclass(frozen=True)
class Config:
    """Application configuration with sensible defaults.

    All values are read from environment variables at construction time.
    """

    # --- LLM backend ---
    llm_provider: str = "anthropic"  # "anthropic" or "openrouter"
    llm_api_key: str = ""
    llm_model: str = "claude-sonnet-4-6"
    llm_endpoint_url: str = "https://openrouter.ai/api/v1/chat/completions"
    llm_max_tokens: int = 4096

    # --- Analysis ---
    words_per_minute: int = 200

    # --- Paths ---
    data_dir: Path = field(default_factory=lambda: Path("data"))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Config:
        """Build config from environment variables."""
        return cls(
            llm_provider=os.getenv("LLM_PROVIDER", "anthropic").lower(),
            llm_api_key=os.getenv("LLM_API_KEY") or os.getenv("ANTHROPIC_API_KEY", ""),
            llm_model=os.getenv("LLM_MODEL", "claude-sonnet-4-6"),
            llm_endpoint_url=os.getenv(
                "LLM_ENDPOINT_URL", "https://openrouter.ai/api/v1/chat/completions"
            ),
            llm_max_tokens=int(os.getenv("LLM_MAX_TOKENS", "4096")),
            words_per_minute=int(os.getenv("WORDS_PER_MINUTE", "200")),
            data_dir=Path(os.getenv("DATA_DIR", "data")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def generation_settings(self) -> GenerationSettings:
        return GenerationSettings(
            model=self.llm_model,
            words_per_minute=self.words_per_minute,
        )

    @property
    def store_path(self) -> Path:
        return self.data_dir / "articles.json"

    @property
    def export_dir(self) -> Path:
        return self.data_dir / "exported"

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"
