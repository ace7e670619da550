"""Unified configuration schema for goiki.

Defines Pydantic models for the YAML config structure with dedicated
sections for the wiki store and logging, plus an adapter that feeds the
``wiki`` section into ``load_config()`` as fallbacks.

Usage:
    from goiki.config_schema import build_config, yaml_fallbacks

    raw = load_hierarchical_config()
    unified = build_config(raw)
    config = load_config(yaml_fallbacks=yaml_fallbacks(unified))
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class WikiConfig(BaseModel):
    """Content store settings.

    All fields are optional so env vars and CLI args can supply them at
    runtime instead.
    """

    data_dir: str | None = Field(
        default=None, description="Git working tree holding the documents"
    )
    file_extension: str | None = Field(
        default=None, description="Document file extension"
    )
    name: str | None = Field(default=None, description="Wiki name")
    index_page: str | None = Field(
        default=None, description="Title of the front page"
    )
    git_binary: str | None = Field(
        default=None, description="git executable"
    )
    command_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds before a git invocation is abandoned",
    )
    max_content_size: int | None = Field(
        default=None,
        ge=1,
        description="Largest accepted document body in bytes",
    )
    init: bool = Field(
        default=False,
        description="Initialize the data directory as a repository if needed",
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unset
            leaves the per-mode default of ``setup_logging``.
        file: Optional log file path.
    """

    level: str | None = Field(default=None, description="Log level")
    file: str | None = Field(default=None, description="Log file path")

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Top-level unified config
# ---------------------------------------------------------------------------


class UnifiedConfig(BaseModel):
    """Top-level unified configuration.

    Every section has defaults, so ``UnifiedConfig()`` (zero-config) is
    always valid.
    """

    wiki: WikiConfig = Field(default_factory=WikiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


def build_config(raw_data: dict) -> UnifiedConfig:
    """Construct a ``UnifiedConfig`` from the raw dict returned by
    ``load_hierarchical_config()``.

    Missing sections get defaults.
    """
    if not raw_data:
        return UnifiedConfig()

    return UnifiedConfig(**raw_data)


def yaml_fallbacks(unified: UnifiedConfig) -> dict[str, Any]:
    """Return the non-None ``wiki`` values for ``load_config(yaml_fallbacks=...)``."""
    return {
        k: v for k, v in unified.wiki.model_dump().items() if v is not None
    }
