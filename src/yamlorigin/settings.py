"""Loader settings read from the environment / .env file."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from yamlorigin.tags import SUPPORTED_TAGS


class LoaderSettings(BaseSettings):
    """Configuration passed explicitly to every ``OriginTrackedYamlLoader``.

    Values are read from ``YAMLORIGIN_*`` environment variables and from a
    ``.env`` file in the working directory, e.g. ``YAMLORIGIN_MAX_DEPTH=64``
    or ``YAMLORIGIN_ALLOWED_TAGS='["str", "int", "map", "seq"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="YAMLORIGIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    log_level: str = "INFO"

    # Safety limits
    max_document_size: int = 5_000_000  # characters
    max_nodes: int = 50_000  # after alias expansion
    max_depth: int = 32

    # Tags (short names under tag:yaml.org,2002:) that may appear in a document
    allowed_tags: frozenset[str] = SUPPORTED_TAGS

    @field_validator("allowed_tags")
    @classmethod
    def _only_supported_tags(cls, value: frozenset[str]) -> frozenset[str]:
        unknown = value - SUPPORTED_TAGS
        if unknown:
            raise ValueError(f"unsupported tags: {', '.join(sorted(unknown))}")
        return value
