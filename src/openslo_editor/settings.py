"""Runtime settings for the CLI and API, read from the environment."""

from __future__ import annotations

from pathlib import Path

import pydantic as pdt
import pydantic_settings as pdts


class EditorSettings(pdts.BaseSettings):
    """Settings loaded from ``OPENSLO_EDITOR_*`` environment variables."""

    model_config = pdts.SettingsConfigDict(env_prefix="OPENSLO_EDITOR_", frozen=True)

    library_path: Path = pdt.Field(
        default=Path(".openslo/library.json"),
        description="JSON file backing the saved-document library",
    )
    default_api_version: str = "openslo/v1"
    log_level: str = "WARNING"
    gemini_api_key: str = pdt.Field(default="", description="API key for the Gemini assistant backend")
    assistant_model: str = "gemini-2.5-flash"
