"""FlowMate settings.

Read from ``~/.flowmate/config.json`` when it exists, then overridden by
``FLOWMATE_*`` environment variables. Invalid content falls back to the
defaults with a warning.
"""

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from flowmate.domain.board.models import COMPLETED_STATUS

logger = logging.getLogger(__name__)

ENV_PREFIX = "FLOWMATE"


def get_config_dir() -> Path:
    """The FlowMate config directory (not created here)."""
    return Path.home() / ".flowmate"


class Settings(BaseModel):
    """Runtime settings for a board session."""

    data_file: Path = Field(default_factory=lambda: get_config_dir() / "board.json")
    autosave_debounce_seconds: float = Field(default=1.0, ge=0)
    manual_move_window_seconds: float = Field(default=2.0, ge=0)
    completed_status: str = COMPLETED_STATUS
    log_dir: Path | None = None
    log_level: str = "WARNING"


def _k(field: str) -> str:
    return f"{ENV_PREFIX}_{field.upper()}"


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    overrides = {}
    for name in Settings.model_fields:
        raw = environ.get(_k(name))
        if raw is not None and raw.strip() != "":
            overrides[name] = raw.strip()
    return overrides


def load_settings(
    config_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from the config file and environment."""
    config_file = config_file or get_config_dir() / "config.json"
    environ = os.environ if environ is None else environ

    data: dict = {}
    if config_file.exists():
        try:
            loaded = json.loads(config_file.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                data = loaded
            else:
                logger.warning(f"Ignoring {config_file}: expected a JSON object")
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring {config_file}: {e}")

    data.update(_env_overrides(environ))
    try:
        return Settings(**data)
    except ValidationError as e:
        logger.warning(f"Invalid settings, using defaults: {e.error_count()} error(s)")
        return Settings()
