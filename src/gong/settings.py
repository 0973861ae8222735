"""gong settings — reads .env + optional settings.toml into a Settings object.

Resolution for each value: environment variable > settings.toml > default.
Both .env files are read into a private mapping; os.environ is untouched.

Key entities:
  - Settings: frozen dataclass with the resolved configuration.
  - load_settings(): parse .env + settings.toml → Settings.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values

from .utils import gong_dir

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """Resolved gong configuration."""

    # Toolchain binary that unrecognized commands are forwarded to
    toolchain_command: str = "go"

    # Variable stripped from the child env and pointed at .gong.deps
    deps_env_var: str = "GOPATH"

    log_level: str = "WARNING"

    config_dir: Path = field(default_factory=lambda: gong_dir())

    @property
    def settings_file(self) -> Path:
        return self.config_dir / "settings.toml"


def load_settings(config_dir: Path | None = None) -> Settings:
    """Read .env + settings.toml and return Settings.

    Args:
        config_dir: Override for the config directory.
                    Defaults to ``gong_dir()``.

    Raises:
        ValueError: If settings.toml is malformed or holds invalid values.
    """
    if config_dir is None:
        config_dir = gong_dir()

    # .env values stay private to gong; os.environ is never modified.
    # Precedence: real environment > ./.env > config_dir/.env
    env: dict[str, str | None] = {}
    for env_file in (config_dir / ".env", Path(".env")):
        if env_file.is_file():
            env.update(dotenv_values(env_file))
    env.update(os.environ)

    toml_path = config_dir / "settings.toml"
    section: dict = {}
    if toml_path.is_file():
        try:
            with open(toml_path, "rb") as f:
                raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid {toml_path}: {e}") from e
        section = raw.get("toolchain", {})
        if not isinstance(section, dict):
            raise ValueError(f"{toml_path}: [toolchain] must be a table.")
        logger.debug("Loaded settings from %s", toml_path)

    def _get(env_key: str, toml_key: str, default: str) -> str:
        """Env > toml > default."""
        value = env.get(env_key)
        if value:
            return value
        value = section.get(toml_key, default)
        if not isinstance(value, str) or not value:
            raise ValueError(f"'{toml_key}' must be a non-empty string.")
        return value

    log_level = _get("GONG_LOG_LEVEL", "log_level", "WARNING").upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(
            f"log_level must be one of {', '.join(sorted(_LOG_LEVELS))}, "
            f"got '{log_level}'."
        )

    return Settings(
        toolchain_command=_get("GONG_TOOLCHAIN", "command", "go"),
        deps_env_var=_get("GONG_DEPS_VAR", "deps_env_var", "GOPATH"),
        log_level=log_level,
        config_dir=config_dir,
    )
