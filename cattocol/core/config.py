"""Configuration management for cattocol.

Default join settings live in a global file (``~/.cattocol.json``, or the
path named by ``CATTOCOL_CONFIG``) and may be overridden per project in
``.cattocol/config.json``. Keys present in the project file win.
"""

import codecs
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from cattocol.core.combine import JoinConfig
from cattocol.utils.log import get_logger


logger = get_logger()

CONFIG_ENV_VAR = "CATTOCOL_CONFIG"
PROJECT_CONFIG_DIR = ".cattocol"
PROJECT_CONFIG_NAME = "config.json"


class CattocolConfig(BaseModel):
    """Default settings used when the command line leaves them out."""

    fill: str = " "
    repeat: int = Field(default=1, ge=0)
    escape_aware: bool = False
    encoding: str = "utf-8"

    @field_validator("fill")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("fill must be exactly one character")
        return value

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown encoding '{value}'") from exc
        return value

    def to_join_config(self) -> JoinConfig:
        """Build the join settings for the column mode."""
        return JoinConfig(fill=self.fill, repeat=self.repeat)


def _read_config_data(path: Path, label: str) -> Optional[Dict[str, Any]]:
    """Load raw JSON settings from ``path``; ``None`` if missing or unreadable."""
    if not path.exists():
        logger.debug(
            f"[config] {label} config not found; using defaults",
            extra={"path": str(path)},
        )
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(
            "Error loading %s config: %s: %s",
            label.lower(),
            type(e).__name__,
            e,
            extra={"error": str(e), "path": str(path)},
        )
        return None
    if not isinstance(data, dict):
        logger.warning(
            "Error loading %s config: expected a JSON object",
            label.lower(),
            extra={"path": str(path)},
        )
        return None
    return data


class ConfigManager:
    """Loads, merges and saves cattocol configuration files."""

    def __init__(self, global_config_path: Optional[Path] = None) -> None:
        if global_config_path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            global_config_path = Path(env_path) if env_path else Path.home() / ".cattocol.json"
        self.global_config_path = global_config_path
        self.current_project_path: Optional[Path] = None
        self._global_config: Optional[CattocolConfig] = None
        self._project_overrides: Optional[Dict[str, Any]] = None

    def get_global_config(self) -> CattocolConfig:
        """Load and return global configuration."""
        if self._global_config is None:
            data = _read_config_data(self.global_config_path, "Global")
            self._global_config = self._validate(data or {}, self.global_config_path)
            if data is not None:
                logger.debug(
                    "[config] Loaded global configuration",
                    extra={"path": str(self.global_config_path)},
                )
        return self._global_config

    def save_global_config(self, config: CattocolConfig) -> None:
        """Save global configuration."""
        self._global_config = config
        self.global_config_path.parent.mkdir(parents=True, exist_ok=True)
        self.global_config_path.write_text(config.model_dump_json(indent=2), encoding="utf-8")
        logger.debug(
            "[config] Saved global configuration",
            extra={"path": str(self.global_config_path)},
        )

    def project_config_path(self, project_path: Path) -> Path:
        return project_path / PROJECT_CONFIG_DIR / PROJECT_CONFIG_NAME

    def get_config(self, project_path: Optional[Path] = None) -> CattocolConfig:
        """Return global settings with the project's overrides applied."""
        if project_path is not None:
            # Reset cached project overrides when switching projects
            if self.current_project_path != project_path:
                self._project_overrides = None
            self.current_project_path = project_path

        base = self.get_global_config()
        if self.current_project_path is None:
            return base

        if self._project_overrides is None:
            config_path = self.project_config_path(self.current_project_path)
            data = _read_config_data(config_path, "Project") or {}
            known = {key: value for key, value in data.items() if key in CattocolConfig.model_fields}
            unknown = sorted(set(data) - set(known))
            if unknown:
                logger.warning(
                    "Ignoring unknown project config keys: %s",
                    ", ".join(unknown),
                    extra={"path": str(config_path)},
                )
            self._project_overrides = known

        if not self._project_overrides:
            return base
        merged = {**base.model_dump(), **self._project_overrides}
        return self._validate(
            merged, self.project_config_path(self.current_project_path), fallback=base
        )

    def save_project_config(self, config: CattocolConfig, project_path: Optional[Path] = None) -> None:
        """Save project configuration as a full set of overrides."""
        if project_path is not None:
            self.current_project_path = project_path
        if self.current_project_path is None:
            return

        config_path = self.project_config_path(self.current_project_path)
        config_path.parent.mkdir(exist_ok=True)
        config_path.write_text(config.model_dump_json(indent=2), encoding="utf-8")
        self._project_overrides = config.model_dump()
        logger.debug(
            "[config] Saved project config",
            extra={"path": str(config_path)},
        )

    @staticmethod
    def _validate(
        data: Dict[str, Any], path: Path, fallback: Optional[CattocolConfig] = None
    ) -> CattocolConfig:
        try:
            return CattocolConfig(**data)
        except ValidationError as e:
            logger.warning(
                "Invalid settings in %s: %s",
                path,
                e,
                extra={"error_count": e.error_count(), "path": str(path)},
            )
            return fallback or CattocolConfig()


# Global instance
config_manager = ConfigManager()


def get_config(project_path: Optional[Path] = None) -> CattocolConfig:
    """Get the effective configuration for a project directory."""
    return config_manager.get_config(project_path)


def config_paths(project_path: Path) -> Tuple[Path, Path]:
    """Global and project configuration file locations."""
    return (
        config_manager.global_config_path,
        config_manager.project_config_path(project_path),
    )
