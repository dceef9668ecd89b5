"""Global configuration: constants, build context, and layered settings."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)

# Compound extension identifying site-description inputs
SITE_SUFFIX = ".building.yaml"

# External conversion executable and its flag contract
DEFAULT_TOOL = "rmf_site_editor"
EXPORT_WORLD_FLAG = "--export-world"
EXPORT_NAV_FLAG = "--export-nav"

# Per-site output layout
MAPS_DIRNAME = "maps"
WORLD_EXTENSION = ".world"
NAV_GRAPHS_DIRNAME = "nav_graphs"

# Package output layout
WORLDS_DIRNAME = "worlds"
PACKAGE_WORLD_EXTENSION = ".sdf"

# Action identifier templates
SITE_IDENTIFIER = "generate_{name}_site"
PACKAGE_IDENTIFIER = "generate_{name}_package"

SETTINGS_FILE = Path(".rmf_site") / "config.json"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Settings field -> environment variable
_ENV_KEYS: dict[str, str] = {
    "tool": "RMF_SITE_TOOL",
    "log_level": "RMF_SITE_LOG_LEVEL",
    "strict_discovery": "RMF_SITE_STRICT_DISCOVERY",
    "site_suffix": "RMF_SITE_SUFFIX",
}


class BuildContext(BaseModel):
    """Roots every component resolves paths against.

    Passed explicitly through the pipeline; nothing reads the ambient
    working directory after construction.
    """

    model_config = ConfigDict(frozen=True)

    source_dir: Path
    binary_dir: Path
    maps_root: Path

    @classmethod
    def create(
        cls,
        source_dir: str | Path | None = None,
        binary_dir: str | Path | None = None,
        maps_root: str | Path | None = None,
    ) -> BuildContext:
        """Build a context, defaulting unset roots.

        ``source_dir`` and ``binary_dir`` default to the current directory,
        ``maps_root`` to ``<binary_dir>/maps``.
        """
        source = Path(source_dir).resolve() if source_dir else Path.cwd()
        binary = Path(binary_dir).resolve() if binary_dir else source
        if maps_root is None:
            maps = binary / MAPS_DIRNAME
        else:
            maps = Path(maps_root)
            if not maps.is_absolute():
                maps = binary / maps
        return cls(source_dir=source, binary_dir=binary, maps_root=maps)

    def source_path(self, value: str | Path) -> Path:
        """Resolve an input path relative to the source tree."""
        path = Path(value)
        return path if path.is_absolute() else self.source_dir / path

    def binary_path(self, value: str | Path) -> Path:
        """Resolve an output path relative to the build tree."""
        path = Path(value)
        return path if path.is_absolute() else self.binary_dir / path


class SiteGenSettings(BaseModel):
    """Tunable behaviour of the generation layer."""

    tool: str = DEFAULT_TOOL
    """Executable invoked by every generation action."""

    log_level: LogLevel = "INFO"

    strict_discovery: bool = False
    """Raise NoInputsFound instead of logging a warning on empty discovery."""

    site_suffix: str = SITE_SUFFIX

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def load_settings(project_root: str | Path | None = None) -> SiteGenSettings:
    """Load merged settings: defaults -> .rmf_site/config.json -> env vars."""
    values: dict[str, Any] = {}

    if project_root is not None:
        config_json = Path(project_root) / SETTINGS_FILE
        if config_json.is_file():
            try:
                data = json.loads(config_json.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError):
                logger.warning("Ignoring unreadable settings file %s", config_json, exc_info=True)
            else:
                for key in SiteGenSettings.model_fields:
                    if key in data:
                        values[key] = data[key]

    for key, env_name in _ENV_KEYS.items():
        env_val = os.environ.get(env_name)
        if env_val is not None:
            values[key] = env_val

    if "strict_discovery" in values:
        values["strict_discovery"] = _coerce_bool(values["strict_discovery"])

    return SiteGenSettings(**values)
