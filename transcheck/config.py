import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from transcheck.exceptions import ConfigError
from transcheck.logger import get_logger, refresh_log_mode

logger = get_logger(__name__)

# Marker shown when a translation unit carries no usable target
NO_TRANSLATION = "`<no translation>`"

# Get base directory (project root)
BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.json"
CONFIG_ENV_VAR = "TRANSCHECK_CONFIG"

# Default configuration template
DEFAULT_CONFIG = {
    "log_mode": "info",  # off | info | debug
    "log_to_file": False,
    "markup_languages": ["html"],
    "xliff_languages": ["xml", "xliff"],
    "json_languages": ["json"],
    "translation_formats": {
        ".xlf": "xliff",
        ".xliff": "xliff",
        ".json": "json"
    },
    "hover_separator": ",",
    "diagnostic_source": "transcheck",
    "server": {
        "host": "127.0.0.1",
        "port": 5510
    }
}


def get_config_file() -> Path:
    """Return the active config file path, honouring the TRANSCHECK_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return CONFIG_FILE


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def create_default_config(path: Optional[Path] = None) -> Path:
    """Write the default config.json file and return its path."""
    path = path or get_config_file()
    save_config(DEFAULT_CONFIG, path)
    logger.info(f"Created default config file: {path}")
    return path


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the configuration, merged over DEFAULT_CONFIG.

    A missing file yields the defaults. A corrupt file is logged and
    also yields the defaults, so the engine keeps running.
    """
    path = path or get_config_file()
    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse config file {path}: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)
    except OSError as e:
        logger.error(f"Failed to read config file {path}: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(data, dict):
        logger.warning(f"Config file {path} must contain a JSON object, got {type(data).__name__}")
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.debug(f"Configuration loaded from {path}")
    return _merge(DEFAULT_CONFIG, data)


def save_config(config: Dict[str, Any], path: Optional[Path] = None):
    """Save the configuration as JSON."""
    path = path or get_config_file()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=4, ensure_ascii=False)
    except OSError as e:
        logger.error(f"Failed to save config to {path}: {e}")
        raise ConfigError(f"Cannot write config file {path}: {e}", code="config_write_failed") from e
    logger.info(f"Configuration saved to {path}")
    if path == get_config_file():
        refresh_log_mode()


@dataclass(frozen=True)
class Settings:
    """Engine settings derived from the configuration dictionary."""
    markup_languages: Tuple[str, ...] = ("html",)
    xliff_languages: Tuple[str, ...] = ("xml", "xliff")
    json_languages: Tuple[str, ...] = ("json",)
    translation_formats: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_CONFIG["translation_formats"])
    )
    hover_separator: str = ","
    diagnostic_source: Optional[str] = "transcheck"

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "Settings":
        config = _merge(DEFAULT_CONFIG, config or {})
        formats = {
            suffix.lower() if suffix.startswith('.') else f".{suffix.lower()}": kind
            for suffix, kind in config["translation_formats"].items()
        }
        return cls(
            markup_languages=tuple(config["markup_languages"]),
            xliff_languages=tuple(config["xliff_languages"]),
            json_languages=tuple(config["json_languages"]),
            translation_formats=formats,
            hover_separator=config["hover_separator"],
            diagnostic_source=config.get("diagnostic_source"),
        )

    def suffixes_for(self, kind: str) -> Tuple[str, ...]:
        """File suffixes configured for a translation format kind."""
        return tuple(suffix for suffix, value in self.translation_formats.items() if value == kind)
