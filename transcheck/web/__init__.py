"""HTTP transport for the transcheck engine."""

from typing import Any, Dict, Optional

from flask import Flask

from transcheck.config import Settings, load_config


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """Application factory; reads config.json when no config is given."""
    if config is None:
        config = load_config()

    from .app import build_app  # Import here to avoid circular imports

    return build_app(Settings.from_config(config))


__all__ = ["create_app"]
