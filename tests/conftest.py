"""
Global test fixtures for transcheck tests.

Provides a provider wired to a recording publisher and default settings,
plus a Flask test client around a fresh engine.
"""

from __future__ import annotations

import pytest

from transcheck.config import Settings
from transcheck.core.provider import TranslationProvider
from transcheck.web import create_app
from tests.helpers import RecordingPublisher


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config lookups at an empty temp location."""
    monkeypatch.setenv("TRANSCHECK_CONFIG", str(tmp_path / "config" / "config.json"))


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def provider(publisher: RecordingPublisher, settings: Settings) -> TranslationProvider:
    return TranslationProvider(publisher=publisher, settings=settings)


@pytest.fixture
def app():
    app = create_app({})
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
