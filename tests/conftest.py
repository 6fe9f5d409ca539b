"""Shared pytest fixtures for the Galley test suite."""

from __future__ import annotations

from typing import Dict, Generator, List

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from galley.config import get_settings
from galley.db.repository import reset_repository_state
from galley.models.equipment import Equipment
from galley.server.app import create_app


@pytest.fixture()
def app() -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)


@pytest.fixture()
def kitchen() -> List[Equipment]:
    """A small kitchen with two ovens sharing a name."""

    return [
        Equipment(id=1, name="Oven", category="Appliances", condition="good"),
        Equipment(id=2, name="Chef's Knife", category="Cutlery", condition="fair"),
        Equipment(id=3, name="Oven", category="Appliances", condition="excellent"),
    ]


@pytest.fixture()
def sample_recommendation() -> Dict[str, object]:
    return {
        "name": "Dutch Oven",
        "category": "Cookware",
        "reason": "Perfect for slow cooking stews, soups, and braising",
        "priority": "medium",
        "estimatedPrice": "$70-200",
    }


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database and the rule-based advisor."""

    db_path = tmp_path / "test_galley.db"
    monkeypatch.setenv("GALLEY_DATABASE_PATH", str(db_path))
    monkeypatch.delenv("GALLEY_LLM_BASE_URL", raising=False)
    monkeypatch.delenv("GALLEY_API_TOKEN", raising=False)
    get_settings.cache_clear()
    reset_repository_state()
    yield
    reset_repository_state()
    monkeypatch.delenv("GALLEY_DATABASE_PATH", raising=False)
    get_settings.cache_clear()
