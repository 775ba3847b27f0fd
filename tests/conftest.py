"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Application setup over in-memory stores
- Test client setup
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from restdemo.api.main import create_app
from restdemo.config.settings import Settings


@pytest.fixture
def settings() -> Settings:
    """Settings that never touch a database."""
    return Settings(database_url=None, seed_demo_data=False, _env_file=None)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create test FastAPI application with fresh in-memory stores."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client for the application."""
    return TestClient(app)
