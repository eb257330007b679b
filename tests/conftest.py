"""Shared test fixtures."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEFAULT_COMPANIONS"] = "false"
os.environ["DEFAULT_PROVIDER"] = "gemini"
os.environ["RATE_LIMIT_STANDARD"] = "10000"
os.environ["RATE_LIMIT_AI"] = "10000"

import pytest
from fastapi.testclient import TestClient

from src.companions.service import create_companion
from src.db.client import get_engine
from src.db.models import Base
from src.llm.orchestrator import get_orchestrator
from src.main import app
from tests.helpers import FakeCredentials


@pytest.fixture(autouse=True)
def reset_db():
    engine = get_engine()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    get_orchestrator.cache_clear()
    yield
    get_orchestrator.cache_clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def luna():
    return create_companion(
        {
            "name": "Luna",
            "role": "Creative Friend",
            "personality": "creative",
            "description": "A creative and artistic companion who helps with inspiration and creative projects.",
        }
    )


@pytest.fixture
def credentials():
    return FakeCredentials()
