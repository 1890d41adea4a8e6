"""Shared fixtures: an in-memory Motor client and DAOs built on it."""

import sys
import uuid
from pathlib import Path

import pytest
from mongomock_motor import AsyncMongoMockClient

# Make the repository root importable without an editable install
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from ldstore.config import MongoConfig, Settings, get_settings
from ldstore.dao.config import DaoConfig
from ldstore.dao.mongo import MongoLinkedDataDao
from ldstore.database import connection

BASE_PATH = "http://x/"


@pytest.fixture(autouse=True)
def clean_settings_cache():
    """get_settings() is cached; never leak a cached instance between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        config_dir=tmp_path,
        mongodb=MongoConfig(database=f"ldstore_test_{uuid.uuid4().hex[:8]}"),
        dao=DaoConfig(id_base_path=BASE_PATH),
    )


@pytest.fixture
def mock_client(settings: Settings):
    """Initialize the global client with an in-memory MongoDB."""
    client = AsyncMongoMockClient()
    connection.init_db(settings, client=client)
    yield client
    # The mock client needs no closing, just forget it
    connection._client = None
    connection._settings = None


@pytest.fixture
def collection(mock_client, settings: Settings):
    return mock_client[settings.mongodb.database][f"elements_{uuid.uuid4().hex[:8]}"]


@pytest.fixture
def dao(collection) -> MongoLinkedDataDao:
    return MongoLinkedDataDao(collection, DaoConfig(id_base_path=BASE_PATH))
