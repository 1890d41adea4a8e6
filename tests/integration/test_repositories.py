"""
Integration Test: linked-data DAO against a real MongoDB.

Runs only when LDSTORE_TEST_MONGODB_URL points at a server, e.g.
    LDSTORE_TEST_MONGODB_URL=mongodb://localhost:27017 pytest tests/integration
"""

import asyncio
import os
import re
import uuid

import pytest

from ldstore.config import MongoConfig, Settings
from ldstore.dao.base import FieldNameInEx
from ldstore.dao.config import DaoConfig
from ldstore.dao.exceptions import DocumentNotFoundError, InvalidArgumentError
from ldstore.database import connection
from ldstore.database.dependencies import create_dao

MONGODB_URL = os.getenv("LDSTORE_TEST_MONGODB_URL")

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not MONGODB_URL, reason="LDSTORE_TEST_MONGODB_URL not set"),
]


def _run_with_dao(scenario) -> None:
    """Run scenario(dao) on a fresh collection of a real server, then drop it."""
    settings = Settings(
        _env_file=None,
        mongodb=MongoConfig(url=MONGODB_URL, database="ldstore_integration"),
        dao=DaoConfig(id_base_path="http://x/"),
    )

    async def run() -> None:
        connection.init_db(settings)
        try:
            assert await connection.check_db_connection()
            dao = create_dao(f"elements_{uuid.uuid4().hex[:8]}")
            try:
                await scenario(dao)
            finally:
                await dao.delete_all()
        finally:
            connection.close_db()

    asyncio.run(run())


def test_crud_lifecycle() -> None:
    async def scenario(dao) -> None:
        created = await dao.create({"name": "A", "$schema": "s", "http://schema.org/name": "n"})
        id = created["@id"]
        assert re.match(r"^http://x/[0-9a-f-]{36}$", id)
        assert created["$schema"] == "s"
        assert await dao.count() == 1
        assert await dao.find(id) == created

        updated = await dao.update(id, {"name": "X"})
        assert updated["name"] == "X"
        assert updated["http://schema.org/name"] == "n"

        await dao.delete(id)
        assert await dao.count() == 0
        with pytest.raises(DocumentNotFoundError):
            await dao.delete(id)
        with pytest.raises(InvalidArgumentError):
            await dao.find("")

    _run_with_dao(scenario)


def test_pagination_and_projection() -> None:
    async def scenario(dao) -> None:
        for i in range(5):
            await dao.create({"n": i, "secret": "s"})

        everything = await dao.find_all()
        assert await dao.find_all(limit=2, offset=1) == everything[1:3]

        included = await dao.find_all(field_names=["n"], include_exclude=FieldNameInEx.INCLUDE)
        assert all(set(doc) == {"n"} for doc in included)

        excluded = await dao.find_all(field_names=["secret"], include_exclude=FieldNameInEx.EXCLUDE)
        assert all("secret" not in doc and "_id" in doc for doc in excluded)

        await dao.delete_all()
        assert await dao.count() == 0

    _run_with_dao(scenario)
