"""
DAO construction on top of the shared MongoDB client.
"""

from typing import Callable, Optional

from ldstore.dao.config import DaoConfig
from ldstore.dao.mongo import MongoLinkedDataDao
from ldstore.database.connection import get_active_settings, get_collection


def create_dao(
    collection_name: str,
    id_base_path: Optional[str] = None,
    database: Optional[str] = None,
    id_generator: Optional[Callable[[], str]] = None,
) -> MongoLinkedDataDao:
    """
    Build a DAO over one collection of the initialized client.

    Usage:
        init_db()
        templates = create_dao("templates", "https://repo.example.org/templates/")
        created = await templates.create({"name": "A"})

    Args:
        collection_name: Collection holding the documents
        id_base_path: Prefix for generated @id values, defaults to settings.dao
        database: Database name, defaults to settings.mongodb.database
        id_generator: Identifier suffix generator, defaults to uuid4
    """
    config: DaoConfig = get_active_settings().dao
    if id_base_path is not None:
        config = DaoConfig(**{**config.model_dump(), "id_base_path": id_base_path})

    return MongoLinkedDataDao(
        get_collection(collection_name, database),
        config=config,
        id_generator=id_generator,
    )
