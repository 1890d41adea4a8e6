"""MongoDB implementation of the generic DAO for JSON-LD documents."""

import json
import logging
import uuid
from collections.abc import Mapping
from typing import Any, Callable, Sequence

from bson import json_util
from bson.json_util import RELAXED_JSON_OPTIONS
from motor.motor_asyncio import AsyncIOMotorCollection

from .base import FieldNameInEx, GenericDao
from .config import DaoConfig
from .exceptions import (
    DocumentNotFoundError,
    IdentifierExhaustedError,
    InternalInconsistencyError,
    InvalidArgumentError,
)
from .keys import escape_key, from_storage, to_storage

logger = logging.getLogger(__name__)

ID_FIELD = "@id"
STORAGE_ID_FIELD = "_id"

JsonDocument = dict[str, Any]


def generate_uuid() -> str:
    """Default identifier suffix: a random 128-bit UUID."""
    return str(uuid.uuid4())


def _to_json(doc: Mapping[str, Any]) -> JsonDocument:
    """Convert a BSON document into plain JSON (relaxed extended JSON for BSON types)."""
    return json.loads(json_util.dumps(doc, json_options=RELAXED_JSON_OPTIONS))


class MongoLinkedDataDao(GenericDao[str, JsonDocument]):
    """
    CRUD over one MongoDB collection of documents keyed by their ``@id``.

    Identifiers are ``<id_base_path><uuid>`` and are checked for uniqueness
    with a probe before insert. Update and delete probe for existence and then
    mutate in a second round trip; a document removed between the two by
    another writer surfaces as InternalInconsistencyError.
    """

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        config: DaoConfig | None = None,
        id_generator: Callable[[], str] | None = None,
    ):
        self.collection = collection
        self.config = config or DaoConfig()
        self._id_generator = id_generator or generate_uuid
        logger.info(
            f"Initialized MongoLinkedDataDao (collection={collection.name}, "
            f"id_base_path={self.config.id_base_path})"
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_id(id: Any) -> None:
        if id is None or not isinstance(id, str) or len(id) == 0:
            raise InvalidArgumentError(f"Invalid identifier: {id!r}")

    def _read(self, doc: Mapping[str, Any]) -> JsonDocument:
        return from_storage(_to_json(doc))

    async def _generate_id(self) -> str:
        """Draw identifiers until one is not used in the collection."""
        max_attempts = self.config.max_id_attempts
        attempts = 0
        while True:
            attempts += 1
            candidate = f"{self.config.id_base_path}{self._id_generator()}"
            if not await self.exists(candidate):
                return candidate

            logger.warning(f"Identifier collision on {candidate} (attempt {attempts})")
            if max_attempts is not None and attempts >= max_attempts:
                raise IdentifierExhaustedError(
                    f"No free identifier after {attempts} attempts",
                    document_id=candidate,
                )

    @staticmethod
    def _build_projection(
        field_names: Sequence[str] | None,
        include_exclude: FieldNameInEx,
    ) -> dict[str, int] | None:
        if not field_names:
            return None

        mode = FieldNameInEx(include_exclude)
        if mode is FieldNameInEx.INCLUDE:
            projection = {escape_key(name): 1 for name in field_names}
            projection[STORAGE_ID_FIELD] = 0
            return projection
        if mode is FieldNameInEx.EXCLUDE:
            return {escape_key(name): 0 for name in field_names}
        return None

    # ------------------------------------------------------------------
    # CRUD operations
    # ------------------------------------------------------------------

    async def create(self, element: Mapping[str, Any]) -> JsonDocument:
        """Create an element that carries a Linked Data identifier (``@id``).

        Args:
            element: JSON object without an ``@id`` (or with ``@id`` null)

        Returns:
            The stored document as read back from MongoDB, keys restored

        Raises:
            InvalidArgumentError: If the element is not an object or already has an ``@id``
            IdentifierExhaustedError: If ``max_id_attempts`` is set and every attempt collided
        """
        if not isinstance(element, Mapping):
            raise InvalidArgumentError("Element must be a JSON object")
        if element.get(ID_FIELD) is not None:
            raise InvalidArgumentError(
                "Specifying @id for new objects is not allowed",
                document_id=element.get(ID_FIELD),
            )

        id = await self._generate_id()
        document = dict(element)
        document[ID_FIELD] = id

        await self.collection.insert_one(to_storage(document))
        logger.debug(f"Created {id} in {self.collection.name}")

        created = await self.find(id)
        if created is None:
            logger.error(f"Document {id} vanished right after insert")
            raise InternalInconsistencyError(
                "Created document could not be read back", document_id=id
            )
        return created

    async def find_all(
        self,
        limit: int | None = None,
        offset: int | None = None,
        field_names: Sequence[str] | None = None,
        include_exclude: FieldNameInEx = FieldNameInEx.UNDEFINED,
    ) -> list[JsonDocument]:
        """Find all elements.

        Args:
            limit: Maximum number of elements, None for no cap. Unlike the
                driver, 0 returns no elements instead of meaning "no limit"
            offset: Number of elements to skip, None for none
            field_names: Top-level fields for the projection
            include_exclude: Whether ``field_names`` are kept or dropped

        Returns:
            Elements in storage-native order
        """
        for name, value in (("limit", limit), ("offset", offset)):
            if value is not None and value < 0:
                raise InvalidArgumentError(f"{name} must be >= 0, got {value}")
        # Mongo treats limit 0 as "no limit"
        if limit == 0:
            return []

        projection = self._build_projection(field_names, include_exclude)
        cursor = self.collection.find(
            {},
            projection,
            skip=offset or 0,
            limit=limit or 0,
        )
        docs = await cursor.to_list(length=None)
        return [self._read(doc) for doc in docs]

    async def find(self, id: str) -> JsonDocument | None:
        """Find an element by its Linked Data identifier.

        Returns:
            The element, or None if it was not found

        Raises:
            InvalidArgumentError: If the identifier is None or empty
        """
        self._validate_id(id)
        docs = await self.collection.find({ID_FIELD: id}, limit=2).to_list(length=2)
        if not docs:
            return None
        if len(docs) > 1:
            logger.error(f"Identifier {id} matches more than one document, using the first")
        return self._read(docs[0])

    async def update(self, id: str, modifications: Mapping[str, Any]) -> JsonDocument:
        """Update an element by its Linked Data identifier.

        Each top-level field of ``modifications`` is set on the stored
        document; fields not named are left untouched.

        Raises:
            InvalidArgumentError: If the identifier is invalid or ``@id`` would change
            DocumentNotFoundError: If the element is not found
            InternalInconsistencyError: If the update matched nothing after the probe
        """
        self._validate_id(id)
        if not isinstance(modifications, Mapping):
            raise InvalidArgumentError("Modifications must be a JSON object", document_id=id)

        changes = dict(modifications)
        if ID_FIELD in changes:
            if changes[ID_FIELD] != id:
                raise InvalidArgumentError("@id cannot be modified", document_id=id)
            del changes[ID_FIELD]
        # The storage surrogate key is immutable and comes back with every read
        changes.pop(STORAGE_ID_FIELD, None)

        if not await self.exists(id):
            raise DocumentNotFoundError(f"Document not found: {id}", document_id=id)

        if changes:
            result = await self.collection.update_one(
                {ID_FIELD: id}, {"$set": to_storage(changes)}
            )
            if result.matched_count != 1:
                logger.error(
                    f"Update of {id} matched {result.matched_count} documents after existence check"
                )
                raise InternalInconsistencyError(
                    f"Update matched {result.matched_count} documents", document_id=id
                )
            logger.debug(f"Updated {id} fields {sorted(changes)}")

        updated = await self.find(id)
        if updated is None:
            logger.error(f"Document {id} disappeared during update")
            raise InternalInconsistencyError(
                "Updated document could not be read back", document_id=id
            )
        return updated

    async def delete(self, id: str) -> None:
        """Delete an element by its Linked Data identifier.

        Raises:
            InvalidArgumentError: If the identifier is invalid
            DocumentNotFoundError: If the element is not found
            InternalInconsistencyError: If the delete removed nothing after the probe
        """
        self._validate_id(id)
        if not await self.exists(id):
            raise DocumentNotFoundError(f"Document not found: {id}", document_id=id)

        result = await self.collection.delete_one({ID_FIELD: id})
        if result.deleted_count != 1:
            logger.error(
                f"Delete of {id} removed {result.deleted_count} documents after existence check"
            )
            raise InternalInconsistencyError(
                f"Delete removed {result.deleted_count} documents", document_id=id
            )
        logger.debug(f"Deleted {id} from {self.collection.name}")

    async def exists(self, id: str) -> bool:
        """Check whether an element with this identifier exists."""
        self._validate_id(id)
        doc = await self.collection.find_one({ID_FIELD: id}, {STORAGE_ID_FIELD: 1})
        return doc is not None

    async def delete_all(self) -> None:
        """Delete all elements by dropping the collection."""
        await self.collection.drop()
        logger.info(f"Dropped collection {self.collection.name}")

    async def count(self) -> int:
        """Number of documents in the collection."""
        return await self.collection.count_documents({})
