"""Linked-data DAO over MongoDB."""

from .base import FieldNameInEx, GenericDao
from .config import DaoConfig
from .exceptions import (
    DocumentNotFoundError,
    IdentifierExhaustedError,
    InternalInconsistencyError,
    InvalidArgumentError,
    KeyEncodingError,
    LinkedDataDaoError,
    StorageFailure,
)
from .keys import FixDirection, escape_key, fix_keys, from_storage, to_storage, unescape_key
from .mongo import ID_FIELD, MongoLinkedDataDao

__all__ = [
    "GenericDao",
    "FieldNameInEx",
    "MongoLinkedDataDao",
    "ID_FIELD",
    "DaoConfig",
    "LinkedDataDaoError",
    "InvalidArgumentError",
    "DocumentNotFoundError",
    "InternalInconsistencyError",
    "IdentifierExhaustedError",
    "KeyEncodingError",
    "StorageFailure",
    "FixDirection",
    "escape_key",
    "unescape_key",
    "to_storage",
    "from_storage",
    "fix_keys",
]
