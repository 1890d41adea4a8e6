"""Custom exceptions for the linked-data DAO."""

from pymongo.errors import PyMongoError


class LinkedDataDaoError(Exception):
    """Base exception for DAO errors."""

    def __init__(self, message: str, document_id: str | None = None):
        super().__init__(message)
        self.document_id = document_id


class InvalidArgumentError(LinkedDataDaoError, ValueError):
    """Caller supplied an invalid id or document."""

    pass


class DocumentNotFoundError(LinkedDataDaoError):
    """No document matches the identifier."""

    pass


class InternalInconsistencyError(LinkedDataDaoError):
    """A mutation matched zero documents after the existence probe passed."""

    pass


class IdentifierExhaustedError(InternalInconsistencyError):
    """No free identifier found within the configured number of attempts."""

    pass


class KeyEncodingError(LinkedDataDaoError):
    """A stored key carries a malformed escape sequence."""

    pass


# Driver errors are propagated unchanged
StorageFailure = PyMongoError
