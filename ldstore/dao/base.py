"""Generic DAO contract shared by every storage backend."""

from enum import Enum
from typing import Protocol, Sequence, TypeVar

K = TypeVar("K")
T = TypeVar("T")


class FieldNameInEx(str, Enum):
    """Whether a projection lists fields to keep or fields to drop."""

    INCLUDE = "include"
    EXCLUDE = "exclude"
    UNDEFINED = "undefined"


class GenericDao(Protocol[K, T]):
    """
    CRUD contract over a single collection of documents.

    K is the identifier type, T the document type. Implementations raise
    the exceptions in ldstore.dao.exceptions and let driver errors through.
    """

    async def create(self, element: T) -> T:
        """Persist a new element under a generated identifier."""
        ...

    async def find_all(
        self,
        limit: int | None = None,
        offset: int | None = None,
        field_names: Sequence[str] | None = None,
        include_exclude: FieldNameInEx = FieldNameInEx.UNDEFINED,
    ) -> list[T]:
        """Return every element, optionally paginated and projected."""
        ...

    async def find(self, id: K) -> T | None:
        """Return the element with this identifier, or None."""
        ...

    async def update(self, id: K, modifications: T) -> T:
        """Merge modifications into an existing element and return it."""
        ...

    async def delete(self, id: K) -> None:
        """Remove the element with this identifier."""
        ...

    async def exists(self, id: K) -> bool:
        """Check whether an element with this identifier exists."""
        ...

    async def delete_all(self) -> None:
        """Remove every element."""
        ...

    async def count(self) -> int:
        """Number of stored elements."""
        ...
