"""Record store contract shared by the file and remote-table backends."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from intake.schemas.records import Record

T = TypeVar("T", bound=Record)

Predicate = Callable[[T], bool]


class StoreError(Exception):
    """Raised when a backend cannot complete an operation."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RecordStore(ABC, Generic[T]):
    """
    A named collection of records of one model type.

    Predicates are plain Python callables evaluated locally against every record
    returned by read_all(); no backend translates them into a query.
    """

    def __init__(self, model: type[T], collection: str) -> None:
        self.model = model
        self.collection = collection

    @abstractmethod
    async def read_all(self) -> list[T]:
        """Return every record in the backend's current order."""

    @abstractmethod
    async def create(self, item: T) -> T:
        """Append a fully-formed record (caller supplies the id) and return the stored copy."""

    @abstractmethod
    async def update(self, predicate: Predicate[T], changes: Mapping[str, Any]) -> T | None:
        """Overlay changes on the first matching record; None when nothing matches."""

    @abstractmethod
    async def delete(self, predicate: Predicate[T]) -> bool:
        """Remove every matching record; True when at least one was removed."""

    async def ping(self) -> None:
        """Raise StoreError (or OSError) when the backend cannot serve reads and writes."""
        await self.read_all()

    async def find_one(self, predicate: Predicate[T]) -> T | None:
        for item in await self.read_all():
            if predicate(item):
                return item
        return None

    async def find_many(self, predicate: Predicate[T]) -> list[T]:
        return [item for item in await self.read_all() if predicate(item)]

    def merge(self, item: T, changes: Mapping[str, Any]) -> T:
        """Shallow merge: changed fields win, the rest are kept. Result is re-validated."""
        unknown = set(changes) - set(self.model.model_fields)
        if unknown:
            raise ValueError(
                f"Unknown {self.model.__name__} field(s): {', '.join(sorted(unknown))}"
            )
        return self.model.model_validate({**item.model_dump(), **changes})

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.model.__name__}, {self.collection!r})"
