"""Storage port for appointments and call sessions.

Services depend on ``Repository`` only; the backing store (in-memory or
SQL) is picked when the app is created.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

ModelT = TypeVar('ModelT', bound=BaseModel)


class Repository(ABC, Generic[ModelT]):
    """Keyed collection of pydantic records with an ``id`` field."""

    @abstractmethod
    def add(self, item: ModelT) -> ModelT:
        """Store a new record and return it."""

    @abstractmethod
    def get(self, item_id: str) -> ModelT | None:
        """Return the record with ``item_id`` or ``None``."""

    @abstractmethod
    def update(self, item_id: str, changes: dict[str, Any]) -> ModelT | None:
        """Merge ``changes`` (field names) into a record.

        Returns the updated record, or ``None`` when ``item_id`` is unknown.
        """

    @abstractmethod
    def list(self, **filters: Any) -> list[ModelT]:
        """Return records whose fields equal every non-``None`` filter."""


def active_filters(filters: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in filters.items() if value is not None}
