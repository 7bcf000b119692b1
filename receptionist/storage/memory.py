from threading import Lock
from typing import Any

from receptionist.storage.base import ModelT, Repository, active_filters


class InMemoryRepository(Repository[ModelT]):
    def __init__(self) -> None:
        self._items: dict[str, ModelT] = {}
        self._lock = Lock()

    def add(self, item: ModelT) -> ModelT:
        with self._lock:
            self._items[item.id] = item
        return item

    def get(self, item_id: str) -> ModelT | None:
        with self._lock:
            return self._items.get(item_id)

    def update(self, item_id: str, changes: dict[str, Any]) -> ModelT | None:
        with self._lock:
            current = self._items.get(item_id)
            if current is None:
                return None

            updated = type(current).model_validate({**current.model_dump(), **changes, 'id': item_id})
            self._items[item_id] = updated
            return updated

    def list(self, **filters: Any) -> list[ModelT]:
        wanted = active_filters(filters)
        with self._lock:
            items = list(self._items.values())
        return [item for item in items if all(getattr(item, key) == value for key, value in wanted.items())]
