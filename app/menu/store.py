from __future__ import annotations

import threading
from collections.abc import Iterable

import structlog

from app.core.errors import MenuItemNotFoundError
from app.menu.models import Category, MenuItem, MenuItemPayload

logger = structlog.get_logger(__name__)

SAMPLE_MENU: tuple[MenuItem, ...] = (
    MenuItem(
        id=1,
        name="Classic Burger",
        description="Beef patty with lettuce, tomato, cheese, sesame bun",
        price=12.99,
        category=Category.entree,
        ingredients=["beef", "lettuce", "tomato", "cheese", "bun"],
        available=True,
    ),
    MenuItem(
        id=2,
        name="Chocolate Lava Cake",
        description="Warm cake with molten center + vanilla ice cream",
        price=7.5,
        category=Category.dessert,
        ingredients=["flour", "cocoa", "eggs", "sugar", "butter"],
        available=True,
    ),
)


class MenuStore:
    """In-memory, ordered collection of menu items plus the id counter.

    Items handed out are copies, so the only way to change stored state is
    through ``create_item``, ``update_item`` and ``delete_item``.
    """

    def __init__(self, items: Iterable[MenuItem] = (), next_id: int | None = None) -> None:
        self._items: list[MenuItem] = [item.model_copy(deep=True) for item in items]
        if next_id is None:
            next_id = max((item.id for item in self._items), default=0) + 1
        self._next_id = next_id
        self._lock = threading.Lock()

    @classmethod
    def with_sample_data(cls) -> MenuStore:
        return cls(SAMPLE_MENU, next_id=3)

    def list_items(self) -> list[MenuItem]:
        with self._lock:
            return [item.model_copy(deep=True) for item in self._items]

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def get_item(self, item_id: int) -> MenuItem:
        with self._lock:
            return self._items[self._index_of(item_id)].model_copy(deep=True)

    def create_item(self, payload: MenuItemPayload) -> MenuItem:
        with self._lock:
            item = MenuItem(
                id=self._next_id,
                name=payload.name,
                description=payload.description,
                price=payload.price,
                category=payload.category,
                ingredients=list(payload.ingredients),
                available=True if payload.available is None else payload.available,
            )
            self._next_id += 1
            self._items.append(item)
        logger.info("menu_item_created", item_id=item.id)
        return item.model_copy(deep=True)

    def update_item(self, item_id: int, payload: MenuItemPayload) -> MenuItem:
        with self._lock:
            index = self._index_of(item_id)
            current = self._items[index]
            updated = MenuItem(
                id=current.id,
                name=payload.name,
                description=payload.description,
                price=payload.price,
                category=payload.category,
                ingredients=list(payload.ingredients),
                available=current.available if payload.available is None else payload.available,
            )
            self._items[index] = updated
        logger.info("menu_item_updated", item_id=item_id)
        return updated.model_copy(deep=True)

    def delete_item(self, item_id: int) -> MenuItem:
        with self._lock:
            deleted = self._items.pop(self._index_of(item_id))
        logger.info("menu_item_deleted", item_id=item_id)
        return deleted

    def _index_of(self, item_id: int) -> int:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        raise MenuItemNotFoundError(item_id)
