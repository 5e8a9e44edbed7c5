from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app import main
from app.menu.store import MenuStore


@pytest.fixture()
def menu_store() -> MenuStore:
    return MenuStore.with_sample_data()


@pytest.fixture()
def client(menu_store: MenuStore) -> Iterator[TestClient]:
    main.app.dependency_overrides[main.get_menu_store] = lambda: menu_store
    previous_enabled = main.limiter.enabled
    main.limiter.enabled = False
    try:
        yield TestClient(main.app, raise_server_exceptions=False)
    finally:
        main.app.dependency_overrides.clear()
        main.limiter.enabled = previous_enabled


@pytest.fixture()
def veggie_wrap() -> dict[str, object]:
    return {
        "name": "Veggie Wrap",
        "description": "Grilled veggies in a wrap",
        "price": 8.5,
        "category": "entree",
        "ingredients": ["lettuce", "pepper"],
    }
