from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.menu.models import FieldError


class MenuServiceError(RuntimeError):
    pass


class MenuItemNotFoundError(MenuServiceError):
    def __init__(self, item_id: object) -> None:
        super().__init__(f"Menu item {item_id!r} not found")
        self.item_id = item_id


class PayloadValidationError(MenuServiceError):
    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__(f"{len(errors)} invalid field(s)")
        self.errors = errors
