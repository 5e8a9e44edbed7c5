from app.menu.models import Category, FieldError, MenuItem, MenuItemPayload
from app.menu.store import MenuStore
from app.menu.validation import validate_menu_payload

__all__ = [
    "Category",
    "FieldError",
    "MenuItem",
    "MenuItemPayload",
    "MenuStore",
    "validate_menu_payload",
]
