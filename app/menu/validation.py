"""
Validation of menu item write payloads.

Every rule in ``MENU_ITEM_RULES`` runs on its own, so a single request gets
back the full list of problems rather than just the first one. Parsing of
``price`` and ``available`` is explicit: a value that cannot be parsed is
reported as a field error, never raised.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from app.core.errors import PayloadValidationError
from app.menu.models import Category, FieldError, MenuItemPayload

NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
CATEGORIES = tuple(category.value for category in Category)

_MISSING = object()


def _is_present(value: Any) -> bool:
    return value is not _MISSING


def _is_filled(value: Any) -> bool:
    if value is _MISSING or value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    return value != ""


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _min_length(length: int) -> Callable[[Any], bool]:
    def _check(value: Any) -> bool:
        return isinstance(value, str) and len(value.strip()) >= length

    return _check


def _is_category(value: Any) -> bool:
    return isinstance(value, str) and value in CATEGORIES


def _is_non_empty_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) >= 1


def _only_strings(value: Any) -> bool:
    if not isinstance(value, list):
        return True
    return all(isinstance(item, str) for item in value)


def parse_price(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str) and NUMBER_RE.match(value.strip()):
        number = float(value.strip())
    else:
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def parse_available(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if value in ("true", "1"):
        return True
    if value in ("false", "0"):
        return False
    return None


@dataclass(frozen=True)
class FieldRule:
    field: str
    check: Callable[[Any], bool]
    message: str
    optional: bool = False

    def violated(self, payload: dict[str, Any]) -> bool:
        value = payload.get(self.field, _MISSING)
        if self.optional and value is _MISSING:
            return False
        return not self.check(value)


MENU_ITEM_RULES: tuple[FieldRule, ...] = (
    FieldRule("name", _is_filled, "name required"),
    FieldRule("name", _is_string, "name must be a string"),
    FieldRule("name", _min_length(3), "name min 3 chars"),
    FieldRule("description", _is_filled, "description required"),
    FieldRule("description", _is_string, "description must be a string"),
    FieldRule("description", _min_length(10), "description min 10 chars"),
    FieldRule("price", _is_present, "price required"),
    FieldRule("price", lambda value: parse_price(value) is not None, "price must be number > 0"),
    FieldRule("category", _is_filled, "category required"),
    FieldRule("category", _is_string, "category must be string"),
    FieldRule(
        "category",
        _is_category,
        "category must be appetizer, entree, dessert or beverage",
    ),
    FieldRule("ingredients", _is_present, "ingredients required"),
    FieldRule(
        "ingredients",
        _is_non_empty_list,
        "ingredients must be array with at least 1 item",
    ),
    FieldRule("ingredients", _only_strings, "ingredients must contain only strings"),
    FieldRule(
        "available",
        lambda value: parse_available(value) is not None,
        "available must be boolean",
        optional=True,
    ),
)


def collect_errors(payload: Any) -> list[FieldError]:
    if not isinstance(payload, dict):
        payload = {}
    return [
        FieldError(field=rule.field, message=rule.message)
        for rule in MENU_ITEM_RULES
        if rule.violated(payload)
    ]


def validate_menu_payload(payload: Any) -> MenuItemPayload:
    """Check ``payload`` against the rule set and return the coerced result.

    Raises ``PayloadValidationError`` listing every violated rule.
    """
    errors = collect_errors(payload)
    if errors:
        raise PayloadValidationError(errors)

    available = payload.get("available", _MISSING)
    return MenuItemPayload(
        name=payload["name"].strip(),
        description=payload["description"].strip(),
        price=parse_price(payload["price"]),
        category=Category(payload["category"]),
        ingredients=list(payload["ingredients"]),
        available=None if available is _MISSING else parse_available(available),
    )


def parse_item_id(raw: str) -> int | None:
    """Parse a path segment into an item id.

    Integral numbers such as ``"2"`` or ``"2.0"`` give an int; anything else
    gives ``None`` and therefore matches no stored item.
    """
    text = raw.strip()
    if not NUMBER_RE.match(text):
        return None
    number = float(text)
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)
