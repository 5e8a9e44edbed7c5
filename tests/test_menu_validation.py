"""
Tests for the menu payload rule set.

Verifies that:
- Valid payloads are coerced (trimmed text, float price, parsed booleans)
- Every violated rule is reported, across all fields
- Parse failures are reported as field errors instead of raising
"""

from __future__ import annotations

import pytest

from app.core.errors import PayloadValidationError
from app.menu.models import Category
from app.menu.validation import (
    collect_errors,
    parse_available,
    parse_item_id,
    parse_price,
    validate_menu_payload,
)


def _messages(payload: object) -> list[tuple[str, str]]:
    return [(error.field, error.message) for error in collect_errors(payload)]


class TestValidPayload:
    def test_coerces_and_trims(self, veggie_wrap) -> None:
        veggie_wrap["name"] = "  Veggie Wrap  "
        veggie_wrap["description"] = "\tGrilled veggies in a wrap\n"
        veggie_wrap["price"] = "8.50"

        payload = validate_menu_payload(veggie_wrap)

        assert payload.name == "Veggie Wrap"
        assert payload.description == "Grilled veggies in a wrap"
        assert payload.price == 8.5
        assert payload.category is Category.entree
        assert payload.ingredients == ["lettuce", "pepper"]
        assert payload.available is None

    def test_integer_price_becomes_float(self, veggie_wrap) -> None:
        veggie_wrap["price"] = 9

        payload = validate_menu_payload(veggie_wrap)

        assert isinstance(payload.price, float)
        assert payload.price == 9.0

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(True, True), (False, False), ("true", True), ("false", False), ("1", True), (0, False)],
    )
    def test_available_is_parsed(self, veggie_wrap, raw, expected) -> None:
        veggie_wrap["available"] = raw

        assert validate_menu_payload(veggie_wrap).available is expected


class TestRuleViolations:
    def test_every_field_reports_its_own_error(self) -> None:
        errors = _messages(
            {
                "name": "Hi",
                "description": "short",
                "price": -1,
                "category": "snack",
                "ingredients": [],
            }
        )

        assert errors == [
            ("name", "name min 3 chars"),
            ("description", "description min 10 chars"),
            ("price", "price must be number > 0"),
            ("category", "category must be appetizer, entree, dessert or beverage"),
            ("ingredients", "ingredients must be array with at least 1 item"),
        ]

    def test_missing_field_violates_several_rules(self) -> None:
        errors = _messages({})

        assert ("name", "name required") in errors
        assert ("name", "name must be a string") in errors
        assert ("name", "name min 3 chars") in errors
        assert ("price", "price required") in errors
        assert ("price", "price must be number > 0") in errors
        assert ("ingredients", "ingredients required") in errors
        assert all(field != "available" for field, _ in errors)

    def test_non_object_payload_is_treated_as_empty(self) -> None:
        assert _messages(["not", "an", "object"]) == _messages({})

    def test_non_string_name(self, veggie_wrap) -> None:
        veggie_wrap["name"] = 12345

        assert _messages(veggie_wrap) == [
            ("name", "name must be a string"),
            ("name", "name min 3 chars"),
        ]

    def test_whitespace_padding_does_not_count_towards_length(self, veggie_wrap) -> None:
        veggie_wrap["name"] = "  ab  "

        assert _messages(veggie_wrap) == [("name", "name min 3 chars")]

    def test_ingredients_must_be_strings(self, veggie_wrap) -> None:
        veggie_wrap["ingredients"] = ["lettuce", 3]

        assert _messages(veggie_wrap) == [
            ("ingredients", "ingredients must contain only strings")
        ]

    def test_invalid_available(self, veggie_wrap) -> None:
        veggie_wrap["available"] = "yes"

        assert _messages(veggie_wrap) == [("available", "available must be boolean")]

    def test_null_available_is_rejected(self, veggie_wrap) -> None:
        veggie_wrap["available"] = None

        assert _messages(veggie_wrap) == [("available", "available must be boolean")]

    def test_validate_raises_with_all_errors(self) -> None:
        with pytest.raises(PayloadValidationError) as excinfo:
            validate_menu_payload({"name": "Hi"})

        fields = {error.field for error in excinfo.value.errors}
        assert fields == {"name", "description", "price", "category", "ingredients"}


class TestParsers:
    @pytest.mark.parametrize("raw", [0, -3, "abc", "", True, None, [], "1e400", float("inf"), 10**400])
    def test_parse_price_rejects(self, raw) -> None:
        assert parse_price(raw) is None

    @pytest.mark.parametrize(("raw", "expected"), [(12.99, 12.99), ("7.5", 7.5), (" 3 ", 3.0), (".5", 0.5)])
    def test_parse_price_accepts(self, raw, expected) -> None:
        assert parse_price(raw) == expected

    @pytest.mark.parametrize("raw", ["yes", 2, 0.5, None, "True", []])
    def test_parse_available_rejects(self, raw) -> None:
        assert parse_available(raw) is None

    @pytest.mark.parametrize(("raw", "expected"), [(1.0, True), (0.0, False), (1, True), ("0", False)])
    def test_parse_available_accepts_numbers(self, raw, expected) -> None:
        assert parse_available(raw) is expected

    @pytest.mark.parametrize(("raw", "expected"), [("1", 1), ("2.0", 2), (" 3 ", 3), ("abc", None), ("1.5", None), ("", None)])
    def test_parse_item_id(self, raw, expected) -> None:
        assert parse_item_id(raw) == expected
