from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Category(str, Enum):
    appetizer = "appetizer"
    entree = "entree"
    dessert = "dessert"
    beverage = "beverage"


class FieldError(BaseModel):
    field: str
    message: str


class MenuItemPayload(BaseModel):
    name: str
    description: str
    price: float = Field(..., gt=0)
    category: Category
    ingredients: list[str] = Field(..., min_length=1)
    available: bool | None = None


class MenuItem(BaseModel):
    id: int
    name: str = Field(..., min_length=3)
    description: str = Field(..., min_length=10)
    price: float = Field(..., gt=0)
    category: Category
    ingredients: list[str] = Field(..., min_length=1)
    available: bool = True
