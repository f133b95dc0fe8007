"""Pydantic request/response schemas for the Menu API.

These are external contracts, kept separate from the ``MenuItem`` aggregate.
"""

from pydantic import BaseModel, Field

from menu.item import MenuItem
from shared.money import to_display_float


class MenuItemSchema(BaseModel):
    id: int
    name: str
    category: str
    price: float
    available: bool

    @classmethod
    def from_item(cls, item: MenuItem) -> "MenuItemSchema":
        return cls(
            id=item.id,
            name=item.name,
            category=item.category,
            price=to_display_float(item.price),
            available=item.available,
        )


class AddMenuItemRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=100)
    price: float = Field(ge=0)
    available: bool = True

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Mango Lassi",
                    "category": "Beverages",
                    "price": 89.0,
                    "available": True,
                }
            ]
        }
    }


class EditMenuItemRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    price: float | None = Field(default=None, ge=0)
    available: bool | None = None
