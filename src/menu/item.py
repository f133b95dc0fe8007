"""Menu item aggregate and the default menu seeded on first run."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Integer, String

from menu.domain import menu

RECORD_FIELDS = ("id", "name", "category", "price", "available")


@menu.aggregate
class MenuItem:
    """A purchasable item on the menu.

    Ids are assigned by the catalog and never change. Names and categories are
    stored verbatim (no HTML sanitizing) so searches and the catalog file see
    exactly what the operator typed.
    """

    id = Integer(identifier=True, min_value=1)
    name = String(max_length=255, required=True, sanitize=False)
    category = String(max_length=100, required=True, sanitize=False)
    price = Float(required=True, min_value=0.0)
    available = Boolean(default=True)

    @invariant.post
    def name_and_category_must_not_be_blank(self):
        errors = {}
        if not self.name.strip():
            errors["name"] = ["Name cannot be blank"]
        if not self.category.strip():
            errors["category"] = ["Category cannot be blank"]
        if errors:
            raise ValidationError(errors)

    def to_record(self) -> dict:
        """Plain field values, as written to the catalog file."""
        return {field: getattr(self, field) for field in RECORD_FIELDS}


DEFAULT_MENU = (
    {"id": 1, "name": "Margherita Pizza", "category": "Pizza", "price": 249.00},
    {"id": 2, "name": "Farmhouse Pizza", "category": "Pizza", "price": 399.00},
    {"id": 3, "name": "Masala Dosa", "category": "South Indian", "price": 129.00},
    {"id": 4, "name": "Paneer Butter Masala", "category": "North Indian", "price": 219.00},
    {"id": 5, "name": "Veg Biryani", "category": "Rice", "price": 199.00},
    {"id": 6, "name": "Chicken Biryani", "category": "Rice", "price": 249.00},
    {"id": 7, "name": "Cold Coffee", "category": "Beverages", "price": 99.00},
    {"id": 8, "name": "Gulab Jamun", "category": "Desserts", "price": 79.00},
)
