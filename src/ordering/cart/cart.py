"""Shopping cart aggregate: the in-progress order of a single session.

Lines hold a snapshot of the menu item taken when it was first added, so
later catalog edits or removals never change prices already in the cart.
There is at most one line per menu item.
"""

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, HasMany, Integer, String

from menu.item import MenuItem
from ordering.domain import ordering


@ordering.entity(part_of="ShoppingCart")
class CartLine:
    item_id = Integer(required=True, min_value=1)
    name = String(max_length=255, required=True, sanitize=False)
    category = String(max_length=100, required=True, sanitize=False)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @classmethod
    def from_item(cls, item: MenuItem, quantity: int) -> "CartLine":
        return cls(
            item_id=item.id,
            name=item.name,
            category=item.category,
            unit_price=item.price,
            quantity=quantity,
        )

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@ordering.aggregate
class ShoppingCart:
    lines = HasMany(CartLine)

    @invariant.post
    def one_line_per_menu_item(self):
        item_ids = [line.item_id for line in self.lines]
        if len(item_ids) != len(set(item_ids)):
            raise ValidationError({"lines": ["A menu item can appear on only one cart line"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls) -> "ShoppingCart":
        return cls(lines=[])

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get_line(self, item_id: int) -> CartLine | None:
        return next((line for line in self.lines if line.item_id == item_id), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add(self, item: MenuItem, quantity: int) -> None:
        """Add ``quantity`` of ``item``, merging into an existing line. Non-positive quantities are ignored."""
        if quantity <= 0:
            return

        existing = self.get_line(item.id)
        if existing:
            existing.quantity += quantity
        else:
            self.add_lines(CartLine.from_item(item, quantity))

    def update_quantity(self, item_id: int, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        line = self._require_line(item_id)
        if quantity <= 0:
            self.remove_lines(line)
        else:
            line.quantity = quantity

    def remove(self, item_id: int) -> None:
        self.remove_lines(self._require_line(item_id))

    def clear(self) -> None:
        if self.lines:
            self.remove_lines(list(self.lines))

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    def subtotal(self) -> float:
        return sum((line.line_total for line in self.lines), 0.0)

    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)

    def _require_line(self, item_id: int) -> CartLine:
        line = self.get_line(item_id)
        if line is None:
            raise ObjectNotFoundError(f"Item {item_id} is not in the cart")
        return line
