"""Shopping session: one customer's cart, promotion code and checkout.

Checkout flow:
    1. quote() computes the Bill for review (no side effects)
    2. place_order() recomputes the Bill and appends it to the ledger
    3. only after the ledger confirms, the cart and promotion code are cleared

A failed ledger write leaves the cart untouched so the order can be retried.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError

from menu.catalog import Catalog
from ordering.billing.bill import DEFAULT_POLICY, Bill, BillingPolicy
from ordering.billing.engine import compute_bill
from ordering.billing.promotions import is_recognized
from ordering.cart.cart import CartLine, ShoppingCart
from ordering.ledger.ledger import OrderLedger

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PlacedOrder:
    order_id: int
    bill: Bill


class ShoppingSession:
    def __init__(self, catalog: Catalog, ledger: OrderLedger, policy: BillingPolicy = DEFAULT_POLICY):
        self.catalog = catalog
        self.ledger = ledger
        self.policy = policy
        self.cart = ShoppingCart.create()
        self.promotion_code = ""

    # -------------------------------------------------------------------
    # Cart management
    # -------------------------------------------------------------------
    def add_to_cart(self, item_id: int, quantity: int) -> CartLine:
        item = self.catalog.find_by_id(item_id)
        if item is None:
            raise ObjectNotFoundError(f"Menu item {item_id} does not exist or is unavailable")
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        self.cart.add(item, quantity)
        logger.debug("Item added to cart", item_id=item_id, quantity=quantity)
        return self.cart.get_line(item_id)

    def update_quantity(self, item_id: int, quantity: int) -> None:
        self.cart.update_quantity(item_id, quantity)

    def remove_from_cart(self, item_id: int) -> None:
        self.cart.remove(item_id)

    def clear_cart(self) -> None:
        self.cart.clear()

    # -------------------------------------------------------------------
    # Promotions
    # -------------------------------------------------------------------
    def apply_promotion(self, code: str | None) -> bool:
        """Set the promotion code (blank clears it). Returns whether the code is recognised."""
        self.promotion_code = (code or "").strip()
        if not self.promotion_code:
            return False

        recognized = is_recognized(self.promotion_code)
        if not recognized:
            # Unknown codes are kept and simply grant no discount
            logger.warning("Unrecognized promotion code applied", promotion_code=self.promotion_code)
        return recognized

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def quote(self) -> Bill:
        return compute_bill(self.cart, self.promotion_code, self.policy)

    def place_order(self) -> PlacedOrder:
        if self.cart.is_empty:
            raise ValidationError({"cart": ["Cannot check out an empty cart"]})

        bill = self.quote()
        order_id = self.ledger.persist(self.cart, bill)

        self.cart.clear()
        self.promotion_code = ""
        return PlacedOrder(order_id=order_id, bill=bill)
