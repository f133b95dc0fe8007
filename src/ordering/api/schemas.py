"""Pydantic request/response schemas for the Ordering API.

These are external contracts, separate from the cart, bill and ledger
models. Amounts are rounded half up to two decimals on the way out.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ordering.billing.bill import Bill
from ordering.cart.cart import CartLine, ShoppingCart
from ordering.ledger.record import OrderRecord
from shared.money import to_display_float


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    item_id: int
    name: str
    category: str
    unit_price: float
    quantity: int
    line_total: float

    @classmethod
    def from_line(cls, line: CartLine) -> "CartLineSchema":
        return cls(
            item_id=line.item_id,
            name=line.name,
            category=line.category,
            unit_price=to_display_float(line.unit_price),
            quantity=line.quantity,
            line_total=to_display_float(line.line_total),
        )


class BillSchema(BaseModel):
    subtotal: float
    discount: float
    tax: float
    delivery_fee: float
    total: float
    promotion_code: str

    @classmethod
    def from_bill(cls, bill: Bill) -> "BillSchema":
        return cls(
            subtotal=to_display_float(bill.subtotal),
            discount=to_display_float(bill.discount),
            tax=to_display_float(bill.tax),
            delivery_fee=to_display_float(bill.delivery_fee),
            total=to_display_float(bill.total),
            promotion_code=bill.promotion_code,
        )


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    item_id: int
    # Non-positive values are rejected by the session with a 422
    quantity: int = 1

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "item_id": 3,
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class ApplyPromotionRequest(BaseModel):
    promotion_code: str = Field(default="", max_length=100)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartResponse(BaseModel):
    lines: list[CartLineSchema]
    total_quantity: int
    subtotal: float
    promotion_code: str

    @classmethod
    def from_cart(cls, cart: ShoppingCart, promotion_code: str) -> "CartResponse":
        return cls(
            lines=[CartLineSchema.from_line(line) for line in cart.lines],
            total_quantity=cart.total_quantity(),
            subtotal=to_display_float(cart.subtotal()),
            promotion_code=promotion_code,
        )


class PromotionResponse(BaseModel):
    promotion_code: str
    recognized: bool


class PlacedOrderResponse(BaseModel):
    order_id: int
    bill: BillSchema


class OrderRecordSchema(BaseModel):
    order_id: int
    timestamp: datetime
    total_quantity: int
    subtotal: float
    discount: float
    tax: float
    delivery_fee: float
    total: float
    promotion_code: str

    @classmethod
    def from_record(cls, record: OrderRecord) -> "OrderRecordSchema":
        return cls(
            order_id=record.order_id,
            timestamp=record.timestamp,
            total_quantity=record.total_quantity,
            subtotal=to_display_float(record.subtotal),
            discount=to_display_float(record.discount),
            tax=to_display_float(record.tax),
            delivery_fee=to_display_float(record.delivery_fee),
            total=to_display_float(record.total),
            promotion_code=record.promotion_code,
        )
