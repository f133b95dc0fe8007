"""Order record: a confirmed Bill with its order id and timestamp."""

from datetime import datetime

from protean.fields import DateTime, Float, Integer, String

from ordering.billing.bill import Bill
from ordering.domain import ordering


@ordering.value_object
class OrderRecord:
    order_id = Integer(required=True, min_value=1)
    timestamp = DateTime(required=True)
    total_quantity = Integer(required=True, min_value=0)
    subtotal = Float(required=True)
    discount = Float(required=True)
    tax = Float(required=True)
    delivery_fee = Float(required=True)
    total = Float(required=True)
    promotion_code = String(max_length=255, default="", sanitize=False)

    @classmethod
    def from_bill(cls, order_id: int, timestamp: datetime, total_quantity: int, bill: Bill) -> "OrderRecord":
        return cls(
            order_id=order_id,
            timestamp=timestamp.replace(microsecond=0),
            total_quantity=total_quantity,
            subtotal=bill.subtotal,
            discount=bill.discount,
            tax=bill.tax,
            delivery_fee=bill.delivery_fee,
            total=bill.total,
            promotion_code=bill.promotion_code,
        )
