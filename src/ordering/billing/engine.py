"""Billing engine: reduces a cart and a promotion code to a payable Bill.

    subtotal    = sum of line totals
    discount    = promotion discount (0 without a code)
    discounted  = subtotal - discount            (may go negative)
    tax         = max(0, discounted * tax_rate)
    delivery    = flat fee while subtotal < threshold, else 0
                  (pre-discount subtotal, promotions never affect delivery)
    total       = max(0, discounted + tax + delivery)

``compute_bill`` has no side effects and no error path.
"""

from ordering.billing.bill import DEFAULT_POLICY, Bill, BillingPolicy
from ordering.billing.promotions import resolve_discount
from ordering.cart.cart import ShoppingCart


def compute_bill(cart: ShoppingCart, promotion_code: str = "", policy: BillingPolicy = DEFAULT_POLICY) -> Bill:
    # Blank codes are recorded as no code at all
    promotion_code = promotion_code if promotion_code and promotion_code.strip() else ""
    subtotal = cart.subtotal()

    discount = resolve_discount(promotion_code, subtotal) if promotion_code else 0.0
    discounted_subtotal = subtotal - discount

    tax = max(0.0, discounted_subtotal * policy.tax_rate)
    delivery_fee = policy.delivery_fee if subtotal < policy.free_delivery_threshold else 0.0
    total = max(0.0, discounted_subtotal + tax + delivery_fee)

    return Bill(
        subtotal=subtotal,
        discount=discount,
        tax=tax,
        delivery_fee=delivery_fee,
        total=total,
        promotion_code=promotion_code,
    )
