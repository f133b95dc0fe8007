"""Bill value object and the fixed billing policy."""

from protean.fields import Float, String

from ordering.domain import ordering
from shared.money import format_amount


@ordering.value_object
class BillingPolicy:
    """Tax and delivery rules applied to every bill."""

    tax_rate = Float(default=0.05, min_value=0.0)
    delivery_fee = Float(default=35.0, min_value=0.0)
    free_delivery_threshold = Float(default=399.0, min_value=0.0)


DEFAULT_POLICY = BillingPolicy()


@ordering.value_object
class Bill:
    """Immutable outcome of billing a cart at checkout."""

    subtotal = Float(required=True, min_value=0.0)
    discount = Float(default=0.0, min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    delivery_fee = Float(default=0.0, min_value=0.0)
    total = Float(required=True, min_value=0.0)
    promotion_code = String(max_length=255, default="", sanitize=False)

    def display_amounts(self) -> dict[str, str]:
        """Each amount as a two decimal string, ready for a receipt."""
        return {
            "subtotal": format_amount(self.subtotal),
            "discount": format_amount(self.discount),
            "tax": format_amount(self.tax),
            "delivery_fee": format_amount(self.delivery_fee),
            "total": format_amount(self.total),
        }
