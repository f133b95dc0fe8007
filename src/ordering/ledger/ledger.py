"""Order ledger: assigns order ids and records confirmed bills.

Order ids are strictly increasing and never reused. There is no counter
file: on startup the ledger scans the records already in its store and
continues from the highest id found.
"""

from collections.abc import Callable
from datetime import datetime

import structlog

from ordering.billing.bill import Bill
from ordering.cart.cart import ShoppingCart
from ordering.ledger.record import OrderRecord
from ordering.ledger.store import OrderLedgerStore

logger = structlog.get_logger(__name__)


class OrderLedger:
    def __init__(self, store: OrderLedgerStore, clock: Callable[[], datetime] = datetime.now):
        self._store = store
        self._clock = clock
        self._next_id = self.recover_next_id()

    @property
    def next_id(self) -> int:
        return self._next_id

    def recover_next_id(self) -> int:
        """One past the highest order id in the store, or 1 for an empty store."""
        next_id = max(self._store.order_ids(), default=0) + 1
        logger.debug("Recovered next order id", next_id=next_id)
        return next_id

    def persist(self, cart: ShoppingCart, bill: Bill) -> int:
        """Append ``bill`` as a new order and return its id."""
        order_id = self._next_id
        record = OrderRecord.from_bill(order_id, self._clock(), cart.total_quantity(), bill)

        self._store.append(record)
        self._next_id = order_id + 1

        logger.info(
            "Order recorded",
            order_id=order_id,
            total_quantity=record.total_quantity,
            total=record.total,
            promotion_code=record.promotion_code or None,
        )
        return order_id

    def records(self) -> list[OrderRecord]:
        return self._store.read_all()
