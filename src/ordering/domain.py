"""Ordering bounded context: shopping cart, billing, checkout and the order ledger.

The session cart is billed at checkout and every confirmed bill is appended
to the order ledger.
"""

from protean.domain import Domain

ordering = Domain(name="ordering")
