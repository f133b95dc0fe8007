"""Menu bounded context: the catalog of purchasable items and its administration."""

from protean.domain import Domain

menu = Domain(name="menu")
