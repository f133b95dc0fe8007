"""FastAPI routes for the Menu: browsing and catalog administration."""

from fastapi import APIRouter, Depends, Request
from protean.exceptions import ObjectNotFoundError

from menu.api.schemas import AddMenuItemRequest, EditMenuItemRequest, MenuItemSchema
from menu.catalog import Catalog, SortOrder


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog


menu_router = APIRouter(prefix="/menu", tags=["menu"])


# ---------------------------------------------------------------------------
# Administration
# ---------------------------------------------------------------------------
@menu_router.get("/items", response_model=list[MenuItemSchema])
async def list_all_items(catalog: Catalog = Depends(get_catalog)) -> list[MenuItemSchema]:
    """Every item, unavailable ones included."""
    return [MenuItemSchema.from_item(item) for item in catalog.items()]


@menu_router.post("/items", status_code=201, response_model=MenuItemSchema)
async def add_item(body: AddMenuItemRequest, catalog: Catalog = Depends(get_catalog)) -> MenuItemSchema:
    item = catalog.add_item(
        name=body.name,
        category=body.category,
        price=body.price,
        available=body.available,
    )
    return MenuItemSchema.from_item(item)


@menu_router.put("/items/{item_id}", response_model=MenuItemSchema)
async def edit_item(item_id: int, body: EditMenuItemRequest, catalog: Catalog = Depends(get_catalog)) -> MenuItemSchema:
    item = catalog.edit_item(
        item_id,
        name=body.name,
        category=body.category,
        price=body.price,
        available=body.available,
    )
    return MenuItemSchema.from_item(item)


@menu_router.delete("/items/{item_id}", status_code=204)
async def remove_item(item_id: int, catalog: Catalog = Depends(get_catalog)) -> None:
    catalog.remove_item(item_id)


# ---------------------------------------------------------------------------
# Browsing
# ---------------------------------------------------------------------------
@menu_router.get("", response_model=list[MenuItemSchema])
async def browse_menu(
    category: str | None = None,
    q: str | None = None,
    sort: SortOrder | None = None,
    catalog: Catalog = Depends(get_catalog),
) -> list[MenuItemSchema]:
    """Available items, optionally narrowed by category and name, optionally sorted."""
    items = catalog.filter_by_category(category)
    if q:
        matching = {item.id for item in catalog.search_by_name(q)}
        items = [item for item in items if item.id in matching]
    if sort is not None:
        order = [item.id for item in catalog.sorted_items(sort)]
        items = sorted(items, key=lambda item: order.index(item.id))
    return [MenuItemSchema.from_item(item) for item in items]


@menu_router.get("/{item_id}", response_model=MenuItemSchema)
async def get_item(item_id: int, catalog: Catalog = Depends(get_catalog)) -> MenuItemSchema:
    item = catalog.find_by_id(item_id)
    if item is None:
        raise ObjectNotFoundError(f"Menu item {item_id} does not exist or is unavailable")
    return MenuItemSchema.from_item(item)
