"""FastAPI routes for Ordering: the session cart, checkout and order history."""

from fastapi import APIRouter, Depends, Request

from ordering.api.schemas import (
    AddToCartRequest,
    ApplyPromotionRequest,
    BillSchema,
    CartResponse,
    OrderRecordSchema,
    PlacedOrderResponse,
    PromotionResponse,
    UpdateCartQuantityRequest,
)
from ordering.checkout.session import ShoppingSession
from ordering.ledger.ledger import OrderLedger


def get_session(request: Request) -> ShoppingSession:
    return request.app.state.session


def get_ledger(request: Request) -> OrderLedger:
    return request.app.state.ledger


def _cart_response(session: ShoppingSession) -> CartResponse:
    return CartResponse.from_cart(session.cart, session.promotion_code)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def view_cart(session: ShoppingSession = Depends(get_session)) -> CartResponse:
    return _cart_response(session)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(session: ShoppingSession = Depends(get_session)) -> CartResponse:
    session.clear_cart()
    return _cart_response(session)


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, session: ShoppingSession = Depends(get_session)) -> CartResponse:
    session.add_to_cart(body.item_id, body.quantity)
    return _cart_response(session)


@cart_router.put("/items/{item_id}", response_model=CartResponse)
async def update_cart_item_quantity(
    item_id: int, body: UpdateCartQuantityRequest, session: ShoppingSession = Depends(get_session)
) -> CartResponse:
    """Set a line's quantity; zero or less removes the line."""
    session.update_quantity(item_id, body.quantity)
    return _cart_response(session)


@cart_router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(item_id: int, session: ShoppingSession = Depends(get_session)) -> CartResponse:
    session.remove_from_cart(item_id)
    return _cart_response(session)


@cart_router.put("/promotion", response_model=PromotionResponse)
async def apply_promotion(body: ApplyPromotionRequest, session: ShoppingSession = Depends(get_session)) -> PromotionResponse:
    recognized = session.apply_promotion(body.promotion_code)
    return PromotionResponse(promotion_code=session.promotion_code, recognized=recognized)


@cart_router.get("/bill", response_model=BillSchema)
async def quote_bill(session: ShoppingSession = Depends(get_session)) -> BillSchema:
    return BillSchema.from_bill(session.quote())


@cart_router.post("/checkout", status_code=201, response_model=PlacedOrderResponse)
async def checkout(session: ShoppingSession = Depends(get_session)) -> PlacedOrderResponse:
    """Bill the cart, record the order, then empty the cart."""
    placed = session.place_order()
    return PlacedOrderResponse(order_id=placed.order_id, bill=BillSchema.from_bill(placed.bill))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderRecordSchema])
async def list_orders(ledger: OrderLedger = Depends(get_ledger)) -> list[OrderRecordSchema]:
    return [OrderRecordSchema.from_record(record) for record in ledger.records()]
