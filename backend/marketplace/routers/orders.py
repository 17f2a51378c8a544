from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.auth import get_actor
from marketplace.clock import utcnow
from marketplace.config import Config
from marketplace.db.database import get_session
from marketplace.models import Order, OrderItem
from marketplace.schemas.actor import Actor, Role
from marketplace.schemas.order import OrderFilters, OrderItemOut, OrderListResponse, OrderOut, OrderStatus
from marketplace.services.orders import get_order_for, items_subtotal, list_for

router = APIRouter(prefix="/api/v1", tags=["orders"])


def to_order_out(order: Order, items: list[OrderItem], actor: Actor) -> OrderOut:
    """Serialize an order with only the lines the actor may see."""
    out = OrderOut.model_validate(order)
    out.items = [OrderItemOut.model_validate(item) for item in items]
    # Vendors get their own subtotal, never the shared order total
    if actor.role == Role.VENDOR:
        out.total_amount = items_subtotal(items)
    return out


@router.get("/orders", response_model=OrderListResponse)
async def list_orders(
    status: OrderStatus | None = None,
    view_all: bool = False,
    page: int = 1,
    actor: Actor = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    filters = OrderFilters(status=status, view_all=view_all, page=page)
    orders = await list_for(session, actor, filters, utcnow())
    return OrderListResponse(
        orders=[to_order_out(order, items, actor) for order, items in orders],
        page=max(page, 1),
        page_size=Config.ORDERS_PAGE_SIZE,
    )


@router.get("/orders/{order_id}", response_model=OrderOut)
async def order_detail(
    order_id: str,
    actor: Actor = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    order, items = await get_order_for(session, order_id, actor)
    return to_order_out(order, items, actor)
