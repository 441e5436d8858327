# storefront/services/order_service.py
from decimal import Decimal
from typing import Sequence

from sqlmodel import Session

from storefront.core.errors import NotFoundError
from storefront.models.order import Order, OrderLineItem
from storefront.repositories.ports import OrderStore
from storefront.schemas.order import (
    OrderLineItemRead,
    OrderRead,
    OrderWithItemsRead,
)

ZERO = Decimal("0.00")


# -------- Total projection --------
#
# Totals are never stored. History, detail and checkout responses all go
# through these two functions so they always agree.


def line_total(item: OrderLineItem) -> Decimal:
    return item.sales_price * item.quantity - item.discount


def order_total(order: Order, items: Sequence[OrderLineItem]) -> Decimal:
    subtotal = sum((line_total(it) for it in items), ZERO)
    return subtotal + order.shipping_amount


def build_order_read(order: Order, items: Sequence[OrderLineItem]) -> OrderRead:
    return OrderRead(
        order_id=order.order_id,
        user_id=order.user_id,
        created_at=order.created_at,
        address=order.address,
        city=order.city,
        state=order.state,
        zip=order.zip,
        shipping_amount=order.shipping_amount,
        total=order_total(order, items),
    )


def build_order_with_items(
    order: Order,
    items: Sequence[OrderLineItem],
) -> OrderWithItemsRead:
    """
    Compose OrderWithItemsRead from ORM models, including subtotal + total.
    """
    item_dtos = [
        OrderLineItemRead(
            line_id=it.line_id,
            product_id=it.product_id,
            sales_price=it.sales_price,
            quantity=it.quantity,
            discount=it.discount,
            line_total=line_total(it),
        )
        for it in items
    ]
    header = build_order_read(order, items)

    return OrderWithItemsRead(
        **header.model_dump(),
        items=item_dtos,
        subtotal=sum((dto.line_total for dto in item_dtos), ZERO),
    )


class OrderService:
    """
    Read side of orders: history and detail, scoped to the caller.

    Order creation lives in CheckoutService; orders are never updated.
    """

    def __init__(self, order_repo: OrderStore):
        self.order_repo = order_repo

    def list_user_orders(self, session: Session, user_id: int) -> list[OrderRead]:
        """
        List orders for the given user (without items), newest first.
        """
        orders = self.order_repo.list_for_user(session, user_id)
        items = self.order_repo.list_items_for_orders(
            session, [o.order_id for o in orders]
        )

        items_by_order: dict[int, list[OrderLineItem]] = {}
        for it in items:
            items_by_order.setdefault(it.order_id, []).append(it)

        return [build_order_read(o, items_by_order.get(o.order_id, [])) for o in orders]

    def get_user_order(
        self,
        session: Session,
        user_id: int,
        order_id: int,
    ) -> OrderWithItemsRead:
        """
        Get a single order for the user, including items.

        - NotFoundError if the order does not exist or belongs to someone else.
        """
        order = self.order_repo.get_for_user(session, user_id, order_id)
        if order is None:
            raise NotFoundError("Order not found")

        items = self.order_repo.list_items_for_orders(session, [order.order_id])
        return build_order_with_items(order, items)
