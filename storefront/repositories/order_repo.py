# storefront/repositories/order_repo.py
from typing import Sequence

from sqlmodel import Session, col, select

from storefront.models.order import Order, OrderLineItem
from storefront.repositories.ports import CartLine, OrderStore


class OrderRepository(OrderStore):
    """
    Data access layer for orders and order_line_items.

    NOTE:
      - No commits here; order creation is one step of the checkout
        transaction. The checkout engine is responsible for commit/rollback.
    """

    # ---- Orders ----

    def create_order(
        self,
        session: Session,
        user_id: int,
        lines: Sequence[CartLine],
    ) -> tuple[Order, list[OrderLineItem]]:
        """
        Insert the header, then one item per cart line at the line's price.
        """
        order = self.create_header(session, Order(user_id=user_id))

        items = [
            OrderLineItem(
                order_id=order.order_id,
                product_id=line.product_id,
                sales_price=line.price,
                quantity=line.quantity,
            )
            for line in lines
        ]
        return order, self.create_items(session, items)

    def create_header(self, session: Session, order: Order) -> Order:
        """
        Insert an Order without committing, but ensure order_id is populated.
        """
        session.add(order)
        session.flush()  # Assign PK
        session.refresh(order)
        return order

    def list_for_user(self, session: Session, user_id: int) -> list[Order]:
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(col(Order.created_at).desc(), col(Order.order_id).desc())
        )
        return list(session.exec(stmt).all())

    def get_for_user(
        self,
        session: Session,
        user_id: int,
        order_id: int,
    ) -> Order | None:
        # Ownership is part of the lookup itself, so a foreign order id
        # behaves exactly like a missing one.
        stmt = select(Order).where(
            Order.order_id == order_id,
            Order.user_id == user_id,
        )
        return session.exec(stmt).first()

    # ---- Order items ----

    def list_items_for_orders(
        self,
        session: Session,
        order_ids: Sequence[int],
    ) -> list[OrderLineItem]:
        if not order_ids:
            return []
        stmt = (
            select(OrderLineItem)
            .where(col(OrderLineItem.order_id).in_(order_ids))
            .order_by(OrderLineItem.order_id, OrderLineItem.line_id)
        )
        return list(session.exec(stmt).all())

    def create_items(
        self,
        session: Session,
        items: list[OrderLineItem],
    ) -> list[OrderLineItem]:
        session.add_all(items)
        session.flush()
        for item in items:
            session.refresh(item)
        return items
