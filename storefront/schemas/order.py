# storefront/schemas/order.py
from datetime import datetime
from decimal import Decimal

from sqlmodel import SQLModel


class OrderRead(SQLModel):
    """
    Order header (without items), as shown in order history.

    `total` is computed from the line items on read.
    """

    order_id: int
    user_id: int
    created_at: datetime
    address: str
    city: str
    state: str
    zip: str
    shipping_amount: Decimal
    total: Decimal


class OrderLineItemRead(SQLModel):
    """
    Representation of a single order line item.
    """

    line_id: int
    product_id: int
    sales_price: Decimal
    quantity: int
    discount: Decimal
    line_total: Decimal


class OrderWithItemsRead(OrderRead):
    """
    Full order view including items.
    """

    items: list[OrderLineItemRead]
    subtotal: Decimal
