# storefront/models/order.py
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order header.

    Immutable once created. The order total is intentionally not a column:
    it is derived from the line items on every read.
    """

    __tablename__ = "orders"

    order_id: int | None = Field(default=None, primary_key=True)

    user_id: int = Field(
        index=True,
        description="Owner of the order",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        index=True,
        description="Creation timestamp (UTC)",
    )

    # Shipping fields: there is no shipping subsystem yet, so checkout
    # writes empty strings and a zero amount.
    address: str = Field(default="")
    city: str = Field(default="")
    state: str = Field(default="")
    zip: str = Field(default="")

    shipping_amount: Decimal = Field(
        default=Decimal("0.00"),
        max_digits=10,
        decimal_places=2,
    )


class OrderLineItem(SQLModel, table=True):
    """
    Line item inside an order.

    sales_price is a snapshot of the catalog price at checkout time,
    not a reference to the product's current price.
    """

    __tablename__ = "order_line_items"

    line_id: int | None = Field(default=None, primary_key=True)

    order_id: int = Field(
        foreign_key="orders.order_id",
        ondelete="CASCADE",
        index=True,
    )

    product_id: int = Field(index=True)

    sales_price: Decimal = Field(
        max_digits=10,
        decimal_places=2,
        description="Unit price at time of order",
    )

    quantity: int = Field(
        gt=0,
        description="Quantity ordered (>=1)",
    )

    discount: Decimal = Field(
        default=Decimal("0.00"),
        max_digits=10,
        decimal_places=2,
        description="Discount amount for the whole line",
    )
