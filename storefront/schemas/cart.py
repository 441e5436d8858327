# storefront/schemas/cart.py
from decimal import Decimal

from sqlmodel import Field, SQLModel

from storefront.schemas.common import MAX_DB_INT


class CartQuantityUpdate(SQLModel):
    """
    Payload for PUT /cart/products/{product_id}.

    The lower bound (quantity >= 0) is checked by the service so a negative
    quantity is a 400 `invalid_argument`, same as any other bad input.
    """

    quantity: int = Field(le=MAX_DB_INT)


class CartItemRead(SQLModel):
    """
    Read model for a single cart line, priced at read time.
    """

    product_id: int
    name: str
    image_url: str | None = None
    quantity: int
    price: Decimal
    line_total: Decimal


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    items: list[CartItemRead]
    total_quantity: int
    total: Decimal
