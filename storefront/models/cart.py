# storefront/models/cart.py
from sqlmodel import SQLModel, Field


class CartItem(SQLModel, table=True):
    """
    Shopping cart line for a user.

    The composite primary key (user_id, product_id) is what guarantees
    one user cannot have 2 rows for the same product.

    No price is stored: a cart line is priced from the catalog every time
    the cart is read, and frozen only when it becomes an order line.
    """

    __tablename__ = "cart"

    user_id: int = Field(
        primary_key=True,
        description="Owner, as resolved from the access token",
    )

    product_id: int = Field(
        primary_key=True,
        foreign_key="products.product_id",
    )

    quantity: int = Field(
        gt=0,
        description="Must be >= 1",
    )
