# storefront/models/product.py
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Category(SQLModel, table=True):
    """
    Catalog category.

    Owned by the catalog admin tooling; this service only reads it.
    """

    __tablename__ = "categories"

    category_id: int | None = Field(default=None, primary_key=True)

    name: str = Field(
        max_length=100,
        index=True,
        description="Display name of the category",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )


class Product(SQLModel, table=True):
    """
    Catalog product.

    Read by the storefront for browsing, cart validation and cart pricing.
    The price here is the *live* catalog price; orders never reference it
    after checkout (see OrderLineItem.sales_price).
    """

    __tablename__ = "products"

    product_id: int | None = Field(default=None, primary_key=True)

    name: str = Field(
        max_length=100,
        index=True,
        description="Display name of the product",
    )

    price: Decimal = Field(
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Current unit price",
    )

    category_id: int | None = Field(
        default=None,
        foreign_key="categories.category_id",
        index=True,
    )

    description: str | None = None

    subcategory: str | None = Field(
        default=None,
        max_length=50,
        index=True,
    )

    stock: int = Field(
        default=0,
        ge=0,
        description="Units on hand (informational; checkout does not reserve stock)",
    )

    featured: bool = Field(default=False)

    image_url: str | None = None
