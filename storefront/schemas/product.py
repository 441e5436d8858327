# storefront/schemas/product.py
from decimal import Decimal

from pydantic import ConfigDict
from sqlmodel import SQLModel


class ProductRead(SQLModel):
    """
    Product representation for clients.
    """

    model_config = ConfigDict(from_attributes=True)

    product_id: int
    name: str
    price: Decimal
    category_id: int | None = None
    description: str | None = None
    subcategory: str | None = None
    stock: int
    featured: bool
    image_url: str | None = None


class CategoryRead(SQLModel):
    model_config = ConfigDict(from_attributes=True)

    category_id: int
    name: str
    description: str | None = None
