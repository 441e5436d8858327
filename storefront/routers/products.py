# storefront/routers/products.py
from decimal import Decimal

from fastapi import APIRouter, Depends, Path, Query
from sqlmodel import Session

from storefront.database import get_session
from storefront.repositories.catalog_repo import CatalogRepository
from storefront.schemas.common import MAX_DB_INT
from storefront.schemas.product import ProductRead
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["Products"])

repo = CatalogRepository()
service = CatalogService(repo)


@router.get("", response_model=list[ProductRead])
def search_products(
    session: Session = Depends(get_session),
    category_id: int | None = Query(default=None, alias="cat", ge=1, le=MAX_DB_INT),
    min_price: Decimal | None = Query(default=None, alias="minPrice"),
    max_price: Decimal | None = Query(default=None, alias="maxPrice"),
    subcategory: str | None = Query(default=None, alias="subCategory"),
):
    """
    Search products.

    - Public endpoint.
    - All filters optional: ?cat=1&minPrice=10&maxPrice=50&subCategory=red
    """
    return service.search_products(
        session,
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        subcategory=subcategory,
    )


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int = Path(ge=1, le=MAX_DB_INT),
    session: Session = Depends(get_session),
):
    """
    Get a single product by id.
    """
    return service.get_product(session, product_id)
