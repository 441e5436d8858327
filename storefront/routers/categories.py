# storefront/routers/categories.py
from fastapi import APIRouter, Depends, Path
from sqlmodel import Session

from storefront.database import get_session
from storefront.repositories.catalog_repo import CatalogRepository
from storefront.schemas.common import MAX_DB_INT
from storefront.schemas.product import CategoryRead, ProductRead
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/categories", tags=["Categories"])

repo = CatalogRepository()
service = CatalogService(repo)


@router.get("", response_model=list[CategoryRead])
def list_categories(session: Session = Depends(get_session)):
    return service.list_categories(session)


@router.get("/{category_id}", response_model=CategoryRead)
def get_category(
    category_id: int = Path(ge=1, le=MAX_DB_INT),
    session: Session = Depends(get_session),
):
    return service.get_category(session, category_id)


@router.get("/{category_id}/products", response_model=list[ProductRead])
def list_category_products(
    category_id: int = Path(ge=1, le=MAX_DB_INT),
    session: Session = Depends(get_session),
):
    """
    List products in a category (404 if the category does not exist).
    """
    return service.list_category_products(session, category_id)
