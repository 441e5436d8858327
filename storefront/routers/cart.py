# storefront/routers/cart.py
from fastapi import APIRouter, Depends, Path, Response, status
from sqlmodel import Session

from storefront.core.auth import require_user
from storefront.database import get_session
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.catalog_repo import CatalogRepository
from storefront.schemas.cart import CartQuantityUpdate, CartSummary
from storefront.schemas.common import MAX_DB_INT
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
catalog_repo = CatalogRepository()
service = CartService(cart_repo, catalog_repo)


@router.get("", response_model=CartSummary)
def get_my_cart(
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user),
):
    """
    Get current user's cart summary (empty cart if nothing was added yet).
    """
    return service.get_cart_summary(session, user_id)


@router.post("/products/{product_id}", response_model=CartSummary)
def add_to_cart(
    product_id: int = Path(ge=1, le=MAX_DB_INT),
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user),
):
    """
    Add one unit of a product to the current user's cart.

    Returns the updated cart summary.
    """
    return service.add_product(session, user_id, product_id)


@router.put("/products/{product_id}", response_model=CartSummary)
def update_cart_item(
    payload: CartQuantityUpdate,
    product_id: int = Path(ge=1, le=MAX_DB_INT),
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user),
):
    """
    Set quantity of a product in the cart. Quantity 0 removes the line.

    Returns the updated cart summary.
    """
    return service.set_quantity(session, user_id, product_id, payload.quantity)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user),
):
    """
    Clear the entire cart.
    """
    service.clear_cart(session, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_cart_item(
    product_id: int = Path(ge=1, le=MAX_DB_INT),
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user),
):
    """
    Remove a product from the cart.
    """
    service.remove_item(session, user_id, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
