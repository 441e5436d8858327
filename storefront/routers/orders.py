# storefront/routers/orders.py
from fastapi import APIRouter, Depends, Path, status
from sqlmodel import Session

from storefront.core.auth import require_user
from storefront.core.config import get_settings
from storefront.database import get_session
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.schemas.common import MAX_DB_INT
from storefront.schemas.order import OrderRead, OrderWithItemsRead
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

settings = get_settings()

order_repo = OrderRepository()
cart_repo = CartRepository()
service = OrderService(order_repo)
checkout_service = CheckoutService(
    cart_repo,
    order_repo,
    max_attempts=settings.CHECKOUT_MAX_ATTEMPTS,
    retry_wait_seconds=settings.CHECKOUT_RETRY_WAIT_SECONDS,
)


@router.post(
    "",
    response_model=OrderWithItemsRead,
    status_code=status.HTTP_201_CREATED,
)
def checkout(
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user),
):
    """
    Create an order from the current user's cart and empty the cart.

    - 400 `empty_cart` if there is nothing to check out.
    """
    return checkout_service.checkout(session, user_id)


@router.get("", response_model=list[OrderRead])
def list_my_orders(
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user),
):
    """
    List the authenticated user's orders (without items), newest first.
    """
    return service.list_user_orders(session, user_id)


@router.get("/{order_id}", response_model=OrderWithItemsRead)
def get_my_order(
    order_id: int = Path(ge=1, le=MAX_DB_INT),
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user),
):
    """
    Get a single order (with items) belonging to the current user.
    """
    return service.get_user_order(session, user_id, order_id)
