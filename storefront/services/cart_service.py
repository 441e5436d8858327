# storefront/services/cart_service.py
import logging
from decimal import Decimal
from typing import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt

from storefront.core.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    PersistenceError,
)
from storefront.models.product import Product
from storefront.repositories.ports import CartStore, CatalogReader
from storefront.schemas.cart import CartItemRead, CartSummary
from storefront.schemas.common import MAX_DB_INT

logger = logging.getLogger(__name__)


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate product existence against the catalog before any write
      - validate quantities (negative => invalid_argument)
      - compute line totals and cart totals from the current catalog price
      - one commit per operation; rollback on any store failure
    """

    def __init__(self, cart_repo: CartStore, catalog: CatalogReader):
        self.cart_repo = cart_repo
        self.catalog = catalog

    # ---- internal helpers ----

    def _get_known_product(self, session: Session, product_id: int) -> Product:
        product = self.catalog.get_product(session, product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    def _write_once(session: Session, write: Callable[..., None], *args) -> None:
        try:
            write(session, *args)
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise

    def _apply(self, session: Session, write: Callable[..., None], *args) -> None:
        """
        Run a single cart write as its own transaction.

        A unique-key collision means a concurrent request created the same
        line between our UPDATE and INSERT; the second attempt takes the
        UPDATE path. If it collides again we give up with a 409.
        """
        retrying = Retrying(
            stop=stop_after_attempt(2),
            retry=retry_if_exception_type(IntegrityError),
            reraise=True,
        )
        try:
            retrying(self._write_once, session, write, *args)
        except IntegrityError as exc:
            raise ConflictError("Cart was modified concurrently, please retry") from exc
        except SQLAlchemyError as exc:
            logger.exception("Cart write failed for %s%s", write.__name__, args)
            raise PersistenceError() from exc

    # ---- public operations ----

    def get_cart_summary(
        self,
        session: Session,
        user_id: int,
    ) -> CartSummary:
        """
        Return full cart summary:
          - list of CartItemRead (with line_total)
          - total_quantity
          - total

        A user who never added anything gets an empty cart, not an error.
        """
        lines = self.cart_repo.list_lines(session, user_id)

        return CartSummary(
            items=[
                CartItemRead(
                    product_id=ln.product_id,
                    name=ln.name,
                    image_url=ln.image_url,
                    quantity=ln.quantity,
                    price=ln.price,
                    line_total=ln.line_total,
                )
                for ln in lines
            ],
            total_quantity=sum(ln.quantity for ln in lines),
            total=sum((ln.line_total for ln in lines), Decimal("0.00")),
        )

    def add_product(
        self,
        session: Session,
        user_id: int,
        product_id: int,
    ) -> CartSummary:
        """
        Add one unit of a product to the user's cart.

        Rules:
          - product must exist in the catalog
          - existing line => quantity + 1, otherwise new line with quantity 1
        """
        self._get_known_product(session, product_id)
        self._apply(session, self.cart_repo.add_or_increment, user_id, product_id)

        logger.info("User %s added product %s to cart", user_id, product_id)
        return self.get_cart_summary(session, user_id)

    def set_quantity(
        self,
        session: Session,
        user_id: int,
        product_id: int,
        quantity: int,
    ) -> CartSummary:
        """
        Set the quantity of a product in the cart.

        Rules:
          - quantity < 0          => InvalidArgumentError (nothing touched)
          - quantity > MAX_DB_INT => InvalidArgumentError (nothing touched)
          - unknown product       => NotFoundError
          - quantity == 0         => line removed
          - line absent, qty > 0  => line created with that quantity
        """
        if quantity < 0:
            raise InvalidArgumentError("Quantity must be 0 or greater")
        if quantity > MAX_DB_INT:
            raise InvalidArgumentError(f"Quantity must be at most {MAX_DB_INT}")

        self._get_known_product(session, product_id)

        if quantity == 0:
            self._apply(session, self.cart_repo.remove, user_id, product_id)
        else:
            self._apply(
                session, self.cart_repo.set_quantity, user_id, product_id, quantity
            )

        return self.get_cart_summary(session, user_id)

    def remove_item(
        self,
        session: Session,
        user_id: int,
        product_id: int,
    ) -> None:
        """
        Remove a product from the cart. Absent lines are not an error.
        """
        self._apply(session, self.cart_repo.remove, user_id, product_id)

    def clear_cart(
        self,
        session: Session,
        user_id: int,
    ) -> None:
        """
        Clear all items from the cart.
        """
        self._apply(session, self.cart_repo.clear, user_id)
