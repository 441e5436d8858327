# storefront/services/checkout_service.py
import logging

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlmodel import Session
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from storefront.core.errors import CartChangedError, EmptyCartError, PersistenceError
from storefront.models.order import Order, OrderLineItem
from storefront.repositories.ports import CartStore, OrderStore
from storefront.schemas.order import OrderWithItemsRead
from storefront.services.order_service import build_order_with_items

logger = logging.getLogger(__name__)

# Failures worth another attempt with a fresh cart read:
#   - the cart no longer matches the snapshot (guarded delete missed)
#   - lock timeouts / deadlock victims / "database is locked"
TRANSIENT_ERRORS = (CartChangedError, OperationalError)


class CheckoutService:
    """
    Converts a user's cart into an order as one unit of work.

    One attempt:
      1. Read + lock the cart lines with their current price.
         Empty => EmptyCartError, nothing written.
      2. Insert the order header (UTC timestamp, empty address, zero shipping).
      3. Insert one line item per cart line from the step-1 read.
         The catalog is not consulted again.
      4. Delete exactly the snapshotted cart lines (guarded by quantity).
      5. Commit.

    Any failure rolls back steps 2–4 together. Transient failures are
    retried with a fresh read; exhausting the retries, or any other store
    error, surfaces as PersistenceError.
    """

    def __init__(
        self,
        cart_repo: CartStore,
        order_repo: OrderStore,
        max_attempts: int = 3,
        retry_wait_seconds: float = 0.1,
    ):
        self.cart_repo = cart_repo
        self.order_repo = order_repo
        self.max_attempts = max_attempts
        self.retry_wait_seconds = retry_wait_seconds

    def checkout(self, session: Session, user_id: int) -> OrderWithItemsRead:
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.retry_wait_seconds, max=2),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

        logger.info("Checkout started for user %s", user_id)
        try:
            order, items = retrying(self._checkout_once, session, user_id)
        except TRANSIENT_ERRORS as exc:
            logger.error(
                "Checkout for user %s gave up after %s attempts: %s",
                user_id,
                self.max_attempts,
                exc,
            )
            raise PersistenceError("Checkout could not be completed, please retry") from exc
        except SQLAlchemyError as exc:
            logger.exception("Checkout for user %s failed in the store", user_id)
            raise PersistenceError() from exc

        logger.info(
            "Order %s created for user %s with %s line(s)",
            order.order_id,
            user_id,
            len(items),
        )
        return build_order_with_items(order, items)

    def _checkout_once(
        self,
        session: Session,
        user_id: int,
    ) -> tuple[Order, list[OrderLineItem]]:
        try:
            lines = self.cart_repo.list_lines(session, user_id, for_update=True)
            if not lines:
                raise EmptyCartError()

            order, items = self.order_repo.create_order(session, user_id, lines)
            self.cart_repo.remove_lines(session, user_id, lines)

            session.commit()
        except Exception:
            session.rollback()
            raise

        return order, items
