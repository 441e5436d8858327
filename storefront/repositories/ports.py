# storefront/repositories/ports.py
"""
Store contracts (abstract interfaces).

The services depend on these, not on SQL. One relational adapter
implements each port; tests may swap in fakes with the same shape.

Every method takes the caller's Session: the service layer owns the
transaction boundary, adapters never commit.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from sqlmodel import Session

from storefront.models.order import Order, OrderLineItem
from storefront.models.product import Product
from storefront.models.profile import Profile


@dataclass(frozen=True)
class CartLine:
    """One cart line priced at read time, with the product's display fields."""

    product_id: int
    quantity: int
    price: Decimal
    name: str = ""
    image_url: str | None = None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class CatalogReader(ABC):
    """Product existence and price lookup."""

    @abstractmethod
    def get_product(self, session: Session, product_id: int) -> Product | None:
        """Return the product, or None if the catalog does not know it."""
        ...


class CartStore(ABC):
    """Per-user cart lines, keyed by (user_id, product_id)."""

    @abstractmethod
    def list_lines(
        self,
        session: Session,
        user_id: int,
        *,
        for_update: bool = False,
    ) -> list[CartLine]:
        """
        Read the user's lines with their current price.

        for_update=True locks the user's cart rows until the transaction ends.
        """
        ...

    @abstractmethod
    def add_or_increment(self, session: Session, user_id: int, product_id: int) -> None:
        ...

    @abstractmethod
    def set_quantity(
        self,
        session: Session,
        user_id: int,
        product_id: int,
        quantity: int,
    ) -> None:
        ...

    @abstractmethod
    def remove(self, session: Session, user_id: int, product_id: int) -> None:
        ...

    @abstractmethod
    def clear(self, session: Session, user_id: int) -> None:
        ...

    @abstractmethod
    def remove_lines(
        self,
        session: Session,
        user_id: int,
        lines: Sequence[CartLine],
    ) -> None:
        """
        Delete exactly these lines, matching on product and quantity.

        Raises:
            CartChangedError: if any line no longer matches.
        """
        ...


class OrderStore(ABC):
    """Orders and their line items."""

    @abstractmethod
    def create_order(
        self,
        session: Session,
        user_id: int,
        lines: Sequence[CartLine],
    ) -> tuple[Order, list[OrderLineItem]]:
        """Insert header + items (flushed, not committed)."""
        ...

    @abstractmethod
    def list_for_user(self, session: Session, user_id: int) -> list[Order]:
        """Headers only, newest first."""
        ...

    @abstractmethod
    def get_for_user(
        self,
        session: Session,
        user_id: int,
        order_id: int,
    ) -> Order | None:
        """The order if it exists AND belongs to user_id, else None."""
        ...

    @abstractmethod
    def list_items_for_orders(
        self,
        session: Session,
        order_ids: Sequence[int],
    ) -> list[OrderLineItem]:
        ...


class ProfileStore(ABC):
    """One profile row per user."""

    @abstractmethod
    def get(self, session: Session, user_id: int) -> Profile | None:
        ...

    @abstractmethod
    def save(self, session: Session, profile: Profile) -> Profile:
        ...
