# storefront/repositories/cart_repo.py
from typing import Sequence

from sqlalchemy import delete, update
from sqlmodel import Session, select

from storefront.core.errors import CartChangedError
from storefront.models.cart import CartItem
from storefront.models.product import Product
from storefront.repositories.ports import CartLine, CartStore


class CartRepository(CartStore):
    """
    Data access layer for the `cart` table.

    NOTE:
      - No commits here; the services decide where a unit of work ends.
      - Quantity changes are single UPDATE statements so concurrent
        increments never lose an update.
    """

    def list_lines(
        self,
        session: Session,
        user_id: int,
        *,
        for_update: bool = False,
    ) -> list[CartLine]:
        stmt = (
            select(CartItem, Product.price, Product.name, Product.image_url)
            .join(Product, Product.product_id == CartItem.product_id)
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.product_id)
        )
        if for_update:
            # Row locks on Postgres; SQLite ignores FOR UPDATE and relies on
            # its database-level write lock + the guarded delete instead.
            stmt = stmt.with_for_update(of=CartItem)

        return [
            CartLine(
                product_id=item.product_id,
                quantity=item.quantity,
                price=price,
                name=name,
                image_url=image_url,
            )
            for item, price, name, image_url in session.exec(stmt).all()
        ]

    def add_or_increment(self, session: Session, user_id: int, product_id: int) -> None:
        stmt = (
            update(CartItem)
            .where(CartItem.user_id == user_id, CartItem.product_id == product_id)
            .values(quantity=CartItem.quantity + 1)
        )
        if session.exec(stmt).rowcount == 0:
            session.add(CartItem(user_id=user_id, product_id=product_id, quantity=1))
            session.flush()

    def set_quantity(
        self,
        session: Session,
        user_id: int,
        product_id: int,
        quantity: int,
    ) -> None:
        """
        Upsert the line to exactly `quantity` (>= 1).

        Zero / negative handling is business logic and lives in the service.
        """
        stmt = (
            update(CartItem)
            .where(CartItem.user_id == user_id, CartItem.product_id == product_id)
            .values(quantity=quantity)
        )
        if session.exec(stmt).rowcount == 0:
            session.add(
                CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
            )
            session.flush()

    def remove(self, session: Session, user_id: int, product_id: int) -> None:
        session.exec(
            delete(CartItem).where(
                CartItem.user_id == user_id, CartItem.product_id == product_id
            )
        )

    def clear(self, session: Session, user_id: int) -> None:
        session.exec(delete(CartItem).where(CartItem.user_id == user_id))

    def remove_lines(
        self,
        session: Session,
        user_id: int,
        lines: Sequence[CartLine],
    ) -> None:
        for line in lines:
            result = session.exec(
                delete(CartItem).where(
                    CartItem.user_id == user_id,
                    CartItem.product_id == line.product_id,
                    CartItem.quantity == line.quantity,
                )
            )
            if result.rowcount != 1:
                raise CartChangedError(
                    f"cart line {line.product_id} of user {user_id} changed during checkout"
                )
