# storefront/repositories/catalog_repo.py
from decimal import Decimal

from sqlmodel import Session, select

from storefront.models.product import Category, Product
from storefront.repositories.ports import CatalogReader


class CatalogRepository(CatalogReader):
    """
    Data access layer for Product & Category.

    - Read-only: catalog writes belong to the admin tooling.
    - No FastAPI, no business logic.
    """

    # ----- Products -----

    def get_product(self, session: Session, product_id: int) -> Product | None:
        return session.get(Product, product_id)

    def search_products(
        self,
        session: Session,
        category_id: int | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        subcategory: str | None = None,
    ) -> list[Product]:
        """
        Filter products; every filter is optional and they combine with AND.
        """
        stmt = select(Product)
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        if min_price is not None:
            stmt = stmt.where(Product.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(Product.price <= max_price)
        if subcategory:
            stmt = stmt.where(Product.subcategory == subcategory)
        stmt = stmt.order_by(Product.product_id)
        return session.exec(stmt).all()

    def list_by_category(self, session: Session, category_id: int) -> list[Product]:
        return self.search_products(session, category_id=category_id)

    # ----- Categories -----

    def list_categories(self, session: Session) -> list[Category]:
        stmt = select(Category).order_by(Category.category_id)
        return session.exec(stmt).all()

    def get_category(self, session: Session, category_id: int) -> Category | None:
        return session.get(Category, category_id)
