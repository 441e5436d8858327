# storefront/services/catalog_service.py
from decimal import Decimal

from sqlmodel import Session

from storefront.core.errors import InvalidArgumentError, NotFoundError
from storefront.models.product import Category, Product
from storefront.repositories.catalog_repo import CatalogRepository


class CatalogService:
    """
    Read-only catalog browsing.

    Catalog writes (category/product admin) are handled by a separate
    tool and are not exposed here.
    """

    def __init__(self, repo: CatalogRepository):
        self.repo = repo

    # ----- Products -----

    def search_products(
        self,
        session: Session,
        category_id: int | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        subcategory: str | None = None,
    ) -> list[Product]:
        if min_price is not None and max_price is not None and min_price > max_price:
            raise InvalidArgumentError("minPrice cannot be greater than maxPrice")

        return self.repo.search_products(
            session,
            category_id=category_id,
            min_price=min_price,
            max_price=max_price,
            subcategory=subcategory,
        )

    def get_product(self, session: Session, product_id: int) -> Product:
        product = self.repo.get_product(session, product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    # ----- Categories -----

    def list_categories(self, session: Session) -> list[Category]:
        return self.repo.list_categories(session)

    def get_category(self, session: Session, category_id: int) -> Category:
        category = self.repo.get_category(session, category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def list_category_products(
        self,
        session: Session,
        category_id: int,
    ) -> list[Product]:
        self.get_category(session, category_id)
        return self.repo.list_by_category(session, category_id)
