"""
Shared fixtures.

The app reads its settings at import time, so the environment is set up
here before anything from `storefront` is imported: a throwaway SQLite
file, a known JWT secret and fast checkout retries.
"""
import os
import tempfile
from decimal import Decimal
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="storefront-tests-"))

os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_ALG"] = "HS256"
os.environ["CHECKOUT_MAX_ATTEMPTS"] = "5"
os.environ["CHECKOUT_RETRY_WAIT_SECONDS"] = "0.01"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlmodel import Session, SQLModel

from storefront.database import engine
from storefront.main import app
from storefront.models.cart import CartItem
from storefront.models.product import Category, Product
from storefront.repositories.ports import CatalogReader

TEST_SECRET = "test-secret"

USER_A = 1
USER_B = 2


def make_token(user_id, secret: str = TEST_SECRET, **claims) -> str:
    """Mint an access token the way the identity provider would."""
    return jwt.encode({"sub": str(user_id), **claims}, secret, algorithm="HS256")


class FakeCatalog(CatalogReader):
    """In-memory catalog: knows exactly the products it was given."""

    def __init__(self, products: dict[int, Product] | None = None):
        self.products = products or {}
        self.lookups: list[int] = []

    def get_product(self, session, product_id):
        self.lookups.append(product_id)
        return self.products.get(product_id)


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh schema for every test."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture
def catalog(session):
    """
    Seed a small catalog:

        7   Chocolate Cake   10.00  (Cakes / chocolate)
        9   Lemonade          5.00  (Drinks / cold)
        12  Fruit Tart       42.50  (Cakes / fruit)
    """
    session.add_all(
        [
            Category(category_id=1, name="Cakes", description="Whole cakes"),
            Category(category_id=2, name="Drinks"),
        ]
    )
    session.add_all(
        [
            Product(
                product_id=7,
                name="Chocolate Cake",
                price=Decimal("10.00"),
                category_id=1,
                subcategory="chocolate",
                stock=20,
                featured=True,
            ),
            Product(
                product_id=9,
                name="Lemonade",
                price=Decimal("5.00"),
                category_id=2,
                subcategory="cold",
                stock=100,
            ),
            Product(
                product_id=12,
                name="Fruit Tart",
                price=Decimal("42.50"),
                category_id=1,
                subcategory="fruit",
                stock=5,
            ),
        ]
    )
    session.commit()
    return {7: Decimal("10.00"), 9: Decimal("5.00"), 12: Decimal("42.50")}


@pytest.fixture
def fill_cart(session):
    """Put lines straight into a user's cart: fill_cart(user_id, {product_id: qty})."""

    def _fill(user_id: int, lines: dict[int, int]) -> None:
        session.add_all(
            CartItem(user_id=user_id, product_id=pid, quantity=qty)
            for pid, qty in lines.items()
        )
        session.commit()

    return _fill


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    def _headers(user_id: int = USER_A) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id)}"}

    return _headers
