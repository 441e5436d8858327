"""
Cart use cases against the relational cart store.

Catalog lookups go through the real CatalogRepository unless a test swaps
in FakeCatalog to control exactly which products exist.
"""
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from conftest import USER_A, USER_B, FakeCatalog
from storefront.core.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    PersistenceError,
)
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.catalog_repo import CatalogRepository
from storefront.services.cart_service import CartService


@pytest.fixture
def service():
    return CartService(CartRepository(), CatalogRepository())


def _quantities(summary):
    return {item.product_id: item.quantity for item in summary.items}


class TestGetCart:
    def test_user_without_lines_gets_empty_cart(self, session, catalog, service):
        summary = service.get_cart_summary(session, USER_A)

        assert summary.items == []
        assert summary.total_quantity == 0
        assert summary.total == Decimal("0.00")

    def test_lines_are_priced_from_catalog(self, session, catalog, service, fill_cart):
        fill_cart(USER_A, {7: 2, 9: 1})

        summary = service.get_cart_summary(session, USER_A)

        assert [i.product_id for i in summary.items] == [7, 9]
        assert summary.items[0].price == Decimal("10.00")
        assert summary.items[0].name == "Chocolate Cake"
        assert summary.items[1].name == "Lemonade"
        assert summary.items[0].line_total == Decimal("20.00")
        assert summary.total_quantity == 3
        assert summary.total == Decimal("25.00")


class TestAddProduct:
    def test_first_add_creates_line_with_quantity_one(self, session, catalog, service):
        summary = service.add_product(session, USER_A, 7)

        assert _quantities(summary) == {7: 1}

    def test_adding_twice_increments_single_line(self, session, catalog, service):
        service.add_product(session, USER_A, 7)
        summary = service.add_product(session, USER_A, 7)

        assert len(summary.items) == 1
        assert _quantities(summary) == {7: 2}
        assert summary.total == Decimal("20.00")

    def test_unknown_product_is_not_found(self, session, catalog, service):
        with pytest.raises(NotFoundError):
            service.add_product(session, USER_A, 999)

        assert service.get_cart_summary(session, USER_A).items == []

    def test_catalog_port_decides_existence(self, session, catalog):
        fake = FakeCatalog()
        service = CartService(CartRepository(), fake)

        with pytest.raises(NotFoundError):
            service.add_product(session, USER_A, 7)

        assert fake.lookups == [7]

    def test_carts_are_scoped_per_user(self, session, catalog, service):
        service.add_product(session, USER_A, 7)
        service.add_product(session, USER_B, 9)

        assert _quantities(service.get_cart_summary(session, USER_A)) == {7: 1}
        assert _quantities(service.get_cart_summary(session, USER_B)) == {9: 1}


class TestSetQuantity:
    def test_sets_existing_line(self, session, catalog, service, fill_cart):
        fill_cart(USER_A, {7: 1})

        summary = service.set_quantity(session, USER_A, 7, 5)

        assert _quantities(summary) == {7: 5}

    def test_zero_removes_line(self, session, catalog, service, fill_cart):
        fill_cart(USER_A, {7: 3, 9: 1})

        summary = service.set_quantity(session, USER_A, 7, 0)

        assert _quantities(summary) == {9: 1}

    def test_negative_is_invalid_and_leaves_cart_unchanged(
        self, session, catalog, service, fill_cart
    ):
        fill_cart(USER_A, {7: 3})

        with pytest.raises(InvalidArgumentError):
            service.set_quantity(session, USER_A, 7, -1)

        assert _quantities(service.get_cart_summary(session, USER_A)) == {7: 3}

    def test_negative_is_rejected_before_catalog_lookup(self, session):
        fake = FakeCatalog()
        service = CartService(CartRepository(), fake)

        with pytest.raises(InvalidArgumentError):
            service.set_quantity(session, USER_A, 7, -1)

        assert fake.lookups == []

    def test_absent_line_is_created(self, session, catalog, service):
        summary = service.set_quantity(session, USER_A, 12, 4)

        assert _quantities(summary) == {12: 4}
        assert summary.total == Decimal("170.00")

    def test_unknown_product_is_not_found(self, session, catalog, service):
        with pytest.raises(NotFoundError):
            service.set_quantity(session, USER_A, 999, 2)

    def test_quantity_beyond_column_range_is_invalid(self, session, catalog, service):
        with pytest.raises(InvalidArgumentError):
            service.set_quantity(session, USER_A, 7, 2**31)

        assert service.get_cart_summary(session, USER_A).items == []


class TestRemoveAndClear:
    def test_remove_present_line(self, session, catalog, service, fill_cart):
        fill_cart(USER_A, {7: 2, 9: 1})

        service.remove_item(session, USER_A, 7)

        assert _quantities(service.get_cart_summary(session, USER_A)) == {9: 1}

    def test_remove_absent_line_is_noop(self, session, catalog, service, fill_cart):
        fill_cart(USER_A, {9: 1})

        service.remove_item(session, USER_A, 7)

        assert _quantities(service.get_cart_summary(session, USER_A)) == {9: 1}

    def test_clear_only_touches_own_cart(self, session, catalog, service, fill_cart):
        fill_cart(USER_A, {7: 2, 9: 1})
        fill_cart(USER_B, {7: 1})

        service.clear_cart(session, USER_A)
        service.clear_cart(session, USER_A)  # already empty: still fine

        assert service.get_cart_summary(session, USER_A).items == []
        assert _quantities(service.get_cart_summary(session, USER_B)) == {7: 1}

    def test_store_failure_is_persistence_error(
        self, session, catalog, service, monkeypatch
    ):
        def broken_clear(self, session, user_id):
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(CartRepository, "clear", broken_clear)

        with pytest.raises(PersistenceError):
            service.clear_cart(session, USER_A)


def _duplicate_line_error():
    return IntegrityError(
        "INSERT INTO cart", {}, Exception("UNIQUE constraint failed: cart.user_id")
    )


class TestConcurrentLineCreation:
    def test_duplicate_insert_is_retried_once(self, session, catalog, service, monkeypatch):
        original = CartRepository.add_or_increment
        calls = {"n": 0}

        def racing_add(self, session, user_id, product_id):
            calls["n"] += 1
            if calls["n"] == 1:
                raise _duplicate_line_error()
            return original(self, session, user_id, product_id)

        monkeypatch.setattr(CartRepository, "add_or_increment", racing_add)

        summary = service.add_product(session, USER_A, 7)

        assert calls["n"] == 2
        assert _quantities(summary) == {7: 1}

    def test_repeated_duplicate_is_conflict(self, session, catalog, service, monkeypatch):
        calls = {"n": 0}

        def always_duplicate(self, session, user_id, product_id):
            calls["n"] += 1
            raise _duplicate_line_error()

        monkeypatch.setattr(CartRepository, "add_or_increment", always_duplicate)

        with pytest.raises(ConflictError):
            service.add_product(session, USER_A, 7)

        assert calls["n"] == 2
