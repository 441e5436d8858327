"""
HTTP surface of /orders: checkout, history and detail.
"""
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from conftest import USER_A, USER_B
from storefront.main import app
from storefront.repositories.order_repo import OrderRepository
from storefront.services.order_service import OrderService

TOO_BIG = 10**20


class TestCheckoutEndpoint:
    def test_checkout_creates_order(self, client, catalog, fill_cart, auth_headers):
        fill_cart(USER_A, {7: 2, 9: 1})

        res = client.post("/orders", headers=auth_headers())

        assert res.status_code == 201
        body = res.json()
        assert body["user_id"] == USER_A
        assert Decimal(body["total"]) == Decimal("25.00")
        assert [(i["product_id"], i["quantity"]) for i in body["items"]] == [(7, 2), (9, 1)]
        assert client.get("/cart", headers=auth_headers()).json()["items"] == []

    def test_empty_cart_is_400(self, client, catalog, auth_headers):
        res = client.post("/orders", headers=auth_headers())

        assert res.status_code == 400
        assert res.json() == {"detail": "Cart is empty", "code": "empty_cart"}

    def test_requires_auth(self, client):
        assert client.post("/orders").status_code == 401

    def test_store_failure_is_503(
        self, client, catalog, fill_cart, auth_headers, monkeypatch
    ):
        fill_cart(USER_A, {7: 1})

        def broken_create_items(self, session, items):
            raise SQLAlchemyError("write failed")

        monkeypatch.setattr(OrderRepository, "create_items", broken_create_items)

        res = client.post("/orders", headers=auth_headers())

        assert res.status_code == 503
        assert res.json()["code"] == "persistence"
        items = client.get("/cart", headers=auth_headers()).json()["items"]
        assert [(i["product_id"], i["quantity"]) for i in items] == [(7, 1)]


class TestOrderHistory:
    def test_list_after_checkout(self, client, catalog, fill_cart, auth_headers):
        fill_cart(USER_A, {7: 1})
        first = client.post("/orders", headers=auth_headers()).json()
        fill_cart(USER_A, {9: 2})
        second = client.post("/orders", headers=auth_headers()).json()

        res = client.get("/orders", headers=auth_headers())

        assert res.status_code == 200
        body = res.json()
        assert [o["order_id"] for o in body] == [second["order_id"], first["order_id"]]
        assert "items" not in body[0]
        assert Decimal(body[0]["total"]) == Decimal("10.00")

    def test_detail_matches_checkout_response(
        self, client, catalog, fill_cart, auth_headers
    ):
        fill_cart(USER_A, {12: 2})
        created = client.post("/orders", headers=auth_headers()).json()

        res = client.get(f"/orders/{created['order_id']}", headers=auth_headers())

        assert res.status_code == 200
        assert res.json() == created

    def test_foreign_order_is_404(self, client, catalog, fill_cart, auth_headers):
        fill_cart(USER_B, {7: 1})
        theirs = client.post("/orders", headers=auth_headers(USER_B)).json()

        res = client.get(f"/orders/{theirs['order_id']}", headers=auth_headers(USER_A))

        assert res.status_code == 404
        assert res.json()["code"] == "not_found"

    def test_oversized_order_id_is_400(self, client, auth_headers):
        res = client.get(f"/orders/{TOO_BIG}", headers=auth_headers())

        assert res.status_code == 400
        assert res.json()["code"] == "invalid_argument"

    def test_unexpected_fault_is_bare_500(self, auth_headers, monkeypatch):
        def boom(self, session, user_id):
            raise RuntimeError("bug")

        monkeypatch.setattr(OrderService, "list_user_orders", boom)

        with TestClient(app, raise_server_exceptions=False) as c:
            res = c.get("/orders", headers=auth_headers())

        assert res.status_code == 500
        assert res.json() == {"detail": "Internal server error", "code": "internal"}
