"""
HTTP tests for the entity and report endpoints.

Response shapes: list/create return {"message", "data"}; reports return
{"data": [...]}; errors return {"error"} with a 4xx/5xx status.
"""

import pytest

from conftest import add_customer, add_invoice, add_product, add_sale


class TestCustomersApi:
    def test_list_empty(self, client, db_session):
        resp = client.get("/api/customers")

        assert resp.status_code == 200
        assert resp.get_json() == {"message": "customers found", "data": []}

    def test_create_then_list(self, client, db_session):
        resp = client.post("/api/customers", json={"first_name": "Ike", "last_name": "Fifield", "condition": 0})

        assert resp.status_code == 201
        body = resp.get_json()
        assert body["message"] == "customer created"
        assert body["data"] == {"id": 1, "first_name": "Ike", "last_name": "Fifield", "condition": 0}

        listed = client.get("/api/customers").get_json()["data"]
        assert [c["id"] for c in listed] == [1]

    def test_create_missing_fields(self, client, db_session):
        resp = client.post("/api/customers", json={"condition": 1})

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Missing required fields: first_name, last_name"

    def test_create_rejects_unknown_field(self, client, db_session):
        resp = client.post("/api/customers", json={"first_name": "A", "last_name": "B", "id": 9})

        assert resp.status_code == 400
        assert "not allowed" in resp.get_json()["error"]

    def test_create_rejects_non_json_body(self, client, db_session):
        resp = client.post("/api/customers", data="not json", content_type="text/plain")

        assert resp.status_code == 400

    def test_top_customers(self, client, store):
        john = add_customer(store, "John", "Doe")
        jane = add_customer(store, "Jane", "Roe")
        add_invoice(store, john, total="32.00")
        add_invoice(store, jane, total="10.50")

        resp = client.get("/api/customers/top")

        assert resp.status_code == 200
        assert resp.get_json() == {
            "data": [
                {"id": john, "first_name": "John", "last_name": "Doe", "amount": 32.0},
                {"id": jane, "first_name": "Jane", "last_name": "Roe", "amount": 10.5},
            ]
        }

    def test_top_customers_limit(self, client, store):
        for n in range(3):
            add_customer(store, f"C{n}", "Doe")

        resp = client.get("/api/customers/top?limit=2")

        assert len(resp.get_json()["data"]) == 2

    @pytest.mark.parametrize("limit", ["0", "-3", "abc", "2.5", str(10 ** 30)])
    def test_top_customers_bad_limit(self, client, db_session, limit):
        resp = client.get(f"/api/customers/top?limit={limit}")

        assert resp.status_code == 400


class TestInvoicesApi:
    def test_create_invoice(self, client, store):
        customer_id = add_customer(store)

        resp = client.post("/api/invoices", json={"datetime": "2022-05-15", "customer_id": customer_id})

        assert resp.status_code == 201
        assert resp.get_json()["data"] == {
            "id": 1,
            "datetime": "2022-05-15",
            "total": 0.0,
            "customer_id": customer_id,
        }

    def test_create_invoice_unknown_customer(self, client, db_session):
        resp = client.post("/api/invoices", json={"datetime": "2022-05-15", "customer_id": 42})

        assert resp.status_code == 409
        assert resp.get_json() == {"error": "customer not found"}

    def test_create_invoice_rejects_decimal_customer_id(self, client, store):
        add_customer(store)

        resp = client.post("/api/invoices", json={"datetime": "2022-05-15", "customer_id": 1.5})

        assert resp.status_code == 400

    def test_recompute_totals(self, client, worked_example):
        resp = client.post("/api/invoices/totals/recompute")

        assert resp.status_code == 200
        assert resp.get_json() == {"message": "invoices total updated"}

        totals = [i["total"] for i in client.get("/api/invoices").get_json()["data"]]
        assert totals == [150.0, 200.0]

    def test_totals_by_condition(self, client, store):
        c1 = add_customer(store, condition=1)
        c2 = add_customer(store, condition=1)
        c3 = add_customer(store, condition=0)
        add_invoice(store, c1, total="32.00")
        add_invoice(store, c2, total="10.00")
        add_invoice(store, c3, total="5.00")

        resp = client.get("/api/invoices/totals/condition")

        assert resp.status_code == 200
        assert resp.get_json() == {
            "data": [
                {"condition": 0, "total": 5.0},
                {"condition": 1, "total": 42.0},
            ]
        }

    def test_totals_by_condition_empty(self, client, db_session):
        assert client.get("/api/invoices/totals/condition").get_json() == {"data": []}


class TestProductsApi:
    def test_create_product(self, client, db_session):
        resp = client.post("/api/products", json={"description": "French Pastry", "price": 97.01})

        assert resp.status_code == 201
        assert resp.get_json()["data"] == {"id": 1, "description": "French Pastry", "price": 97.01}

    @pytest.mark.parametrize("price", [-1, "abc", True])
    def test_create_product_bad_price(self, client, db_session, price):
        resp = client.post("/api/products", json={"description": "Thing", "price": price})

        assert resp.status_code == 400

    def test_top_products(self, client, store):
        invoice_id = add_invoice(store, add_customer(store))
        p1 = add_product(store, "Product 1")
        p2 = add_product(store, "Product 2")
        add_sale(store, p1, invoice_id, 10)
        add_sale(store, p2, invoice_id, 5)
        add_sale(store, p1, invoice_id, 10)

        resp = client.get("/api/products/top")

        assert resp.status_code == 200
        assert resp.get_json() == {
            "data": [
                {"id": p1, "description": "Product 1", "total": 20},
                {"id": p2, "description": "Product 2", "total": 5},
            ]
        }

    def test_top_products_no_sales(self, client, store):
        add_product(store)

        assert client.get("/api/products/top").get_json() == {"data": []}

    def test_top_products_non_integer_limit(self, client, db_session):
        resp = client.get("/api/products/top?limit=abc")

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "limit must be a positive integer"}


class TestSalesApi:
    def test_create_sale(self, client, store):
        invoice_id = add_invoice(store, add_customer(store))
        product_id = add_product(store)

        resp = client.post("/api/sales", json={"product_id": product_id, "invoice_id": invoice_id, "quantity": 3})

        assert resp.status_code == 201
        assert resp.get_json()["data"] == {
            "id": 1,
            "product_id": product_id,
            "invoice_id": invoice_id,
            "quantity": 3,
        }

    def test_create_sale_dangling_reference(self, client, store):
        product_id = add_product(store)

        resp = client.post("/api/sales", json={"product_id": product_id, "invoice_id": 77, "quantity": 1})

        assert resp.status_code == 409
        assert client.get("/api/sales").get_json()["data"] == []

    def test_create_sale_zero_quantity(self, client, db_session):
        resp = client.post("/api/sales", json={"product_id": 1, "invoice_id": 1, "quantity": 0})

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "quantity must be > 0"}

    def test_sale_does_not_touch_invoice_total(self, client, store):
        invoice_id = add_invoice(store, add_customer(store))
        product_id = add_product(store, price="4.00")

        client.post("/api/sales", json={"product_id": product_id, "invoice_id": invoice_id, "quantity": 2})

        assert client.get("/api/invoices").get_json()["data"][0]["total"] == 0.0

    def test_create_sale_quantity_out_of_range(self, client, store):
        invoice_id = add_invoice(store, add_customer(store))
        product_id = add_product(store)

        resp = client.post("/api/sales", json={"product_id": product_id, "invoice_id": invoice_id, "quantity": 10 ** 30})

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "quantity is out of range"}


class TestSystemApi:
    def test_health(self, client, worked_example):
        resp = client.get("/health")

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "healthy"
        assert body["checks"]["database"]["details"] == {
            "customers": 2,
            "invoices": 2,
            "products": 2,
            "sales": 3,
        }

    def test_version(self, client):
        assert client.get("/version").get_json()["api_version"] == "1.0.0"
