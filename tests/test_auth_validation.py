# tests/test_auth_validation.py
import pytest
from fastapi.testclient import TestClient

from product_api.core import PRODUCT_INVALID_MSG
from product_api.main import create_app

AUTH_ERROR = {"error": "AuthError", "message": "Invalid or missing API Key"}


def _ids(client):
    return [p["id"] for p in client.get("/api/products").json()["data"]]


@pytest.mark.parametrize("headers", [{}, {"x-api-key": "wrong"}, {"x-api-key": ""}])
def test_writes_require_api_key(client, new_product, headers):
    before = client.get("/api/products").json()

    r = client.post("/api/products", json=new_product, headers=headers)
    assert r.status_code == 401
    assert r.json() == AUTH_ERROR

    r = client.put("/api/products/1", json=new_product, headers=headers)
    assert r.status_code == 401
    assert r.json() == AUTH_ERROR

    r = client.delete("/api/products/1", headers=headers)
    assert r.status_code == 401
    assert r.json() == AUTH_ERROR

    assert client.get("/api/products").json() == before


def test_auth_checked_before_validation(client):
    r = client.post("/api/products", json={"price": "free"})
    assert r.status_code == 401
    r = client.post("/api/products", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 401


def test_reads_need_no_key(client):
    assert client.get("/api/products").status_code == 200
    assert client.get("/api/products/1").status_code == 200
    assert client.get("/api/products/search/phone").status_code == 200
    assert client.get("/api/products/stats").status_code == 200


def test_api_key_from_settings(monkeypatch, new_product):
    monkeypatch.setattr("product_api.settings.API_KEY", "from-env")
    client = TestClient(create_app())
    assert client.post("/api/products", json=new_product, headers={"x-api-key": "from-env"}).status_code == 201


@pytest.mark.parametrize("change", [
    {"price": "12"},
    {"price": True},
    {"price": None},
    {"price": -1},
    {"name": ""},
    {"name": 42},
    {"description": ""},
    {"category": ""},
    {"inStock": "yes"},
    {"inStock": 1},
])
def test_create_rejects_bad_fields(client, auth, new_product, change):
    before = _ids(client)
    r = client.post("/api/products", json={**new_product, **change}, headers=auth)
    assert r.status_code == 400
    assert r.json() == {"error": "ValidationError", "message": PRODUCT_INVALID_MSG}
    assert _ids(client) == before


@pytest.mark.parametrize("field", ["name", "description", "price", "category", "inStock"])
def test_create_rejects_missing_field(client, auth, new_product, field):
    payload = dict(new_product)
    del payload[field]
    r = client.post("/api/products", json=payload, headers=auth)
    assert r.status_code == 400
    assert len(_ids(client)) == 3


def test_create_rejects_unparseable_body(client, auth):
    headers = {**auth, "content-type": "application/json"}
    for body in (b"", b"{not json", b"[1, 2]", b'{"name": "a", "description": "b", "price": NaN, '
                                              b'"category": "c", "inStock": true}'):
        r = client.post("/api/products", content=body, headers=headers)
        assert r.status_code == 400
        assert r.json()["error"] == "ValidationError"
    assert len(_ids(client)) == 3


def test_integer_and_float_prices_kept(client, auth, new_product):
    assert client.post("/api/products", json={**new_product, "price": 0}, headers=auth).json()["price"] == 0
    assert client.post("/api/products", json={**new_product, "price": 19.5}, headers=auth).json()["price"] == 19.5


def test_update_rejects_bad_payload_without_mutation(client, auth, new_product):
    before = client.get("/api/products/1").json()
    r = client.put("/api/products/1", json={**new_product, "inStock": "no"}, headers=auth)
    assert r.status_code == 400
    assert client.get("/api/products/1").json() == before


def test_unhandled_error_is_500():
    app = create_app()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaput")

    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/boom")
    assert r.status_code == 500
    assert r.json() == {"error": "InternalServerError", "message": "Something went wrong"}


def test_huge_integer_price_is_accepted(client, auth, new_product):
    huge = 10 ** 400
    r = client.post("/api/products", json={**new_product, "price": huge}, headers=auth)
    assert r.status_code == 201
    assert r.json()["price"] == huge


def test_routing_errors_use_error_shape(client):
    r = client.get("/no/such/route")
    assert r.status_code == 404
    assert r.json() == {"error": "NotFoundError", "message": "Not Found"}

    r = client.patch("/api/products/1", json={})
    assert r.status_code == 405
    assert r.json() == {"error": "MethodNotAllowedError", "message": "Method Not Allowed"}
    assert "allow" in r.headers
