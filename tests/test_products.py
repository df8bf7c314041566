# tests/test_products.py
import uuid


def test_root_welcome(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "Welcome to the Product API! Go to /api/products to see all products."


def test_list_defaults(client):
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["limit"] == 10
    assert [p["id"] for p in body["data"]] == ["1", "2", "3"]


def test_list_category_filter_and_paging(client):
    r = client.get("/api/products", params={"category": "electronics", "page": 2, "limit": 1})
    body = r.json()
    # total counts the filtered set, not the page
    assert body["total"] == 2
    assert body["page"] == 2
    assert body["limit"] == 1
    assert [p["name"] for p in body["data"]] == ["Smartphone"]

    r = client.get("/api/products", params={"category": "electronics"})
    assert all(p["category"] == "electronics" for p in r.json()["data"])


def test_list_unknown_category_and_page_past_end(client):
    assert client.get("/api/products", params={"category": "Electronics"}).json()["total"] == 0
    body = client.get("/api/products", params={"page": 5}).json()
    assert body["total"] == 3
    assert body["data"] == []


def test_list_rejects_non_numeric_paging(client):
    for params in ({"page": "abc"}, {"limit": "ten"}):
        r = client.get("/api/products", params=params)
        assert r.status_code == 400
        assert r.json()["error"] == "ValidationError"


def test_get_product(client):
    r = client.get("/api/products/1")
    assert r.status_code == 200
    assert r.json() == {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    }


def test_get_missing_product(client):
    r = client.get("/api/products/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"error": "NotFoundError", "message": "Product not found"}


def test_search_is_case_insensitive_on_name(client):
    r = client.get("/api/products/search/lap")
    assert r.status_code == 200
    assert [p["name"] for p in r.json()] == ["Laptop"]

    assert [p["name"] for p in client.get("/api/products/search/MAKER").json()] == ["Coffee Maker"]
    # description is not searched
    assert client.get("/api/products/search/RAM").json() == []


def test_stats(client, auth, new_product):
    assert client.get("/api/products/stats").json() == {"electronics": 2, "kitchen": 1}

    client.post("/api/products", json={**new_product, "category": "garden"}, headers=auth)
    stats = client.get("/api/products/stats").json()
    assert stats == {"electronics": 2, "kitchen": 1, "garden": 1}
    assert list(stats) == ["electronics", "kitchen", "garden"]


def test_create_then_get(client, auth, new_product):
    r = client.post("/api/products", json=new_product, headers=auth)
    assert r.status_code == 201
    created = r.json()
    assert uuid.UUID(created["id"]).version == 4
    assert {k: v for k, v in created.items() if k != "id"} == new_product

    assert client.get(f"/api/products/{created['id']}").json() == created
    assert client.get("/api/products").json()["data"][-1] == created


def test_create_generates_unique_ids(client, auth, new_product):
    seen = {p["id"] for p in client.get("/api/products").json()["data"]}
    for _ in range(5):
        # a client supplied id is ignored
        pid = client.post("/api/products", json={**new_product, "id": "1"}, headers=auth).json()["id"]
        assert pid not in seen
        seen.add(pid)
    assert client.get("/api/products").json()["total"] == 8


def test_update_replaces_fields_in_place(client, auth, new_product):
    r = client.put("/api/products/2", json=new_product, headers=auth)
    assert r.status_code == 200
    assert r.json() == {"id": "2", **new_product}

    body = client.get("/api/products").json()
    assert body["total"] == 3
    assert body["data"][1] == {"id": "2", **new_product}
    assert client.get("/api/products/2").json()["name"] == "Blender"


def test_update_missing_product(client, auth, new_product):
    r = client.put("/api/products/nope", json=new_product, headers=auth)
    assert r.status_code == 404
    assert r.json()["error"] == "NotFoundError"


def test_update_validates_before_lookup(client, auth):
    r = client.put("/api/products/nope", json={"name": "x"}, headers=auth)
    assert r.status_code == 400


def test_delete(client, auth):
    r = client.delete("/api/products/3", headers=auth)
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Product deleted"
    assert [p["name"] for p in body["deleted"]] == ["Coffee Maker"]

    assert client.get("/api/products/3").status_code == 404
    assert client.get("/api/products").json()["total"] == 2
    assert client.delete("/api/products/3", headers=auth).status_code == 404
