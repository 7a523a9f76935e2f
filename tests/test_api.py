API = "/api/v1"


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "X-Request-ID" in resp.headers


# ---------- Auth ----------

def test_register_rejects_duplicate_username(client, login):
    login("dana")
    resp = client.post(f"{API}/auth/register", json={
        "username": "dana", "password": "x", "email": "other@example.com",
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Username already exists"


def test_register_hides_credential(client):
    resp = client.post(f"{API}/auth/register", json={
        "username": "erin", "password": "pw", "email": "erin@example.com",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["username"] == "erin"
    assert "password" not in body and "password_hash" not in body


def test_token_rejects_bad_password(client, login):
    login("fay")
    resp = client.post(f"{API}/auth/token", data={"username": "fay", "password": "wrong"})
    assert resp.status_code == 401


def test_me_requires_token(client, auth_headers):
    assert client.get(f"{API}/auth/me").status_code == 401
    resp = client.get(f"{API}/auth/me", headers=auth_headers)
    assert resp.json()["username"] == "alice"


# ---------- Catalog ----------

def test_products_listing_with_pagination(client):
    resp = client.get(f"{API}/products/", params={"page": 2, "limit": 12})
    assert resp.status_code == 200
    body = resp.json()
    assert [p["id"] for p in body["products"]] == list(range(13, 21))
    assert body["pagination"] == {"page": 2, "limit": 12, "total": 20, "total_pages": 2}


def test_products_filter_sort_and_search(client):
    resp = client.get(f"{API}/products/", params={"category": 1, "sort": "price-asc"})
    prices = [p["price"] for p in resp.json()["products"]]
    assert prices == ["69.99", "89.99", "129.99", "199.99"]

    resp = client.get(f"{API}/products/", params={"search": "football"})
    assert resp.json()["pagination"]["total"] == 2


def test_product_detail_and_404(client):
    resp = client.get(f"{API}/products/2")
    assert resp.status_code == 200
    assert resp.json()["old_price"] == "119.99"
    assert client.get(f"{API}/products/999").status_code == 404


def test_categories(client):
    resp = client.get(f"{API}/categories/")
    assert [c["icon"] for c in resp.json()] == ["laptop", "tshirt", "home", "spa", "running"]


# ---------- Cart ----------

def test_cart_requires_auth(client):
    assert client.get(f"{API}/cart/").status_code == 401


def test_cart_lifecycle(client, auth_headers):
    resp = client.post(f"{API}/cart/", json={"product_id": 19, "quantity": 1}, headers=auth_headers)
    assert resp.status_code == 201
    item_id = resp.json()["id"]

    resp = client.post(f"{API}/cart/", json={"product_id": 19}, headers=auth_headers)
    assert resp.json() == {"id": item_id, "user_id": 1, "product_id": 19, "quantity": 2}

    resp = client.get(f"{API}/cart/", headers=auth_headers)
    lines = resp.json()
    assert len(lines) == 1
    assert lines[0]["product"]["name"] == "Essential Cotton T-Shirt"

    resp = client.put(f"{API}/cart/{item_id}", json={"quantity": 5}, headers=auth_headers)
    assert resp.json()["quantity"] == 5
    assert client.put(f"{API}/cart/{item_id}", json={"quantity": 0}, headers=auth_headers).status_code == 422
    assert client.put(f"{API}/cart/999", json={"quantity": 1}, headers=auth_headers).status_code == 404

    assert client.delete(f"{API}/cart/{item_id}", headers=auth_headers).status_code == 204
    assert client.delete(f"{API}/cart/{item_id}", headers=auth_headers).status_code == 204
    assert client.get(f"{API}/cart/", headers=auth_headers).json() == []


def test_add_unknown_product_is_404(client, auth_headers):
    resp = client.post(f"{API}/cart/", json={"product_id": 999}, headers=auth_headers)
    assert resp.status_code == 404


def test_clear_cart_only_touches_caller(client, login):
    alice = login("alice")
    bob = login("bob")
    client.post(f"{API}/cart/", json={"product_id": 1}, headers=alice)
    client.post(f"{API}/cart/", json={"product_id": 2}, headers=bob)

    assert client.delete(f"{API}/cart/", headers=alice).status_code == 204
    assert client.get(f"{API}/cart/", headers=alice).json() == []
    assert len(client.get(f"{API}/cart/", headers=bob).json()) == 1


# ---------- Orders & checkout ----------

def test_checkout_summary(client, auth_headers):
    client.post(f"{API}/cart/", json={"product_id": 19, "quantity": 2}, headers=auth_headers)
    resp = client.post(f"{API}/checkout/summary", headers=auth_headers)
    assert resp.json() == {
        "subtotal": "39.98",
        "shipping": "9.99",
        "tax": "3.1984",
        "total": "53.1684",
    }


def test_order_requires_items(client, auth_headers):
    resp = client.post(f"{API}/orders/", json={"order": {"total": "0"}, "items": []}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Order must contain items"
    assert client.get(f"{API}/orders/", headers=auth_headers).json() == []


def test_order_flow(client, login):
    alice = login("alice")
    client.post(f"{API}/cart/", json={"product_id": 19, "quantity": 2}, headers=alice)

    resp = client.post(f"{API}/orders/", json={
        "order": {"total": "53.1684", "status": "pending"},
        "items": [{"product_id": 19, "quantity": 2, "price": "19.99"}],
    }, headers=alice)
    assert resp.status_code == 201
    order = resp.json()
    assert order["status"] == "pending"

    # Cart is emptied once the order exists
    assert client.get(f"{API}/cart/", headers=alice).json() == []

    listing = client.get(f"{API}/orders/", headers=alice).json()
    assert [o["id"] for o in listing] == [order["id"]]

    detail = client.get(f"{API}/orders/{order['id']}", headers=alice).json()
    assert detail["items"][0]["price"] == "19.99"
    assert detail["items"][0]["product"]["name"] == "Essential Cotton T-Shirt"

    bob = login("bob")
    assert client.get(f"{API}/orders/{order['id']}", headers=bob).status_code == 403
    assert client.get(f"{API}/orders/999", headers=alice).status_code == 404


def test_order_with_unknown_product_is_rejected(client, auth_headers):
    client.post(f"{API}/cart/", json={"product_id": 19}, headers=auth_headers)

    resp = client.post(f"{API}/orders/", json={
        "order": {"total": "5.00"},
        "items": [{"product_id": 999, "quantity": 1, "price": "5.00"}],
    }, headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Product 999 not found"

    assert client.get(f"{API}/orders/", headers=auth_headers).json() == []
    # The failed order leaves the cart alone
    assert len(client.get(f"{API}/cart/", headers=auth_headers).json()) == 1
