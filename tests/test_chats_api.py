def test_requires_session(client, product):
    res = client.get(f"/api/chats/{product.id.value}")

    assert res.status_code == 401
    assert res.json()["success"] is False


def test_buyer_fetch_creates_empty_chat(client, auth_headers, product, buyer, seller):
    res = client.get(f"/api/chats/{product.id.value}", headers=auth_headers(buyer))

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    chat = body["chat"]
    assert chat["productId"] == product.id.value
    assert chat["buyer"] == {"id": buyer.id.value, "name": "Buyer", "email": "buyer@example.com"}
    assert chat["seller"]["id"] == seller.id.value
    assert chat["messages"] == []
    assert "createdAt" in chat and "updatedAt" in chat


def test_seller_fetch_without_chat_is_null(client, store, auth_headers, product, buyer, seller):
    res = client.get(
        f"/api/chats/{product.id.value}",
        params={"buyerId": buyer.id.value},
        headers=auth_headers(seller),
    )

    assert res.status_code == 200
    assert res.json() == {"success": True, "chat": None}
    assert store.chats == {}


def test_seller_sees_chat_started_by_buyer(client, auth_headers, product, buyer, seller):
    created = client.get(f"/api/chats/{product.id.value}", headers=auth_headers(buyer)).json()

    res = client.get(
        f"/api/chats/{product.id.value}",
        params={"buyerId": buyer.id.value},
        headers=auth_headers(seller),
    )

    assert res.json()["chat"]["id"] == created["chat"]["id"]


def test_seller_fetch_requires_buyer_id(client, auth_headers, product, seller):
    res = client.get(f"/api/chats/{product.id.value}", headers=auth_headers(seller))

    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "buyerId is required"}


def test_unknown_or_malformed_product(client, auth_headers, buyer):
    for product_id in ["7c9e6679-7425-40de-944b-e07fc1f90ae7", "abc"]:
        res = client.get(f"/api/chats/{product_id}", headers=auth_headers(buyer))
        assert res.status_code == 404
        assert res.json() == {"success": False, "message": "Product not found"}


def test_product_chats_for_seller(client, auth_headers, product, seller, make_user):
    alice = make_user(name="Alice", email="alice@example.com")
    bob = make_user(name="Bob", email="bob@example.com")
    client.get(f"/api/chats/{product.id.value}", headers=auth_headers(alice))
    client.get(f"/api/chats/{product.id.value}", headers=auth_headers(bob))

    res = client.get(f"/api/products/{product.id.value}/chats", headers=auth_headers(seller))

    assert res.status_code == 200
    chats = res.json()["chats"]
    assert [c["buyer"]["name"] for c in chats] == ["Bob", "Alice"]
    first = chats[0]
    assert first["lastMessage"] is None
    assert first["messageCount"] == 0
    assert first["lastMessageAt"] is not None
    assert "updatedAt" in first


def test_product_chats_forbidden_for_non_owner(client, auth_headers, product, buyer):
    res = client.get(f"/api/products/{product.id.value}/chats", headers=auth_headers(buyer))

    assert res.status_code == 403
    assert res.json()["success"] is False


def test_product_chats_unknown_product(client, auth_headers, seller):
    res = client.get(
        "/api/products/7c9e6679-7425-40de-944b-e07fc1f90ae7/chats",
        headers=auth_headers(seller),
    )

    assert res.status_code == 404
