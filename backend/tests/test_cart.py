from cartshop.models import Cart, CartItem, CartStatus, User
from cartshop.services.cart_service import CartService, collect_item_ids


def _item_ids(body):
    return sorted(ci["item_id"] for ci in body["cart_items"])


def test_my_cart_is_created_lazily(client, login):
    headers = login()
    assert client.get("/carts").json() == []

    res = client.get("/carts/me", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["cart"]["status"] == "ACTIVE"
    assert body["cart"]["name"] == ""
    assert body["cart_items"] == []

    again = client.get("/carts/me", headers=headers).json()
    assert again["cart"]["id"] == body["cart"]["id"]
    assert len(client.get("/carts").json()) == 1


def test_duplicate_ids_in_one_call_are_deduplicated(client, login):
    headers = login()
    res = client.post("/carts", json={"itemIds": [1, 1, 2]}, headers=headers)
    assert res.status_code == 200
    assert _item_ids(res.json()) == [1, 2]


def test_adding_same_item_twice_is_idempotent(client, login):
    headers = login()
    client.post("/carts", json={"itemId": 3}, headers=headers)
    res = client.post("/carts", json={"itemId": 3}, headers=headers)
    assert res.status_code == 200
    assert _item_ids(res.json()) == [3]


def test_item_id_and_item_ids_are_merged(client, login):
    headers = login()
    res = client.post("/carts", json={"itemId": 4, "itemIds": [2]}, headers=headers)
    assert _item_ids(res.json()) == [2, 4]


def test_add_requires_ids(client, login):
    headers = login()
    for body in ({}, {"itemIds": []}, {"itemId": 0}):
        res = client.post("/carts", json=body, headers=headers)
        assert res.status_code == 400
        assert res.json() == {"error": "itemId or itemIds required"}


def test_invalid_item_rejects_whole_call(client, login):
    headers = login()
    client.post("/carts", json={"itemId": 1}, headers=headers)

    res = client.post("/carts", json={"itemIds": [2, 999]}, headers=headers)
    assert res.status_code == 400
    assert res.json() == {"error": "invalid item id"}

    body = client.get("/carts/me", headers=headers).json()
    assert _item_ids(body) == [1]


def test_zero_in_item_ids_is_an_invalid_item(client, login):
    headers = login()
    res = client.post("/carts", json={"itemIds": [0]}, headers=headers)
    assert res.status_code == 400
    assert res.json() == {"error": "invalid item id"}
    assert client.get("/carts").json() == []


def test_remove_item(client, login):
    headers = login()
    client.post("/carts", json={"itemIds": [1, 2]}, headers=headers)

    res = client.delete("/carts/items/1", headers=headers)
    assert res.status_code == 200
    assert _item_ids(res.json()) == [2]


def test_remove_missing_association_leaves_cart_alone(client, login):
    headers = login()
    client.post("/carts", json={"itemIds": [1, 2]}, headers=headers)

    res = client.delete("/carts/items/5", headers=headers)
    assert res.status_code == 404
    assert res.json() == {"error": "item not found in cart"}
    assert _item_ids(client.get("/carts/me", headers=headers).json()) == [1, 2]


def test_remove_without_active_cart(client, login):
    headers = login()
    res = client.delete("/carts/items/1", headers=headers)
    assert res.status_code == 404
    assert res.json() == {"error": "no active cart"}


def test_remove_rejects_bad_item_id(client, login):
    headers = login()
    client.get("/carts/me", headers=headers)
    assert client.delete("/carts/items/0", headers=headers).status_code == 400
    assert client.delete("/carts/items/abc", headers=headers).status_code == 400


def test_remove_does_not_reclaim_ordered_cart(client, login):
    headers = login()
    cart = client.post("/carts", json={"itemId": 1}, headers=headers).json()["cart"]
    client.post("/orders", json={"cartId": cart["id"]}, headers=headers)

    res = client.delete("/carts/items/1", headers=headers)
    assert res.status_code == 404
    assert res.json() == {"error": "no active cart"}


def test_users_never_share_a_cart(client, login):
    a = login("alice")
    b = login("bob")
    cart_a = client.post("/carts", json={"itemId": 1}, headers=a).json()["cart"]
    cart_b = client.post("/carts", json={"itemId": 1}, headers=b).json()["cart"]
    assert cart_a["id"] != cart_b["id"]
    assert cart_a["user_id"] != cart_b["user_id"]

    client.post("/orders", json={"cartId": cart_a["id"]}, headers=a)
    client.post("/orders", json={"cartId": cart_b["id"]}, headers=b)
    carts = client.get("/carts").json()
    assert sorted(c["id"] for c in carts) == sorted([cart_a["id"], cart_b["id"]])


def test_one_cart_per_user_across_lifecycle(db):
    user = User(username="carol", password_hash="x")
    db.add(user)
    db.commit()

    svc = CartService(db)
    cart = svc.resolve_active_cart(user.id)
    svc.add_items(user.id, [1, 2])
    cart.status = CartStatus.ORDERED
    db.commit()

    again = svc.resolve_active_cart(user.id)
    svc.add_items(user.id, [3])
    svc.remove_item(user.id, 3)
    svc.my_cart(user.id)

    assert again.id == cart.id
    assert db.query(Cart).filter(Cart.user_id == user.id).count() == 1


def test_reclaim_resets_ordered_cart(db):
    user = User(username="dave", password_hash="x")
    db.add(user)
    db.commit()

    svc = CartService(db)
    cart, _ = svc.add_items(user.id, [1, 2])
    cart.status = CartStatus.ORDERED
    cart.name = "weekly shop"
    db.commit()

    cart, items = svc.my_cart(user.id)
    assert cart.status == "ACTIVE"
    assert cart.name == ""
    assert items == []
    assert db.query(CartItem).filter(CartItem.cart_id == cart.id).count() == 0


def test_collect_item_ids():
    assert collect_item_ids(None, None) == []
    assert collect_item_ids(0, []) == []
    assert collect_item_ids(0, [0]) == [0]
    assert collect_item_ids(3, [1, 2]) == [1, 2, 3]
