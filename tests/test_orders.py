from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.services import notification_service
from storefront.services.line_item_service import LineItemKind, LineItemService
from storefront.services.order_service import OrderService


def fill_cart(c, *lines):
    for product, quantity in lines:
        assert c.post("/cart", json={"productId": product.id, "quantity": quantity}).status_code in (200, 201)


def test_checkout_snapshots_cart_and_clears_it(user_client, make_product):
    user, c = user_client
    vase = make_product(name="Azure Ceramic Vase", price="49.99", stock=15)
    lamp = make_product(name="Navy Blue Table Lamp", price="79.99", stock=10)
    fill_cart(c, (vase, 1), (lamp, 2))

    response = c.post("/orders")

    assert response.status_code == 201
    order = response.json()
    assert order["userId"] == user.id
    assert order["status"] == "pending"
    assert order["total"] == 209.97
    assert order["items"] == [
        {"productId": vase.id, "name": "Azure Ceramic Vase", "price": 49.99, "quantity": 1},
        {"productId": lamp.id, "name": "Navy Blue Table Lamp", "price": 79.99, "quantity": 2},
    ]
    assert c.get("/cart").json() == []


def test_checkout_does_not_decrement_stock(user_client, make_product, client):
    _, c = user_client
    product = make_product(stock=5)
    fill_cart(c, (product, 2))

    c.post("/orders")

    assert client.get(f"/products/{product.id}").json()["stockQuantity"] == 5


def test_order_is_immune_to_later_product_changes(user_client, make_product, db):
    _, c = user_client
    product = make_product(name="Vase", price="10.00")
    fill_cart(c, (product, 3))
    order_id = c.post("/orders").json()["id"]

    product.price = Decimal("99.00")
    product.name = "Renamed"
    db.commit()
    db.delete(product)
    db.commit()

    order = c.get(f"/orders/{order_id}").json()
    assert order["items"][0]["name"] == "Vase"
    assert order["items"][0]["price"] == 10.0
    assert order["total"] == 30.0


def test_checkout_with_empty_cart_is_400(user_client):
    _, c = user_client
    response = c.post("/orders")
    assert response.status_code == 400
    assert response.json() == {"message": "Order must contain at least one item"}


def test_checkout_requires_session(client):
    assert client.post("/orders").status_code == 401


def test_checkout_sends_notification(user_client, make_product, monkeypatch):
    _, c = user_client
    sent = []
    monkeypatch.setattr(
        notification_service.send_order_notification_task,
        "delay",
        lambda user_id, order_id: sent.append((user_id, order_id)),
    )
    fill_cart(c, (make_product(), 1))

    order = c.post("/orders").json()

    assert sent == [(order["userId"], order["id"])]


def test_checkout_survives_broker_outage(user_client, make_product, monkeypatch):
    _, c = user_client

    def broken(*args, **kwargs):
        raise ConnectionError("broker down")

    monkeypatch.setattr(notification_service.send_order_notification_task, "delay", broken)
    fill_cart(c, (make_product(), 1))

    assert c.post("/orders").status_code == 201


def test_notification_task_runs():
    result = notification_service.send_order_notification_task.delay(1, 2)
    assert result.get() == {"user_id": 1, "order_id": 2, "status": "sent"}


def test_order_history_is_per_user_and_newest_first(make_user, login_client, make_product):
    alice = login_client(make_user())
    bob = login_client(make_user())
    product = make_product(stock=100)

    fill_cart(alice, (product, 1))
    first = alice.post("/orders").json()["id"]
    fill_cart(alice, (product, 2))
    second = alice.post("/orders").json()["id"]

    assert [o["id"] for o in alice.get("/orders").json()] == [second, first]
    assert bob.get("/orders").json() == []
    assert bob.get(f"/orders/{first}").status_code == 404


def test_admin_updates_only_status(admin_client, user_client, make_product):
    _, admin = admin_client
    _, c = user_client
    fill_cart(c, (make_product(price="5.00"), 2))
    order = c.post("/orders").json()

    response = admin.patch(f"/admin/orders/{order['id']}", json={"status": "shipped", "total": 0})

    assert response.status_code == 200
    assert response.json()["status"] == "shipped"
    assert response.json()["total"] == 10.0
    assert response.json()["items"] == order["items"]
    assert c.get(f"/orders/{order['id']}").json()["status"] == "shipped"


def test_admin_order_status_validation(admin_client, user_client, make_product):
    _, admin = admin_client
    _, c = user_client
    fill_cart(c, (make_product(), 1))
    order_id = c.post("/orders").json()["id"]

    assert admin.patch(f"/admin/orders/{order_id}", json={"status": "lost"}).status_code == 400
    assert admin.patch("/admin/orders/9999", json={"status": "shipped"}).status_code == 404


def test_admin_lists_all_orders(admin_client, user_client, make_product):
    _, admin = admin_client
    _, c = user_client
    fill_cart(c, (make_product(), 1))
    c.post("/orders")

    assert len(admin.get("/admin/orders").json()) == 1
    assert c.get("/admin/orders").status_code == 403


def test_checkout_keeps_lines_added_after_the_cart_was_read(db, make_user, make_product, monkeypatch):
    user = make_user()
    vase = make_product(name="Vase")
    lamp = make_product(name="Lamp")
    LineItemService(db, LineItemKind.CART).add(user.id, vase.id, 1)

    service = OrderService(db)
    read = service.cart.list_for_user

    # another request adds a line once checkout has read the cart
    def read_then_add(user_id):
        lines = read(user_id)
        other = SessionLocal()
        try:
            LineItemService(other, LineItemKind.CART).add(user_id, lamp.id, 1)
        finally:
            other.close()
        return lines

    monkeypatch.setattr(service.cart, "list_for_user", read_then_add)

    order = service.checkout(user.id)

    assert [i["name"] for i in order["items"]] == ["Vase"]
    remaining = LineItemService(db, LineItemKind.CART).list_for_user(user.id)
    assert [line["product"]["name"] for line in remaining] == ["Lamp"]


def test_checkout_clamps_quantity_to_current_stock(user_client, make_product, db):
    _, c = user_client
    product = make_product(price="10.00", stock=5)
    fill_cart(c, (product, 4))

    product.stock_quantity = 2
    db.commit()

    order = c.post("/orders").json()

    assert order["items"][0]["quantity"] == 2
    assert order["total"] == 20.0


def test_checkout_with_sold_out_line_is_conflict(user_client, make_product, db):
    _, c = user_client
    vase = make_product(name="Vase")
    lamp = make_product(name="Lamp")
    fill_cart(c, (vase, 1), (lamp, 1))

    lamp.stock_quantity = 0
    db.commit()

    response = c.post("/orders")

    assert response.status_code == 409
    assert response.json() == {"message": "Lamp is out of stock"}
    assert len(c.get("/cart").json()) == 2
    assert c.get("/orders").json() == []
