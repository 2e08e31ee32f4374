from storefront.data.models import CartItemModel, WishlistItemModel
from storefront.tasks.sweep import sweep_orphaned_lines, sweep_orphaned_lines_task


def test_admin_lists_users_and_changes_role(admin_client, make_user, login_client):
    _, admin = admin_client
    user = make_user()

    listed = admin.get("/admin/users")
    assert listed.status_code == 200
    assert {u["email"] for u in listed.json()} == {"admin@example.com", user.email}

    promoted = admin.patch(f"/admin/users/{user.id}", json={"role": "admin"})
    assert promoted.status_code == 200
    assert promoted.json()["role"] == "admin"

    assert login_client(user).get("/admin/users").status_code == 200


def test_role_validation(admin_client, make_user):
    _, admin = admin_client
    user = make_user()

    assert admin.patch(f"/admin/users/{user.id}", json={"role": "root"}).status_code == 400
    assert admin.patch("/admin/users/999", json={"role": "user"}).status_code == 404


def test_admin_routes_reject_plain_users(user_client, client):
    _, c = user_client
    assert c.get("/admin/users").status_code == 403
    assert client.get("/admin/users").status_code == 401


def test_sweep_removes_only_orphaned_lines(db, make_user, make_product):
    user = make_user()
    keep = make_product(name="Keep")
    gone = make_product(name="Gone")
    db.add_all([
        CartItemModel(user_id=user.id, product_id=keep.id, quantity=1),
        CartItemModel(user_id=user.id, product_id=gone.id, quantity=2),
        WishlistItemModel(user_id=user.id, product_id=gone.id),
    ])
    db.commit()
    db.delete(gone)
    db.commit()

    assert sweep_orphaned_lines(db) == {"cart": 1, "wishlist": 1}
    assert [line.product_id for line in db.query(CartItemModel).all()] == [keep.id]
    assert db.query(WishlistItemModel).count() == 0


def test_sweep_task_runs_eagerly():
    result = sweep_orphaned_lines_task.delay()
    assert result.get() == {"cart": 0, "wishlist": 0}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_unknown_route_uses_message_body(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}
