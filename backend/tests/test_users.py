"""
Profile endpoints and the owner-or-admin policy on users.
"""
from models.order import Order
from models.reservation import Reservation


class TestMe:

    def test_me(self, client, customer):
        res = client.get("/users/me", headers=customer["headers"])
        assert res.status_code == 200
        user = res.json()["user"]
        assert user["id"] == customer["id"]
        assert user["email"] == customer["email"]
        assert user["role"] == "customer"
        assert "message" not in res.json()


class TestUpdateUser:

    def test_user_updates_own_profile(self, client, customer):
        res = client.put(
            f"/users/{customer['id']}",
            json={"email": "mynewemail@example.com", "role": "customer"},
            headers=customer["headers"],
        )
        assert res.status_code == 200
        assert res.json()["user"]["email"] == "mynewemail@example.com"

    def test_user_cannot_update_someone_else(self, client, customer, other_customer):
        res = client.put(
            f"/users/{other_customer['id']}",
            json={"email": "hack@example.com"},
            headers=customer["headers"],
        )
        assert res.status_code == 403

    def test_admin_updates_any_user_and_role(self, client, admin, customer):
        res = client.put(
            f"/users/{customer['id']}",
            json={"email": "updated_user@example.com", "role": "admin"},
            headers=admin["headers"],
        )
        assert res.status_code == 200
        user = res.json()["user"]
        assert user["email"] == "updated_user@example.com"
        assert user["role"] == "admin"

    def test_customer_cannot_promote_self(self, client, customer):
        res = client.put(f"/users/{customer['id']}", json={"role": "admin"}, headers=customer["headers"])
        assert res.status_code == 403
        assert client.get("/users/me", headers=customer["headers"]).json()["user"]["role"] == "customer"

    def test_email_taken(self, client, customer, other_customer):
        res = client.put(
            f"/users/{customer['id']}",
            json={"email": other_customer["email"]},
            headers=customer["headers"],
        )
        assert res.status_code == 400

    def test_partial_update_keeps_other_fields(self, client, admin, customer):
        res = client.put(f"/users/{customer['id']}", json={"email": "only@example.com"}, headers=admin["headers"])
        assert res.status_code == 200
        assert res.json()["user"]["role"] == "customer"

    def test_missing_user(self, client, admin, customer):
        for who in (admin, customer):
            res = client.put("/users/9999", json={"email": "x@example.com"}, headers=who["headers"])
            assert res.status_code == 404


class TestDeleteUser:

    def test_user_deletes_self(self, client, customer):
        res = client.delete(f"/users/{customer['id']}", headers=customer["headers"])
        assert res.status_code == 200
        res = client.post("/auth/login", json={"email": customer["email"], "password": "secret123"})
        assert res.status_code == 404

    def test_admin_deletes_user(self, client, admin, customer):
        res = client.delete(f"/users/{customer['id']}", headers=admin["headers"])
        assert res.status_code == 200
        assert "deleted" in res.json()["message"]

    def test_user_cannot_delete_someone_else(self, client, customer, other_customer):
        res = client.delete(f"/users/{other_customer['id']}", headers=customer["headers"])
        assert res.status_code == 403

    def test_missing_user(self, client, admin, customer):
        for who in (admin, customer):
            assert client.delete("/users/9999", headers=who["headers"]).status_code == 404

    def test_deleting_user_removes_their_reservations(self, client, admin, customer, restaurant):
        res = client.post(
            "/reservations",
            json={"fecha": "2026-11-02", "hora": "20:30", "restaurante_id": restaurant["id"]},
            headers=customer["headers"],
        )
        reservation_id = res.json()["reservation"]["id"]

        client.delete(f"/users/{customer['id']}", headers=admin["headers"])
        assert client.get(f"/reservations/{reservation_id}", headers=admin["headers"]).status_code == 404


class TestDeletedAccount:

    def test_new_account_never_reuses_a_deleted_id(self, client, make_user):
        old = make_user()
        assert client.delete(f"/users/{old['id']}", headers=old["headers"]).status_code == 200

        new = make_user()
        assert new["id"] != old["id"]

        # The leftover token names nobody now
        assert client.get("/users/me", headers=old["headers"]).status_code == 404
        res = client.put(f"/users/{new['id']}", json={"email": "taken@example.com"}, headers=old["headers"])
        assert res.status_code == 403

    def test_leftover_token_cannot_create_owned_rows(self, client, make_user, db_session, menu, restaurant):
        gone = make_user()
        client.delete(f"/users/{gone['id']}", headers=gone["headers"])

        res = client.post(
            "/reservations",
            json={"fecha": "2026-11-02", "hora": "20:30", "restaurante_id": restaurant["id"]},
            headers=gone["headers"],
        )
        assert res.status_code == 404
        assert res.json() == {"message": "User not found"}

        res = client.post("/orders", json={"menu_id": menu["id"], "cantidad": 1}, headers=gone["headers"])
        assert res.status_code == 404

        assert db_session.query(Reservation).filter(Reservation.user_id == gone["id"]).count() == 0
        assert db_session.query(Order).filter(Order.user_id == gone["id"]).count() == 0


class TestListUsers:

    def test_admin_lists_users(self, client, admin, customer, other_customer):
        res = client.get("/users", headers=admin["headers"])
        assert res.status_code == 200
        body = res.json()
        assert body["total"] == 3
        assert [u["id"] for u in body["users"]] == sorted(u["id"] for u in body["users"])

    def test_filter_by_role(self, client, admin, customer):
        res = client.get("/users", params={"role": "admin"}, headers=admin["headers"])
        assert [u["email"] for u in res.json()["users"]] == [admin["email"]]

    def test_pagination(self, client, admin, customer, other_customer):
        res = client.get("/users", params={"page": 2, "page_size": 2}, headers=admin["headers"])
        body = res.json()
        assert body["total"] == 3
        assert len(body["users"]) == 1

    def test_customer_cannot_list(self, client, customer):
        assert client.get("/users", headers=customer["headers"]).status_code == 403
