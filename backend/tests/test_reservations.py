"""
Reservations: created for the caller, cancelled by owner or admin.
"""


def _book(client, who, restaurant_id, fecha="2026-11-02", hora="20:30"):
    return client.post(
        "/reservations",
        json={"fecha": fecha, "hora": hora, "restaurante_id": restaurant_id},
        headers=who["headers"],
    )


def test_customer_reserves_and_cancels(client, make_user, restaurant):
    customer = make_user()

    res = _book(client, customer, restaurant["id"])
    assert res.status_code == 201
    reservation = res.json()["reservation"]
    assert reservation["usuario_id"] == customer["id"]
    assert reservation["fecha"] == "2026-11-02"
    assert reservation["hora"] == "20:30:00"

    res = client.delete(f"/reservations/{reservation['id']}", headers=customer["headers"])
    assert res.status_code == 200
    assert res.json()["message"] == "Reservation cancelled"
    assert res.json()["reservation"]["id"] == reservation["id"]

    res = client.delete(f"/reservations/{reservation['id']}", headers=customer["headers"])
    assert res.status_code == 404


class TestCreateReservation:

    def test_requires_auth(self, client, restaurant):
        res = client.post("/reservations", json={"fecha": "2026-11-02", "hora": "20:30", "restaurante_id": restaurant["id"]})
        assert res.status_code == 401

    def test_unknown_restaurant(self, client, customer):
        assert _book(client, customer, 999).status_code == 404

    def test_double_booking_is_not_detected(self, client, customer, other_customer, restaurant):
        assert _book(client, customer, restaurant["id"]).status_code == 201
        assert _book(client, other_customer, restaurant["id"]).status_code == 201

    def test_bad_date(self, client, customer, restaurant):
        assert _book(client, customer, restaurant["id"], fecha="tomorrow").status_code == 422


class TestCancelReservation:

    def test_other_customer_forbidden(self, client, customer, other_customer, restaurant):
        reservation_id = _book(client, customer, restaurant["id"]).json()["reservation"]["id"]
        res = client.delete(f"/reservations/{reservation_id}", headers=other_customer["headers"])
        assert res.status_code == 403

    def test_admin_cancels_any(self, client, admin, customer, restaurant):
        reservation_id = _book(client, customer, restaurant["id"]).json()["reservation"]["id"]
        assert client.delete(f"/reservations/{reservation_id}", headers=admin["headers"]).status_code == 200

    def test_missing_is_404_for_every_role(self, client, admin, customer):
        for who in (admin, customer):
            assert client.delete("/reservations/999", headers=who["headers"]).status_code == 404


class TestReadReservations:

    def test_list_shows_only_own(self, client, customer, other_customer, restaurant):
        _book(client, customer, restaurant["id"])
        _book(client, other_customer, restaurant["id"])

        res = client.get("/reservations", headers=customer["headers"])
        assert res.status_code == 200
        assert [r["usuario_id"] for r in res.json()["reservations"]] == [customer["id"]]

    def test_admin_lists_all(self, client, admin, customer, other_customer, restaurant):
        _book(client, customer, restaurant["id"])
        _book(client, other_customer, restaurant["id"])

        res = client.get("/reservations", headers=admin["headers"])
        assert len(res.json()["reservations"]) == 2

    def test_get_owner_or_admin(self, client, admin, customer, other_customer, restaurant):
        reservation_id = _book(client, customer, restaurant["id"]).json()["reservation"]["id"]

        assert client.get(f"/reservations/{reservation_id}", headers=customer["headers"]).status_code == 200
        assert client.get(f"/reservations/{reservation_id}", headers=admin["headers"]).status_code == 200
        assert client.get(f"/reservations/{reservation_id}", headers=other_customer["headers"]).status_code == 403
