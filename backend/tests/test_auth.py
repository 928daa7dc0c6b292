"""
Registration and login endpoints.
"""
from main import create_app
from fastapi.testclient import TestClient

from models.log import Log
from models.users import User


class TestRegister:

    def test_register_returns_user_without_hash(self, client):
        res = client.post("/auth/register", json={"email": "ana@example.com", "password": "pw123456"})
        assert res.status_code == 201
        body = res.json()
        assert body["message"] == "User registered"
        assert body["user"]["email"] == "ana@example.com"
        assert body["user"]["role"] == "customer"
        assert "id" in body["user"]
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]

    def test_register_same_email_twice(self, client):
        payload = {"email": "dup@example.com", "password": "pw123456"}
        assert client.post("/auth/register", json=payload).status_code == 201

        res = client.post("/auth/register", json=payload)
        assert res.status_code == 400
        assert res.json() == {"message": "Email already registered"}

    def test_duplicate_check_ignores_case(self, client):
        assert client.post("/auth/register", json={"email": "Case@Example.com", "password": "x"}).status_code == 201
        res = client.post("/auth/register", json={"email": "case@example.com", "password": "x"})
        assert res.status_code == 400

    def test_password_is_stored_hashed(self, client, db_session):
        client.post("/auth/register", json={"email": "hash@example.com", "password": "plaintext"})
        user = db_session.query(User).filter(User.email == "hash@example.com").one()
        assert user.password_hash != "plaintext"
        assert user.password_hash.startswith("$2b$10$")

    def test_register_admin_role(self, client):
        res = client.post("/auth/register", json={"email": "boss@example.com", "password": "x", "role": "admin"})
        assert res.status_code == 201
        assert res.json()["user"]["role"] == "admin"

    def test_unknown_role_rejected(self, client):
        res = client.post("/auth/register", json={"email": "r@example.com", "password": "x", "role": "chef"})
        assert res.status_code == 422
        assert res.json()["message"] == "Invalid request"

    def test_missing_fields_rejected(self, client):
        res = client.post("/auth/register", json={"email": "nopass@example.com"})
        assert res.status_code == 422

    def test_admin_self_registration_can_be_disabled(self, settings):
        settings.ALLOW_ADMIN_REGISTRATION = False
        with TestClient(create_app(settings)) as client:
            res = client.post("/auth/register", json={"email": "boss@example.com", "password": "x", "role": "admin"})
            assert res.status_code == 403

            res = client.post("/auth/register", json={"email": "plain@example.com", "password": "x"})
            assert res.status_code == 201


class TestLogin:

    def test_login_returns_token(self, client):
        client.post("/auth/register", json={"email": "log@example.com", "password": "pw123456"})
        res = client.post("/auth/login", json={"email": "log@example.com", "password": "pw123456"})
        assert res.status_code == 200
        body = res.json()
        assert body["message"] == "Login successful"
        assert body["token_type"] == "bearer"
        assert body["token"].count(".") == 2

    def test_login_wrong_password(self, client):
        client.post("/auth/register", json={"email": "wrong@example.com", "password": "right"})
        res = client.post("/auth/login", json={"email": "wrong@example.com", "password": "nope"})
        assert res.status_code == 401

    def test_login_unknown_email(self, client):
        res = client.post("/auth/login", json={"email": "ghost@example.com", "password": "x"})
        assert res.status_code == 404

    def test_login_attempts_are_audited(self, client, db_session):
        client.post("/auth/register", json={"email": "audit@example.com", "password": "right"})
        client.post("/auth/login", json={"email": "audit@example.com", "password": "bad"})
        client.post("/auth/login", json={"email": "audit@example.com", "password": "right"})

        entries = db_session.query(Log).filter(Log.action == "LOGIN").order_by(Log.id).all()
        assert [e.status for e in entries] == ["FAIL", "SUCCESS"]
        assert entries[0].meta["reason"] == "Bad password"
