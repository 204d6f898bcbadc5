"""
End-to-end tests for /api/auth — register, login, profile, update.
"""

from conftest import user_payload


class TestRegister:
    def test_register_returns_message_only(self, client):
        resp = client.post("/api/auth/register", json=user_payload())
        assert resp.status_code == 201
        assert resp.json() == {"message": "User registered successfully"}

    def test_register_then_login_succeeds(self, client):
        client.post("/api/auth/register", json=user_payload())
        resp = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "s3cret-pass"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["token"]
        assert body["user"]["username"] == "alice"
        assert body["user"]["email"] == "alice@example.com"
        assert body["user"]["dateOfBirth"] == "1990-04-12"
        assert body["user"]["gender"] == "Female"
        assert body["user"]["phoneNumber"] == "5551234567"
        assert "password" not in body["user"]
        assert "passwordHash" not in body["user"]

    def test_duplicate_email_is_rejected_regardless_of_other_fields(self, client):
        client.post("/api/auth/register", json=user_payload())
        resp = client.post(
            "/api/auth/register",
            json=user_payload(username="bob", password="another-pass", gender="Male"),
        )
        assert resp.status_code == 400
        assert resp.json() == {"message": "User already exists"}

    def test_validation_errors_are_reported_per_field(self, client):
        resp = client.post(
            "/api/auth/register",
            json=user_payload(
                email="not-an-email",
                username="al",
                gender="Unknown",
                phoneNumber="12ab",
            ),
        )
        assert resp.status_code == 400
        body = resp.json()
        assert body["message"] == "Validation error"
        fields = {err.split(":", 1)[0] for err in body["errors"]}
        assert {"email", "username", "gender", "phoneNumber"} <= fields

    def test_missing_fields_are_rejected(self, client):
        resp = client.post("/api/auth/register", json={"email": "a@example.com"})
        assert resp.status_code == 400
        assert len(resp.json()["errors"]) == 5

    def test_password_is_stored_hashed(self, client):
        client.post("/api/auth/register", json=user_payload())
        resp = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "s3cret-pass"},
        )
        assert "s3cret-pass" not in resp.text


class TestLogin:
    def test_wrong_password_and_unknown_email_are_indistinguishable(self, client):
        client.post("/api/auth/register", json=user_payload())

        wrong_password = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "wrong-pass"},
        )
        unknown_email = client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "s3cret-pass"},
        )

        assert wrong_password.status_code == unknown_email.status_code == 400
        assert wrong_password.content == unknown_email.content
        assert wrong_password.json() == {"message": "Invalid credentials"}

    def test_login_requires_valid_input(self, client):
        resp = client.post("/api/auth/login", json={"email": "alice@example.com"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Validation error"


class TestProfile:
    def test_profile_requires_token(self, client):
        resp = client.get("/api/auth/profile")
        assert resp.status_code == 401

    def test_profile_returns_current_user(self, client, register_and_login):
        user, headers = register_and_login()
        resp = client.get("/api/auth/profile", headers=headers)
        assert resp.status_code == 200
        assert resp.json() == user


class TestUpdateProfile:
    def test_update_requires_token(self, client):
        resp = client.put("/api/auth/update", json={"username": "alicia"})
        assert resp.status_code == 401
        assert resp.json() == {"message": "No token, authorization denied"}

    def test_update_rejects_invalid_token(self, client):
        resp = client.put(
            "/api/auth/update",
            json={"username": "alicia"},
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert resp.status_code == 401
        assert resp.json() == {"message": "Token is not valid"}

    def test_update_applies_only_supplied_fields(self, client, register_and_login):
        user, headers = register_and_login()
        resp = client.put(
            "/api/auth/update",
            json={"username": "alicia", "phoneNumber": "5559876543"},
            headers=headers,
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Profile updated successfully"
        assert body["user"]["username"] == "alicia"
        assert body["user"]["phoneNumber"] == "5559876543"
        assert body["user"]["email"] == user["email"]
        assert body["user"]["dateOfBirth"] == user["dateOfBirth"]
        assert body["user"]["gender"] == user["gender"]

    def test_update_changes_gender_and_birthdate(self, client, register_and_login):
        _, headers = register_and_login()
        resp = client.put(
            "/api/auth/update",
            json={"gender": "Other", "dateOfBirth": "1985-01-31"},
            headers=headers,
        )
        assert resp.status_code == 200
        assert resp.json()["user"]["gender"] == "Other"
        assert resp.json()["user"]["dateOfBirth"] == "1985-01-31"

    def test_update_to_taken_email_is_rejected(self, client, register_and_login):
        register_and_login("bob@example.com", username="bob")
        _, headers = register_and_login()
        resp = client.put(
            "/api/auth/update", json={"email": "bob@example.com"}, headers=headers
        )
        assert resp.status_code == 400

    def test_update_validates_fields(self, client, register_and_login):
        _, headers = register_and_login()
        resp = client.put(
            "/api/auth/update", json={"phoneNumber": "123"}, headers=headers
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Validation error"

    def test_update_for_vanished_user_is_not_found(self, client):
        token = client.app.state.token_service.issue("00000000-0000-0000-0000-000000000000")
        resp = client.put(
            "/api/auth/update",
            json={"username": "ghost"},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert resp.status_code == 404
        assert resp.json() == {"message": "User not found"}
