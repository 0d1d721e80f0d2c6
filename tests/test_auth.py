import unittest
from unittest.mock import patch

from uniagora.config import settings

from tests.base import ApiTestCase, ALICE, ALICE_TOKEN, ADMIN_TOKEN, auth


class RegisterTests(ApiTestCase):
    payload = {
        "email": "new@uni.edu",
        "password": "secret123",
        "full_name": "New Student",
        "whatsapp_number": "08033334444",
    }

    def test_register_creates_profile_with_international_phone(self):
        response = self.client.post("/api/auth/register", json=self.payload)
        self.assertEqual(response.status_code, 201)
        user_id = response.json()["user_id"]

        profile = self.db.find("profiles", user_id)
        self.assertEqual(profile["phone_number"], "+2348033334444")
        self.assertEqual(profile["university"], "Unspecified University")
        self.assertFalse(profile["is_freelancer"])

    def test_phone_must_be_eleven_digits(self):
        for phone in ("0803333444", "080333344445", "0803333444x"):
            response = self.client.post("/api/auth/register", json={**self.payload, "whatsapp_number": phone})
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json()["detail"], "WhatsApp number must be exactly 11 digits.")
        self.assertEqual(len(self.db.tables["profiles"]), 3)

    def test_short_password_rejected(self):
        response = self.client.post("/api/auth/register", json={**self.payload, "password": "12345"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Password too short.")

    def test_duplicate_email(self):
        self.client.post("/api/auth/register", json=self.payload)
        response = self.client.post("/api/auth/register", json=self.payload)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "This email is already used. Try logging in.")


class SessionTests(ApiTestCase):
    def test_login_returns_tokens(self):
        self.client.post("/api/auth/register", json=RegisterTests.payload)
        response = self.client.post(
            "/api/auth/login", json={"email": "new@uni.edu", "password": "secret123"}
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["access_token"])
        self.assertTrue(body["refresh_token"])

    def test_login_with_wrong_password(self):
        self.client.post("/api/auth/register", json=RegisterTests.payload)
        response = self.client.post(
            "/api/auth/login", json={"email": "new@uni.edu", "password": "wrong-one"}
        )
        self.assertEqual(response.status_code, 401)

    def test_me_includes_profile_and_admin_flag(self):
        body = self.client.get("/api/auth/me", headers=auth(ALICE_TOKEN)).json()
        self.assertEqual(body["id"], ALICE)
        self.assertEqual(body["profile"]["full_name"], "Alice Okafor")
        self.assertFalse(body["is_admin"])

        self.assertTrue(self.client.get("/api/auth/me", headers=auth(ADMIN_TOKEN)).json()["is_admin"])

    def test_me_without_token(self):
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)

    def test_invalid_token(self):
        self.assertEqual(self.client.get("/api/auth/me", headers=auth("forged")).status_code, 401)

    def test_forgot_password_links_to_update_page(self):
        response = self.client.post("/api/auth/forgot-password", json={"email": "alice@uni.edu"})
        self.assertEqual(response.status_code, 200)
        email, options = self.db.auth.reset_requests[0]
        self.assertEqual(email, "alice@uni.edu")
        self.assertTrue(options["redirect_to"].endswith("/update-password"))

    def test_update_password_needs_service_role_key(self):
        with patch.object(settings, "supabase_service_role_key", None):
            response = self.client.post(
                "/api/auth/update-password", json={"password": "newsecret"}, headers=auth(ALICE_TOKEN)
            )
        self.assertEqual(response.status_code, 500)

    def test_update_password(self):
        with patch.object(settings, "supabase_service_role_key", "service-key"):
            response = self.client.post(
                "/api/auth/update-password", json={"password": "newsecret"}, headers=auth(ALICE_TOKEN)
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.db.auth.admin.password_updates, [(ALICE, {"password": "newsecret"})])


if __name__ == "__main__":
    unittest.main()
