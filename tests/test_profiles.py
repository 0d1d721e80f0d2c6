import unittest

from tests.base import ApiTestCase, ALICE, BOB, ALICE_TOKEN, BOB_TOKEN, auth


class ProfileTests(ApiTestCase):
    def test_get_own_profile(self):
        response = self.client.get("/api/profiles/me", headers=auth(ALICE_TOKEN))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["university"], "University of Lagos")

    def test_missing_profile_is_404(self):
        response = self.client.get("/api/profiles/nobody", headers=auth(ALICE_TOKEN))
        self.assertEqual(response.status_code, 404)

    def test_update_rejects_phone_that_is_not_eleven_digits(self):
        response = self.client.put(
            "/api/profiles/me", json={"phone_number": "12345"}, headers=auth(BOB_TOKEN)
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Please enter a valid 11-digit phone number.")
        self.assertEqual(self.db.find("profiles", BOB)["phone_number"], "+2349011112222")

    def test_update_stores_international_phone(self):
        response = self.client.put(
            "/api/profiles/me",
            json={"full_name": "Bob A.", "phone_number": "07055556666"},
            headers=auth(BOB_TOKEN),
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["phone_number"], "+2347055556666")
        self.assertEqual(self.db.find("profiles", BOB)["full_name"], "Bob A.")

    def test_edit_form_shows_local_phone(self):
        body = self.client.get("/api/profiles/me/edit", headers=auth(ALICE_TOKEN)).json()
        self.assertEqual(body["phone_number"], "08012345678")

    def test_dashboard_counts_listings_for_freelancers(self):
        body = self.client.get("/api/profiles/me/dashboard", headers=auth(ALICE_TOKEN)).json()
        self.assertEqual(body["service_count"], 2)
        body = self.client.get("/api/profiles/me/dashboard", headers=auth(BOB_TOKEN)).json()
        self.assertEqual(body["service_count"], 0)

    def test_become_freelancer(self):
        response = self.client.post("/api/profiles/me/freelancer", headers=auth(BOB_TOKEN))
        self.assertTrue(response.json()["is_freelancer"])
        self.assertTrue(self.db.find("profiles", BOB)["is_freelancer"])


class ProfileUploadTests(ApiTestCase):
    def test_image_upload_sets_public_url(self):
        response = self.client.post(
            "/api/profiles/me/image",
            files={"file": ("my photo.png", b"\x89PNG...", "image/png")},
            headers=auth(ALICE_TOKEN),
        )
        self.assertEqual(response.status_code, 200)
        image_url = response.json()["image_url"]
        self.assertIn("/profiles/", image_url)
        self.assertTrue(image_url.endswith("-my_photo.png"))
        self.assertEqual(len(self.db.storage.objects), 1)

    def test_non_image_rejected(self):
        response = self.client.post(
            "/api/profiles/me/image",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=auth(ALICE_TOKEN),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.db.storage.objects, {})

    def test_oversized_image_rejected(self):
        response = self.client.post(
            "/api/profiles/me/image",
            files={"file": ("big.jpg", b"0" * (2 * 1024 * 1024 + 1), "image/jpeg")},
            headers=auth(ALICE_TOKEN),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Image size must be less than 2MB")

    def test_verification_marks_profile_pending(self):
        response = self.client.post(
            "/api/profiles/me/verification",
            files={"file": ("id card.pdf", b"%PDF-1.4", "application/pdf")},
            headers=auth(ALICE_TOKEN),
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["verification_status"], "pending")
        self.assertIn(f"verifications/{ALICE}/", body["verification_document_url"])

    def test_verification_document_type_checked(self):
        response = self.client.post(
            "/api/profiles/me/verification",
            files={"file": ("id.docx", b"PK", "application/vnd.openxmlformats-officedocument.wordprocessingml.document")},
            headers=auth(ALICE_TOKEN),
        )
        self.assertEqual(response.status_code, 400)

    def test_storage_failure_is_500(self):
        self.db.storage.fail = True
        response = self.client.post(
            "/api/profiles/me/image",
            files={"file": ("a.png", b"png", "image/png")},
            headers=auth(ALICE_TOKEN),
        )
        self.assertEqual(response.status_code, 500)


if __name__ == "__main__":
    unittest.main()
