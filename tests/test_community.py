import unittest

from tests.base import ApiTestCase, ALICE, ALICE_TOKEN, BOB_TOKEN, auth


class CommunityTests(ApiTestCase):
    def test_feed_newest_first_with_authors(self):
        body = self.client.get("/api/community/posts").json()
        self.assertEqual([p["id"] for p in body], ["post-2", "post-1"])
        self.assertEqual(body[1]["profiles"]["full_name"], "Bob Adeyemi")

    def test_feed_filters(self):
        body = self.client.get("/api/community/posts", params={"category": "Academic"}).json()
        self.assertEqual([p["id"] for p in body], ["post-1"])
        body = self.client.get("/api/community/posts", params={"search": "PRICE"}).json()
        self.assertEqual([p["id"] for p in body], ["post-2"])

    def test_post_detail_comments_oldest_first(self):
        body = self.client.get("/api/community/posts/post-1").json()
        self.assertEqual([c["id"] for c in body["comments"]], ["comment-1", "comment-2"])
        self.assertEqual(body["comments"][1]["profiles"]["full_name"], "Alice Okafor")

    def test_missing_post(self):
        self.assertEqual(self.client.get("/api/community/posts/nope").status_code, 404)

    def test_create_post(self):
        response = self.client.post(
            "/api/community/posts",
            json={"title": "Hackathon", "category": "Events", "content": "Teams forming this Friday"},
            headers=auth(ALICE_TOKEN),
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["user_id"], ALICE)

    def test_create_post_validation(self):
        response = self.client.post(
            "/api/community/posts",
            json={"title": "Short", "content": "too short"},
            headers=auth(ALICE_TOKEN),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Content must be at least 10 characters long.")

        response = self.client.post(
            "/api/community/posts",
            json={"title": "Odd", "category": "Memes", "content": "Not a forum category"},
            headers=auth(ALICE_TOKEN),
        )
        self.assertEqual(response.status_code, 400)

    def test_create_post_requires_session(self):
        response = self.client.post(
            "/api/community/posts", json={"title": "Anon", "content": "Anonymous posting attempt"}
        )
        self.assertEqual(response.status_code, 401)

    def test_comment_carries_author(self):
        response = self.client.post(
            "/api/community/posts/post-1/comments", json={"content": " Noted "}, headers=auth(BOB_TOKEN)
        )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["content"], "Noted")
        self.assertEqual(body["profiles"]["full_name"], "Bob Adeyemi")

    def test_comment_too_short(self):
        response = self.client.post(
            "/api/community/posts/post-1/comments", json={"content": " k "}, headers=auth(BOB_TOKEN)
        )
        self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
