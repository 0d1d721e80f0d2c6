import unittest
from types import SimpleNamespace

from uniagora.client.notifications import NotificationFeed

from tests.base import ApiTestCase, ALICE, BOB, ALICE_TOKEN, BOB_TOKEN, auth


class NotificationApiTests(ApiTestCase):
    def test_list_own_newest_first(self):
        body = self.client.get("/api/notifications", headers=auth(ALICE_TOKEN)).json()
        self.assertEqual([n["id"] for n in body], ["note-2", "note-1"])

    def test_unread_only_and_count(self):
        body = self.client.get(
            "/api/notifications", params={"unread_only": True}, headers=auth(ALICE_TOKEN)
        ).json()
        self.assertEqual([n["id"] for n in body], ["note-1"])
        count = self.client.get("/api/notifications/unread-count", headers=auth(ALICE_TOKEN)).json()
        self.assertEqual(count, {"unread": 1})

    def test_mark_read(self):
        response = self.client.post("/api/notifications/note-1/read", headers=auth(ALICE_TOKEN))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["is_read"])

    def test_cannot_mark_someone_elses(self):
        response = self.client.post("/api/notifications/note-3/read", headers=auth(ALICE_TOKEN))
        self.assertEqual(response.status_code, 404)
        self.assertFalse(self.db.find("notifications", "note-3")["is_read"])

    def test_mark_all_read(self):
        body = self.client.post("/api/notifications/read-all", headers=auth(ALICE_TOKEN)).json()
        self.assertEqual(body, {"updated": 1})
        self.assertFalse(self.db.find("notifications", "note-3")["is_read"])

    def test_delete(self):
        response = self.client.delete("/api/notifications/note-3", headers=auth(BOB_TOKEN))
        self.assertEqual(response.status_code, 204)
        self.assertIsNone(self.db.find("notifications", "note-3"))


def insert_payload(record):
    return {"data": {"type": "INSERT", "table": "notifications", "record": record}}


class NotificationFeedTests(unittest.TestCase):
    def setUp(self):
        self.changes = []
        self.feed = NotificationFeed(client=None, user_id=ALICE, limit=2, on_change=self.changes.append)

    def record(self, note_id, user_id=ALICE, is_read=False):
        return {
            "id": note_id, "user_id": user_id, "title": "New review", "content": "Someone reviewed you",
            "link": None, "is_read": is_read, "created_at": "2024-06-01T10:00:00+00:00",
        }

    def test_insert_prepends_and_counts_unread(self):
        self.feed.handle_insert(insert_payload(self.record("n-1", is_read=True)))
        self.feed.handle_insert(insert_payload(self.record("n-2")))
        self.assertEqual([n.id for n in self.feed.notifications], ["n-2", "n-1"])
        self.assertEqual(self.feed.unread_count, 1)
        self.assertEqual(len(self.changes), 2)

    def test_keeps_only_latest(self):
        for note_id in ("n-1", "n-2", "n-3"):
            self.feed.handle_insert(insert_payload(self.record(note_id)))
        self.assertEqual([n.id for n in self.feed.notifications], ["n-3", "n-2"])

    def test_ignores_other_users_and_duplicates(self):
        self.feed.handle_insert(insert_payload(self.record("n-1", user_id=BOB)))
        self.feed.handle_insert({"new": self.record("n-2")})
        self.feed.handle_insert({"new": self.record("n-2")})
        self.assertEqual([n.id for n in self.feed.notifications], ["n-2"])
        self.assertEqual(len(self.changes), 1)


class FakeAsyncQuery:
    def __init__(self, rows):
        self.rows = rows
        self.filters = {}
        self.order_by = None
        self.limit_to = None

    def select(self, columns="*"):
        return self

    def eq(self, column, value):
        self.filters[column] = value
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_to = n
        return self

    async def execute(self):
        rows = [r for r in self.rows if all(r.get(k) == v for k, v in self.filters.items())]
        column, desc = self.order_by
        rows = sorted(rows, key=lambda r: r[column], reverse=desc)[:self.limit_to]
        return SimpleNamespace(data=rows)


class FakeChannel:
    def __init__(self, name):
        self.name = name
        self.bindings = []
        self.subscribed = False

    def on_postgres_changes(self, event, schema=None, table=None, filter=None, callback=None):
        self.bindings.append({"event": event, "schema": schema, "table": table, "filter": filter, "callback": callback})
        return self

    async def subscribe(self, callback=None):
        self.subscribed = True
        return self


class FakeAsyncClient:
    def __init__(self, rows):
        self.rows = rows
        self.queries = []
        self.channels = []
        self.removed = []

    def table(self, name):
        query = FakeAsyncQuery(self.rows)
        self.queries.append((name, query))
        return query

    def channel(self, name):
        channel = FakeChannel(name)
        self.channels.append(channel)
        return channel

    async def remove_channel(self, channel):
        self.removed.append(channel)


class NotificationFeedSubscriptionTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = FakeAsyncClient([
            {"id": "n-1", "user_id": ALICE, "title": "Old", "content": "first", "is_read": True,
             "created_at": "2024-06-01T10:00:00+00:00"},
            {"id": "n-2", "user_id": ALICE, "title": "Newer", "content": "second", "is_read": False,
             "created_at": "2024-06-02T10:00:00+00:00"},
            {"id": "n-3", "user_id": ALICE, "title": "Newest", "content": "third", "is_read": False,
             "created_at": "2024-06-03T10:00:00+00:00"},
            {"id": "n-4", "user_id": BOB, "title": "Not mine", "content": "other", "is_read": False,
             "created_at": "2024-06-04T10:00:00+00:00"},
        ])
        self.feed = NotificationFeed(self.client, ALICE, limit=2)

    async def test_refresh_loads_latest_newest_first(self):
        await self.feed.refresh()
        self.assertEqual([n.id for n in self.feed.notifications], ["n-3", "n-2"])
        self.assertEqual(self.feed.unread_count, 2)
        name, query = self.client.queries[0]
        self.assertEqual(name, "notifications")
        self.assertEqual(query.filters, {"user_id": ALICE})

    async def test_start_subscribes_to_own_inserts(self):
        await self.feed.start()
        channel = self.client.channels[0]
        self.assertTrue(channel.subscribed)
        binding = channel.bindings[0]
        self.assertEqual(binding["event"], "INSERT")
        self.assertEqual(binding["schema"], "public")
        self.assertEqual(binding["table"], "notifications")
        self.assertEqual(binding["filter"], f"user_id=eq.{ALICE}")

        binding["callback"]({"new": {
            "id": "n-5", "user_id": ALICE, "title": "Live", "content": "pushed", "is_read": False,
            "created_at": "2024-06-05T10:00:00+00:00",
        }})
        self.assertEqual([n.id for n in self.feed.notifications], ["n-5", "n-3"])

    async def test_stop_removes_channel_once(self):
        await self.feed.start()
        channel = self.client.channels[0]
        await self.feed.stop()
        await self.feed.stop()
        self.assertEqual(self.client.removed, [channel])

    async def test_stop_before_start_is_noop(self):
        await self.feed.stop()
        self.assertEqual(self.client.removed, [])


if __name__ == "__main__":
    unittest.main()
