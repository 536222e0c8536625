import unittest

from daybook.core.cache_entries import CacheEntryStore
from daybook.core.db import get_db
from daybook.core.exceptions import NotFoundError

from .helpers import api_client


class TestCacheEntryStore(unittest.TestCase):
    def setUp(self):
        self.store = CacheEntryStore(get_db())

    def test_create_defaults(self):
        entry = self.store.create(title="  idea ", body=" body\n")
        self.assertEqual((entry.title, entry.body), ("idea", "body"))
        self.assertEqual((entry.position.x, entry.position.y), (300, 300))
        self.assertIsNotNone(entry.timestamp)

    def test_list_newest_first(self):
        first = self.store.create(title="first")
        second = self.store.create(title="second")
        self.assertEqual([e.id for e in self.store.list()], [second.id, first.id])

    def test_update(self):
        entry = self.store.create(title="a", position={"x": 10, "y": 20})
        updated = self.store.update(entry.id, body="more", position={"x": 50, "y": 60})
        self.assertEqual(updated.title, "a")
        self.assertEqual(updated.body, "more")
        self.assertEqual((updated.position.x, updated.position.y), (50, 60))

    def test_missing_entries(self):
        with self.assertRaises(NotFoundError):
            self.store.update("bad-id", title="x")
        with self.assertRaises(NotFoundError):
            self.store.update("0" * 24)
        with self.assertRaises(NotFoundError) as ctx:
            self.store.delete("0" * 24)
        self.assertEqual(ctx.exception.message, "Cache entry not found")


class TestCacheApi(unittest.TestCase):
    def setUp(self):
        self.client = api_client()

    def test_crud(self):
        created = self.client.post(
            "/api/cache/cache-entries",
            json={"title": "Groceries", "body": "milk", "position": {"x": 120, "y": 80}},
        )
        self.assertEqual(created.status_code, 201)
        entry = created.json()["data"]
        self.assertEqual(entry["position"], {"x": 120, "y": 80})

        listed = self.client.get("/api/cache/cache-entries").json()["data"]
        self.assertEqual([e["id"] for e in listed], [entry["id"]])

        updated = self.client.put(
            f"/api/cache/cache-entries/{entry['id']}", json={"title": "Shopping"}
        )
        self.assertEqual(updated.json()["data"]["title"], "Shopping")
        self.assertEqual(updated.json()["data"]["body"], "milk")

        self.assertEqual(self.client.delete(f"/api/cache/cache-entries/{entry['id']}").status_code, 200)
        self.assertEqual(self.client.get("/api/cache/cache-entries").json()["data"], [])
        self.assertEqual(self.client.delete(f"/api/cache/cache-entries/{entry['id']}").status_code, 404)

    def test_empty_body_uses_defaults(self):
        resp = self.client.post("/api/cache/cache-entries", json={})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["data"]["position"], {"x": 300, "y": 300})


if __name__ == "__main__":
    unittest.main(verbosity=2)
