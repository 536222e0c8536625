import unittest

from .helpers import api_client, today


class TestStatsApi(unittest.TestCase):
    def setUp(self):
        self.client = api_client()
        for name in ("Exercise", "Reading"):
            self.client.post("/api/categories", json={"name": name})
        for name in ("Walk", "Run"):
            self.client.post("/api/categories/exercise/subcategories", json={"name": name})

        for category, subcategory, title, duration in [
            ("exercise", "walk", "Walk to work", 30),
            ("exercise", "run", "Run", 20),
            ("exercise", "walk", "Walk home", 15),
            ("reading", None, "Novel", 45),
        ]:
            body = {"date": today(), "category": category, "title": title, "duration": duration}
            if subcategory:
                body["subcategory"] = subcategory
            resp = self.client.post("/api/activities", json=body)
            assert resp.status_code == 201, resp.text

    def _stats(self, **params):
        resp = self.client.get(f"/api/stats/{today()}", params=params)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["data"]

    def test_category_level(self):
        data = self._stats()
        self.assertEqual(data["level"], "category")
        self.assertEqual([(s["category"], s["value"]) for s in data["slices"]], [("exercise", 65), ("reading", 45)])
        self.assertEqual(data["total"], 110)
        self.assertEqual(data["slices"][0]["hours"], "1h 5m")

    def test_hidden_categories(self):
        data = self._stats(hiddenCategories="reading")
        self.assertEqual([s["category"] for s in data["slices"]], ["exercise"])
        self.assertEqual(data["hiddenCategories"], ["reading"])

    def test_hidden_keys_ignore_case_and_spacing(self):
        data = self._stats(hiddenCategories=" Reading ")
        self.assertEqual([s["category"] for s in data["slices"]], ["exercise"])
        self.assertEqual(data["hiddenCategories"], ["reading"])

        data = self._stats(category="exercise", hiddenSubcategories="RUN")
        self.assertEqual([s["subcategory"] for s in data["slices"]], ["walk"])

    def test_subcategory_level(self):
        data = self._stats(category="Exercise")
        self.assertEqual(data["level"], "subcategory")
        self.assertEqual([(s["subcategory"], s["value"]) for s in data["slices"]], [("walk", 45), ("run", 20)])

        hidden = self._stats(category="exercise", hiddenSubcategories="run")
        self.assertEqual([s["subcategory"] for s in hidden["slices"]], ["walk"])

    def test_activity_level(self):
        data = self._stats(category="exercise", subcategory="walk")
        self.assertEqual(data["level"], "activity")
        self.assertEqual([s["name"] for s in data["slices"]], ["Walk to work", "Walk home"])
        self.assertEqual(data["breadcrumb"], "Exercise → Walk")

        direct = self._stats(category="reading")
        self.assertEqual(direct["level"], "activity")
        self.assertEqual(len(direct["slices"]), 1)

    def test_empty_day(self):
        data = self._stats_for("2020-01-01")
        self.assertEqual(data["slices"], [])
        self.assertEqual(data["total"], 0)

    def _stats_for(self, date):
        return self.client.get(f"/api/stats/{date}").json()["data"]


if __name__ == "__main__":
    unittest.main(verbosity=2)
