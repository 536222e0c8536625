import json
import unittest

from typer.testing import CliRunner

from daybook.cli import build_app
from daybook.core.db import get_db


class TestCli(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.app = build_app()

    def test_categories_dump(self):
        get_db().categories.insert_one(
            {"name": "meal", "displayName": "Meal", "color": "#FF6B6B", "usageCount": 2, "subcategories": []}
        )
        result = self.runner.invoke(self.app, ["categories"])
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.output)
        self.assertEqual(data[0]["displayName"], "Meal")
        self.assertEqual(data[0]["usageCount"], 2)

    def test_migrate_legacy(self):
        get_db().activities.insert_one(
            {"date": "2024-01-01", "category": "Reading", "title": "Book", "duration": 40}
        )
        result = self.runner.invoke(self.app, ["migrate-legacy"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Updated: 1", result.output)
        self.assertIsNotNone(get_db().categories.find_one({"name": "reading"}))

    def test_init_db(self):
        result = self.runner.invoke(self.app, ["init-db"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("daybook_test", result.output)


if __name__ == "__main__":
    unittest.main(verbosity=2)
