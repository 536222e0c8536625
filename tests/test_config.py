import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from daybook.config.loader import ConfigLoader, interpolate_env
from daybook.core.logger import parse_size


class TestConfigLoader(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_creates_default_file(self):
        path = self.dir / "nested" / "config.toml"
        with mock.patch.dict(os.environ, {"MONGODB_URI": "mongodb://db:27017/tracker"}):
            loader = ConfigLoader(str(path))
            loader.load()
        self.assertTrue(path.exists())
        self.assertEqual(loader.get("server.port"), 5000)
        self.assertEqual(loader.get("database.uri"), "mongodb://db:27017/tracker")
        self.assertEqual(loader.get("activities.timezone"), "Asia/Kolkata")

    def test_env_defaults_and_overrides(self):
        path = self.dir / "config.toml"
        path.write_text(
            '[auth]\nadmin_password = "${DAYBOOK_TEST_PW:fallback}"\n', encoding="utf-8"
        )
        env = {k: v for k, v in os.environ.items() if k != "DAYBOOK_TEST_PW"}
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertEqual(ConfigLoader(str(path)).load()["auth"]["admin_password"], "fallback")
        with mock.patch.dict(os.environ, {"DAYBOOK_TEST_PW": "s3cret"}):
            self.assertEqual(ConfigLoader(str(path)).load()["auth"]["admin_password"], "s3cret")

    def test_yaml(self):
        path = self.dir / "config.yaml"
        path.write_text("server:\n  port: 8080\n", encoding="utf-8")
        loader = ConfigLoader(str(path))
        loader.load()
        self.assertEqual(loader.get("server.port"), 8080)
        self.assertEqual(loader.get("server.host", "0.0.0.0"), "0.0.0.0")
        self.assertIsNone(loader.get("missing.key"))

    def test_secret_with_quotes_and_backslashes(self):
        password = 'pa"ss\\word'
        path = self.dir / "config.toml"
        with mock.patch.dict(
            os.environ,
            {"ADMIN_PASSWORD": password, "MONGODB_URI": 'mongodb://u:p"w\\d@db/x'},
        ):
            loader = ConfigLoader(str(path))
            loader.load()
        self.assertEqual(loader.get("auth.admin_password"), password)
        self.assertEqual(loader.get("database.uri"), 'mongodb://u:p"w\\d@db/x')
        # the file keeps the placeholder, never the secret
        self.assertIn("${ADMIN_PASSWORD:}", path.read_text(encoding="utf-8"))

    def test_yaml_secret_with_quotes(self):
        path = self.dir / "config.yaml"
        path.write_text('auth:\n  admin_password: "${DAYBOOK_TEST_PW}"\n', encoding="utf-8")
        with mock.patch.dict(os.environ, {"DAYBOOK_TEST_PW": "it's \"x\"\\"}):
            loader = ConfigLoader(str(path))
            loader.load()
        self.assertEqual(loader.get("auth.admin_password"), "it's \"x\"\\")

    def test_placeholders_inside_lists(self):
        path = self.dir / "config.toml"
        path.write_text('[server]\ncors_origins = ["${DAYBOOK_ORIGIN:http://localhost}"]\n', encoding="utf-8")
        env = {k: v for k, v in os.environ.items() if k != "DAYBOOK_ORIGIN"}
        with mock.patch.dict(os.environ, env, clear=True):
            loader = ConfigLoader(str(path))
            loader.load()
        self.assertEqual(loader.get("server.cors_origins"), ["http://localhost"])

    def test_section(self):
        path = self.dir / "config.toml"
        path.write_text("[logging]\nlevel = \"WARNING\"\n[auth]\nadmin_password = \"x\"\n", encoding="utf-8")
        loader = ConfigLoader(str(path))
        loader.load()
        self.assertEqual(loader.section("logging"), {"level": "WARNING"})
        self.assertEqual(loader.section("missing"), {})
        self.assertEqual(loader.section("auth.admin_password"), {})

    def test_env_variable_selects_file(self):
        path = self.dir / "picked.toml"
        with mock.patch.dict(os.environ, {"DAYBOOK_CONFIG_FILE": str(path)}):
            self.assertEqual(ConfigLoader().config_file, str(path))


class TestHelpers(unittest.TestCase):
    def test_interpolate_env(self):
        with mock.patch.dict(os.environ, {"DAYBOOK_X": "1"}):
            self.assertEqual(interpolate_env("a=${DAYBOOK_X} b=${DAYBOOK_NOPE:two}"), "a=1 b=two")

    def test_parse_size(self):
        self.assertEqual(parse_size("10MB"), 10 * 1024 * 1024)
        self.assertEqual(parse_size("2kb"), 2048)
        self.assertEqual(parse_size(512), 512)


if __name__ == "__main__":
    unittest.main(verbosity=2)
