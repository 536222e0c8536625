import unittest

from daybook.core.exceptions import AuthError
from daybook.core.sessions import InMemorySessionStore, check_password

from .conftest import ADMIN_PASSWORD
from .helpers import api_client, today


class TestSessionStore(unittest.TestCase):
    def test_issue_validate_revoke(self):
        store = InMemorySessionStore()
        token = store.issue()
        self.assertEqual(len(token), 64)
        self.assertTrue(store.validate(token))
        self.assertNotEqual(store.issue(), token)
        self.assertEqual(len(store), 2)

        store.revoke(token)
        self.assertFalse(store.validate(token))
        store.revoke(token)
        store.revoke(None)
        self.assertEqual(len(store), 1)

    def test_validate_rejects_empty(self):
        store = InMemorySessionStore()
        self.assertFalse(store.validate(None))
        self.assertFalse(store.validate(""))


class TestCheckPassword(unittest.TestCase):
    def test_match(self):
        check_password("pw", expected="pw")
        check_password(ADMIN_PASSWORD)

    def test_mismatch(self):
        with self.assertRaises(AuthError):
            check_password("nope", expected="pw")
        with self.assertRaises(AuthError):
            check_password(None, expected="pw")

    def test_unconfigured_password_rejects_everything(self):
        with self.assertRaises(AuthError):
            check_password("", expected="")


class TestAuthApi(unittest.TestCase):
    def setUp(self):
        self.client = api_client(login=False)

    def _login(self, password=ADMIN_PASSWORD):
        return self.client.post("/api/auth/login", json={"password": password})

    def test_wrong_password(self):
        resp = self._login("hunter2")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["error"], "Invalid password")

    def test_login_verify_logout(self):
        resp = self._login()
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["success"])
        headers = {"Authorization": f"Bearer {resp.json()['token']}"}

        verify = self.client.get("/api/auth/verify", headers=headers)
        self.assertTrue(verify.json()["valid"])
        self.assertEqual(self.client.get(f"/api/activities/{today()}", headers=headers).status_code, 200)

        self.assertEqual(self.client.post("/api/auth/logout", headers=headers).status_code, 200)
        self.assertFalse(self.client.get("/api/auth/verify", headers=headers).json()["valid"])

        after = self.client.get(f"/api/activities/{today()}", headers=headers)
        self.assertEqual(after.status_code, 401)
        self.assertEqual(after.json()["error"], "Invalid or expired token")

    def test_verify_without_token(self):
        resp = self.client.get("/api/auth/verify")
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["valid"])

    def test_protected_route_without_header(self):
        resp = self.client.get("/api/cache/cache-entries")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["error"], "Authentication required")

    def test_root_and_health_are_public(self):
        self.assertEqual(self.client.get("/").json()["status"], "running")
        health = self.client.get("/health")
        self.assertEqual(health.status_code, 200)
        self.assertIn(health.json()["status"], ("healthy", "unhealthy"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
