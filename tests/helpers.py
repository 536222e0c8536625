from fastapi.testclient import TestClient

from daybook.app import create_app
from daybook.core.timeutils import today_in

from .conftest import ADMIN_PASSWORD


def api_client(login: bool = True) -> TestClient:
    client = TestClient(create_app())
    if login:
        resp = client.post("/api/auth/login", json={"password": ADMIN_PASSWORD})
        assert resp.status_code == 200, resp.text
        client.headers["Authorization"] = f"Bearer {resp.json()['token']}"
    return client


def today() -> str:
    return today_in("Asia/Kolkata")
