import os
import tempfile
from pathlib import Path

import mongomock
import pytest

ADMIN_PASSWORD = "correct horse"

# Must be in place before daybook is imported: the logger and config load eagerly
_config_dir = Path(tempfile.mkdtemp(prefix="daybook-tests-"))
_config_file = _config_dir / "config.toml"
_config_file.write_text(
    f"""
[server]
host = "127.0.0.1"
port = 5000
debug = false
cors_origins = ["*"]

[database]
uri = "mongodb://localhost:27017/daybook_test"
name = "daybook_test"

[auth]
admin_password = "{ADMIN_PASSWORD}"

[activities]
timezone = "Asia/Kolkata"

[logging]
level = "DEBUG"
logs_dir = '{_config_dir / "logs"}'
max_file_size = "1MB"
backup_count = 1
""",
    encoding="utf-8",
)
os.environ["DAYBOOK_CONFIG_FILE"] = str(_config_file)


@pytest.fixture(autouse=True)
def fresh_state():
    """Empty in-memory database and session store for every test"""
    from daybook.core.db import init_db
    from daybook.core.sessions import InMemorySessionStore, set_session_store

    db = init_db(db_name="daybook_test", client=mongomock.MongoClient())
    set_session_store(InMemorySessionStore())
    yield db
