import os
import sys
from pathlib import Path
from typing import Generator

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

TEST_ENV_OVERRIDES = {
    "SECRET_KEY": "test-secret",
    "JWT_SECRET_KEY": "test-jwt-secret-with-enough-length-for-hs256",
    "FLASK_DEBUG": "False",
    "FLASK_TESTING": "true",
    "SECURITY_ENFORCE_STRONG_SECRETS": "false",
}


@pytest.fixture(autouse=True)
def isolate_test_env() -> Generator[None, None, None]:
    tracked_keys = set(TEST_ENV_OVERRIDES.keys()) | {
        "DATABASE_URL",
        "FLASK_SQLALCHEMY_DATABASE_URI",
    }
    original_values = {key: os.environ.get(key) for key in tracked_keys}
    yield
    for key, value in original_values.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture
def app(tmp_path: Path):
    test_db_path = tmp_path / "test.sqlite3"
    database_url = f"sqlite:///{test_db_path}"
    os.environ["DATABASE_URL"] = database_url
    os.environ["FLASK_SQLALCHEMY_DATABASE_URI"] = database_url
    for key, value in TEST_ENV_OVERRIDES.items():
        os.environ[key] = value

    from goal_tracker import create_app
    from goal_tracker.extensions.database import db

    app = create_app()
    app.config["TESTING"] = True

    with app.app_context():
        db.drop_all()
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()
    if test_db_path.exists():
        test_db_path.unlink()


@pytest.fixture
def client(app) -> Generator:
    yield app.test_client()


@pytest.fixture
def app_ctx(app) -> Generator:
    with app.app_context():
        yield app
