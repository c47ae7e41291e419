from __future__ import annotations

from collections.abc import Generator
from http import HTTPStatus
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from sqlalchemy import Engine
from werkzeug.test import Client

from athenai import app, database as db

GYM = {
    "name": "Iron Temple",
    "domain": "iron-temple.example.com",
    "email": "info@iron-temple.example.com",
    "address": "1 Main Street",
    "phone": "+1 555 0100",
}


@pytest.fixture()
def alembic_config() -> dict[str, str]:
    return {"script_location": "athenai:migrations"}


@pytest.fixture()
def alembic_engine() -> Generator[Engine, None, None]:
    with TemporaryDirectory() as tmp_dir:
        tmp_file = Path(tmp_dir) / "test.db"
        tmp_file.touch()
        app.config["DATABASE"] = f"sqlite:///{tmp_file}"
        app.config["SECRET_KEY"] = b"TEST_KEY"
        with app.app_context():
            yield db.get_engine()


@pytest.fixture(name="client")
def fixture_client(tmp_path: Path) -> Generator[Client, None, None]:
    app.config["DATABASE"] = f"sqlite:///{tmp_path}/athenai.db"
    app.config["SECRET_KEY"] = b"TEST_KEY"
    app.config["TESTING"] = True
    app.config["APP_ENV"] = "test"

    with app.test_client() as client, app.app_context():
        yield client


@pytest.fixture(name="gym_id")
def fixture_gym_id(client: Client) -> str:
    resp = client.post("/api/v1/gyms", json=GYM)
    assert resp.status_code == HTTPStatus.CREATED
    assert resp.json
    return str(resp.json["data"]["id"])


@pytest.fixture(name="headers")
def fixture_headers(gym_id: str) -> dict[str, str]:
    return {"X-Gym-ID": gym_id}
