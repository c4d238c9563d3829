from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from planner.app import create_app
from planner.core.config import Settings
from planner.core.store import ContributionStore


@pytest.fixture()
def store() -> ContributionStore:
    return ContributionStore()


@pytest.fixture()
def app(store: ContributionStore) -> Flask:
    flask_app = create_app(Settings(), store=store)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
