from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient


def pytest_configure():
    # keep tests off any real MongoDB / LeakCheck configured in .env
    os.environ["LOOKUP_BACKEND"] = "memory"
    os.environ["UPSTREAM_TIMEOUT"] = "10"
    os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture
def sample_store():
    from whogotpwned.database.memory import InMemoryLookupStore

    return InMemoryLookupStore.from_sample_data()


@pytest.fixture
def client(sample_store):
    from whogotpwned.main import create_app

    app = create_app(store=sample_store, enable_debug=True)
    with TestClient(app) as c:
        yield c
