from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient

from app.infrastructure.redis.binding_store import get_binding_store
from app.main import app


class InMemoryBindingStore:
    """Dict-backed binding store double with switchable failures."""

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.fail_get = False
        self.fail_set = False
        self.get_calls = 0
        self.set_calls = 0

    async def get(self, key: str) -> Optional[str]:
        self.get_calls += 1
        if self.fail_get:
            raise ConnectionError("store read timed out")
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.set_calls += 1
        if self.fail_set:
            raise ConnectionError("store write timed out")
        self.data[key] = value


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def store():
    return InMemoryBindingStore()


@pytest.fixture
def client(store):
    """TestClient wired to the in-memory store (lifespan not started)."""
    app.dependency_overrides[get_binding_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
