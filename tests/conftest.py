from typing import Dict, List

import pytest
from fastapi.testclient import TestClient

from main import create_app
from saved_items.db.repository import SavedItemsRepo


class InMemorySavedItemsRepo(SavedItemsRepo):
    """Dict-backed repository used in place of PostgreSQL."""

    def __init__(self, initial: Dict[int, List[dict]] = None):
        self.items: Dict[int, List[dict]] = dict(initial or {})
        self.calls: List[tuple] = []

    async def get(self, user_id):
        self.calls.append(("get", user_id))
        return list(self.items.get(user_id, []))

    async def put(self, user_id, items):
        self.calls.append(("put", user_id))
        self.items[user_id] = list(items)

    async def delete(self, user_id):
        self.calls.append(("delete", user_id))
        self.items.pop(user_id, None)


class FailingSavedItemsRepo(SavedItemsRepo):
    """Repository whose every call fails like a lost database connection."""

    message = "dial tcp 10.0.0.5:5432: connection refused"

    async def get(self, user_id):
        raise ConnectionError(self.message)

    async def put(self, user_id, items):
        raise ConnectionError(self.message)

    async def delete(self, user_id):
        raise ConnectionError(self.message)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def repo():
    return InMemorySavedItemsRepo()


@pytest.fixture
def failing_repo():
    return FailingSavedItemsRepo()


@pytest.fixture
def client(repo):
    with TestClient(create_app(repo=repo)) as test_client:
        yield test_client


@pytest.fixture
def failing_client(failing_repo):
    with TestClient(create_app(repo=failing_repo)) as test_client:
        yield test_client
