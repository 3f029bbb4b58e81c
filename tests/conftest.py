"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from daily_wish.main import create_app, get_today
from daily_wish.settings import AppSettings

TEST_DAY = "2024-01-01"
BASE_URL = "https://frames.example.com"


class MemoryKVStore:
    """In-process stand-in for the hosted store."""

    name = "memory"

    def __init__(self):
        self.counters: dict[str, int] = {}
        self.sets: dict[str, set[str]] = {}
        self.closed = False

    def get_int(self, key):
        return self.counters.get(key, 0)

    def incr(self, key):
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]

    def sadd(self, key, member):
        members = self.sets.setdefault(key, set())
        if member in members:
            return False
        members.add(member)
        return True

    def sismember(self, key, member):
        return member in self.sets.get(key, set())

    def srem(self, key, member):
        members = self.sets.get(key, set())
        if member not in members:
            return False
        members.discard(member)
        return True

    def close(self):
        self.closed = True


@pytest.fixture
def store():
    return MemoryKVStore()


@pytest.fixture
def app_settings():
    return AppSettings(base_url=BASE_URL)


@pytest.fixture
def make_client(app_settings):
    clients = []

    def _make(store):
        app = create_app(app_settings=app_settings, store=store)
        app.dependency_overrides[get_today] = lambda: TEST_DAY
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client, store):
    return make_client(store)
