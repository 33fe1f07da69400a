from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from ephemeral_board.main import app
from ephemeral_board.routes import get_service
from ephemeral_board.services import MessageService
from ephemeral_board.storage import MessageStorage


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage(clock):
    return MessageStorage(clock=clock)


@pytest.fixture
def service(storage):
    return MessageService(storage=storage, sweep_interval=0.01)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
