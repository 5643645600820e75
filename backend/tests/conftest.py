import pytest
from fastapi.testclient import TestClient

from ticketdesk.core.config import Settings
from ticketdesk.db.store import build_store, get_store
from ticketdesk.main import app
from ticketdesk.services.helpdesk import HelpdeskService
from ticketdesk.services.identity import StaticSessionProvider


@pytest.fixture()
def store():
    return build_store(seed=True)


@pytest.fixture()
def test_settings():
    return Settings(simulated_latency_ms=0, anonymous_fallback=True, default_user_id="1")


@pytest.fixture()
def make_service(store, test_settings):
    def _make(user_id=None, **overrides):
        cfg = test_settings.model_copy(update=overrides) if overrides else test_settings
        return HelpdeskService(store, sessions=StaticSessionProvider(user_id), settings=cfg)

    return _make


@pytest.fixture()
def service(make_service):
    return make_service()


@pytest.fixture()
def client(store):
    # fresh seeded store per test instead of the process-wide default
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
