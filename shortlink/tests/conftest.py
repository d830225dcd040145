import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shortlink.core.config import Settings
from shortlink.core.context import build_context
from shortlink.main import create_app
from shortlink.services.resolver import URLResolver


ADMIN_KEY = "test-admin-key"


def upstream(request: httpx.Request) -> httpx.Response:
    """Fake upstream hosts for the redirect probe."""
    if request.url.scheme not in ("http", "https"):
        raise httpx.UnsupportedProtocol("Request URL is missing an 'http://' or 'https://' protocol.", request=request)
    host = request.url.host
    if host == "redirect.example":
        return httpx.Response(302, headers={"Location": "http://target.example/?ref=shortener"})
    if host == "relative.example":
        return httpx.Response(301, headers={"Location": "/moved/here?x=1#top"})
    if host == "nolocation.example":
        return httpx.Response(301)
    if host == "down.example":
        raise httpx.ConnectError("connection refused", request=request)
    return httpx.Response(200)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DB_DRIVER="sqlite",
        DB_NAME=":memory:",
        BASE_URL="http://sho.rt/",
        ADMIN_KEY=ADMIN_KEY,
    )


@pytest.fixture
def engine():
    # In-memory SQLite shared across threads for the TestClient
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def resolver():
    resolver = URLResolver(transport=httpx.MockTransport(upstream))
    yield resolver
    resolver.close()


@pytest.fixture
def context(settings, engine, resolver):
    return build_context(settings, engine=engine, resolver=resolver)


@pytest.fixture
def db_session(engine):
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(context):
    return TestClient(create_app(context))


@pytest.fixture
def admin_headers():
    return {"Authorization": ADMIN_KEY}

