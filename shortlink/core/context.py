import logging
import threading
from dataclasses import dataclass, field

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from shortlink.core.config import Settings
from shortlink.db.Connection import database
from shortlink.services.resolver import URLResolver

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Per-process state shared by every request handler.

    Built once at startup and attached to ``app.state.context``.
    """

    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    resolver: URLResolver
    # Serializes the dedup lookup and insert of every create request
    create_lock: threading.Lock = field(default_factory=threading.Lock)

    @property
    def base_url(self) -> str:
        return self.settings.BASE_URL.rstrip("/")

    def build_short_url(self, short_code: str) -> str:
        return f"{self.base_url}/{short_code}"

    def close(self):
        self.resolver.close()
        self.engine.dispose()
        logger.info("Application context closed")


class StartupError(Exception):
    """Raised when the datastore cannot be reached or initialized at startup."""


def build_context(settings: Settings, engine: Engine = None, resolver: URLResolver = None) -> AppContext:
    engine = engine or database.make_engine(settings)
    if not database.verify_database_connection(engine):
        engine.dispose()
        raise StartupError("Database connection failed")
    try:
        database.init_schema(engine)
    except Exception as e:
        engine.dispose()
        raise StartupError(f"Database schema initialization failed: {e}") from e

    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=database.make_session_factory(engine),
        resolver=resolver or URLResolver(timeout=settings.RESOLVE_TIMEOUT),
    )
