import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import sessionmaker

from shortlink.core.config import Settings
from shortlink.db.Models.models import Base

logger = logging.getLogger(__name__)


def build_database_url(settings: Settings) -> URL:
    if settings.DB_DRIVER.startswith("sqlite"):
        return URL.create(settings.DB_DRIVER, database=settings.DB_NAME)
    return URL.create(
        settings.DB_DRIVER,
        username=settings.DB_USER,
        password=settings.DB_PASSWORD or None,
        host=settings.DB_HOST,
        port=settings.DB_PORT,
        database=settings.DB_NAME,
    )


def make_engine(settings: Settings) -> Engine:
    return create_engine(build_database_url(settings), pool_pre_ping=True, future=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


def verify_database_connection(engine: Engine) -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection verified")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def init_schema(engine: Engine):
    """Create the short_urls table if it does not exist yet."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database models initialized/checked.")


def get_db(request: Request):
    """
    FastAPI dependency: yield a session bound to the app's engine and ensure it's closed.
    Usage: db: Session = Depends(database.get_db)
    """
    db = request.app.state.context.session_factory()
    try:
        yield db
    finally:
        db.close()
