from typing import Optional
from sqlalchemy import delete, select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from shortlink.core.exceptions import PersistenceError, ShortCodeConflictError
from shortlink.db.Models.models import ShortURL

logger = logging.getLogger(__name__)


def get_url_by_short_code(db: Session, short_code: str) -> Optional[ShortURL]:
    try:
        return db.execute(select(ShortURL).where(ShortURL.short_code == short_code)).scalars().first()
    except SQLAlchemyError as e:
        logger.error("Lookup by short_code=%s failed: %s", short_code, e)
        raise PersistenceError("Failed to look up short URL") from e


def get_url_by_long_url(db: Session, long_url: str) -> Optional[ShortURL]:
    try:
        return db.execute(select(ShortURL).where(ShortURL.long_url == long_url)).scalars().first()
    except SQLAlchemyError as e:
        logger.error("Lookup by long_url=%s failed: %s", long_url[:50], e)
        raise PersistenceError("Failed to check for existing short URL") from e


def create_url(db: Session, short_code: str, long_url: str) -> ShortURL:
    db_url = ShortURL(short_code=short_code, long_url=long_url)
    try:
        db.add(db_url)
        db.commit()
        db.refresh(db_url)
        return db_url
    except IntegrityError as e:
        db.rollback()
        logger.warning(
            "IntegrityError creating ShortURL short_code=%s long_url=%s: %s",
            short_code, long_url[:50], str(e)
        )
        raise ShortCodeConflictError() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to create ShortURL short_code=%s: %s", short_code, e)
        raise PersistenceError("Failed to create short URL") from e


def delete_url(db: Session, short_code: str) -> int:
    try:
        deleted = db.execute(delete(ShortURL).where(ShortURL.short_code == short_code)).rowcount
        db.commit()
        return deleted
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to delete short_code=%s: %s", short_code, e)
        raise PersistenceError("Failed to delete short URL") from e
