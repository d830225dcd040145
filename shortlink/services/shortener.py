from sqlalchemy.orm import Session
import logging
import secrets

from shortlink.core.context import AppContext
from shortlink.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from shortlink.db import repository
from shortlink.db.Models.models import ShortURL
from shortlink.utils.encoding import generate_short_code


logger = logging.getLogger(__name__)


class URLService:

    @staticmethod
    def create_short_url(db: Session, context: AppContext, long_url: str) -> str:
        """Return the short code for ``long_url``, creating a mapping if needed."""
        if not long_url:
            raise BadRequestError("Missing long_url parameter")

        # Network probe stays outside the lock
        canonical_url = context.resolver.normalize(long_url)

        with context.create_lock:
            existing = repository.get_url_by_long_url(db, canonical_url)
            if existing:
                logger.info("short URL already existed : '%s' for URL: %s", existing.short_code, canonical_url[:50])
                return existing.short_code

            # A colliding code surfaces as ShortCodeConflictError; it is not retried
            url_item = repository.create_url(db, generate_short_code(), canonical_url)

        logger.info("Shortened %s... to %s", canonical_url[:50], url_item.short_code)
        return url_item.short_code

    @staticmethod
    def get_url_by_short_code(db: Session, short_code: str) -> ShortURL:
        if not short_code:
            raise NotFoundError()
        db_url = repository.get_url_by_short_code(db, short_code)
        if db_url is None:
            logger.warning("Redirect 404: Short code not found: %s", short_code)
            raise NotFoundError()
        return db_url

    @staticmethod
    def delete_short_url(db: Session, context: AppContext, short_code: str, authorization: str):
        if not secrets.compare_digest((authorization or "").encode(), context.settings.ADMIN_KEY.encode()):
            logger.warning("Rejected delete of '%s': bad or missing admin key", short_code)
            raise UnauthorizedError()
        if not short_code:
            raise NotFoundError()

        deleted = repository.delete_url(db, short_code)
        logger.info("Deleted short code '%s' (%d row(s))", short_code, deleted)
