from typing import Optional
from urllib.parse import urlsplit
import logging

import httpx

from shortlink.core.exceptions import ResolutionError

logger = logging.getLogger(__name__)


def is_redirect(status_code: int) -> bool:
    return 300 <= status_code <= 399


def strip_query(url: str) -> str:
    """Drop the query string, keeping scheme, host, path and fragment."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    return parts._replace(query="").geturl()


class URLResolver:
    """Canonicalizes submitted URLs before they are deduplicated and stored.

    A single HEAD probe is sent with redirect following disabled; when the
    upstream answers with a 3xx status its Location header becomes the
    resolved URL. Only one hop is resolved.
    """

    def __init__(self, timeout: Optional[float] = None, transport: Optional[httpx.BaseTransport] = None):
        self.client = httpx.Client(
            follow_redirects=False,
            timeout=timeout,
            transport=transport,
        )

    def resolve(self, raw_url: str) -> str:
        try:
            response = self.client.head(raw_url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Redirect probe failed for %s: %s", raw_url[:50], e)
            raise ResolutionError() from e

        if not is_redirect(response.status_code):
            return raw_url

        location = response.headers.get("location")
        if not location:
            logger.warning("Redirect from %s carried no Location header", raw_url[:50])
            raise ResolutionError()
        try:
            resolved = str(response.request.url.join(location))
        except httpx.InvalidURL as e:
            logger.warning("Unparseable Location %r from %s: %s", location[:50], raw_url[:50], e)
            raise ResolutionError() from e

        logger.info("Resolved %s -> %s (%d)", raw_url[:50], resolved[:50], response.status_code)
        return resolved

    def normalize(self, raw_url: str) -> str:
        return strip_query(self.resolve(raw_url))

    def close(self):
        self.client.close()
