from typing import Optional
from fastapi import APIRouter, Depends, Header
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from shortlink.api.dependencies import get_context
from shortlink.core.context import AppContext
from shortlink.db.Connection import database
from shortlink.services.shortener import URLService

router = APIRouter(prefix="/api/delete", tags=["admin"])

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{short_code:path}", methods=ALL_METHODS, response_class=PlainTextResponse)
def delete_short_url_endpoint(
    short_code: str,
    authorization: Optional[str] = Header(None),
    context: AppContext = Depends(get_context),
    db: Session = Depends(database.get_db),
):
    URLService.delete_short_url(db, context, short_code, authorization)
    return f"Short URL deleted: {context.build_short_url(short_code)}\n"
