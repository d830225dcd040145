from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from shortlink.api.dependencies import get_context, get_long_url
from shortlink.core.context import AppContext
from shortlink.db.Connection import database
from shortlink.schemas.ShortURLResponse import ErrorResponse, ShortURLResponse
from shortlink.services.shortener import URLService


router = APIRouter()


@router.api_route(
    "/api/create",
    methods=["GET", "POST"],
    response_model=ShortURLResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["shorten"],
)
def create_short_url_endpoint(
    long_url: str = Depends(get_long_url),
    context: AppContext = Depends(get_context),
    db: Session = Depends(database.get_db),
):
    short_code = URLService.create_short_url(db, context, long_url)
    return ShortURLResponse(short_url=context.build_short_url(short_code))


# Registered last: the path converter matches everything the other routes leave over
@router.api_route("/{short_code:path}", methods=["GET", "HEAD"], tags=["redirect"])
def redirect_to_url_endpoint(short_code: str, db: Session = Depends(database.get_db)):
    db_url = URLService.get_url_by_short_code(db, short_code)
    return RedirectResponse(url=db_url.long_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
