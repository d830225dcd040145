from pydantic import BaseModel


class ShortURLResponse(BaseModel):
    short_url: str


class ErrorResponse(BaseModel):
    error: str
