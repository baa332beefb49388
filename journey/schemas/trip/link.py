from pydantic import AfterValidator, BaseModel, Field, HttpUrl, TypeAdapter, ValidationError
from typing import Annotated, List
from uuid import UUID

_http_url = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    # validated as an http(s) URL but stored exactly as submitted
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("invalid url") from None
    return value


class LinkCreate(BaseModel):
    title: str = Field(..., min_length=1)
    url: Annotated[str, AfterValidator(_check_url)]

class LinkCreateResponse(BaseModel):
    link_id: str

class LinkOut(BaseModel):
    id: UUID
    title: str
    url: str

    class Config:
        from_attributes = True

class LinksResponse(BaseModel):
    links: List[LinkOut]
