from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: str
    first_publication_date: Optional[str] = None
    title: str
    subtitle: str = ""
    author: str = ""


class PostsPagination(BaseModel):
    results: List[PostSummary] = Field(default_factory=list)
    next_page: Optional[str] = None


class Span(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    type: str
    data: Optional[dict] = None


class RichTextBlock(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = "paragraph"
    text: str = ""
    spans: List[Span] = Field(default_factory=list)
    # image blocks only
    url: Optional[str] = None
    alt: Optional[str] = None


class ContentSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    heading: str = ""
    body: List[RichTextBlock] = Field(default_factory=list)


class PostDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: str
    first_publication_date: Optional[str] = None
    title: str
    subtitle: str = ""
    banner_url: Optional[str] = None
    author: str = ""
    content: List[ContentSection] = Field(default_factory=list)
    reading_time: int = 0


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"
    EXHAUSTED = "exhausted"


class PaginationSnapshot(BaseModel):
    """What the listing page needs to render the current pagination state."""

    status: LoadStatus
    results: List[PostSummary] = Field(default_factory=list)
    next_page: Optional[str] = None
    error: Optional[str] = None


class PathParams(BaseModel):
    slug: str


class PostPath(BaseModel):
    params: PathParams


class StaticPaths(BaseModel):
    paths: List[PostPath] = Field(default_factory=list)
    fallback: bool = True
