from typing import List, Optional

from pydantic import BaseModel, Field

from spacetraveling.schemas.blog import PostsPagination


class HomePage(BaseModel):
    postsPagination: PostsPagination
    load_more_label: Optional[str] = None


class RenderedSection(BaseModel):
    key: str
    heading: str
    html: str


class RenderedPost(BaseModel):
    uid: str
    title: str
    banner_url: Optional[str] = None
    author: str = ""
    published_on: str
    reading_time: str
    sections: List[RenderedSection] = Field(default_factory=list)


class PostPage(BaseModel):
    is_fallback: bool = False
    placeholder: Optional[str] = None
    post: Optional[RenderedPost] = None
    revalidate: Optional[int] = None
