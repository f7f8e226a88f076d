import logging
import math
from typing import Iterable, List, Optional

from spacetraveling.cms.predicates import at
from spacetraveling.schemas.blog import (
    ContentSection,
    PostDetail,
    PostsPagination,
    PostSummary,
    RichTextBlock,
)
from spacetraveling.services.dates import format_publication_date
from spacetraveling.services.richtext import as_text
from spacetraveling.settings import settings

logger = logging.getLogger(__name__)

POST_TYPE = "post"
LISTING_FIELDS = ["post.title", "post.subtitle", "post.author"]
# Both the first page and "load more" pages show this date.
LISTING_DATE_FIELD = "first_publication_date"


class PostsService:
    def __init__(self, cms, page_size: Optional[int] = None):
        self.cms = cms
        self.page_size = page_size or settings.POSTS_PAGE_SIZE

    async def get_posts_pagination(self) -> PostsPagination:
        """First page of the listing, as handed to the home page."""
        response = await self.cms.query(
            [at("document.type", POST_TYPE)],
            fetch=LISTING_FIELDS,
            page_size=self.page_size,
            page=1,
        )
        return map_posts_page(response)

    async def get_post(self, uid: str) -> PostDetail:
        document = await self.cms.get_by_uid(POST_TYPE, uid)
        logger.debug(f"Fetched post {uid} from CMS")
        return map_post_detail(document)


def map_posts_page(response: dict) -> PostsPagination:
    return PostsPagination(
        results=map_post_summaries(response.get("results") or []),
        next_page=response.get("next_page"),
    )


def map_post_summaries(documents: Iterable[dict]) -> List[PostSummary]:
    return [map_post_summary(doc) for doc in documents]


def map_post_summary(document: dict) -> PostSummary:
    """Map a raw CMS document to a listing entry; a bad date raises FormatError."""
    data = document.get("data") or {}
    return PostSummary(
        uid=document["uid"],
        first_publication_date=format_publication_date(
            document.get(LISTING_DATE_FIELD)
        ),
        title=data.get("title") or "",
        subtitle=data.get("subtitle") or "",
        author=data.get("author") or "",
    )


def map_post_detail(document: dict) -> PostDetail:
    data = document.get("data") or {}
    sections = [_map_section(section) for section in data.get("content") or []]
    banner = data.get("banner") or {}

    return PostDetail(
        uid=document["uid"],
        first_publication_date=document.get("first_publication_date"),
        title=data.get("title") or "",
        subtitle=data.get("subtitle") or "",
        banner_url=banner.get("url"),
        author=data.get("author") or "",
        content=sections,
        reading_time=calculate_reading_time(sections),
    )


def _map_section(section: dict) -> ContentSection:
    return ContentSection(
        heading=section.get("heading") or "",
        body=[RichTextBlock(**block) for block in section.get("body") or []],
    )


def count_words(sections: Iterable[ContentSection]) -> int:
    total = 0
    for section in sections:
        text = f"{section.heading} {as_text(section.body)}"
        total += len(text.split())
    return total


def calculate_reading_time(
    sections: Iterable[ContentSection], words_per_minute: Optional[int] = None
) -> int:
    words = count_words(sections)
    return math.ceil(words / (words_per_minute or settings.READING_WORDS_PER_MINUTE))
