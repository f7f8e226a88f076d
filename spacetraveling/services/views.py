import re
from typing import Optional

from spacetraveling.schemas.blog import ContentSection, PostDetail, PostsPagination
from spacetraveling.schemas.pages import (
    HomePage,
    PostPage,
    RenderedPost,
    RenderedSection,
)
from spacetraveling.services.dates import format_publication_date
from spacetraveling.services.richtext import as_html

LOAD_MORE_LABEL = "Carregar mais posts"
LOADING_PLACEHOLDER = "Carregando..."


def render_home_page(pagination: PostsPagination) -> HomePage:
    return HomePage(
        postsPagination=pagination,
        load_more_label=LOAD_MORE_LABEL if pagination.next_page else None,
    )


def render_post_page(
    post: Optional[PostDetail], revalidate: Optional[int] = None
) -> PostPage:
    """
    Build the post page. Without data (fallback still loading) or without a
    publication date only the placeholder is rendered and the date is never
    formatted.
    """
    if post is None or post.first_publication_date is None:
        return PostPage(is_fallback=True, placeholder=LOADING_PLACEHOLDER)

    return PostPage(
        post=RenderedPost(
            uid=post.uid,
            title=post.title,
            banner_url=post.banner_url,
            author=post.author,
            published_on=format_publication_date(post.first_publication_date),
            reading_time=f"{post.reading_time} min",
            sections=[
                render_section(index, section)
                for index, section in enumerate(post.content)
            ],
        ),
        revalidate=revalidate,
    )


def render_section(index: int, section: ContentSection) -> RenderedSection:
    return RenderedSection(
        key=section_key(index, section.heading),
        heading=section.heading,
        html=as_html(section.body),
    )


def section_key(index: int, heading: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", heading.lower()).strip("-")
    return f"{index}-{slug}" if slug else str(index)
