from fastapi import Depends, Request

from spacetraveling.cms.connection import get_cms
from spacetraveling.repos.page_cache import PageCache
from spacetraveling.services.post_page_service import PostPageService
from spacetraveling.services.posts_service import PostsService


def get_posts_service(cms=Depends(get_cms)):
    return PostsService(cms)


def get_page_cache(request: Request) -> PageCache:
    return request.app.state.page_cache


def get_post_page_service(
    posts_service=Depends(get_posts_service),
    cache=Depends(get_page_cache),
):
    return PostPageService(posts_service=posts_service, cache=cache)
