import logging
from typing import Iterable

from spacetraveling.errors import FetchError, NotFoundError
from spacetraveling.repos.page_cache import PageCache
from spacetraveling.schemas.blog import PostDetail
from spacetraveling.services.posts_service import PostsService

logger = logging.getLogger(__name__)


class PostPageService:
    """
    Serves post pages from the page cache, regenerating them from the CMS
    once they are older than the revalidation window.
    """

    def __init__(self, posts_service: PostsService, cache: PageCache):
        self.posts_service = posts_service
        self.cache = cache

    async def get_post(self, uid: str) -> PostDetail:
        cached, is_fresh = self.cache.get(uid)
        if cached is not None and is_fresh:
            logger.debug(f"Serving cached page for {uid}")
            return cached

        try:
            post = await self.posts_service.get_post(uid)
        except NotFoundError:
            self.cache.discard(uid)
            raise
        except FetchError as e:
            if cached is not None:
                logger.warning(
                    f"Revalidation of {uid} failed, serving stale page: {e}"
                )
                return cached
            raise

        self.cache.put(uid, post)
        return post

    async def prerender(self, uids: Iterable[str]) -> int:
        """Warm the cache for the given UIDs; returns how many pages were built."""
        built = 0
        for uid in uids:
            try:
                self.cache.put(uid, await self.posts_service.get_post(uid))
                built += 1
            except Exception as e:
                logger.error(f"Failed to prerender post {uid}: {e}")
        logger.info(f"Prerendered {built} post pages")
        return built
