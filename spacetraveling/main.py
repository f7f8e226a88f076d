import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from spacetraveling.cms.connection import create_cms
from spacetraveling.errors import CMSError
from spacetraveling.repos.page_cache import PageCache
from spacetraveling.routers import posts
from spacetraveling.services.paths_service import enumerate_post_paths
from spacetraveling.services.post_page_service import PostPageService
from spacetraveling.services.posts_service import PostsService
from spacetraveling.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="spacetraveling", description="Blog pages backed by Prismic")
app.state.page_cache = PageCache(ttl_seconds=settings.REVALIDATE_SECONDS)


async def prerender_posts(cache: PageCache) -> int:
    """Build a page for every post the CMS knows about."""
    cms = create_cms()
    try:
        paths = await enumerate_post_paths(cms)
        service = PostPageService(PostsService(cms), cache)
        return await service.prerender(p.params.slug for p in paths.paths)
    except CMSError as e:
        logger.error(f"Prerender skipped, CMS unavailable: {e}")
        return 0
    finally:
        await cms.http.aclose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.PRERENDER_ON_STARTUP:
        await prerender_posts(app.state.page_cache)
    yield
    logger.info("spacetraveling shutting down")


app.router.lifespan_context = lifespan

app.include_router(posts.router)


@app.get("/health")
async def health():
    return {"message": "spacetraveling is running"}
