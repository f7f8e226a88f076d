import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from spacetraveling import dependencies as deps
from spacetraveling.errors import FetchError, FormatError, NotFoundError
from spacetraveling.schemas.blog import (
    LoadStatus,
    PaginationSnapshot,
    PostsPagination,
    StaticPaths,
)
from spacetraveling.schemas.pages import HomePage, PostPage
from spacetraveling.services.pagination import PaginationController
from spacetraveling.services.paths_service import enumerate_post_paths
from spacetraveling.services.post_page_service import PostPageService
from spacetraveling.services.posts_service import PostsService
from spacetraveling.services.views import render_home_page, render_post_page
from spacetraveling.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=HomePage)
async def home(service: PostsService = Depends(deps.get_posts_service)):
    """First page of posts plus the "load more" affordance."""
    try:
        return render_home_page(await service.get_posts_pagination())
    except HTTPException:
        raise
    except FetchError as e:
        logger.warning(f"Failed to fetch posts listing: {e}")
        raise HTTPException(status_code=502, detail="Failed to fetch posts")
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/more", response_model=PaginationSnapshot)
async def load_more_posts(
    cursor: str = Query(..., min_length=1),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Fetch the page behind a ``next_page`` cursor."""
    try:
        controller = PaginationController(
            service.cms, PostsPagination(results=[], next_page=cursor)
        )
        snapshot = await controller.load_more()
        if snapshot.status is LoadStatus.FAILED:
            raise HTTPException(
                status_code=502,
                detail="Failed to load more posts, please try again",
            )
        return snapshot
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error loading more posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to load more posts")


@router.get("/post/{slug}", response_model=PostPage)
async def get_post(
    slug: str,
    service: PostPageService = Depends(deps.get_post_page_service),
    current_settings: Settings = Depends(get_settings),
):
    """Get a single post page by UID."""
    try:
        post = await service.get_post(slug)
        return render_post_page(
            post, revalidate=current_settings.REVALIDATE_SECONDS
        )
    except HTTPException:
        raise
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except FetchError as e:
        logger.warning(f"Post {slug} not available yet: {e}")
        return JSONResponse(
            status_code=503, content=render_post_page(None).model_dump()
        )
    except FormatError as e:
        logger.error(f"Post {slug} has an invalid publication date: {e}")
        raise HTTPException(status_code=500, detail="Failed to render post")
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/paths", response_model=StaticPaths)
async def get_paths(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return await enumerate_post_paths(service.cms)
    except FetchError as e:
        logger.warning(f"Failed to enumerate post paths: {e}")
        raise HTTPException(status_code=502, detail="Failed to enumerate posts")
