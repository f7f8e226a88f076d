import logging
from typing import List

from spacetraveling.cms.predicates import at
from spacetraveling.schemas.blog import PathParams, PostPath, StaticPaths
from spacetraveling.services.posts_service import POST_TYPE

logger = logging.getLogger(__name__)


async def enumerate_post_paths(cms) -> StaticPaths:
    """
    Every post UID known to the CMS, one path each.
    Posts published later are still served through the fallback.
    """
    uids: List[str] = []
    response = await cms.query([at("document.type", POST_TYPE)])
    while True:
        uids.extend(
            doc["uid"] for doc in response.get("results") or [] if doc.get("uid")
        )
        next_page = response.get("next_page")
        if not next_page:
            break
        response = await cms.fetch_page(next_page)

    logger.info(f"Enumerated {len(uids)} post paths")
    return StaticPaths(
        paths=[PostPath(params=PathParams(slug=uid)) for uid in uids],
        fallback=True,
    )
