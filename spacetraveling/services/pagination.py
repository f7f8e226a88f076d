import logging
from typing import List, Optional

from spacetraveling.errors import CMSError
from spacetraveling.schemas.blog import (
    LoadStatus,
    PaginationSnapshot,
    PostsPagination,
    PostSummary,
)
from spacetraveling.services.posts_service import map_posts_page

logger = logging.getLogger(__name__)


class PaginationController:
    """
    Drives "load more" on the listing page.

    Posts only ever get appended, in the order pages arrive. The cursor is
    replaced only after a page was fetched and mapped successfully; once it
    is None the listing is exhausted and no further fetch is issued.
    """

    def __init__(self, cms, initial: PostsPagination):
        self.cms = cms
        self._posts: List[PostSummary] = list(initial.results)
        self.next_page: Optional[str] = initial.next_page
        self.error: Optional[str] = None
        self.status = LoadStatus.IDLE if self.next_page else LoadStatus.EXHAUSTED

    @property
    def posts(self) -> List[PostSummary]:
        return list(self._posts)

    @property
    def is_fetching(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def can_load_more(self) -> bool:
        """Whether the "load more" control should be shown and enabled."""
        return self.next_page is not None and not self.is_fetching

    async def load_more(self) -> PaginationSnapshot:
        if self.next_page is None:
            return self.snapshot()
        if self.is_fetching:
            logger.debug("Ignoring load_more while a fetch is in flight")
            return self.snapshot()

        cursor = self.next_page
        self.status = LoadStatus.LOADING
        self.error = None
        try:
            page = map_posts_page(await self.cms.fetch_page(cursor))
        except CMSError as e:
            logger.warning(f"Failed to load page {cursor}: {e}")
            return self._fail(str(e))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            # Malformed documents in the page, e.g. a result without a uid.
            logger.warning(f"Malformed page behind {cursor}: {e!r}")
            return self._fail(f"Malformed page: {e!r}")
        finally:
            if self.status is LoadStatus.LOADING:
                self.status = LoadStatus.IDLE

        self._posts.extend(page.results)
        self.next_page = page.next_page
        self.status = LoadStatus.LOADED if self.next_page else LoadStatus.EXHAUSTED
        return self.snapshot()

    def _fail(self, reason: str) -> PaginationSnapshot:
        self.status = LoadStatus.FAILED
        self.error = reason
        return self.snapshot()

    def snapshot(self) -> PaginationSnapshot:
        return PaginationSnapshot(
            status=self.status,
            results=self.posts,
            next_page=self.next_page,
            error=self.error,
        )
