import time
from typing import Callable, Dict, Optional, Tuple

from spacetraveling.schemas.blog import PostDetail


class PageCache:
    """In-memory store of generated post pages, keyed by UID."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[str, Tuple[PostDetail, float]] = {}

    def get(self, uid: str) -> Tuple[Optional[PostDetail], bool]:
        """Return ``(post, is_fresh)``; ``(None, False)`` when never generated."""
        entry = self._entries.get(uid)
        if not entry:
            return None, False
        post, generated_at = entry
        return post, self.clock() - generated_at < self.ttl_seconds

    def put(self, uid: str, post: PostDetail) -> None:
        self._entries[uid] = (post, self.clock())

    def discard(self, uid: str) -> None:
        self._entries.pop(uid, None)

    def __contains__(self, uid: str) -> bool:
        return uid in self._entries

    def __len__(self) -> int:
        return len(self._entries)
