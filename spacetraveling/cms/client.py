import logging
from typing import Iterable, List, Optional

import httpx

from spacetraveling.cms.predicates import at, build_query
from spacetraveling.errors import FetchError, NotFoundError

logger = logging.getLogger(__name__)


class PrismicClient:
    """
    Thin async client for the Prismic REST API (v2).

    The HTTP client is passed in so callers own its lifecycle and tests can
    swap in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_url: str,
        http_client: httpx.AsyncClient,
        access_token: Optional[str] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.http = http_client
        self.access_token = access_token or None
        self._master_ref: Optional[str] = None

    async def get_master_ref(self) -> str:
        if self._master_ref:
            return self._master_ref

        api = await self._get_json(self.api_url)
        for ref in api.get("refs", []):
            if ref.get("isMasterRef"):
                self._master_ref = ref["ref"]
                return self._master_ref
        raise FetchError(f"No master ref advertised by {self.api_url}")

    async def query(
        self,
        predicates: Iterable[str],
        *,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
        fetch: Optional[List[str]] = None,
    ) -> dict:
        """Run a predicate query, returning the raw ``{results, next_page, ...}`` body."""
        params = {
            "ref": await self.get_master_ref(),
            "q": build_query(predicates),
        }
        if page_size is not None:
            params["pageSize"] = page_size
        if page is not None:
            params["page"] = page
        if fetch:
            params["fetch"] = ",".join(fetch)

        return await self._get_json(f"{self.api_url}/documents/search", params)

    async def get_by_uid(self, doc_type: str, uid: str) -> dict:
        response = await self.query(
            [at(f"my.{doc_type}.uid", uid)], page_size=1
        )
        results = response.get("results") or []
        if not results:
            raise NotFoundError(doc_type, uid)
        return results[0]

    async def fetch_page(self, url: str) -> dict:
        """
        Follow an opaque ``next_page`` cursor URL handed out by the CMS.
        Cursors pointing anywhere but the configured API host are refused.
        """
        if not self._is_api_host(url):
            logger.warning(f"Refusing cursor outside the CMS host: {url}")
            raise FetchError("Cursor does not point at the CMS")
        return await self._get_json(url)

    def _is_api_host(self, url: str) -> bool:
        try:
            target = httpx.URL(url)
        except httpx.InvalidURL:
            return False
        api = httpx.URL(self.api_url)
        return (target.scheme, target.host, target.port) == (
            api.scheme,
            api.host,
            api.port,
        )

    async def _get_json(self, url: str, params: Optional[dict] = None) -> dict:
        params = dict(params or {})
        if (
            self.access_token
            and "access_token=" not in url
            and self._is_api_host(url)
        ):
            params["access_token"] = self.access_token

        try:
            response = await self.http.get(url, params=params or None)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"CMS responded {e.response.status_code} for {e.request.url}"
            )
            raise FetchError(
                f"CMS request failed with status {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"CMS request error for {url}: {e}")
            raise FetchError(f"Could not reach CMS: {e}") from e
        except ValueError as e:
            logger.warning(f"CMS returned invalid JSON for {url}: {e}")
            raise FetchError("CMS returned invalid JSON") from e
