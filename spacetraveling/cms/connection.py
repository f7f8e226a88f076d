import httpx

from spacetraveling.cms.client import PrismicClient
from spacetraveling.settings import Settings, settings


def create_cms(settings_obj: Settings = settings) -> PrismicClient:
    """Build a Prismic client with its own HTTP connection pool."""
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings_obj.CMS_TIMEOUT_SECONDS)
    )
    return PrismicClient(
        settings_obj.PRISMIC_API_URL,
        http_client,
        access_token=settings_obj.PRISMIC_ACCESS_TOKEN,
    )


async def get_cms():
    """
    Request-scoped CMS client.
    Called at runtime to avoid import-time connections.
    """
    cms = create_cms()
    try:
        yield cms
    finally:
        await cms.http.aclose()
