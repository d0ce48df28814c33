import logging
import httpx
from app.core.config import settings
from app.core.errors import FetchError

logger = logging.getLogger(__name__)

HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "nb-NO,nb;q=0.9,no;q=0.8,en;q=0.5",
}

async def fetch_html(url: str) -> str:
    """
    Fetch raw HTML from a menu page.

    A single attempt: non-2xx status, transport errors and empty or
    undecodable bodies all raise FetchError with the cause attached.
    """
    client_options = {
        "headers": {"User-Agent": settings.USER_AGENT, **HEADERS},
        "follow_redirects": True,
    }
    if settings.REQUEST_TIMEOUT is not None:
        client_options["timeout"] = settings.REQUEST_TIMEOUT

    try:
        async with httpx.AsyncClient(**client_options) as client:
            response = await client.get(url)
            if not response.is_success:
                raise FetchError(f"HTTP error {response.status_code} for {url}", url=url)
            html = response.content.decode(response.encoding or "utf-8")
    except httpx.TimeoutException as e:
        raise FetchError(f"Timeout while fetching {url}", url=url) from e
    except httpx.HTTPError as e:
        raise FetchError(f"Failed to fetch {url}: {e}", url=url) from e
    except (UnicodeDecodeError, LookupError) as e:
        raise FetchError(f"Could not decode response from {url}: {e}", url=url) from e

    if not html.strip():
        raise FetchError(f"Empty response from {url}", url=url)

    logger.info("Fetched %s (%d characters)", url, len(html))
    return html
