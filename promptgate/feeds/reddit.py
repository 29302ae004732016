"""Trending posts from Reddit's public "hot" listings."""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from promptgate.core.logging import get_logger
from promptgate.core.results import Err, ErrorKind, Ok, Result
from promptgate.core.settings import Settings
from promptgate.core.time import from_unix
from .models import TrendItem

logger = get_logger(__name__)


class RedditTrendsFetcher:
    """
    Unauthenticated fetcher for community hot listings.

    Trends are an enrichment: failures come back as ``Err`` and callers drop
    the trends clause instead of failing the request.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._owns_client:
            await self.client.aclose()

    def _listing_url(self, community: str) -> str:
        return f"{self.settings.reddit_base_url.rstrip('/')}/r/{quote(community, safe='')}/hot.json"

    @staticmethod
    def _parse_listing(payload: Dict[str, Any]) -> List[TrendItem]:
        """Turn a listing document into trend items, skipping malformed children."""
        children = (payload.get("data") or {}).get("children") or []
        items = []
        for child in children:
            data = child.get("data") if isinstance(child, dict) else None
            if not isinstance(data, dict) or not data.get("title"):
                continue
            permalink = data.get("permalink") or ""
            items.append(TrendItem(
                title=data["title"],
                score=int(data.get("score") or 0),
                source_community=data.get("subreddit") or "",
                url=f"https://reddit.com{permalink}" if permalink else data.get("url", ""),
                created_at=from_unix(data.get("created_utc")),
            ))
        return items

    async def fetch_trends(self, community: str = "all", limit: int = 10) -> Result[List[TrendItem]]:
        """
        Fetch hot posts of a community.

        Args:
            community: Subreddit name without the ``r/`` prefix
            limit: Maximum number of posts requested

        Returns:
            Ok with trend items, or Err when the feed is unavailable
        """
        url = self._listing_url(community)
        try:
            response = await self.client.get(
                url,
                params={"limit": limit},
                headers={"User-Agent": self.settings.user_agent},
            )
            if not response.is_success:
                logger.warning(f"Reddit trends request failed: {response.status_code} for r/{community}")
                return Err(
                    message=f"Reddit API request failed: {response.status_code}",
                    kind=ErrorKind.REQUEST,
                    detail="Unable to fetch Reddit trends",
                    status_code=response.status_code,
                )
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning(f"Reddit trends unavailable for r/{community}: {type(e).__name__}: {e}")
            return Err(message="Failed to fetch Reddit trends", kind=ErrorKind.TRANSPORT, detail=str(e))

        if not isinstance(payload, dict):
            return Err(message="Failed to fetch Reddit trends", kind=ErrorKind.TRANSPORT,
                       detail="Unexpected listing format")

        try:
            items = self._parse_listing(payload)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Malformed Reddit listing for r/{community}: {e}")
            return Err(message="Failed to fetch Reddit trends", kind=ErrorKind.TRANSPORT, detail=str(e))
        logger.debug(f"Fetched {len(items)} trends from r/{community}")
        return Ok(items)
