"""Optional news search through NewsAPI."""

from typing import Any, Dict, List, Optional

import httpx

from promptgate.core.logging import get_logger
from promptgate.core.results import Err, ErrorKind, Ok, Result, not_configured
from promptgate.core.settings import Settings
from .models import NewsArticle

logger = get_logger(__name__)


class NewsFetcher:
    """Search recent articles. Needs ``NEWS_API_KEY``; without it no request is made."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._owns_client:
            await self.client.aclose()

    @staticmethod
    def _parse_articles(payload: Dict[str, Any]) -> List[NewsArticle]:
        articles = []
        for raw in payload.get("articles") or []:
            if not isinstance(raw, dict) or not raw.get("title"):
                continue
            source = raw.get("source")
            articles.append(NewsArticle(
                title=raw["title"],
                source=(source.get("name") or "") if isinstance(source, dict) else "",
                url=raw.get("url") or "",
                description=raw.get("description") or "",
                published_at=raw.get("publishedAt"),
            ))
        return articles

    async def fetch_news(self, query: str, limit: int = 5) -> Result[List[NewsArticle]]:
        """
        Search news sorted by popularity.

        Args:
            query: Free-text search query
            limit: Page size

        Returns:
            Ok with articles, or Err (``ErrorKind.CONFIG`` when no key is set)
        """
        if not self.settings.news_configured:
            return not_configured(
                "NewsAPI",
                "NEWS_API_KEY",
                "Set NEWS_API_KEY in environment variables (optional)",
            )

        url = f"{self.settings.news_base_url.rstrip('/')}/everything"
        try:
            response = await self.client.get(
                url,
                params={"q": query, "sortBy": "popularity", "pageSize": limit},
                headers={"X-Api-Key": self.settings.news_api_key, "User-Agent": self.settings.user_agent},
            )
            if not response.is_success:
                logger.warning(f"NewsAPI request failed: {response.status_code}")
                return Err(
                    message=f"NewsAPI request failed: {response.status_code}",
                    kind=ErrorKind.REQUEST,
                    detail="Unable to fetch news",
                    status_code=response.status_code,
                )
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning(f"NewsAPI unavailable: {type(e).__name__}: {e}")
            return Err(message="Failed to fetch news", kind=ErrorKind.TRANSPORT, detail=str(e))

        if not isinstance(payload, dict):
            return Err(message="Failed to fetch news", kind=ErrorKind.TRANSPORT, detail="Unexpected response format")

        try:
            articles = self._parse_articles(payload)
        except (ValueError, TypeError) as e:
            logger.warning(f"Malformed NewsAPI response: {e}")
            return Err(message="Failed to fetch news", kind=ErrorKind.TRANSPORT, detail=str(e))
        return Ok(articles[:limit])
