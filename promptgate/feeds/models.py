"""Read-only items fetched from external feeds."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from promptgate.core.time import isoformat_utc


class FeedItem(BaseModel):
    """Common config for feed items: camelCase on the wire, immutable."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_api(self) -> dict:
        return self.model_dump(by_alias=True)


class TrendItem(FeedItem):
    """A hot post from a community feed."""
    title: str
    score: int = 0
    source_community: str = Field("", alias="sourceCommunity")
    url: str = ""
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @field_serializer("created_at")
    def _serialize_created_at(self, value: Optional[datetime]) -> Optional[str]:
        return isoformat_utc(value) if value else None


class NewsArticle(FeedItem):
    """A news search hit."""
    title: str
    source: str = ""
    url: str = ""
    description: str = ""
    published_at: Optional[str] = Field(None, alias="publishedAt")
