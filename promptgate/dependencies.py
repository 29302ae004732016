"""FastAPI dependencies wiring settings and per-request clients into handlers."""

from typing import AsyncGenerator

import httpx
from fastapi import Depends, Request

from promptgate.core.settings import Settings
from promptgate.feeds.news import NewsFetcher
from promptgate.feeds.reddit import RedditTrendsFetcher
from promptgate.llm.provider import LLMProvider, LLMProviderFactory


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


async def get_http_client(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """One HTTP client per request, closed when the response is sent."""
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout),
        transport=request.app.state.transport,
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
    ) as client:
        yield client


def get_llm_provider(
    settings: Settings = Depends(get_app_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> LLMProvider:
    """Primary generation backend."""
    return LLMProviderFactory.create_provider("huggingface", settings, client)


def get_trends_fetcher(
    settings: Settings = Depends(get_app_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> RedditTrendsFetcher:
    return RedditTrendsFetcher(settings, client)


def get_news_fetcher(
    settings: Settings = Depends(get_app_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> NewsFetcher:
    return NewsFetcher(settings, client)
