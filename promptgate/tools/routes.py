"""
REST endpoints for the generation tools.

Every handler validates its required fields first, builds the prompt, makes
at most one generation call and shapes the JSON envelope. Trend and news
enrichment is fetched before the prompt is built; when it is unavailable the
clause is left out and the request carries on.
"""

import re
from typing import Any, Dict, List, Optional

import httpx
from fastapi import APIRouter, Depends

from promptgate.core.errors import UpstreamError
from promptgate.core.logging import get_logger
from promptgate.core.results import Err
from promptgate.core.settings import Settings
from promptgate.core.time import epoch_millis, isoformat_utc
from promptgate.dependencies import (
    get_app_settings,
    get_http_client,
    get_llm_provider,
    get_news_fetcher,
    get_trends_fetcher,
)
from promptgate.feeds.models import TrendItem
from promptgate.feeds.news import NewsFetcher
from promptgate.feeds.reddit import RedditTrendsFetcher
from promptgate.llm.models import GenerationParams
from promptgate.llm.provider import LLMProvider, LLMProviderFactory
from . import prompts
from .leads import structure_leads
from .models import (
    ContentRequest,
    EmailRequest,
    GenerateRequest,
    LeadsRequest,
    NewsletterRequest,
    ProductRequest,
    PromptRequest,
    ResumeRequest,
    SeoRequest,
    TrendsRequest,
    optional_text,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Tools"])

NEWSLETTER_TREND_LIMIT = 5
SEO_TREND_FETCH_LIMIT = 10
SEO_TREND_KEEP = 5
NEWS_LIMIT = 5

SAMPLE_PROMPTS = [
    {
        "id": "prompt-1",
        "category": "Content Writing",
        "text": "Write a compelling blog post about...",
        "description": "Professional blog post generator",
        "price": 0,
    },
    {
        "id": "prompt-2",
        "category": "Marketing",
        "text": "Create a social media campaign for...",
        "description": "Social media content creator",
        "price": 0,
    },
]


async def generate_text(
    provider: LLMProvider,
    prompt: str,
    params: GenerationParams,
    model: Optional[str] = None,
) -> str:
    """Run one generation call, raising UpstreamError on failure."""
    result = await provider.generate(model, prompt, params)
    if isinstance(result, Err):
        logger.warning(
            f"Generation failed via {provider.provider_name}: {result.message}",
            extra={"provider": provider.provider_name, "kind": result.kind.value}
        )
        raise UpstreamError.from_err(result)
    return result.value


def _word_count(text: str) -> int:
    return len(text.split())


async def _fetch_trends(fetcher: RedditTrendsFetcher, community: str, limit: int) -> Optional[List[TrendItem]]:
    """Trend items, or None when the feed is unavailable."""
    result = await fetcher.fetch_trends(community, limit)
    if isinstance(result, Err):
        logger.warning(f"Trends unavailable for r/{community}, continuing without them: {result.message}")
        return None
    return result.value


@router.post("/content/generate")
async def generate_content(req: ContentRequest, provider: LLMProvider = Depends(get_llm_provider)):
    """Short marketing copy for a topic."""
    req.check_required()
    prompt = prompts.build_content_prompt(req)
    logger.info("Generating content", extra={"tool": "content"})

    text = await generate_text(provider, prompt, prompts.CONTENT_PARAMS)

    return {
        "success": True,
        "content": text or "Content generated successfully",
        "topic": req.topic,
        "type": optional_text(req.type) or prompts.DEFAULT_CONTENT_TYPE,
    }


@router.post("/leads/generate")
async def generate_leads(req: LeadsRequest, provider: LLMProvider = Depends(get_llm_provider)):
    """Business lead list; falls back to flagged placeholder records."""
    req.check_required()
    prompt = prompts.build_leads_prompt(req)
    logger.info("Generating leads", extra={"tool": "leads"})

    text = await generate_text(provider, prompt, prompts.LEADS_PARAMS)
    leads, synthetic = structure_leads(text, req.industry, req.location)

    return {
        "success": True,
        "leads": leads,
        "count": len(leads),
        "industry": req.industry,
        "location": optional_text(req.location) or "Anywhere",
        "synthetic": synthetic,
        "createdAt": isoformat_utc(),
    }


@router.post("/products/generate")
async def generate_product(req: ProductRequest, provider: LLMProvider = Depends(get_llm_provider)):
    """Digital product draft (ebook, guide, checklist...)."""
    req.check_required()
    prompt = prompts.build_product_prompt(req)
    logger.info("Generating product", extra={"tool": "products"})

    content = await generate_text(provider, prompt, prompts.PRODUCT_PARAMS)

    return {
        "success": True,
        "product": {
            "type": req.product_type,
            "topic": req.topic,
            "format": optional_text(req.format) or prompts.DEFAULT_PRODUCT_FORMAT,
            "content": content,
            "wordCount": _word_count(content),
            "createdAt": isoformat_utc(),
        },
    }


@router.post("/prompts/generate")
async def generate_prompt(req: PromptRequest, provider: LLMProvider = Depends(get_llm_provider)):
    req.check_required()
    prompt = prompts.build_prompt_prompt(req)
    logger.info("Generating prompt", extra={"tool": "prompts"})

    text = await generate_text(provider, prompt, prompts.PROMPT_PARAMS)

    return {
        "success": True,
        "prompt": {
            "id": f"prompt-{epoch_millis()}",
            "category": req.category,
            "useCase": optional_text(req.use_case) or "General",
            "style": optional_text(req.style) or "Professional",
            "text": text,
            "description": f"AI prompt for {req.category}",
            "createdAt": isoformat_utc(),
            "price": 0,
        },
    }


@router.get("/prompts/list")
async def list_prompts():
    """Static sample prompts."""
    return {"success": True, "prompts": SAMPLE_PROMPTS}


@router.post("/trends/analyze")
async def analyze_trends(
    req: TrendsRequest,
    provider: LLMProvider = Depends(get_llm_provider),
    news: NewsFetcher = Depends(get_news_fetcher),
):
    """Industry trend analysis, optionally grounded on current headlines."""
    req.check_required()

    articles = None
    if req.include_news:
        result = await news.fetch_news(req.industry, NEWS_LIMIT)
        if isinstance(result, Err):
            logger.warning(f"News unavailable, continuing without headlines: {result.message}")
        else:
            articles = result.value

    headlines = [article.title for article in articles] if articles else None
    prompt = prompts.build_trends_prompt(req, headlines)
    logger.info("Analyzing trends", extra={"tool": "trends", "headlines": len(headlines or [])})

    content = await generate_text(provider, prompt, prompts.TRENDS_PARAMS)

    return {
        "success": True,
        "analysis": {
            "industry": req.industry,
            "timeframe": optional_text(req.timeframe) or "Current",
            "focus": optional_text(req.focus) or "General",
            "content": content,
            "news": [article.to_api() for article in articles] if articles is not None else None,
            "generatedAt": isoformat_utc(),
        },
    }


@router.post("/resume/generate")
async def generate_resume(req: ResumeRequest, provider: LLMProvider = Depends(get_llm_provider)):
    req.check_required()
    prompt = prompts.build_resume_prompt(req)
    logger.info("Generating resume", extra={"tool": "resume"})

    content = await generate_text(provider, prompt, prompts.RESUME_PARAMS)

    return {
        "success": True,
        "resume": {
            "name": req.name,
            "email": req.email or "",
            "phone": req.phone or "",
            "jobTitle": req.job_title,
            "content": content,
            "createdAt": isoformat_utc(),
        },
    }


@router.post("/email/generate")
async def generate_email(req: EmailRequest, provider: LLMProvider = Depends(get_llm_provider)):
    req.check_required()
    prompt = prompts.build_email_prompt(req)
    logger.info("Generating cold email", extra={"tool": "email"})

    content = await generate_text(provider, prompt, prompts.EMAIL_PARAMS)

    return {
        "success": True,
        "email": {
            "recipientName": req.recipient_name,
            "recipientCompany": req.recipient_company or "",
            "purpose": req.purpose,
            "content": content,
            "createdAt": isoformat_utc(),
        },
    }


@router.post("/newsletter/generate")
async def generate_newsletter(
    req: NewsletterRequest,
    provider: LLMProvider = Depends(get_llm_provider),
    trends: RedditTrendsFetcher = Depends(get_trends_fetcher),
):
    """Newsletter issue, optionally seeded with the topic community's hot posts."""
    req.check_required()

    items = None
    if req.include_trends:
        community = re.sub(r"\s+", "", req.topic)
        items = await _fetch_trends(trends, community, NEWSLETTER_TREND_LIMIT)

    prompt = prompts.build_newsletter_prompt(req, [item.title for item in items or []])
    logger.info("Generating newsletter", extra={"tool": "newsletter", "trends": len(items or [])})

    content = await generate_text(provider, prompt, prompts.NEWSLETTER_PARAMS)

    return {
        "success": True,
        "newsletter": {
            "topic": req.topic,
            "audience": optional_text(req.audience) or prompts.DEFAULT_NEWSLETTER_AUDIENCE,
            "sections": optional_text(req.sections) or prompts.DEFAULT_NEWSLETTER_SECTIONS,
            "content": content,
            "trends": [item.to_api() for item in items] if items is not None else None,
            "createdAt": isoformat_utc(),
        },
    }


def _matching_trends(items: List[TrendItem], keyword: str) -> List[TrendItem]:
    needle = keyword.lower()
    matches = [
        item for item in items
        if needle in item.title.lower() or needle in item.source_community.lower()
    ]
    return matches[:SEO_TREND_KEEP]


@router.post("/seo/generate")
async def generate_seo_blog(
    req: SeoRequest,
    provider: LLMProvider = Depends(get_llm_provider),
    trends: RedditTrendsFetcher = Depends(get_trends_fetcher),
):
    """SEO blog post for a keyword, optionally referencing matching hot posts."""
    req.check_required()

    items = None
    if req.include_trends:
        fetched = await _fetch_trends(trends, "all", SEO_TREND_FETCH_LIMIT)
        if fetched is not None:
            items = _matching_trends(fetched, req.keyword)

    prompt = prompts.build_seo_prompt(req, [item.title for item in items or []])
    logger.info("Generating SEO blog", extra={"tool": "seo", "trends": len(items or [])})

    content = await generate_text(provider, prompt, prompts.SEO_PARAMS)

    return {
        "success": True,
        "blog": {
            "keyword": req.keyword,
            "targetAudience": optional_text(req.target_audience) or prompts.DEFAULT_SEO_AUDIENCE,
            "wordCount": _word_count(content),
            "content": content,
            "trends": [item.to_api() for item in items] if items is not None else None,
            "createdAt": isoformat_utc(),
        },
    }


@router.post("/v1/generate")
async def generate_generic(
    req: GenerateRequest,
    settings: Settings = Depends(get_app_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Raw prompt pass-through to either backend."""
    req.check_required()
    provider = LLMProviderFactory.create_provider(req.provider, settings, client)
    params = GenerationParams(
        max_new_tokens=req.max_tokens or prompts.GENERIC_DEFAULT_MAX_TOKENS,
        temperature=req.temperature if req.temperature is not None else prompts.GENERIC_DEFAULT_TEMPERATURE,
    )
    model = optional_text(req.model) or provider.default_model
    logger.info("Generic generation", extra={"tool": "generic", "provider": provider.provider_name, "model": model})

    text = await generate_text(provider, req.prompt, params, model=model)

    data: Dict[str, Any] = {
        "text": text,
        "model": model,
        "provider": provider.provider_name,
        "tokens": _word_count(text),
        "createdAt": isoformat_utc(),
    }
    return {"success": True, "data": data}
