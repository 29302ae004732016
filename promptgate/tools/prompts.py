"""
Prompt builders, one per tool.

Every builder is a pure function of its validated request (plus any context
already fetched by the handler). Optional fields add a clause only when they
carry text; an absent field never leaves an empty or ``None`` clause behind.
"""

from typing import Optional, Sequence

from promptgate.llm.models import GenerationParams
from .models import (
    ContentRequest,
    EmailRequest,
    LeadsRequest,
    NewsletterRequest,
    ProductRequest,
    PromptRequest,
    ResumeRequest,
    SeoRequest,
    TrendsRequest,
    optional_text,
)

# Sampling parameters per tool, sized to the expected output length
CONTENT_PARAMS = GenerationParams(max_new_tokens=200, temperature=0.7)
LEADS_PARAMS = GenerationParams(max_new_tokens=300, temperature=0.7)
PRODUCT_PARAMS = GenerationParams(max_new_tokens=500, temperature=0.7)
PROMPT_PARAMS = GenerationParams(max_new_tokens=300, temperature=0.7)
TRENDS_PARAMS = GenerationParams(max_new_tokens=400, temperature=0.7)
RESUME_PARAMS = GenerationParams(max_new_tokens=600, temperature=0.6)
EMAIL_PARAMS = GenerationParams(max_new_tokens=300, temperature=0.7)
NEWSLETTER_PARAMS = GenerationParams(max_new_tokens=800, temperature=0.7)
SEO_PARAMS = GenerationParams(max_new_tokens=1000, temperature=0.7)
GENERIC_DEFAULT_MAX_TOKENS = 200
GENERIC_DEFAULT_TEMPERATURE = 0.7

LEADS_COUNT = 5
DEFAULT_CONTENT_TYPE = "social media post"
DEFAULT_CONTENT_TONE = "engaging"
DEFAULT_PRODUCT_FORMAT = "markdown"
DEFAULT_NEWSLETTER_SECTIONS = "weekly"
DEFAULT_NEWSLETTER_AUDIENCE = "general audience"
DEFAULT_SEO_AUDIENCE = "general readers"
DEFAULT_SEO_WORD_COUNT = 1000


def _clause(template: str, value: Optional[str]) -> str:
    """Format ``template`` with ``value`` when the value has text, else nothing."""
    text = optional_text(value)
    return template.format(text) if text is not None else ""


def _joined(titles: Optional[Sequence[str]]) -> Optional[str]:
    if not titles:
        return None
    return ", ".join(titles)


def build_content_prompt(req: ContentRequest) -> str:
    content_type = optional_text(req.type) or DEFAULT_CONTENT_TYPE
    tone = optional_text(req.tone) or DEFAULT_CONTENT_TONE
    return (
        f'Create a {content_type} about "{req.topic}" in a {tone} tone. '
        "Make it compelling and ready to use."
    )


def build_leads_prompt(req: LeadsRequest) -> str:
    return (
        f"Generate a list of {LEADS_COUNT} real business leads in the {req.industry} industry"
        + _clause(" located in {}", req.location)
        + _clause(" with {} employees", req.company_size)
        + ". Format as JSON array with fields: companyName, contactEmail, contactName, phone, website, address."
    )


def build_product_prompt(req: ProductRequest) -> str:
    fmt = optional_text(req.format) or DEFAULT_PRODUCT_FORMAT
    return (
        f'Create a {req.product_type} about "{req.topic}" in {fmt} format. '
        "Include a title, introduction, main content sections, and conclusion. "
        "Make it comprehensive and valuable."
    )


def build_prompt_prompt(req: PromptRequest) -> str:
    return (
        f"Create a high-quality AI prompt for {req.category}"
        + _clause(" specifically for {}", req.use_case)
        + _clause(" in a {} style", req.style)
        + ". Make it detailed, effective, and ready to use. "
        "Include the prompt text, description, and use cases."
    )


def build_trends_prompt(req: TrendsRequest, headlines: Optional[Sequence[str]] = None) -> str:
    return (
        f"Analyze current trends in the {req.industry} industry"
        + _clause(" for the {}", req.timeframe)
        + _clause(" focusing on {}", req.focus)
        + ". "
        + _clause("Consider these recent headlines: {}. ", _joined(headlines))
        + "Provide: 1) Top 5 trends, 2) Market opportunities, 3) Emerging technologies, "
        "4) Consumer behavior shifts, 5) Business ideas. Format as structured analysis."
    )


def build_resume_prompt(req: ResumeRequest) -> str:
    return (
        f"Create a professional resume for {req.name} applying for a {req.job_title} position. "
        + _clause("Experience: {}. ", req.experience)
        + _clause("Skills: {}. ", req.skills)
        + _clause("Education: {}. ", req.education)
        + "Include: Professional Summary, Work Experience, Skills, Education sections. "
        "Format as clean, professional resume text."
    )


def build_email_prompt(req: EmailRequest) -> str:
    return (
        f"Write a professional cold email to {req.recipient_name}"
        + _clause(" at {}", req.recipient_company)
        + f". Purpose: {req.purpose}. "
        + _clause("Value proposition: {}. ", req.value_proposition)
        + _clause("Call to action: {}. ", req.call_to_action)
        + "Make it personalized, concise, and compelling. Include subject line."
    )


def build_newsletter_prompt(req: NewsletterRequest, trend_titles: Optional[Sequence[str]] = None) -> str:
    sections = optional_text(req.sections) or DEFAULT_NEWSLETTER_SECTIONS
    audience = optional_text(req.audience) or DEFAULT_NEWSLETTER_AUDIENCE
    return (
        f"Create a {sections} newsletter about {req.topic} for {audience}. "
        + _clause("Include trending topics: {}. ", _joined(trend_titles))
        + "Include: engaging subject line, introduction, main stories, and conclusion. "
        "Make it informative and engaging."
    )


def build_seo_prompt(req: SeoRequest, trend_titles: Optional[Sequence[str]] = None) -> str:
    audience = optional_text(req.target_audience) or DEFAULT_SEO_AUDIENCE
    word_count = req.word_count or DEFAULT_SEO_WORD_COUNT
    return (
        f'Write a comprehensive SEO-optimized blog post targeting the keyword "{req.keyword}" for {audience}. '
        f"Target word count: {word_count} words. "
        + _clause("Reference these trending topics: {}. ", _joined(trend_titles))
        + "Include: SEO-optimized title, meta description, H1-H3 headings, keyword-rich content, "
        "and conclusion. Make it valuable and search-engine friendly."
    )
