"""
Request models for the tool endpoints.

Fields arrive in camelCase. Every field is optional at the schema level so
that a missing required field is reported as ``"<Label> is required"`` with a
400 status instead of a schema error; ``check_required`` enforces them before
any network call is made.
"""

from typing import ClassVar, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from promptgate.core.errors import FieldValidationError


def optional_text(value: Optional[str]) -> Optional[str]:
    """Return the value when it has non-whitespace content, else None."""
    if value is None or not value.strip():
        return None
    return value


class ToolRequest(BaseModel):
    """Base for all tool requests."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    # (attribute name, label used in the error message)
    required_fields: ClassVar[Tuple[Tuple[str, str], ...]] = ()

    def check_required(self) -> None:
        """Raise FieldValidationError for the first missing or blank required field."""
        for name, label in self.required_fields:
            if optional_text(getattr(self, name)) is None:
                raise FieldValidationError(label)


class ContentRequest(ToolRequest):
    required_fields = (("topic", "Topic"),)

    topic: Optional[str] = None
    type: Optional[str] = None
    tone: Optional[str] = None


class LeadsRequest(ToolRequest):
    required_fields = (("industry", "Industry"),)

    industry: Optional[str] = None
    location: Optional[str] = None
    company_size: Optional[str] = None


class ProductRequest(ToolRequest):
    required_fields = (("product_type", "Product type"), ("topic", "Topic"))

    product_type: Optional[str] = None
    topic: Optional[str] = None
    format: Optional[str] = None


class PromptRequest(ToolRequest):
    required_fields = (("category", "Category"),)

    category: Optional[str] = None
    use_case: Optional[str] = None
    style: Optional[str] = None


class TrendsRequest(ToolRequest):
    required_fields = (("industry", "Industry"),)

    industry: Optional[str] = None
    timeframe: Optional[str] = None
    focus: Optional[str] = None
    include_news: bool = False


class ResumeRequest(ToolRequest):
    required_fields = (("name", "Name"), ("job_title", "Job title"))

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[str] = None
    education: Optional[str] = None


class EmailRequest(ToolRequest):
    required_fields = (("recipient_name", "Recipient name"), ("purpose", "Email purpose"))

    recipient_name: Optional[str] = None
    recipient_company: Optional[str] = None
    purpose: Optional[str] = None
    value_proposition: Optional[str] = None
    call_to_action: Optional[str] = None


class NewsletterRequest(ToolRequest):
    required_fields = (("topic", "Topic"),)

    topic: Optional[str] = None
    audience: Optional[str] = None
    sections: Optional[str] = None
    include_trends: bool = False


class SeoRequest(ToolRequest):
    required_fields = (("keyword", "Keyword"),)

    keyword: Optional[str] = None
    target_audience: Optional[str] = None
    word_count: Optional[int] = Field(None, gt=0, le=10000)
    include_trends: bool = False


class GenerateRequest(ToolRequest):
    """Generic pass-through generation."""
    required_fields = (("prompt", "Prompt"),)

    prompt: Optional[str] = None
    model: Optional[str] = None
    provider: Literal["huggingface", "openrouter"] = "huggingface"
    max_tokens: Optional[int] = Field(None, gt=0, le=4096)
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
