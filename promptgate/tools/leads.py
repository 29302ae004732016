"""
Structured lead extraction for the lead generator.

The model is asked for a JSON array but often wraps it in prose or ignores
the format entirely. ``structure_leads`` parses the array when there is one
and otherwise synthesizes placeholder records, flagging them as synthetic so
callers can tell fabricated data from parsed data.
"""

import json
import re
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from promptgate.core.logging import get_logger
from .prompts import LEADS_COUNT

logger = get_logger(__name__)

# First "[" to last "]", across lines
JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")

ADDRESS_MAX_CHARS = 50


class Lead(BaseModel):
    """One business lead."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    company_name: str
    contact_email: str
    contact_name: str
    phone: str
    website: str
    address: str


def _domain_stem(industry: str) -> str:
    stem = re.sub(r"[^a-z0-9]+", "", industry.lower())
    return stem or "company"


def parse_lead_array(text: str) -> Optional[List[Dict[str, Any]]]:
    """
    Parse the first JSON-array-shaped substring of ``text``.

    Returns:
        The object entries of the array, or None when there is no array, it
        does not parse, or it holds no objects
    """
    match = JSON_ARRAY_PATTERN.search(text)
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.info(f"Lead array did not parse: {e}")
        return None
    if not isinstance(parsed, list):
        return None
    leads = [entry for entry in parsed if isinstance(entry, dict)]
    return leads or None


def synthesize_leads(text: str, industry: str, location: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Build exactly ``LEADS_COUNT`` placeholder leads.

    Fields derive from the industry, location and index; the address uses the
    i-th non-empty line of ``text`` when there is one.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    stem = _domain_stem(industry)
    place = location.strip() if location and location.strip() else "City"

    leads = []
    for idx in range(LEADS_COUNT):
        n = idx + 1
        address = lines[idx][:ADDRESS_MAX_CHARS] if idx < len(lines) else f"{place}, State"
        lead = Lead(
            company_name=f"{industry.strip()} Company {n}",
            contact_email=f"contact{n}@{stem}.com",
            contact_name=f"Contact {n}",
            phone=f"+1-555-000-{1000 + idx}",
            website=f"https://{stem}{n}.com",
            address=address,
        )
        leads.append(lead.model_dump(by_alias=True))
    return leads


def structure_leads(text: str, industry: str, location: Optional[str] = None) -> Tuple[List[Dict[str, Any]], bool]:
    """
    Turn generated text into a lead list.

    Returns:
        Tuple of (leads, synthetic) where ``synthetic`` is True when the
        records were fabricated rather than parsed
    """
    parsed = parse_lead_array(text)
    if parsed is not None:
        return parsed, False

    logger.warning(
        "No usable lead array in generated text, synthesizing placeholders",
        extra={"industry": industry}
    )
    return synthesize_leads(text, industry, location), True
