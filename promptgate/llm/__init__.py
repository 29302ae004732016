"""Text generation providers and response normalization."""

from .models import GenerationParams, GenerationRequest, GenerationResult
from .normalize import extract_text, normalize_generation, strip_prompt_echo
from .provider import HuggingFaceProvider, LLMProvider, LLMProviderFactory, OpenRouterProvider

__all__ = [
    "GenerationParams",
    "GenerationRequest",
    "GenerationResult",
    "extract_text",
    "normalize_generation",
    "strip_prompt_echo",
    "LLMProvider",
    "HuggingFaceProvider",
    "OpenRouterProvider",
    "LLMProviderFactory",
]
