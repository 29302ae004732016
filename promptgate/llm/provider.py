"""
LLM provider interface and implementations.

Providers wrap one hosted inference backend behind a single ``generate``
contract. They never raise for remote failures: every outcome is returned as
``Ok(text)`` or ``Err``. Each call makes at most one network request, with no
retries and no caching.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type
from urllib.parse import quote

import httpx

from promptgate.core.logging import get_logger
from promptgate.core.results import Err, ErrorKind, Ok, not_configured
from promptgate.core.settings import Settings
from .models import GenerationParams, GenerationRequest, GenerationResult
from .normalize import normalize_generation, strip_prompt_echo

logger = get_logger(__name__)

# Upstream bodies are echoed to callers only up to this length
ERROR_EXCERPT_CHARS = 200

MODEL_LOADING_MESSAGE = "Model is currently loading, retry shortly"


def model_path(model: str) -> str:
    """Percent-encode a model id one path segment at a time."""
    return "/".join(quote(segment, safe="") for segment in model.split("/"))


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identification name."""

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when the caller does not name one."""

    @property
    @abstractmethod
    def configured(self) -> bool:
        """Whether a credential is present."""

    @abstractmethod
    async def generate(self, model: Optional[str], inputs: str, params: GenerationParams) -> GenerationResult:
        """
        Generate text for a prompt.

        Args:
            model: Hosted model identifier, or None for the provider default
            inputs: Prompt text
            params: Sampling parameters

        Returns:
            Ok with the normalized text, or Err describing the failure
        """

    async def health_check(self) -> Dict[str, Any]:
        """Report configuration state without calling the backend."""
        return {
            "provider": self.provider_name,
            "status": "configured" if self.configured else "not_configured",
            "default_model": self.default_model,
        }

    def _auth_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def _error_from_response(self, response: httpx.Response) -> Err:
        """Map a non-success response to an Err with a truncated body excerpt."""
        excerpt = response.text[:ERROR_EXCERPT_CHARS]
        logger.warning(
            f"{self.provider_name} request failed with status {response.status_code}",
            extra={"provider": self.provider_name, "status_code": response.status_code}
        )
        return Err(
            message=f"API request failed: {response.status_code} {response.reason_phrase}".rstrip(),
            kind=ErrorKind.REQUEST,
            detail=excerpt,
            status_code=response.status_code,
        )

    def _transport_error(self, exc: Exception) -> Err:
        logger.error(f"{self.provider_name} transport error: {type(exc).__name__}: {exc}")
        return Err(
            message="Failed to connect to AI service",
            kind=ErrorKind.TRANSPORT,
            detail=str(exc) or type(exc).__name__,
        )


class HuggingFaceProvider(LLMProvider):
    """HuggingFace hosted inference API."""

    @property
    def provider_name(self) -> str:
        return "huggingface"

    @property
    def default_model(self) -> str:
        return self.settings.default_model

    @property
    def configured(self) -> bool:
        return self.settings.huggingface_configured

    def _error_from_response(self, response: httpx.Response) -> Err:
        # Hosted backends cold-start models lazily and answer 503 meanwhile
        if response.status_code == 503:
            logger.info(f"{self.provider_name} model is loading (503)")
            return Err(
                message=MODEL_LOADING_MESSAGE,
                kind=ErrorKind.REQUEST,
                detail=f"{response.status_code}: {response.text[:ERROR_EXCERPT_CHARS]}",
                status_code=response.status_code,
            )
        return super()._error_from_response(response)

    async def generate(self, model: Optional[str], inputs: str, params: GenerationParams) -> GenerationResult:
        if not self.configured:
            return not_configured(
                "HuggingFace",
                "HUGGINGFACE_API_KEY",
                "Get a free API key from https://huggingface.co/settings/tokens",
            )

        request = GenerationRequest(model=model or self.default_model, inputs=inputs, parameters=params)
        url = f"{self.settings.hf_base_url.rstrip('/')}/models/{model_path(request.model)}"

        try:
            response = await self.client.post(
                url,
                json=request.to_inference_body(),
                headers=self._auth_headers(self.settings.huggingface_api_key),
            )
            if not response.is_success:
                return self._error_from_response(response)
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            return self._transport_error(e)

        if isinstance(payload, dict) and payload.get("error"):
            error = str(payload["error"])
            logger.warning(f"{self.provider_name} returned an error body: {error[:ERROR_EXCERPT_CHARS]}")
            return Err(message=error, kind=ErrorKind.REQUEST, detail=error)

        return Ok(normalize_generation(payload, inputs))


class OpenRouterProvider(LLMProvider):
    """OpenRouter chat completions API."""

    @property
    def provider_name(self) -> str:
        return "openrouter"

    @property
    def default_model(self) -> str:
        return self.settings.openrouter_model

    @property
    def configured(self) -> bool:
        return self.settings.openrouter_configured

    async def generate(self, model: Optional[str], inputs: str, params: GenerationParams) -> GenerationResult:
        if not self.configured:
            return not_configured(
                "OpenRouter",
                "OPENROUTER_API_KEY",
                "Get a free API key from https://openrouter.ai/keys",
            )

        request = GenerationRequest(model=model or self.default_model, inputs=inputs, parameters=params)
        url = f"{self.settings.openrouter_base_url.rstrip('/')}/chat/completions"

        try:
            response = await self.client.post(
                url,
                json=request.to_chat_body(),
                headers=self._auth_headers(self.settings.openrouter_api_key),
            )
            if not response.is_success:
                return self._error_from_response(response)
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            return self._transport_error(e)

        return Ok(strip_prompt_echo(self._message_content(payload), inputs))

    @staticmethod
    def _message_content(payload: Any) -> str:
        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return ""
        return content if isinstance(content, str) else ""


class LLMProviderFactory:
    """Factory for creating LLM provider instances."""

    _providers: Dict[str, Type[LLMProvider]] = {
        "huggingface": HuggingFaceProvider,
        "openrouter": OpenRouterProvider,
    }

    @classmethod
    def create_provider(cls, provider_type: str, settings: Settings, client: httpx.AsyncClient) -> LLMProvider:
        """
        Create LLM provider instance.

        Args:
            provider_type: Type of provider ("huggingface", "openrouter")
            settings: Application settings holding credentials and URLs
            client: HTTP client scoped to the current request

        Returns:
            LLMProvider instance
        """
        if provider_type not in cls._providers:
            logger.warning(f"Unknown provider type: {provider_type}, falling back to huggingface")
            provider_type = "huggingface"

        provider_class = cls._providers[provider_type]
        return provider_class(settings, client)

    @classmethod
    def list_providers(cls) -> List[str]:
        """List available provider types."""
        return list(cls._providers.keys())
