"""Tests for the generation providers."""

import httpx
import pytest

from promptgate.core.results import Err, ErrorKind, Ok
from promptgate.llm.models import GenerationParams
from promptgate.llm.provider import (
    MODEL_LOADING_MESSAGE,
    HuggingFaceProvider,
    LLMProviderFactory,
    OpenRouterProvider,
)

from .conftest import RecordingBackend, make_settings, respond_json

PARAMS = GenerationParams(max_new_tokens=50, temperature=0.5)


def _provider(cls, backend, **settings_overrides):
    client = httpx.AsyncClient(transport=httpx.MockTransport(backend))
    return cls(make_settings(**settings_overrides), client)


class TestHuggingFaceProvider:
    """HuggingFace inference client."""

    @pytest.mark.asyncio
    async def test_missing_credential_makes_no_request(self):
        backend = RecordingBackend({"huggingface": respond_json([{"generated_text": "x"}])})
        provider = _provider(HuggingFaceProvider, backend, huggingface_api_key="")

        result = await provider.generate(None, "prompt", PARAMS)

        assert isinstance(result, Err)
        assert "not configured" in result.message
        assert result.kind == ErrorKind.CONFIG
        assert result.suggestion
        assert backend.call_count == 0

    @pytest.mark.asyncio
    async def test_request_shape(self):
        backend = RecordingBackend({"huggingface": respond_json([{"generated_text": "Done."}])})
        provider = _provider(HuggingFaceProvider, backend)

        result = await provider.generate("org/model-x", "Say done.", PARAMS)

        assert result == Ok("Done.")
        request = backend.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/models/org/model-x"
        assert request.headers["Authorization"] == "Bearer hf-test-key"
        assert backend.json_body() == {
            "inputs": "Say done.",
            "parameters": {"max_new_tokens": 50, "temperature": 0.5},
        }

    @pytest.mark.asyncio
    async def test_default_model_used_when_none_given(self):
        backend = RecordingBackend({"huggingface": respond_json({"text": "ok"})})
        provider = _provider(HuggingFaceProvider, backend, default_model="acme/tiny")

        await provider.generate(None, "hi", PARAMS)

        assert backend.requests[0].url.path == "/models/acme/tiny"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        [{"generated_text": "X"}],
        {"text": "X"},
        "X",
    ])
    async def test_response_shapes_normalize(self, payload):
        backend = RecordingBackend({"huggingface": respond_json(payload)})
        provider = _provider(HuggingFaceProvider, backend)

        result = await provider.generate(None, "prompt", PARAMS)

        assert result == Ok("X")

    @pytest.mark.asyncio
    async def test_echoed_prompt_is_stripped(self):
        prompt = "Explain tides briefly."
        backend = RecordingBackend({"huggingface": respond_json([{"generated_text": prompt + "\n\nAnswer: Z"}])})
        provider = _provider(HuggingFaceProvider, backend)

        result = await provider.generate(None, prompt, PARAMS)

        assert result == Ok("Answer: Z")

    @pytest.mark.asyncio
    async def test_model_loading_is_special_cased(self):
        backend = RecordingBackend({
            "huggingface": lambda request: httpx.Response(503, json={"error": "Model is loading", "estimated_time": 20}),
        })
        provider = _provider(HuggingFaceProvider, backend)

        result = await provider.generate(None, "prompt", PARAMS)

        assert isinstance(result, Err)
        assert result.message == MODEL_LOADING_MESSAGE
        assert "loading" in result.message.lower()
        assert result.status_code == 503

    @pytest.mark.asyncio
    async def test_other_status_carries_truncated_body(self):
        backend = RecordingBackend({
            "huggingface": lambda request: httpx.Response(500, text="E" * 500),
        })
        provider = _provider(HuggingFaceProvider, backend)

        result = await provider.generate(None, "prompt", PARAMS)

        assert isinstance(result, Err)
        assert result.kind == ErrorKind.REQUEST
        assert result.message.startswith("API request failed: 500")
        assert result.message != MODEL_LOADING_MESSAGE
        assert result.detail == "E" * 200
        assert backend.call_count == 1

    @pytest.mark.asyncio
    async def test_error_body_on_success_status(self):
        backend = RecordingBackend({"huggingface": respond_json({"error": "Input too long"})})
        provider = _provider(HuggingFaceProvider, backend)

        result = await provider.generate(None, "prompt", PARAMS)

        assert isinstance(result, Err)
        assert result.message == "Input too long"

    @pytest.mark.asyncio
    async def test_connection_failure_becomes_err(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider = _provider(HuggingFaceProvider, RecordingBackend({"huggingface": refuse}))

        result = await provider.generate(None, "prompt", PARAMS)

        assert isinstance(result, Err)
        assert result.kind == ErrorKind.TRANSPORT
        assert "failed to connect" in result.message.lower()
        assert result.detail == "connection refused"

    @pytest.mark.asyncio
    async def test_invalid_json_becomes_err(self):
        backend = RecordingBackend({"huggingface": lambda request: httpx.Response(200, text="<html>oops</html>")})
        provider = _provider(HuggingFaceProvider, backend)

        result = await provider.generate(None, "prompt", PARAMS)

        assert isinstance(result, Err)
        assert result.kind == ErrorKind.TRANSPORT

    @pytest.mark.asyncio
    async def test_model_id_is_escaped_per_segment(self):
        """Control characters in a model id are percent-encoded, slashes kept."""
        backend = RecordingBackend({"huggingface": respond_json([{"generated_text": "ok"}])})
        provider = _provider(HuggingFaceProvider, backend)

        result = await provider.generate("org/a\u0001b", "prompt", PARAMS)

        assert result == Ok("ok")
        assert backend.requests[0].url.raw_path == b"/models/org/a%01b"

    @pytest.mark.asyncio
    async def test_unbuildable_url_becomes_err(self):
        """A model id too long for a URL yields a transport Err, not an exception."""
        backend = RecordingBackend({"huggingface": respond_json([{"generated_text": "ok"}])})
        provider = _provider(HuggingFaceProvider, backend)

        result = await provider.generate("m" * 70_000, "prompt", PARAMS)

        assert isinstance(result, Err)
        assert result.kind == ErrorKind.TRANSPORT
        assert result.message == "Failed to connect to AI service"
        assert backend.call_count == 0


class TestOpenRouterProvider:
    """OpenRouter chat completions client."""

    @pytest.mark.asyncio
    async def test_missing_credential_makes_no_request(self):
        backend = RecordingBackend()
        provider = _provider(OpenRouterProvider, backend)

        result = await provider.generate(None, "prompt", PARAMS)

        assert isinstance(result, Err)
        assert "not configured" in result.message
        assert backend.call_count == 0

    @pytest.mark.asyncio
    async def test_chat_completion(self):
        backend = RecordingBackend({
            "openrouter.ai": respond_json({"choices": [{"message": {"role": "assistant", "content": " Hello! "}}]}),
        })
        provider = _provider(OpenRouterProvider, backend, openrouter_api_key="or-key")

        result = await provider.generate(None, "Greet me", PARAMS)

        assert result == Ok("Hello!")
        body = backend.json_body()
        assert body["model"] == "mistralai/mistral-7b-instruct:free"
        assert body["messages"] == [{"role": "user", "content": "Greet me"}]
        assert body["max_tokens"] == 50
        assert backend.requests[0].headers["Authorization"] == "Bearer or-key"

    @pytest.mark.asyncio
    async def test_missing_choices_yields_empty_text(self):
        backend = RecordingBackend({"openrouter.ai": respond_json({"id": "x"})})
        provider = _provider(OpenRouterProvider, backend, openrouter_api_key="or-key")

        result = await provider.generate(None, "prompt", PARAMS)

        assert result == Ok("")

    @pytest.mark.asyncio
    async def test_status_error(self):
        backend = RecordingBackend({"openrouter.ai": lambda request: httpx.Response(429, text="rate limited")})
        provider = _provider(OpenRouterProvider, backend, openrouter_api_key="or-key")

        result = await provider.generate(None, "prompt", PARAMS)

        assert isinstance(result, Err)
        assert result.status_code == 429
        assert result.detail == "rate limited"


class TestLLMProviderFactory:

    def test_known_providers(self):
        assert set(LLMProviderFactory.list_providers()) >= {"huggingface", "openrouter"}

    def test_unknown_falls_back_to_huggingface(self):
        client = httpx.AsyncClient()
        provider = LLMProviderFactory.create_provider("nope", make_settings(), client)
        assert isinstance(provider, HuggingFaceProvider)

    @pytest.mark.asyncio
    async def test_health_check_reports_configuration(self):
        client = httpx.AsyncClient()
        provider = LLMProviderFactory.create_provider("openrouter", make_settings(), client)
        health = await provider.health_check()
        assert health == {
            "provider": "openrouter",
            "status": "not_configured",
            "default_model": "mistralai/mistral-7b-instruct:free",
        }
