"""
Pydantic models for text-generation calls.

A ``GenerationRequest`` is built fresh for every call and serialized to the
inference wire body; it is never reused between calls.
"""

from typing import Any, Dict, Union

from pydantic import BaseModel, Field

from promptgate.core.results import Err, Ok


class GenerationParams(BaseModel):
    """Sampling parameters fixed per tool."""
    max_new_tokens: int = Field(..., gt=0, description="Upper bound on generated tokens")
    temperature: float = Field(0.7, ge=0.0, le=2.0, description="Sampling temperature")


class GenerationRequest(BaseModel):
    """One inference call."""
    model: str = Field(..., min_length=1, description="Hosted model identifier")
    inputs: str = Field(..., description="Prompt text")
    parameters: GenerationParams

    def to_inference_body(self) -> Dict[str, Any]:
        """Body for the HuggingFace inference endpoint."""
        return {"inputs": self.inputs, "parameters": self.parameters.model_dump()}

    def to_chat_body(self) -> Dict[str, Any]:
        """Body for an OpenAI-compatible chat completions endpoint."""
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": self.inputs}],
            "max_tokens": self.parameters.max_new_tokens,
            "temperature": self.parameters.temperature,
        }


GenerationResult = Union[Ok[str], Err]
