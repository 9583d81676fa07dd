from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GenerationResult(BaseModel):
    """Response from an LLM provider."""

    model_config = ConfigDict(frozen=True)

    text: str | None = Field(
        default=None,
        description="Generated text, or None if the response carried no text"
    )
    model: str = Field(description="Model that generated the response")
    usage: dict[str, Any] | None = Field(
        default=None,
        description="Token usage information"
    )
