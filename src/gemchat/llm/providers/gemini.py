"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK for async content generation.
Reference: https://github.com/googleapis/python-genai

Note: Gemini can return a response without any text (safety filtering,
empty candidates). That is reported as a result with text=None rather
than an error, and is not retried.
"""

from typing import Any

from google import genai
from google.genai import errors, types

from ...config import DEFAULT_MODEL
from ...errors import RemoteCallError
from ..base import LLMProvider
from ..models import GenerationResult


def extract_text(response: Any) -> str | None:
    """Extract text content from a Gemini response.

    Args:
        response: Gemini GenerateContentResponse

    Returns:
        Joined text of the first candidate, or None if it has no text
    """
    if response.candidates:
        candidate = response.candidates[0]
        if candidate.content and candidate.content.parts:
            texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
            if texts:
                return "".join(texts)

    # Fallback to response.text (may raise or return None)
    try:
        return response.text or None
    except (ValueError, AttributeError):
        return None


def describe_api_error(error: errors.APIError) -> str:
    """Human-readable message for an SDK error."""
    return getattr(error, "message", None) or str(error)


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization
    - Prompt-to-content conversion
    - Text extraction from candidates
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.5-flash, gemini-2.5-pro, ...)
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def generate_content(
        self,
        prompt: str,
        model: str | None = None,
        **kwargs: Any
    ) -> GenerationResult:
        """Generate a reply using Google Gemini.

        Args:
            prompt: The prompt text
            model: Model to use (overrides default)
            **kwargs: Additional GenerateContentConfig fields

        Returns:
            GenerationResult with the reply text (None if absent)

        Raises:
            RemoteCallError: If the Gemini API call fails
        """
        model_to_use = model or self._model
        contents = [types.Content(role="user", parts=[types.Part(text=prompt)])]
        config = types.GenerateContentConfig(**kwargs) if kwargs else None

        try:
            response = await self._client.aio.models.generate_content(
                model=model_to_use,
                contents=contents,
                config=config
            )
        except errors.APIError as e:
            raise RemoteCallError(describe_api_error(e)) from e

        usage = None
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                "total_tokens": response.usage_metadata.total_token_count or 0
            }

        return GenerationResult(
            text=extract_text(response),
            model=model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Close the Gemini client's async transport.

        Older SDK releases have no aclose(); their client needs no closing.
        """
        aclose = getattr(self._client.aio, "aclose", None)
        if aclose is not None:
            await aclose()
