from abc import ABC, abstractmethod
from typing import Any

from .models import GenerationResult


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    This module hides the design decision of which generative API answers
    prompts. Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request/response format conversion
    - Translating SDK failures into RemoteCallError

    A provider makes exactly one attempt per call: no retries, no backoff.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            result = await provider.generate_content("Hello")
        # Automatically cleaned up
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Get the default model name."""

    @abstractmethod
    async def generate_content(
        self,
        prompt: str,
        model: str | None = None,
        **kwargs: Any
    ) -> GenerationResult:
        """Generate a reply to a single text prompt.

        Args:
            prompt: The prompt text, sent as one content blob
            model: Model to use (None uses provider's default)
            **kwargs: Provider-specific parameters

        Returns:
            GenerationResult whose text may be None

        Raises:
            RemoteCallError: If the remote call fails
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup,
        a known harmless race in httpx/anyio teardown.
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
