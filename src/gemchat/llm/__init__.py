from .base import LLMProvider
from .factory import create_llm_provider
from .models import GenerationResult
from .providers import GeminiProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "GenerationResult",
    "GeminiProvider",
]
