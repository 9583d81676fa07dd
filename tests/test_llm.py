"""Unit tests for the LLM module."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import errors, types

from gemchat.errors import RemoteCallError
from gemchat.llm import (
    GeminiProvider,
    GenerationResult,
    LLMProvider,
    create_llm_provider,
)
from gemchat.llm.providers import gemini as gemini_module
from gemchat.llm.providers.gemini import extract_text


def _response(*texts: str, usage: bool = True) -> types.GenerateContentResponse:
    candidates = None
    if texts:
        candidates = [
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part(text=t) for t in texts])
            )
        ]
    usage_metadata = None
    if usage:
        usage_metadata = types.GenerateContentResponseUsageMetadata(
            prompt_token_count=3,
            candidates_token_count=2,
            total_token_count=5,
        )
    return types.GenerateContentResponse(candidates=candidates, usage_metadata=usage_metadata)


def _api_error(message: str) -> errors.APIError:
    return errors.APIError(
        503,
        {"error": {"code": 503, "message": message, "status": "UNAVAILABLE"}},
    )


@pytest.fixture
def mock_client(monkeypatch):
    """Replace the GenAI client with a mock that never touches the network."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=_response("Hello"))
    client.aio.aclose = AsyncMock()
    monkeypatch.setattr(gemini_module.genai, "Client", MagicMock(return_value=client))
    return client


class TestLLMProviderInterface:
    """Tests for the abstract LLMProvider interface."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, fake_llm):
        """Test that leaving the context closes the provider."""
        async with fake_llm as provider:
            assert provider is fake_llm

        assert fake_llm.closed


class TestGenerationResult:
    """Tests for GenerationResult."""

    def test_text_is_optional(self):
        result = GenerationResult(model="gemini-2.5-flash")

        assert result.text is None
        assert result.usage is None

    def test_is_frozen(self):
        result = GenerationResult(text="hi", model="gemini-2.5-flash")

        with pytest.raises(Exception):
            result.text = "changed"  # type: ignore


class TestExtractText:
    """Tests for response text extraction."""

    def test_joins_parts(self):
        assert extract_text(_response("Hello", " world")) == "Hello world"

    def test_no_candidates(self):
        assert extract_text(_response()) is None

    def test_candidate_without_content(self):
        response = types.GenerateContentResponse(candidates=[types.Candidate()])

        assert extract_text(response) is None


class TestGeminiProvider:
    """Tests for GeminiProvider with a mocked client."""

    def test_default_model(self, mock_client):
        provider = GeminiProvider(api_key="fake-key")

        assert provider.model == "gemini-2.5-flash"

    @pytest.mark.asyncio
    async def test_generate_content(self, mock_client):
        """Test that the prompt is sent as a single user content."""
        provider = GeminiProvider(api_key="fake-key", model="gemini-2.5-pro")

        result = await provider.generate_content("Hi")

        assert result.text == "Hello"
        assert result.model == "gemini-2.5-pro"
        assert result.usage == {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5}

        kwargs = mock_client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-2.5-pro"
        assert kwargs["config"] is None
        [content] = kwargs["contents"]
        assert content.role == "user"
        assert [part.text for part in content.parts] == ["Hi"]

    @pytest.mark.asyncio
    async def test_model_override_and_config(self, mock_client):
        provider = GeminiProvider(api_key="fake-key")

        result = await provider.generate_content("Hi", model="gemini-2.5-pro", temperature=0.2)

        kwargs = mock_client.aio.models.generate_content.await_args.kwargs
        assert result.model == "gemini-2.5-pro"
        assert kwargs["config"].temperature == 0.2

    @pytest.mark.asyncio
    async def test_response_without_text(self, mock_client):
        """Test that a textless response is a result, not an error."""
        mock_client.aio.models.generate_content.return_value = _response(usage=False)
        provider = GeminiProvider(api_key="fake-key")

        result = await provider.generate_content("Hi")

        assert result.text is None
        assert result.usage is None

    @pytest.mark.asyncio
    async def test_api_error_becomes_remote_call_error(self, mock_client):
        mock_client.aio.models.generate_content.side_effect = _api_error("timeout")
        provider = GeminiProvider(api_key="fake-key")

        with pytest.raises(RemoteCallError) as exc_info:
            await provider.generate_content("Hi")

        assert "timeout" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, errors.APIError)

    @pytest.mark.asyncio
    async def test_close(self, mock_client):
        provider = GeminiProvider(api_key="fake-key")

        await provider.close()

        mock_client.aio.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_generate_content_real_api(self, api_keys):
        """Test a real call (requires GEMINI_API_KEY)."""
        if not api_keys["gemini"]:
            pytest.skip("GEMINI_API_KEY not set")

        async with GeminiProvider(api_key=api_keys["gemini"]) as provider:
            result = await provider.generate_content("Reply with the single word: pong")

        assert result.text
        assert "pong" in result.text.lower()


class TestLLMFactory:
    """Tests for create_llm_provider."""

    @pytest.mark.parametrize("name", ["gemini", "google", "Gemini"])
    def test_create_gemini(self, mock_client, name):
        provider = create_llm_provider(name, api_key="fake-key", model="gemini-2.5-pro")

        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.5-pro"

    def test_missing_api_key(self):
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider("gemini")

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("openai", api_key="fake-key")
