"""
Unit tests for the generative backends and the backend factory.
"""
import json
import os

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from app.core import llm_factory
from app.core.llm_factory import GeminiBackend, OllamaBackend, get_generative_backend
from app.flows.errors import BackendError
from app.models.schemas import (
    HarmBlockThreshold,
    HarmCategory,
    SafetySetting,
    SummarizeAdResultsOutput,
)

SAFETY = [
    SafetySetting(category=HarmCategory.DANGEROUS_CONTENT, threshold=HarmBlockThreshold.BLOCK_ONLY_HIGH),
    SafetySetting(category=HarmCategory.HARASSMENT, threshold=HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE),
]


@pytest.fixture(autouse=True)
def clear_backend_cache():
    get_generative_backend.cache_clear()
    yield
    get_generative_backend.cache_clear()


class TestOllamaBackend:
    @pytest.mark.asyncio
    async def test_submit_requests_schema_format(self):
        mock_llm = MagicMock()
        mock_llm.ainvoke = AsyncMock(return_value=MagicMock(content='{"summary": "s", "suggestions": "t"}'))

        with patch("app.core.llm_factory.get_ollama_llm", return_value=mock_llm) as mock_factory:
            raw = await OllamaBackend(model="qwen2.5").submit("Summarize this", SummarizeAdResultsOutput, SAFETY)

        assert json.loads(raw) == {"summary": "s", "suggestions": "t"}
        kwargs = mock_factory.call_args.kwargs
        assert kwargs["format"] == SummarizeAdResultsOutput.model_json_schema()
        assert kwargs["model"] == "qwen2.5"

        system, human = mock_llm.ainvoke.call_args.args[0]
        assert '"suggestions"' in system.content
        assert human.content == "Summarize this"

    @pytest.mark.asyncio
    async def test_empty_content_returns_none(self):
        mock_llm = MagicMock()
        mock_llm.ainvoke = AsyncMock(return_value=MagicMock(content=""))

        with patch("app.core.llm_factory.get_ollama_llm", return_value=mock_llm):
            raw = await OllamaBackend().submit("prompt", SummarizeAdResultsOutput)

        assert raw is None

    @pytest.mark.asyncio
    async def test_transport_failure_is_backend_error(self):
        mock_llm = MagicMock()
        mock_llm.ainvoke = AsyncMock(side_effect=ConnectionError("connection refused"))

        with patch("app.core.llm_factory.get_ollama_llm", return_value=mock_llm):
            with pytest.raises(BackendError, match="connection refused") as exc_info:
                await OllamaBackend().submit("prompt", SummarizeAdResultsOutput)

        assert isinstance(exc_info.value.__cause__, ConnectionError)


class TestGeminiBackend:
    def _backend(self, response=None, error=None):
        with patch("google.genai.Client"):
            backend = GeminiBackend(api_key="test-key", model="gemini-test")
        backend.client = MagicMock()
        backend.client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=error)
        return backend

    @pytest.mark.asyncio
    async def test_submit_sends_schema_and_safety_settings(self):
        backend = self._backend(response=MagicMock(text='{"summary": "s", "suggestions": "t"}'))

        raw = await backend.submit("Summarize this", SummarizeAdResultsOutput, SAFETY)

        assert raw == '{"summary": "s", "suggestions": "t"}'
        kwargs = backend.client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == "Summarize this"

        config = kwargs["config"]
        assert config.response_mime_type == "application/json"
        assert config.response_schema is SummarizeAdResultsOutput
        assert [s.category for s in config.safety_settings] == [
            "HARM_CATEGORY_DANGEROUS_CONTENT", "HARM_CATEGORY_HARASSMENT"
        ]
        assert [s.threshold for s in config.safety_settings] == [
            "BLOCK_ONLY_HIGH", "BLOCK_MEDIUM_AND_ABOVE"
        ]

    @pytest.mark.asyncio
    async def test_blocked_response_returns_none(self):
        backend = self._backend(response=MagicMock(text=None))

        assert await backend.submit("prompt", SummarizeAdResultsOutput, SAFETY) is None

    @pytest.mark.asyncio
    async def test_api_failure_is_backend_error(self):
        backend = self._backend(error=RuntimeError("429 RESOURCE_EXHAUSTED"))

        with pytest.raises(BackendError, match="RESOURCE_EXHAUSTED"):
            await backend.submit("prompt", SummarizeAdResultsOutput)


class TestGetGenerativeBackend:
    def test_defaults_to_ollama(self):
        with patch.dict(os.environ, {}, clear=True):
            backend = get_generative_backend()
        assert isinstance(backend, OllamaBackend)
        assert backend.model == "qwen2.5"

    def test_backend_is_cached(self):
        with patch.dict(os.environ, {"LLM_PROVIDER": "ollama"}, clear=True):
            assert get_generative_backend() is get_generative_backend()

    def test_gemini_provider(self):
        env = {"LLM_PROVIDER": "gemini", "GEMINI_API_KEY": "key", "GEMINI_MODEL": "gemini-x"}
        with patch.dict(os.environ, env, clear=True), patch.object(llm_factory, "GeminiBackend") as mock_gemini:
            backend = get_generative_backend()
        mock_gemini.assert_called_once_with(api_key="key", model="gemini-x")
        assert backend is mock_gemini.return_value

    def test_gemini_without_api_key(self):
        with patch.dict(os.environ, {"LLM_PROVIDER": "gemini"}, clear=True):
            with pytest.raises(BackendError, match="GEMINI_API_KEY"):
                get_generative_backend()

    def test_unknown_provider(self):
        with patch.dict(os.environ, {"LLM_PROVIDER": "carrier-pigeon"}, clear=True):
            with pytest.raises(BackendError, match="Unknown LLM_PROVIDER"):
                get_generative_backend()


def test_get_ollama_llm_reads_environment():
    env = {"OLLAMA_BASE_URL": "http://ollama:11434", "OLLAMA_MODEL": "llama3.1"}
    with patch.dict(os.environ, env, clear=True), patch("langchain_ollama.ChatOllama") as mock_chat:
        llm_factory.get_ollama_llm(temperature=0.2, format="json")

    mock_chat.assert_called_once_with(
        model="llama3.1", temperature=0.2, base_url="http://ollama:11434", format="json"
    )
