import json
import logging
import os
from functools import lru_cache
from typing import List, Optional, Protocol, Type

from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import BaseModel

from app.flows.errors import BackendError
from app.models.schemas import SafetySetting

logger = logging.getLogger(__name__)

SCHEMA_DIRECTIVE = (
    "Output should be in JSON format and conform to the following schema:\n\n"
    "```\n{schema}\n```\n\n"
    "Respond with the JSON object only."
)


def get_ollama_llm(temperature: float = 0, model: str = "", format=None):
    """Create an Ollama LLM instance.

    Centralizes LLM creation so all modules share the same config.
    `format` may be "json" or a JSON schema dict for structured output.
    """
    from langchain_ollama import ChatOllama

    ollama_base_url = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    model = model or os.getenv("OLLAMA_MODEL", "qwen2.5")
    return ChatOllama(model=model, temperature=temperature, base_url=ollama_base_url, format=format)


class GenerativeBackend(Protocol):
    async def submit(
        self,
        prompt: str,
        output_model: Type[BaseModel],
        safety_settings: Optional[List[SafetySetting]] = None,
    ) -> Optional[str]:
        """Return the raw structured text produced for `prompt`, or None if nothing was produced."""
        ...


class OllamaBackend:
    """Structured generation through a local Ollama model."""

    def __init__(self, model: str = "", temperature: float = 0.7):
        self.model = model
        self.temperature = temperature

    async def submit(self, prompt, output_model, safety_settings=None):
        schema = output_model.model_json_schema()
        if safety_settings:
            logger.debug("Ollama has no safety settings; ignoring %d setting(s)", len(safety_settings))

        llm = get_ollama_llm(temperature=self.temperature, model=self.model, format=schema)
        messages = [
            SystemMessage(content=SCHEMA_DIRECTIVE.format(schema=json.dumps(schema, indent=2))),
            HumanMessage(content=prompt),
        ]
        try:
            response = await llm.ainvoke(messages)
        except Exception as e:
            logger.error(f"Ollama call failed: {e}")
            raise BackendError(f"Ollama request failed: {e}") from e

        content = response.content
        if isinstance(content, list):
            content = "".join(part if isinstance(part, str) else part.get("text", "") for part in content)
        return content or None


class GeminiBackend:
    """Structured generation through the Gemini API, honoring safety settings."""

    def __init__(self, api_key: str, model: str = "gemini-2.0-flash", temperature: float = 0.7):
        from google import genai

        self.client = genai.Client(api_key=api_key)
        self.model = model
        self.temperature = temperature

    def _build_config(self, output_model, safety_settings):
        from google.genai import types

        return types.GenerateContentConfig(
            temperature=self.temperature,
            response_mime_type="application/json",
            response_schema=output_model,
            safety_settings=[
                types.SafetySetting(category=s.category.value, threshold=s.threshold.value)
                for s in safety_settings or []
            ],
        )

    async def submit(self, prompt, output_model, safety_settings=None):
        config = self._build_config(output_model, safety_settings)
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            logger.error(f"Gemini call failed: {e}")
            raise BackendError(f"Gemini request failed: {e}") from e

        # Blocked or empty candidates leave text unset
        return response.text or None


@lru_cache(maxsize=1)
def get_generative_backend() -> GenerativeBackend:
    """Build the backend selected by LLM_PROVIDER (ollama or gemini)."""
    provider = os.getenv("LLM_PROVIDER", "ollama").lower()

    if provider == "gemini":
        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not api_key:
            raise BackendError("GEMINI_API_KEY is not set")
        return GeminiBackend(api_key=api_key, model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"))

    if provider == "ollama":
        return OllamaBackend(model=os.getenv("OLLAMA_MODEL", "qwen2.5"))

    raise BackendError(f"Unknown LLM_PROVIDER: {provider}")
