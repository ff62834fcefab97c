"""
LLM Client
멀티 프로바이더 LLM 클라이언트 (OpenAI, Gemini, Anthropic)
Multi-provider LLM client with unified interface.

Every provider raises LLMError on failure; callers decide the fallback.
"""
from abc import ABC, abstractmethod
from typing import Optional

from config.settings import settings as default_settings
from agent.core.logger import get_logger

logger = get_logger("llm")


class LLMError(Exception):
    """Generation failed (not configured, timeout, quota, network, empty reply)"""


class BaseLLMClient(ABC):
    """LLM 클라이언트 추상 클래스"""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_prompt: str = "",
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """텍스트 생성"""
        pass

    @staticmethod
    def _require_text(text: Optional[str]) -> str:
        if not text or not text.strip():
            raise LLMError("empty response")
        return text.strip()


class OpenAIClient(BaseLLMClient):
    """OpenAI GPT"""

    def __init__(self, settings=None):
        settings = settings or default_settings
        self.model_name = settings.OPENAI_MODEL
        self.default_max_tokens = settings.LLM_MAX_TOKENS
        self.client = None
        if not settings.OPENAI_API_KEY:
            logger.warning("[OPENAI] No API key!")
            return
        from openai import OpenAI
        self.client = OpenAI(api_key=settings.OPENAI_API_KEY)
        logger.info(f"[OPENAI] initialized (model={self.model_name})")

    def generate(self, prompt, system_prompt="", model=None, max_tokens=None, temperature=None) -> str:
        if not self.client:
            raise LLMError("OpenAI not initialized")

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        kwargs = {}
        if temperature is not None:
            kwargs["temperature"] = temperature
        try:
            response = self.client.chat.completions.create(
                model=model or self.model_name,
                messages=messages,
                max_tokens=max_tokens or self.default_max_tokens,
                **kwargs
            )
            text = response.choices[0].message.content
        except Exception as e:
            raise LLMError(f"[OPENAI] Generation failed: {e}") from e
        return self._require_text(text)


class GeminiClient(BaseLLMClient):
    """Google Gemini API"""

    def __init__(self, settings=None):
        settings = settings or default_settings
        self.model_name = settings.GEMINI_MODEL
        self.default_max_tokens = settings.LLM_MAX_TOKENS
        self.client = None
        if not settings.GEMINI_API_KEY:
            logger.warning("[GEMINI] No API key!")
            return
        from google import genai
        self.client = genai.Client(api_key=settings.GEMINI_API_KEY)
        logger.info(f"[GEMINI] initialized (model={self.model_name})")

    def generate(self, prompt, system_prompt="", model=None, max_tokens=None, temperature=None) -> str:
        if not self.client:
            raise LLMError("Gemini not initialized")

        from google.genai import types

        config = types.GenerateContentConfig(
            system_instruction=system_prompt or None,
            max_output_tokens=max_tokens or self.default_max_tokens,
            temperature=temperature,
        )
        try:
            response = self.client.models.generate_content(
                model=model or self.model_name,
                contents=prompt,
                config=config
            )
            text = response.text
        except Exception as e:
            raise LLMError(f"[GEMINI] Generation failed: {e}") from e
        return self._require_text(text)


class AnthropicClient(BaseLLMClient):
    """Anthropic Claude"""

    def __init__(self, settings=None):
        settings = settings or default_settings
        self.model_name = settings.ANTHROPIC_MODEL
        self.default_max_tokens = settings.LLM_MAX_TOKENS
        self.client = None
        if not settings.ANTHROPIC_API_KEY:
            logger.warning("[ANTHROPIC] No API key!")
            return
        from anthropic import Anthropic
        self.client = Anthropic(api_key=settings.ANTHROPIC_API_KEY)
        logger.info(f"[ANTHROPIC] initialized (model={self.model_name})")

    def generate(self, prompt, system_prompt="", model=None, max_tokens=None, temperature=None) -> str:
        if not self.client:
            raise LLMError("Anthropic not initialized")

        kwargs = {}
        if system_prompt:
            kwargs["system"] = system_prompt
        if temperature is not None:
            kwargs["temperature"] = temperature
        try:
            response = self.client.messages.create(
                model=model or self.model_name,
                max_tokens=max_tokens or self.default_max_tokens,
                messages=[{"role": "user", "content": prompt}],
                **kwargs
            )
            text = response.content[0].text
        except Exception as e:
            raise LLMError(f"[ANTHROPIC] Generation failed: {e}") from e
        return self._require_text(text)


def create_llm_client(provider: Optional[str] = None, settings=None) -> BaseLLMClient:
    """설정에 따라 LLM 클라이언트 생성"""
    settings = settings or default_settings
    provider = provider or settings.LLM_PROVIDER

    clients = {
        'openai': OpenAIClient,
        'gemini': GeminiClient,
        'anthropic': AnthropicClient,
    }

    if provider not in clients:
        logger.warning(f"[LLM] Unknown provider: {provider}, falling back to openai")
        provider = 'openai'

    return clients[provider](settings)
