import unittest
from unittest.mock import MagicMock
from types import SimpleNamespace
import sys
import os

# Add project root to path
sys.path.append(os.getcwd())

from core.llm import LLMError, OpenAIClient, AnthropicClient, create_llm_client


def make_settings(**overrides):
    values = dict(
        LLM_PROVIDER="openai",
        LLM_MAX_TOKENS=500,
        OPENAI_API_KEY=None,
        OPENAI_MODEL="gpt-4o-mini",
        GEMINI_API_KEY=None,
        GEMINI_MODEL="gemini-2.5-flash",
        ANTHROPIC_API_KEY=None,
        ANTHROPIC_MODEL="claude-sonnet-4-20250514",
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def openai_response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestOpenAIClient(unittest.TestCase):
    def setUp(self):
        self.llm = OpenAIClient(make_settings())
        self.llm.client = MagicMock()

    def test_generate_passes_prompts(self):
        self.llm.client.chat.completions.create.return_value = openai_response("  BTC up  ")

        text = self.llm.generate("prompt", system_prompt="system", temperature=0.7)

        self.assertEqual(text, "BTC up")
        kwargs = self.llm.client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "gpt-4o-mini")
        self.assertEqual(kwargs["max_tokens"], 500)
        self.assertEqual(kwargs["temperature"], 0.7)
        self.assertEqual(kwargs["messages"][0], {"role": "system", "content": "system"})

    def test_empty_reply_raises(self):
        for content in (None, "", "  "):
            self.llm.client.chat.completions.create.return_value = openai_response(content)
            with self.assertRaises(LLMError):
                self.llm.generate("prompt")

    def test_api_error_wrapped(self):
        self.llm.client.chat.completions.create.side_effect = RuntimeError("429 quota")
        with self.assertRaises(LLMError):
            self.llm.generate("prompt")

    def test_missing_key_raises(self):
        llm = OpenAIClient(make_settings())
        self.assertIsNone(llm.client)
        with self.assertRaises(LLMError):
            llm.generate("prompt")


class TestCreateLLMClient(unittest.TestCase):

    def test_selects_provider(self):
        llm = create_llm_client("anthropic", settings=make_settings())
        self.assertIsInstance(llm, AnthropicClient)

    def test_unknown_provider_falls_back_to_openai(self):
        llm = create_llm_client("mystery", settings=make_settings())
        self.assertIsInstance(llm, OpenAIClient)


if __name__ == '__main__':
    unittest.main()
