"""
Tests for model selection and the Anthropic summarizer.
"""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import anthropic
import httpx

from common.errors import GenerationFailed
from models.config import DEFAULT_MODEL, MODEL_IDENTIFIERS
from models.selection import get_model_identifier
from summarization.base import AnthropicSummarizer, create_summarizer
from utils.config import Settings


class TestModelSelection(unittest.TestCase):
    """Test get_model_identifier()."""

    def test_get_model_identifier(self):
        """Test model identifier resolution."""
        # Default model when None
        self.assertEqual(get_model_identifier(None), MODEL_IDENTIFIERS[DEFAULT_MODEL])

        # Shorthand, case-insensitive
        self.assertEqual(get_model_identifier("haiku"), "claude-haiku-4-5")
        self.assertEqual(get_model_identifier("Sonnet"), "claude-sonnet-4-5")

        # Full name
        self.assertEqual(
            get_model_identifier("claude-haiku-4.5"),
            get_model_identifier("haiku-4.5")
        )

        # Known full identifier should be returned as-is
        self.assertEqual(get_model_identifier("claude-sonnet-4-5"), "claude-sonnet-4-5")

    def test_unlisted_claude_identifier_passes_through(self):
        self.assertEqual(
            get_model_identifier("claude-sonnet-4-5-20250929"),
            "claude-sonnet-4-5-20250929"
        )

    def test_unknown_model_falls_back_to_default(self):
        with self.assertLogs('models.selection', level='WARNING'):
            self.assertEqual(get_model_identifier("gpt-4"), MODEL_IDENTIFIERS[DEFAULT_MODEL])


def _text_response(*texts):
    return SimpleNamespace(content=[SimpleNamespace(type='text', text=t) for t in texts])


class TestAnthropicSummarizer(unittest.TestCase):
    """Test the Claude provider with a mocked client."""

    def setUp(self):
        self.client = MagicMock()
        self.summarizer = AnthropicSummarizer(api_key="test-key", model="sonnet", client=self.client)

    def test_summarize_joins_text_blocks(self):
        self.client.messages.create.return_value = _text_response("## Trends\n", "* one")

        summary = self.summarizer.summarize("<div>news</div>")

        self.assertEqual(summary, "## Trends\n* one")
        kwargs = self.client.messages.create.call_args.kwargs
        self.assertEqual(kwargs['model'], "claude-sonnet-4-5")
        self.assertEqual(kwargs['max_tokens'], 4096)
        self.assertIn("strategic analyst", kwargs['system'])
        self.assertIn("<div>news</div>", kwargs['messages'][0]['content'])

    def test_non_text_blocks_ignored(self):
        self.client.messages.create.return_value = SimpleNamespace(content=[
            SimpleNamespace(type='tool_use', id='x'),
            SimpleNamespace(type='text', text='body'),
        ])
        self.assertEqual(self.summarizer.summarize("content"), "body")

    def test_empty_response_is_failure(self):
        self.client.messages.create.return_value = SimpleNamespace(content=[])
        with self.assertRaises(GenerationFailed) as ctx:
            self.summarizer.summarize("content")
        self.assertIn("Could not extract summary text", ctx.exception.message)

    def test_http_error_carries_status(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        response = httpx.Response(529, request=request, json={"error": {"message": "Overloaded"}})
        self.client.messages.create.side_effect = anthropic.APIStatusError(
            "Overloaded", response=response, body=None
        )

        with self.assertRaises(GenerationFailed) as ctx:
            self.summarizer.summarize("content")

        self.assertEqual(ctx.exception.provider_status, 529)
        self.assertIn("529", ctx.exception.message)

    def test_connection_error_has_no_status(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        self.client.messages.create.side_effect = anthropic.APIConnectionError(request=request)

        with self.assertRaises(GenerationFailed) as ctx:
            self.summarizer.summarize("content")
        self.assertIsNone(ctx.exception.provider_status)

    def test_missing_api_key(self):
        summarizer = AnthropicSummarizer(api_key=None)
        with patch('summarization.base.Anthropic') as client_cls:
            with self.assertRaises(GenerationFailed) as ctx:
                summarizer.summarize("content")
        client_cls.assert_not_called()
        self.assertIn("CLAUDE_API_KEY", str(ctx.exception))

    def test_create_summarizer_from_settings(self):
        summarizer = create_summarizer(Settings(claude_api_key="k", claude_model="haiku"))
        self.assertIsInstance(summarizer, AnthropicSummarizer)
        self.assertEqual(summarizer.model_id, "claude-haiku-4-5")


if __name__ == "__main__":
    unittest.main()
