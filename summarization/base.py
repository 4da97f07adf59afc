"""
Summarizer providers.

The coordinator only depends on the Summarizer interface; the Anthropic
implementation is the production provider.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

import anthropic
from anthropic import Anthropic

from common.errors import GenerationFailed
from common.logging import StructuredLogger
from models.config import MAX_OUTPUT_TOKENS
from models.selection import get_model_identifier
from summarization.text_processing import create_summary_prompt, get_system_prompt

logger = logging.getLogger(__name__)


class Summarizer(ABC):
    """
    Interface for summary providers.
    """

    @abstractmethod
    def summarize(self, content: str) -> str:
        """
        Generate a strategic summary of the content.

        Args:
            content: Dashboard HTML or Markdown article digest

        Returns:
            Markdown summary text

        Raises:
            GenerationFailed: the provider failed or returned nothing usable
        """
        pass


class AnthropicSummarizer(Summarizer):
    """
    Summarizer backed by the Claude Messages API.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = MAX_OUTPUT_TOKENS,
        timeout: float = 120.0,
        client=None
    ):
        """
        Initialize the summarizer.

        Args:
            api_key: Anthropic API key; checked when the first call is made
            model: Model name, shorthand or identifier
            max_tokens: Maximum tokens for the response
            timeout: Request timeout in seconds
            client: Optional pre-built Anthropic client
        """
        self.logger = StructuredLogger(__name__)
        self.api_key = api_key
        self.model_id = get_model_identifier(model)
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise GenerationFailed(None, "CLAUDE_API_KEY environment variable is not set.")
            self._client = Anthropic(api_key=self.api_key, timeout=self.timeout)
        return self._client

    def summarize(self, content: str) -> str:
        client = self.client
        log = self.logger.bind(model=self.model_id)

        log.info("Calling Claude API", input_chars=len(content))
        start_time = time.time()
        try:
            response = client.messages.create(
                model=self.model_id,
                max_tokens=self.max_tokens,
                system=get_system_prompt(),
                messages=[{"role": "user", "content": create_summary_prompt(content)}]
            )
        except anthropic.APIStatusError as e:
            log.error("Claude API HTTP error", status=e.status_code, error=e.message)
            raise GenerationFailed(
                e.status_code, f"Anthropic API request failed with status {e.status_code}: {e.message}"
            ) from e
        except anthropic.APIConnectionError as e:
            log.error("Claude API connection failed", error=str(e))
            raise GenerationFailed(None, f"Connection to Anthropic API failed: {e}") from e
        except anthropic.APIError as e:
            log.error("Claude API error", error=str(e))
            raise GenerationFailed(None, str(e)) from e

        log.info("API call completed", seconds=f"{time.time() - start_time:.2f}")

        text = ''.join(
            getattr(block, 'text', '') for block in (response.content or [])
            if getattr(block, 'type', None) == 'text'
        )
        if not text.strip():
            raise GenerationFailed(None, "Could not extract summary text from Claude response.")
        return text


def create_summarizer(settings) -> Summarizer:
    """
    Build the configured summarizer.

    Args:
        settings: utils.config.Settings instance

    Returns:
        Summarizer implementation
    """
    return AnthropicSummarizer(api_key=settings.claude_api_key, model=settings.claude_model)
