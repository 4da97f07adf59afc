"""
Summary generation: throttle policy, coordinator and providers.
"""

from summarization.throttle import ThrottleDecision, decide
from summarization.coordinator import SummaryCoordinator, SummaryResult, current_millis
from summarization.base import Summarizer, AnthropicSummarizer, create_summarizer

__all__ = [
    'ThrottleDecision',
    'decide',
    'SummaryCoordinator',
    'SummaryResult',
    'current_millis',
    'Summarizer',
    'AnthropicSummarizer',
    'create_summarizer',
]
