"""
Centralized configuration for Claude models.
"""

# Complete model identifiers for API calls
MODEL_IDENTIFIERS = {
    "claude-sonnet-4.5": "claude-sonnet-4-5",  # Claude 4.5 Sonnet
    "claude-haiku-4.5": "claude-haiku-4-5"     # Claude 4.5 Haiku
}

# Default model for the strategy summary
DEFAULT_MODEL = "claude-sonnet-4.5"

# Mapping from shorthand names to full model names
SHORTHAND_MAPPING = {
    "sonnet-4.5": "claude-sonnet-4.5",
    "sonnet": "claude-sonnet-4.5",
    "haiku-4.5": "claude-haiku-4.5",
    "haiku": "claude-haiku-4.5"
}

# Generation limits for the summary call
MAX_OUTPUT_TOKENS = 4096
