"""
Model name resolution.
"""

import logging
from typing import Optional
from .config import MODEL_IDENTIFIERS, DEFAULT_MODEL, SHORTHAND_MAPPING

logger = logging.getLogger(__name__)


def get_model_identifier(model_name: Optional[str] = None) -> str:
    """
    Get the full API model identifier from a model name or shorthand.

    Args:
        model_name: Model name, shorthand, or full identifier

    Returns:
        Full API model identifier
    """
    if not model_name:
        return MODEL_IDENTIFIERS[DEFAULT_MODEL]

    model_name = model_name.strip()

    # Check if it's already a full identifier
    if model_name in MODEL_IDENTIFIERS.values():
        return model_name

    # Check if it's a known model name
    if model_name in MODEL_IDENTIFIERS:
        return MODEL_IDENTIFIERS[model_name]

    # Check if it's a shorthand
    if model_name.lower() in SHORTHAND_MAPPING:
        return MODEL_IDENTIFIERS[SHORTHAND_MAPPING[model_name.lower()]]

    # Dated or newer identifiers are passed through untouched
    if model_name.startswith("claude-"):
        logger.info(f"Using unlisted Claude model identifier '{model_name}'")
        return model_name

    logger.warning(f"Unknown model '{model_name}', using default: {DEFAULT_MODEL}")
    return MODEL_IDENTIFIERS[DEFAULT_MODEL]
