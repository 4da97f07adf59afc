"""
Text processing utilities for summarization.
"""

import re
import html
import logging
from typing import Iterable

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """
You are a senior strategic analyst specializing in AdTech, Marketing, and Enterprise Technology.
Analyze the following news content from various industry feeds. The content may be raw HTML
from the dashboard or a Markdown digest of articles.

Your task is to:
1. **SCAN** all the provided news articles (titles, sources, and descriptions), extracting key themes and patterns
2. **IGNORE** hidden elements or administrative content (like 'Hide Forever' buttons)
3. **SYNTHESIZE** the information into strategic insights
4. **GENERATE** a strategic summary in Markdown format that is ready to be displayed in a dashboard panel

Your output MUST be structured using Markdown headings and lists, focusing on actionable insights, without preamble. Go directly into the following structure:

## 📰 Core Trends & Market Focus
* **[Trend 1/Topic]**: Briefly describe the key theme (e.g., "AI Regulation").
* **[Trend 2/Topic]**: Briefly describe the key theme (e.g., "Retail Media Expansion").
* ... (List 3-5 major recurring themes)

## 💡 Strategic Takeaways for AdTech Leadership
* **For Branding & Campaigns**: What should leadership be doing right now based on the news?
* **For Ad Technology**: What specific technology area requires immediate investment or planning?
* **For Enterprise Tech/FinTech**: What is the key market shift that requires a business response?

## 📉 Potential Risks & Blindspots
* [Risk 1]: A critical risk emerging from the news (e.g., privacy changes, economic downturn, competitor move).
"""


def get_system_prompt() -> str:
    """Return the system prompt for the strategy summary."""
    return SYSTEM_PROMPT.strip()


def create_summary_prompt(content: str) -> str:
    """
    Wrap the news content for the user turn.

    Args:
        content: Dashboard HTML or a Markdown article digest

    Returns:
        Prompt text
    """
    return f"---\nNews Content to Analyze:\n---\n{content}"


def clean_text(text: str) -> str:
    """
    Strip HTML and normalize whitespace.

    Args:
        text: Raw text that may contain HTML

    Returns:
        Cleaned and normalized text
    """
    if not text:
        return ""

    soup = BeautifulSoup(text, 'html.parser')
    text = soup.get_text(separator=' ')

    text = re.sub(r'\s+', ' ', text).strip()
    return html.unescape(text)


def format_news_for_prompt(items: Iterable) -> str:
    """
    Render news items as the Markdown digest sent to the summarizer.

    Args:
        items: NewsItem objects (title, source, description, link, published_at)

    Returns:
        Markdown document
    """
    parts = ['# News Articles for Analysis\n\n']

    for index, item in enumerate(items, start=1):
        parts.append(f"## Article {index}: {item.title}\n")
        parts.append(f"**Source:** {item.source}\n")
        parts.append(f"**Published:** {item.published_at or 'Unknown'}\n")
        parts.append(f"**Link:** {item.link}\n")
        parts.append(f"**Description:**\n{clean_text(item.description)}\n")
        parts.append("\n---\n\n")

    content = ''.join(parts)
    logger.debug(f"Formatted news digest: {len(content)} chars")
    return content
