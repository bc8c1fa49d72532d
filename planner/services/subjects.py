"""Email subject-line suggestions.

Uses the OpenAI chat completions API when an API key is configured and
falls back to a fixed list otherwise, or when the call fails.
"""
import logging
import re
from typing import List, Optional

import openai
from openai import OpenAI

from ..config import OPENAI_API_KEY, OPENAI_MODEL

logger = logging.getLogger(__name__)

SUGGESTION_COUNT = 3

STOCK_SUBJECTS = [
    "Safe childbirth: a complete approach to the motherhood journey",
    "Workshop invitation: comprehensive reproductive health care",
    "Workshop: comprehensive reproductive health care",
]

_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")

_client: Optional[OpenAI] = None


def get_openai_client() -> OpenAI:
    """Lazily build the OpenAI client."""
    global _client
    if _client is None:
        _client = OpenAI(api_key=OPENAI_API_KEY)
    return _client


def _parse_suggestions(text: str) -> List[str]:
    suggestions = []
    for line in text.splitlines():
        line = _LIST_MARKER.sub("", line).strip().strip('"').strip()
        if line:
            suggestions.append(line)
    return suggestions[:SUGGESTION_COUNT]


def suggest_subjects(tone: Optional[str] = None) -> List[str]:
    if not OPENAI_API_KEY:
        return list(STOCK_SUBJECTS)

    tone = (tone or "professional").strip() or "professional"
    try:
        response = get_openai_client().chat.completions.create(
            model=OPENAI_MODEL,
            messages=[
                {
                    "role": "system",
                    "content": (
                        "You write subject lines for marketing emails. "
                        f"Reply with exactly {SUGGESTION_COUNT} subject lines, one per line, "
                        "without numbering or quotes."
                    ),
                },
                {"role": "user", "content": f"Tone: {tone}"},
            ],
        )
        content = response.choices[0].message.content or ""
    except openai.OpenAIError as e:
        logger.warning("Subject suggestion request failed: %s", e)
        return list(STOCK_SUBJECTS)

    return _parse_suggestions(content) or list(STOCK_SUBJECTS)
