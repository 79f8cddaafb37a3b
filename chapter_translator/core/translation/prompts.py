"""Frozen translation instructions and safety configuration.

These are not user-configurable: every chapter and title request uses them
verbatim.
"""

from typing import Dict, List, Tuple

CHAPTER_SYSTEM_INSTRUCTION = (
    "You are a strict translator. Do not modify the story, characters, or intent. "
    "Preserve all names of people, but translate techniques/props/places/organizations "
    "when readability benefits. Prioritize natural English flow while keeping the "
    "original's tone (humor, sarcasm, etc.). For idioms or culturally specific terms, "
    "translate literally if possible; otherwise, adapt with a footnote. Dialogue must "
    "match the original's bluntness or subtlety, including punctuation."
)

TITLE_SYSTEM_INSTRUCTION = (
    "Translate these novel titles accurately to English, preserving their original "
    "meaning and style. Return each translated title on a new line in the same order."
)

# Harm categories recognized by Gemini; content is never blocked from translation
HARM_CATEGORIES: Tuple[str, ...] = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
    "HARM_CATEGORY_CIVIC_INTEGRITY",
)

SAFETY_THRESHOLD = "BLOCK_NONE"

SAFETY_SETTINGS: Tuple[Tuple[str, str], ...] = tuple(
    (category, SAFETY_THRESHOLD) for category in HARM_CATEGORIES
)


def safety_settings_payload() -> List[Dict[str, str]]:
    """Safety settings in the list-of-dicts form LiteLLM passes to Gemini."""
    return [
        {"category": category, "threshold": threshold}
        for category, threshold in SAFETY_SETTINGS
    ]
