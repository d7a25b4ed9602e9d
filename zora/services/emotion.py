"""
Keyword-based emotion detection for assistant replies.

The detected label is sent back with the reply so the client can re-render the
avatar and pick a voice preset for the next utterance.
"""

import re
from typing import Iterable, Sequence, Tuple

from config import EMOTION_LEXICONS
from zora.models import DEFAULT_EMOTION, Emotion


def compile_lexicons(lexicons: Iterable[Tuple[str, Sequence[str]]]) -> Tuple[Tuple[Emotion, re.Pattern], ...]:
    """Turn (label, keywords) groups into (Emotion, case-insensitive alternation) pairs, keeping order."""
    return tuple(
        (Emotion(label), re.compile("|".join(re.escape(word) for word in words), re.IGNORECASE))
        for label, words in lexicons
    )


DEFAULT_RULES = compile_lexicons(EMOTION_LEXICONS)


def classify(text: str, rules: Sequence[Tuple[Emotion, re.Pattern]] = DEFAULT_RULES) -> Emotion:
    """Return the emotion of the first rule group with a match in `text`, or calm."""
    for emotion, pattern in rules:
        if pattern.search(text or ""):
            return emotion
    return DEFAULT_EMOTION
