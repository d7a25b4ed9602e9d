"""
PROMPT ASSEMBLY
===============

Builds the system instruction for one relay call and the chat messages that
carry it to the gateway.

FLOW:
  1. resolve_language_name(tag): language tag -> display name (English fallback).
  2. build_system_prompt(context): fill the Zora template with the detected
     emotion, the language name and the server's current date/time.
  3. build_messages(system_prompt, message): system + user chat messages in the
     gateway's role/content format, via a LangChain ChatPromptTemplate.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from langchain_core.messages import convert_to_openai_messages
from langchain_core.prompts import ChatPromptTemplate

from config import (
    ASSISTANT_NAME,
    FALLBACK_LANGUAGE_NAME,
    LANGUAGE_NAMES,
    ZORA_SYSTEM_PROMPT_TEMPLATE,
)
from zora.models import Emotion
from zora.utils.time_info import TimeInformation


@dataclass(frozen=True)
class PromptContext:
    emotion: Emotion
    language_name: str
    current_date: str
    current_time: str
    current_year: int

    @classmethod
    def from_time_information(cls, emotion: Emotion, language_name: str, time_info: TimeInformation) -> "PromptContext":
        return cls(
            emotion=emotion,
            language_name=language_name,
            current_date=time_info.current_date,
            current_time=time_info.current_time,
            current_year=time_info.current_year,
        )


def resolve_language_name(language: Optional[str], table: Mapping[str, str] = LANGUAGE_NAMES) -> str:
    """Return the display name for a language tag; English for unknown or missing tags."""
    return table.get(language or "", FALLBACK_LANGUAGE_NAME)


def build_system_prompt(
    context: PromptContext,
    template: str = ZORA_SYSTEM_PROMPT_TEMPLATE,
    assistant_name: str = ASSISTANT_NAME,
) -> str:
    return template.format(
        assistant_name=assistant_name,
        current_date=context.current_date,
        current_time=context.current_time,
        current_year=context.current_year,
        emotion=context.emotion.value,
        language_name=context.language_name,
    )


def escape_curly_braces(text: str) -> str:
    """Double the braces so ChatPromptTemplate treats the text literally."""
    return text.replace("{", "{{").replace("}", "}}")


def build_messages(system_prompt: str, message: str) -> List[Dict[str, str]]:
    """Return [{"role": "system", ...}, {"role": "user", ...}] for the gateway."""
    prompt = ChatPromptTemplate.from_messages([
        ("system", escape_curly_braces(system_prompt)),
        ("human", "{question}"),
    ])
    return convert_to_openai_messages(prompt.format_messages(question=message))
