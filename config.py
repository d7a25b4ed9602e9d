"""
CONFIGURATION MODULE
====================

PURPOSE:
  Central place for all Zora settings: the AI gateway endpoint and model, the
  generation knobs, the language table, the emotion lexicons, and the Zora
  system prompt. Every table here is read-only; the pure helpers in
  zora.services take them as default arguments so tests can inject their own.

WHAT THIS FILE DOES:
  - Loads environment variables from .env (so the API key stays out of code).
  - Exposes AI_GATEWAY_URL, AI_MODEL, AI_TEMPERATURE, AI_MAX_TOKENS, AI_TIMEOUT_SECONDS.
  - Exposes get_api_key(): the gateway key is read at request time, never cached.
  - Defines LANGUAGE_NAMES (language tag -> display name, English fallback).
  - Defines the emotion lexicons, in priority order.
  - Holds the system prompt template that defines Zora's personality and the
    music suggestion format parsed by zora.services.music.

USAGE:
  Import what you need: `from config import AI_MODEL, LANGUAGE_NAMES, get_api_key`
"""

import os
import logging
from types import MappingProxyType
from dotenv import load_dotenv


# -----------------------------------------------------------------------------
# LOGGING
# -----------------------------------------------------------------------------
logger = logging.getLogger("Zora")


# -----------------------------------------------------------------------------
# ENVIRONMENT
# -----------------------------------------------------------------------------
# Load environment variables from .env file (if it exists).
load_dotenv()


# ============================================================================
# AI GATEWAY CONFIGURATION
# ============================================================================
# The gateway speaks the OpenAI chat-completions protocol. One request per
# user message: no retries, no streaming.

API_KEY_ENV_VAR = "LOVABLE_API_KEY"

AI_GATEWAY_URL = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1/chat/completions")
AI_MODEL = os.getenv("AI_MODEL", "google/gemini-2.5-flash")
AI_TEMPERATURE = 0.8
AI_MAX_TOKENS = 150

# Upper bound for the single blocking gateway call so a hung upstream cannot
# hold a request (and the client's AwaitingReply state) forever.
AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "30"))


def get_api_key() -> str:
    """
    Return the gateway API key from the environment, or "" if it is not set.

    Read on every request (not at import) so that rotating or removing the key
    takes effect without a restart, and so a missing key fails each request.
    """
    return os.getenv(API_KEY_ENV_VAR, "").strip()


# ============================================================================
# HTTP SERVER CONFIGURATION
# ============================================================================
CORS_ALLOW_ORIGINS = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]

# Base URL the terminal client (chat_cli.py) talks to.
RELAY_URL = os.getenv("ZORA_RELAY_URL", "http://localhost:8000/zora-chat")


# ============================================================================
# LANGUAGES
# ============================================================================
# Language tag -> name used in the prompt. Unknown tags fall back to English.

DEFAULT_LANGUAGE = "en-US"
FALLBACK_LANGUAGE_NAME = "English"

LANGUAGE_NAMES = MappingProxyType({
    "en-US": "English",
    "ta-IN": "Tamil",
    "hi-IN": "Hindi",
    "te-IN": "Telugu",
    "kn-IN": "Kannada",
    "ml-IN": "Malayalam",
    "mr-IN": "Marathi",
    "bn-IN": "Bengali",
    "es-ES": "Spanish",
    "fr-FR": "French",
})


# ============================================================================
# EMOTION LEXICONS
# ============================================================================
# Ordered: the first group with a keyword found in the text wins. Keywords are
# matched as substrings, case-insensitively ("hardly" counts as "hard").

EMOTION_LEXICONS = (
    ("excited", ("yay", "wow", "amazing", "awesome", "fantastic", "great",
                 "excited", "wonderful", "love", "happy")),
    ("sad", ("sad", "sorry", "worried", "concerned", "unfortunately",
             "difficult", "hard", "challenging")),
    ("thoughtful", ("think", "consider", "wonder", "interesting", "perhaps",
                    "maybe", "question", "curious")),
)


# ============================================================================
# FALLBACK MESSAGES
# ============================================================================
# Sent by the relay when the gateway answers 200 with no content.
EMPTY_REPLY_FALLBACK = "I'm here with you!"

# Shown by the client session when the relay call fails.
CLIENT_ERROR_FALLBACK = "I'm having trouble hearing you right now. Can you try again?"

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a moment."
QUOTA_EXHAUSTED_MESSAGE = "AI credits depleted. Please add more credits."


# ============================================================================
# ZORA PERSONALITY CONFIGURATION
# ============================================================================
# The "Music Format" block is a contract with zora.services.music.MUSIC_PATTERN:
# "🎵 <Title> by <Artist>" followed by " - <remark>". Change both together.

ASSISTANT_NAME = (os.getenv("ASSISTANT_NAME", "").strip() or "Zora")

ZORA_SYSTEM_PROMPT_TEMPLATE = """You are {assistant_name}, an intelligent AI assistant like Siri, Alexa, and ChatGPT combined. You're warm, helpful, and knowledgeable about everything.

Current Information:
- Date: {current_date}
- Time: {current_time}
- Year: {current_year}
- Current emotion detected: {emotion}
- Language: {language_name}

Core Capabilities:
1. **Answer ALL questions** - science, math, history, geography, current events, homework help
2. **Tell creative stories** - When asked for stories (like "tell me a story about India"), create engaging, educational narratives based on your knowledge
3. **Real-time information** - Provide current date, time, day of week
4. **General knowledge** - Countries, capitals, leaders, facts
5. **Music playback** - Suggest songs to play like Alexa

Response Guidelines:
- ALWAYS respond in {language_name} language
- Keep answers clear and age-appropriate
- Match emotional tone: energetic when they're excited, comforting when sad
- For factual questions: provide accurate, simple explanations
- For homework: help them understand, don't just give answers
- For stories: create engaging 4-6 sentence narratives based on the topic
- For time/date: use the current information provided above
- Show personality and warmth like a real assistant

Music Format:
- When asked to play music: "🎵 [Song Title] by [Artist]" + brief comment
- Example: "🎵 Twinkle Twinkle Little Star by Kids Songs - Let's sing along!"
- Always use popular, child-appropriate songs

Examples:
- "What time is it?" → "It's {current_time} right now!"
- "Tell me a story about India" → Create an engaging story about Indian culture, festivals, or history
- "Help with my math homework" → Guide them through the problem
- "Play a song" → Suggest and play a fun children's song"""
