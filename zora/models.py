"""
DATA MODELS MODULE
==================

This file defines the Pydantic models used for the relay's requests and
responses and for the client-side conversation record. FastAPI uses these to
validate incoming JSON and to serialize responses; the client session uses
them to parse relay replies and to keep its history.

MODELS:
  Emotion         - The five mood labels driving the avatar and the voice tone.
  MusicCue        - Song suggestion parsed out of a reply (title, artist, search query).
  RelayRequest    - Body of POST /zora-chat (message + optional emotion and language).
  RelayResponse   - Body returned on success (reply text, new emotion, optional music).
  ErrorResponse   - Body returned on any failure: {"error": "..."}.
  ChatTurn        - One message in a conversation (role, content, emotion, music).
  VoiceParams     - Speech-synthesis rate/pitch/volume for an emotion.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

YOUTUBE_SEARCH_URL = "https://www.youtube.com/results?search_query={query}"
YOUTUBE_EMBED_URL = "https://www.youtube.com/embed?listType=search&list={query}&autoplay=1"


class Emotion(str, Enum):
    HAPPY = "happy"
    CALM = "calm"
    EXCITED = "excited"
    THOUGHTFUL = "thoughtful"
    SAD = "sad"


DEFAULT_EMOTION = Emotion.CALM


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


# ==============================================================================
# MUSIC
# ==============================================================================

class MusicCue(BaseModel):
    """
    A song suggestion found in an assistant reply.

    search_query is the URL-component-encoded "title artist" string, ready to
    drop into a search or embed link. Cues are never modified after creation.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    artist: str
    search_query: str = Field(..., alias="searchQuery")

    @property
    def search_url(self) -> str:
        """Link to the video search results for this song."""
        return YOUTUBE_SEARCH_URL.format(query=self.search_query)

    @property
    def embed_url(self) -> str:
        """Autoplaying embed of the first search result (informational link only)."""
        return YOUTUBE_EMBED_URL.format(query=self.search_query)


# ==============================================================================
# RELAY REQUEST/RESPONSE MODELS
# ==============================================================================

class RelayRequest(BaseModel):
    """
    Request body for POST /zora-chat.

    - message: The user's utterance. Optional at the schema level so that a
      missing or blank message reaches the relay and is reported as
      InvalidRequest in the {"error": ...} envelope instead of a 422.
    - emotion: Mood detected on the client; defaults to calm.
    - language: Language tag from the language table; unknown tags mean English.
    """
    message: Optional[str] = None
    emotion: Optional[Emotion] = None
    language: Optional[str] = None


class RelayResponse(BaseModel):
    """Response body for a successful POST /zora-chat."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    emotion: Emotion
    music: Optional[MusicCue] = None


class ErrorResponse(BaseModel):
    error: str


# ==============================================================================
# CLIENT-SIDE CONVERSATION MODELS
# ==============================================================================

class ChatTurn(BaseModel):
    """
    A single message in a conversation (user or assistant).
    Appended in send order; no timestamp, order defines chronology.
    """
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    emotion: Optional[Emotion] = None
    music: Optional[MusicCue] = None


class VoiceParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: float = 1.0
    pitch: float = 1.0
    volume: float = 0.9
