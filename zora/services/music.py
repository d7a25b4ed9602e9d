"""
MUSIC CUE EXTRACTION
====================

Finds the song suggestion Zora is told to write as

    🎵 <Title> by <Artist> - <short remark>

and turns it into a MusicCue. The pattern mirrors the "Music Format" block of
config.ZORA_SYSTEM_PROMPT_TEMPLATE; if the model paraphrases the format there
is simply no cue and the reply is still delivered as plain text.

Matching rules:
  - Only the first 🎵 cue in the text is used.
  - The title is the shortest text before " by ".
  - The artist runs up to the first period, spaced dash (" - ", " – ", " — "),
    line break, or the end of the text. "Dr. Dre" therefore becomes "Dr".
"""

import re
from typing import Optional
from urllib.parse import quote

from zora.models import MusicCue

MUSIC_PATTERN = re.compile(
    r"🎵\s*(?P<title>.+?)\s+by\s+(?P<artist>.+?)\s*(?:\.|\s[-–—]\s|\n|$)",
    re.IGNORECASE,
)

# Characters encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_search_query(title: str, artist: str) -> str:
    """URL-component-encode "title artist" (spaces become %20)."""
    return quote(f"{title} {artist}", safe=_URI_COMPONENT_SAFE)


def extract_music(text: str) -> Optional[MusicCue]:
    """Return the first music cue in `text`, or None."""
    match = MUSIC_PATTERN.search(text or "")
    if not match:
        return None

    title = match.group("title").strip()
    artist = match.group("artist").strip()
    return MusicCue(title=title, artist=artist, search_query=encode_search_query(title, artist))
