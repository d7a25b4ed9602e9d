"""
SPEECH CAPABILITIES
===================

Interfaces for the two speech capabilities the conversation session uses but
does not own: speech recognition (final transcripts) and speech synthesis
(speaking replies with an emotion's voice preset).

Both are event sources. Platform adapters subclass SpeechRecognizer and
SpeechSynthesizer, start the platform operation in _start()/_play(), and
report back through deliver_transcript() or on_start()/on_end()/on_error().
Nothing here blocks waiting on the platform.

When a platform has no such capability, the Unavailable* classes stand in and
the session runs text-only; detect_capabilities() produces the one-time notices.
"""

import logging
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Callable, List, NamedTuple, Optional, Sequence

from config import DEFAULT_LANGUAGE
from zora.exceptions import ClientCapabilityUnavailable
from zora.models import DEFAULT_EMOTION, Emotion, VoiceParams

logger = logging.getLogger("Zora")

VOICE_PRESETS = MappingProxyType({
    Emotion.EXCITED: VoiceParams(rate=1.2, pitch=1.3, volume=1.0),
    Emotion.HAPPY: VoiceParams(rate=1.1, pitch=1.2, volume=1.0),
    Emotion.SAD: VoiceParams(rate=0.9, pitch=0.8, volume=0.8),
    Emotion.THOUGHTFUL: VoiceParams(rate=0.95, pitch=1.0, volume=0.9),
    Emotion.CALM: VoiceParams(rate=1.0, pitch=1.0, volume=0.9),
})

VOICE_INPUT_UNSUPPORTED = "Voice input not supported. You can still type messages!"
VOICE_OUTPUT_UNSUPPORTED = "Voice output not supported. Replies will be shown as text."


def voice_params_for(emotion: Optional[Emotion]) -> VoiceParams:
    return VOICE_PRESETS.get(emotion or DEFAULT_EMOTION, VOICE_PRESETS[DEFAULT_EMOTION])


class Voice(NamedTuple):
    name: str
    lang: str


class Utterance(NamedTuple):
    text: str
    params: VoiceParams
    lang: str
    voice: Optional[Voice] = None


def select_voice(voices: Sequence[Voice], language: str) -> Optional[Voice]:
    """
    Pick a voice for a language tag.

    A voice whose lang starts with the tag's primary subtag ("ta" for "ta-IN")
    wins; otherwise an exact tag match; otherwise None and the synthesizer
    falls back to the tag itself.
    """
    primary = language.split("-")[0]
    for voice in voices:
        if voice.lang.startswith(primary):
            return voice
    for voice in voices:
        if voice.lang == language:
            return voice
    return None


# ==============================================================================
# SPEECH SYNTHESIS
# ==============================================================================

class SpeechSynthesizer(ABC):
    """Text-to-speech event source. is_speaking follows the start/end/error callbacks."""

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self.language = language
        self.is_speaking = False

    @property
    @abstractmethod
    def is_supported(self) -> bool:
        ...

    @abstractmethod
    def voices(self) -> List[Voice]:
        ...

    @abstractmethod
    def _play(self, utterance: Utterance) -> None:
        """Start playback; the platform reports progress via on_start/on_end/on_error."""

    @abstractmethod
    def _cancel(self) -> None:
        ...

    def speak(self, text: str, emotion: Optional[Emotion] = None) -> bool:
        """Speak `text` with the emotion's preset, interrupting anything already playing."""
        if not self.is_supported:
            return False

        self._cancel()
        voice = select_voice(self.voices(), self.language)
        self._play(Utterance(
            text=text,
            params=voice_params_for(emotion),
            lang=voice.lang if voice else self.language,
            voice=voice,
        ))
        return True

    def cancel(self) -> None:
        if self.is_supported:
            self._cancel()
        self.is_speaking = False

    def on_start(self) -> None:
        self.is_speaking = True

    def on_end(self) -> None:
        self.is_speaking = False

    def on_error(self, error: object = None) -> None:
        logger.warning("Speech synthesis error: %s", error)
        self.is_speaking = False


class UnavailableSynthesizer(SpeechSynthesizer):
    """Stand-in when the platform cannot speak: replies stay text-only."""

    @property
    def is_supported(self) -> bool:
        return False

    def voices(self) -> List[Voice]:
        return []

    def _play(self, utterance: Utterance) -> None:
        raise ClientCapabilityUnavailable("Speech synthesis is not available")

    def _cancel(self) -> None:
        pass


# ==============================================================================
# SPEECH RECOGNITION
# ==============================================================================

TranscriptListener = Callable[[str], None]


class SpeechRecognizer(ABC):
    """
    Speech-to-text event source keyed by a language tag.

    start() begins listening; some time later the platform calls
    deliver_transcript() with the final text, or stop() ends listening early.
    """

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self.language = language
        self.is_listening = False
        self._listeners: List[TranscriptListener] = []

    @property
    @abstractmethod
    def is_supported(self) -> bool:
        ...

    @abstractmethod
    def _start(self) -> None:
        ...

    @abstractmethod
    def _stop(self) -> None:
        ...

    def subscribe(self, listener: TranscriptListener) -> None:
        self._listeners.append(listener)

    def start(self) -> None:
        if not self.is_supported:
            raise ClientCapabilityUnavailable("Speech recognition is not available")
        if self.is_listening:
            return
        self.is_listening = True
        self._start()

    def stop(self) -> None:
        if self.is_listening:
            self._stop()
        self.is_listening = False

    def deliver_transcript(self, transcript: str) -> None:
        """Called by the platform with the final transcript; listening ends first."""
        self.is_listening = False
        for listener in list(self._listeners):
            listener(transcript)


class UnavailableRecognizer(SpeechRecognizer):
    """Stand-in when the platform has no speech recognition: typed input only."""

    @property
    def is_supported(self) -> bool:
        return False

    def _start(self) -> None:
        raise ClientCapabilityUnavailable("Speech recognition is not available")

    def _stop(self) -> None:
        pass


def detect_capabilities(recognizer: SpeechRecognizer, synthesizer: SpeechSynthesizer) -> List[str]:
    """Return the notices to show once at startup for missing speech capabilities."""
    notices = []
    if not recognizer.is_supported:
        notices.append(VOICE_INPUT_UNSUPPORTED)
    if not synthesizer.is_supported:
        notices.append(VOICE_OUTPUT_UNSUPPORTED)
    return notices
