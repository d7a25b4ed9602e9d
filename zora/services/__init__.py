"""
SERVICES PACKAGE
=================

Business logic lives here. The API layer (zora.main) calls these services;
they don't handle HTTP routing, only the relay flow and reply interpretation.

MODULES:
    emotion        - classify(text): keyword lexicons -> Emotion
    music          - extract_music(text): "🎵 Title by Artist" -> MusicCue
    prompt         - language lookup, system prompt, gateway messages
    gateway_client - the single outbound chat-completions call
    relay_service  - RelayService.handle(request): the whole pipeline
"""
