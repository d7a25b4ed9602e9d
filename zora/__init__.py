"""
ZORA APPLICATION PACKAGE
========================

This directory is the main Python package for the Zora companion.

  from zora.main import app
  from zora.models import RelayRequest
  from zora.services.relay_service import RelayService

FILE STRUCTURE:
  zora/
    __init__.py   - This file; marks 'zora' as a package.
    main.py       - FastAPI app and HTTP endpoints (/zora-chat, /health, /).
    models.py     - Pydantic models for relay requests/responses and chat turns.
    exceptions.py - Error taxonomy mapped to HTTP statuses.
    services/     - Relay pipeline: emotion, music cue, prompt, gateway call.
    client/       - Conversation session and speech capability interfaces.
    utils/        - Helpers: current date/time for the LLM prompt.
"""
