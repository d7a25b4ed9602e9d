"""
ZORA RELAY API
==============

This module defines the FastAPI application and its HTTP endpoints. The relay
is the only server-side piece of Zora: the browser (or chat_cli.py) sends the
user's message here, the relay asks the AI gateway once and returns the reply
with the emotion and music cue read out of it.

ENDPOINTS:
  GET     /            - Returns API name and list of endpoints.
  GET     /health      - Returns service status and whether the API key is set.
  POST    /zora-chat   - Relay one message: {message, emotion?, language?}
                         -> {message, emotion, music}
  OPTIONS /zora-chat   - CORS preflight (answered by the CORS middleware).

ERRORS:
  Every failure is returned as {"error": "..."}:
    429 - gateway rate limit
    402 - gateway credits exhausted
    500 - anything else (missing message, missing API key, gateway failure)

STATELESS:
  No sessions and no history on the server. The conversation lives in the
  client (zora.client.session.ConversationSession).
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import ASSISTANT_NAME, CORS_ALLOW_ORIGINS, get_api_key
from zora.exceptions import RelayError, UpstreamError
from zora.models import ErrorResponse, RelayRequest
from zora.services.relay_service import RelayService


# -----------------------------------------------------------------------------
# LOGGING
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("Zora")


# -----------------------------------------------------------------------------
# GLOBAL SERVICE REFERENCE
# -----------------------------------------------------------------------------
# Set during startup (lifespan). The service is stateless, so one instance is
# shared by all concurrent requests.
relay_service: RelayService = None


def get_relay_service() -> RelayService:
    global relay_service
    if relay_service is None:
        relay_service = RelayService()
    return relay_service


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


# -------------------------------------------------------------------------
# LIFESPAN (STARTUP / SHUTDOWN)
# -------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the relay service on startup and warn early if the API key is missing."""
    global relay_service

    logger.info("=" * 60)
    logger.info("%s relay - Starting Up...", ASSISTANT_NAME)
    logger.info("=" * 60)

    relay_service = RelayService()
    if not get_api_key():
        # Not fatal at startup: every request checks again and fails with 500.
        logger.warning("AI gateway API key is not set; /zora-chat will fail until it is configured")

    logger.info("%s relay is online and ready!", ASSISTANT_NAME)
    logger.info("Docs: http://localhost:8000/docs")
    logger.info("=" * 60)

    yield

    logger.info("Shutting down %s relay. Goodbye!", ASSISTANT_NAME)


# -------------------------------------------------------------------------
# FASTAPI APP AND CORS
# -------------------------------------------------------------------------
app = FastAPI(
    title=f"{ASSISTANT_NAME} API",
    description="Conversational companion relay to the AI gateway",
    lifespan=lifespan
)

# Any origin may call the relay, including the OPTIONS preflight.
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RelayError)
async def relay_exception_handler(request: Request, exc: RelayError):
    """Typed relay failures become {"error": ...} with their own status code."""
    logger.warning("Relay failed with %s (%s): %s", type(exc).__name__, exc.status_code, exc.message)
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Bad JSON or an unknown emotion: report it in the error envelope like every other failure."""
    logger.warning("Invalid request to %s: %s", request.url.path, exc.errors())
    return error_response(500, "Invalid request body")


# =========================================================================
# API ENDPOINTS
# =========================================================================

@app.get("/")
async def root():
    """Return the API name and a short description of each endpoint (for discovery)."""
    return {
        "message": f"{ASSISTANT_NAME} API",
        "endpoints": {
            "/zora-chat": "Relay a message to the AI gateway (POST)",
            "/health": "System health check"
        }
    }


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "api_key_configured": bool(get_api_key()),
    }


@app.post("/zora-chat")
def zora_chat(request: RelayRequest, service: RelayService = Depends(get_relay_service)):
    """
    Relay one message to the AI gateway.

    Runs in the threadpool (plain def) because the gateway call blocks.

    REQUEST BODY:
    {
        "message": "Play a happy song",
        "emotion": "calm",
        "language": "en-US"
    }

    RESPONSE:
    {
        "message": "🎵 Happy by Pharrell Williams - this will cheer you up!",
        "emotion": "excited",
        "music": {"title": "Happy", "artist": "Pharrell Williams", "searchQuery": "Happy%20Pharrell%20Williams"}
    }
    """
    try:
        response = service.handle(request)
    except RelayError:
        raise
    except Exception as e:
        # Wrapped so relay_exception_handler answers it inside the CORS middleware.
        logger.error(f"Error in zora-chat: {e}", exc_info=True)
        raise UpstreamError(str(e) or "An error occurred") from e
    return JSONResponse(content=response.model_dump(mode="json", by_alias=True))


# -------------------------------------------------------------------------
# STANDALONE RUN (python -m zora.main)
# -------------------------------------------------------------------------
def run():
    """Start the uvicorn server (same as run.py); used if someone does python -m zora.main"""
    uvicorn.run(
        "zora.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )

if __name__ == "__main__":
    run()
