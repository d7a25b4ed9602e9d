"""
RUN SCRIPT - Start the Zora relay
=================================

PURPOSE:
  Single entry point to start the relay server that the Zora UI (or
  chat_cli.py) sends messages to.

WHAT IT DOES:
  - Imports the FastAPI app from zora.main.
  - Runs it with uvicorn on host 0.0.0.0 (accept connections from any interface) and port 8000.
  - reload=True means any change to Python files will restart the server (handy for development).

USAGE:
  python run.py

  Relay endpoint: POST http://localhost:8000/zora-chat
  API docs: http://localhost:8000/docs

NOTE:
  Before running, set LOVABLE_API_KEY in .env. Without it the server starts,
  but every /zora-chat request fails with a configuration error.
"""

import uvicorn

# ------------------------------------------------------------------------------
# ENTRY POINT
# ------------------------------------------------------------------------------
if __name__ == "__main__":
    uvicorn.run(
        "zora.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
