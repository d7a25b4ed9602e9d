"""
ZORA TERMINAL CLIENT
====================

PURPOSE:
A command-line chat with Zora through a running relay. It drives the same
ConversationSession a browser UI would, text-only: a terminal has no speech
capabilities, so the startup notices say so and typing is the only input.

USAGE:
    python chat_cli.py

    Make sure the relay is running first: python run.py
    Set ZORA_RELAY_URL if it is not at http://localhost:8000/zora-chat.

COMMANDS:
    /lang <tag> - Reply language, e.g. /lang hi-IN (see config.LANGUAGE_NAMES)
    /history    - View this session's messages
    /clear      - Start a new session
    /quit or /exit - Exit
"""

from config import ASSISTANT_NAME, LANGUAGE_NAMES, RELAY_URL
from zora.client.session import ConversationSession, RelayClient


# -----------------------------------------------------------------------------
# UI HELPERS
# -----------------------------------------------------------------------------

def print_header():
    print("\n" + "="*60)
    print(f"🤖 {ASSISTANT_NAME} - Your friendly AI companion")
    print("="*60)
    print("\nCommands:")
    print("  /lang <tag> - Change reply language")
    print("  /history - See chat history")
    print("  /clear - Start new session")
    print("  /quit - Exit")
    print("="*60 + "\n")


def get_user_input():
    try:
        return input("\nYou: ").strip()
    except (KeyboardInterrupt, EOFError):
        return None


def new_session(language="en-US"):
    session = ConversationSession(RelayClient(RELAY_URL), language=language)
    for notice in session.notices:
        print(f"ℹ️  {notice}")
    return session


def format_history(session):
    """Number the session's turns, labelled "You" or the assistant name."""
    if not session.messages:
        return "No messages in this session"

    output = f"\n📜 Chat History ({len(session.messages)} messages):\n"
    output += "-" * 60 + "\n"
    for i, turn in enumerate(session.messages, 1):
        role = "You" if turn.role == "user" else ASSISTANT_NAME
        output += f"{i}. {role}: {turn.content}\n"
    output += "-" * 60 + "\n"
    return output


# -----------------------------------------------------------------------------
# MAIN LOOP
# -----------------------------------------------------------------------------

def main():
    print_header()
    session = new_session()

    while True:
        user_input = get_user_input()
        if user_input is None or user_input in ["/quit", "/exit"]:
            print("\n👋 Goodbye!")
            break

        if user_input == "/history":
            print(format_history(session))
            continue

        if user_input == "/clear":
            session = new_session(session.language)
            print("\n🔄 Session cleared. Starting fresh!")
            continue

        if user_input.startswith("/lang"):
            parts = user_input.split()
            if len(parts) != 2 or parts[1] not in LANGUAGE_NAMES:
                print(f"❌ Usage: /lang <tag>, one of: {', '.join(LANGUAGE_NAMES)}")
                continue
            session.set_language(parts[1])
            print(f"✅ Replies will be in {LANGUAGE_NAMES[parts[1]]}")
            continue

        if user_input.startswith("/"):
            print(f"❌ Unknown command: {user_input}")
            continue

        if not user_input:
            continue

        session.send(user_input)
        # On failure the session has already appended its fallback reply.
        turn = session.messages[-1]
        print(f"🤖 {ASSISTANT_NAME} ({session.current_emotion.value}): {turn.content}")
        if turn.music:
            print(f"🎵 {turn.music.title} by {turn.music.artist}: {turn.music.search_url}")


# Run the interactive loop when this file is executed (python chat_cli.py).
if __name__ == "__main__":
    main()
