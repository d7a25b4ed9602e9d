"""
CLIENT PACKAGE
==============

Client-side pieces of Zora (what the browser UI does, in Python):

  session - ConversationSession: history, current emotion, single-flight relay calls.
  speech  - Speech recognition/synthesis interfaces and emotion voice presets.
"""
