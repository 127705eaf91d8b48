"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Transcript display for user, assistant, and error messages
    - Busy indicator while a relay round-trip is pending
    - Connection issue banner and clear-chat control

Conversation state lives in ConversationController; the page only
subscribes to its changes and re-renders.
"""
