"""Unit tests for individual components in isolation.

Coverage:
    - relay/: Configuration, URL building, body reading, classification
    - ui/: Conversation transitions, controller, relay client

Uses fakes for the relay and upstream. Leverages pytest-check for
multiple assertions per test.
"""
