"""Relay layer between the chat UI and the upstream debugging assistant.

Responsibilities:
    - Upstream configuration loaded once at startup
    - Building the upstream chat URL from the configured base
    - Forwarding queries and classifying the upstream outcome
    - Normalizing every failure into a JSON payload

Knows nothing about FastAPI routing; the API layer calls into it.
"""

from src.relay.config import RelayConfig, get_relay_config
from src.relay.upstream import RelayOutcome, UpstreamRelay, build_upstream_url

__all__ = [
    "RelayConfig",
    "RelayOutcome",
    "UpstreamRelay",
    "build_upstream_url",
    "get_relay_config",
]
