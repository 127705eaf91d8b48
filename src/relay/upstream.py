"""Upstream relay service for the debugging assistant backend.

Forwards a single chat query to the configured backend and maps its outcome
onto the normalized payloads the chat UI understands:

- Backend answers with JSON -> forwarded verbatim (200)
- Backend answers with text -> wrapped as {"answer": text} (200)
- Backend answers with an error status -> {"error": body, "status": code} (502)
- Backend unreachable -> {"error": "Server proxy error: ..."} (500)

Upstream failures are always reported as 502 whatever the backend's own
status was; the chat UI keys off that code.
"""

import json
import logging
from typing import Any

import httpx
from fastapi import status
from pydantic import BaseModel

from src.models.schemas import ChatAnswer, JsonBody, RelayError, TextBody, UpstreamBody
from src.relay.config import RelayConfig

logger = logging.getLogger(__name__)

CHAT_PATH = "/chat"
MISSING_QUERY_MESSAGE = "Missing 'query' field"
BACKEND_NOT_CONFIGURED_MESSAGE = "Backend URL not configured"
PROXY_ERROR_PREFIX = "Server proxy error: "


class RelayOutcome(BaseModel):
    """Status code and JSON content the relay endpoint responds with."""

    status_code: int
    content: Any


def error_payload(error: Any, upstream_status: int | None = None) -> dict[str, Any]:
    """Build a failure payload, omitting status when there is none."""
    payload = RelayError(error=error, status=upstream_status)
    if upstream_status is None:
        return payload.model_dump(exclude={"status"})
    return payload.model_dump()


def build_upstream_url(base_url: str) -> str:
    """Join the backend base URL and the chat path.

    Trailing slashes on the base are dropped so the result never
    contains a doubled separator.
    """
    return f"{base_url.rstrip('/')}{CHAT_PATH}"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name!r} in upstream body")


def read_body(response: httpx.Response) -> UpstreamBody:
    """Read the upstream body according to its declared content type.

    Raises:
        ValueError: If the body claims to be JSON but does not decode,
            or uses NaN or Infinity, which cannot be sent back as JSON.
    """
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        return JsonBody(value=json.loads(response.content, parse_constant=_reject_constant))
    return TextBody(value=response.text)


def classify(status_code: int, body: UpstreamBody) -> RelayOutcome:
    """Map an upstream status and body onto the relay's response."""
    if 200 <= status_code < 300:
        if isinstance(body, JsonBody):
            return RelayOutcome(status_code=status.HTTP_200_OK, content=body.value)
        return RelayOutcome(
            status_code=status.HTTP_200_OK,
            content=ChatAnswer(answer=body.value).model_dump(),
        )

    logger.warning(f"Upstream returned {status_code}; reporting as 502")
    return RelayOutcome(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=error_payload(body.value, status_code),
    )


class UpstreamRelay:
    """Forwards chat queries to the configured backend.

    Holds a reference to the startup configuration and reads the backend
    URL from it on every call. Keeps no per-request state; one HTTP client
    is opened and closed per round-trip.
    """

    def __init__(
        self,
        config: RelayConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the relay.

        Args:
            config: Relay configuration built at startup.
            transport: Optional httpx transport override (used by tests).
        """
        self._config = config
        self._transport = transport

    @property
    def config(self) -> RelayConfig:
        return self._config

    async def relay(self, query: str) -> RelayOutcome:
        """Forward a query upstream and normalize the result.

        Never raises: every failure is returned as a JSON-shaped outcome.

        Args:
            query: The user's non-empty query string.

        Returns:
            RelayOutcome with the status code and content to send back.
        """
        backend_url = self._config.backend_url
        if not backend_url:
            logger.error("BACKEND_URL is not configured; cannot relay chat query")
            return RelayOutcome(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_payload(BACKEND_NOT_CONFIGURED_MESSAGE),
            )

        url = build_upstream_url(backend_url)

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._config.upstream_timeout,
                follow_redirects=True,
            ) as client:
                response = await client.post(
                    url,
                    json={"query": query},
                    headers={"Content-Type": "application/json"},
                )
            body = read_body(response)
        except Exception as e:
            logger.error(f"Upstream request to {url} failed: {e}")
            return RelayOutcome(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_payload(f"{PROXY_ERROR_PREFIX}{e}"),
            )

        logger.info(f"Upstream {url} responded {response.status_code}")
        return classify(response.status_code, body)
