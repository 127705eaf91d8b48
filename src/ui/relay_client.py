"""HTTP client the chat UI uses to reach the relay endpoint."""

import os

import httpx

from src.ui.conversation import RelayCallError

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
CHAT_ENDPOINT = "/api/chat"


async def fetch_answer(
    query: str,
    base_url: str = API_BASE_URL,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str | None:
    """POST a query to the relay and return the answer text.

    Args:
        query: Trimmed, non-empty user message.
        base_url: Where the relay is served.
        transport: Optional httpx transport override (used by tests).

    Returns:
        The ``answer`` field of the relay response, or None if absent.

    Raises:
        RelayCallError: On a non-success status, an invalid relay URL,
            a connection failure, or a response body that is not valid JSON.
    """
    try:
        async with httpx.AsyncClient(
            base_url=base_url, transport=transport, timeout=None
        ) as client:
            response = await client.post(CHAT_ENDPOINT, json={"query": query})
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise RelayCallError(str(e) or type(e).__name__) from e

    if not response.is_success:
        raise RelayCallError(f"API returned {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        raise RelayCallError(str(e)) from e

    if not isinstance(data, dict):
        return None
    answer = data.get("answer")
    return answer if isinstance(answer, str) else None
