"""Chat relay endpoint.

Validates the incoming query and hands it to the upstream relay.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.models.schemas import ChatQuery
from src.relay.upstream import MISSING_QUERY_MESSAGE, UpstreamRelay, error_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


def get_relay(request: Request) -> UpstreamRelay:
    """Return the relay instance the app factory attached to this app."""
    return request.app.state.relay


async def _parse_query(request: Request) -> str | None:
    """Extract the query string from the request body.

    Returns:
        The query, or None if the body is not JSON or lacks a non-empty string query.
    """
    try:
        payload = ChatQuery.model_validate(await request.json())
    except (ValidationError, ValueError):
        return None
    return payload.query


@router.post("/chat")
async def chat(request: Request, relay: UpstreamRelay = Depends(get_relay)) -> JSONResponse:
    """Relay a chat query to the debugging assistant backend.

    Responses:
        200: Upstream JSON body verbatim, or {"answer": text}.
        400: Missing, empty, or non-string query.
        500: Backend URL not configured, or upstream unreachable.
        502: Upstream returned an error status.
    """
    query = await _parse_query(request)
    if query is None:
        logger.info("Rejected chat request without a usable 'query' field")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_payload(MISSING_QUERY_MESSAGE),
        )

    outcome = await relay.relay(query)
    return JSONResponse(status_code=outcome.status_code, content=outcome.content)
