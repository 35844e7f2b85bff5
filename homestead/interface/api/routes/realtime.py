"""Realtime chat WebSocket endpoint."""

import logfire
from fastapi import APIRouter, Query, WebSocket, status

from homestead.domain.service import JWTService
from homestead.interface.api.auth import extract_bearer
from homestead.realtime import ChatBroker

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def chat_socket(
    websocket: WebSocket,
    token: str | None = Query(default=None),
) -> None:
    """Authenticated realtime channel for chats.

    The token is read once, from the ``Authorization`` header or the
    ``token`` query parameter. Without a valid token the socket is closed
    with 1008 before it is accepted.

    Frames are ``{"event": ..., "data": {...}}``, sent as text or binary.
    Rejected or malformed frames get no reply and never close the socket.
    """
    broker: ChatBroker = websocket.app.state.chat_broker

    raw_token = extract_bearer(websocket.headers.get("authorization")) or token
    async with broker.container() as scope:
        jwt_service = await scope.get(JWTService)
        principal = jwt_service.get_principal(raw_token)

    if principal is None:
        logfire.info("Realtime handshake rejected", has_token=bool(raw_token))
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    connection = await broker.connect(principal, websocket.send_json)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            await broker.handle_frame(connection, raw)
    finally:
        await broker.disconnect(connection)
