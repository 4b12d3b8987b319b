"""
Chat WebSocket endpoint.

Every frame, in both directions, is a JSON text frame:
    {"event": "<name>", "data": {...}}

Inbound:
- join-chat    {roomId}                       join a room (idempotent)
- leave-chat   {roomId}                       leave a room (idempotent)
- send-message {productId, content, buyerId}  persist and broadcast

Outbound:
- new-message  {id, senderId, content, createdAt}  to every member of the room
- error        {event, message}  to the sender only, when REALTIME_ERROR_EVENTS is on

The session gate runs before the upgrade is accepted: without a valid session
the socket is closed with 1008 and no event is ever read. After that, events
carry no credentials; authorization is by role inside each handler. With
REALTIME_JOIN_REQUIRES_PARTICIPANT on, joining a product/buyer room also
requires being one of its chat participants.

Events from one connection are handled one at a time, in arrival order.
Disconnecting removes the channel from every room it joined.
"""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from marketplace.application.commands.chats import (
    SendChatMessageCommand,
    SendChatMessageHandler,
)
from marketplace.application.queries.chats import (
    CheckRoomAccessHandler,
    CheckRoomAccessQuery,
)
from marketplace.config.logging_config import correlation_id_var
from marketplace.config.settings import get_config
from marketplace.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
)
from marketplace.domain.ports.realtime import Channel
from marketplace.domain.services.chat_roles import canonical_room_id, parse_room_id
from marketplace.domain.value_objects.user_id import UserId
from marketplace.infrastructure.realtime import InMemoryRoomRegistry
from marketplace.observability.metrics import (
    RejectionReason,
    decrement_ws_connections,
    increment_chat_messages,
    increment_chat_rejection,
    increment_ws_connections,
)
from marketplace.presentation.dependencies.auth import authenticate_websocket

logger = logging.getLogger(__name__)

JOIN_CHAT = "join-chat"
LEAVE_CHAT = "leave-chat"
SEND_MESSAGE = "send-message"
ERROR_EVENT = "error"

router = APIRouter(tags=["realtime"])


class WebSocketChannel(Channel):
    def __init__(self, websocket: WebSocket, user_id: UserId):
        self._websocket = websocket
        self.user_id = user_id

    async def send(self, event: str, data: dict[str, Any]) -> None:
        await self._websocket.send_json({"event": event, "data": data})


class RejectedEvent(Exception):
    """An inbound event that was dropped, with the reason label for metrics."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


def _parse_frame(raw: str) -> tuple[str, dict[str, Any]]:
    try:
        frame = json.loads(raw)
    except ValueError as e:
        raise RejectedEvent(RejectionReason.MALFORMED_FRAME, "Frame is not valid JSON") from e

    if not isinstance(frame, dict) or not isinstance(frame.get("event"), str):
        raise RejectedEvent(RejectionReason.MALFORMED_FRAME, "Frame has no event name")
    data = frame.get("data") or {}
    if not isinstance(data, dict):
        raise RejectedEvent(RejectionReason.MALFORMED_FRAME, "Frame data must be an object")
    return frame["event"], data


def _room_id_of(data: dict[str, Any]) -> str:
    room_id = data.get("roomId")
    if not isinstance(room_id, str) or not room_id.strip():
        raise RejectedEvent(RejectionReason.INVALID, "roomId is required")
    return canonical_room_id(room_id)


class ChatSocketSession:
    """Handles the events of one authenticated connection."""

    def __init__(
        self,
        websocket: WebSocket,
        channel: WebSocketChannel,
        registry: InMemoryRoomRegistry,
    ):
        self._websocket = websocket
        self._channel = channel
        self._registry = registry

    async def handle(self, raw: str) -> None:
        event: Optional[str] = None
        try:
            event, data = _parse_frame(raw)
            if event == JOIN_CHAT:
                await self._join(_room_id_of(data))
            elif event == LEAVE_CHAT:
                self._registry.leave(self._channel, _room_id_of(data))
            elif event == SEND_MESSAGE:
                await self._send_message(data)
            else:
                logger.debug(f"Ignoring unknown event {event!r}")
        except RejectedEvent as e:
            await self._reject(event, e.reason, e.message)
        except DomainValidationError as e:
            await self._reject(event, RejectionReason.INVALID, e.message)
        except EntityNotFoundError as e:
            await self._reject(event, RejectionReason.NOT_FOUND, str(e))
        except AccessDeniedError as e:
            await self._reject(event, RejectionReason.FORBIDDEN, str(e))
        except WebSocketDisconnect:
            raise
        except Exception:
            logger.exception(f"Unexpected error handling {event!r}")
            await self._reject(
                event, RejectionReason.ERROR, "Internal server error", log=False
            )

    async def _join(self, room_id: str) -> None:
        parsed = parse_room_id(room_id)
        if parsed is not None and get_config().REALTIME_JOIN_REQUIRES_PARTICIPANT:
            product_id, buyer_id = parsed
            container = self._websocket.app.state.dishka_container
            async with container() as request_container:
                handler = await request_container.get(CheckRoomAccessHandler)
                await handler.execute(
                    CheckRoomAccessQuery(
                        caller_id=self._channel.user_id,
                        product_id=product_id,
                        buyer_id=buyer_id,
                    )
                )
        self._registry.join(self._channel, room_id)

    async def _send_message(self, data: dict[str, Any]) -> None:
        container = self._websocket.app.state.dishka_container
        async with container() as request_container:
            handler = await request_container.get(SendChatMessageHandler)
            await handler.execute(
                SendChatMessageCommand(
                    sender_id=self._channel.user_id,
                    product_id=data.get("productId"),
                    content=data.get("content"),
                    buyer_id=data.get("buyerId"),
                )
            )
        increment_chat_messages()

    async def _reject(
        self, event: Optional[str], reason: str, message: str, log: bool = True
    ) -> None:
        increment_chat_rejection(reason)
        if log:
            logger.warning(f"Rejected {event!r} ({reason}): {message}")
        if get_config().REALTIME_ERROR_EVENTS:
            await self._channel.send(ERROR_EVENT, {"event": event, "message": message})


@router.websocket("/ws")
async def chat_socket(websocket: WebSocket):
    user_id = authenticate_websocket(websocket)
    if user_id is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    registry = await websocket.app.state.dishka_container.get(InMemoryRoomRegistry)
    await websocket.accept()

    correlation_id_var.set(f"ws-{user_id.value}")
    channel = WebSocketChannel(websocket, user_id)
    session = ChatSocketSession(websocket, channel, registry)
    increment_ws_connections()
    logger.info(f"User connected: {user_id.value}")

    try:
        while True:
            raw = await websocket.receive_text()
            await session.handle(raw)
    except WebSocketDisconnect:
        pass
    finally:
        rooms = registry.disconnect(channel)
        decrement_ws_connections()
        logger.info(f"User disconnected: {user_id.value} (left {len(rooms)} room(s))")
