"""Realtime fan-out over Socket.IO.

Connections authenticate with the same bearer token as HTTP, passed in the
handshake auth payload ``{"token": ...}``. Every broadcast goes to all
connected clients; there is no per-user filtering, no acknowledgement and no
history replay (clients fetch history over REST).
"""

import logging
from typing import Any

import socketio

from app.core.security import TokenError, decode_access_token

logger = logging.getLogger(__name__)

# Server -> client
MESSAGE_NEW = "message:new"
MESSAGE_DELETED = "message:deleted"
EVENT_UPDATED = "event:updated"
CONTRIBUTION_UPDATED = "contribution:updated"
PROFILE_UPDATED = "profile:updated"
PRESENCE_ONLINE = "presence:user-online"
PRESENCE_OFFLINE = "presence:user-offline"
TYPING_USER = "typing:user"
TYPING_STOP = "typing:stop"

# Client events echoed verbatim to every connection for cache invalidation
ECHOED_EVENTS = {
    "event:update": EVENT_UPDATED,
    "contribution:update": CONTRIBUTION_UPDATED,
    "profile:update": PROFILE_UPDATED,
}


def user_room(user_id: str) -> str:
    return f"user:{user_id}"


class RealtimeHub:
    """Owns the Socket.IO server, the connected-user map and the event handlers."""

    def __init__(self, cors_origins: list[str] | str = "*") -> None:
        self.sio = socketio.AsyncServer(
            async_mode="asgi",
            cors_allowed_origins=cors_origins,
            logger=False,
            engineio_logger=False,
        )
        # sid -> user id
        self.connections: dict[str, str] = {}
        self._register()

    def _register(self) -> None:
        self.sio.on("connect", self.on_connect)
        self.sio.on("disconnect", self.on_disconnect)
        self.sio.on("message:send", self.on_message_send)
        self.sio.on("typing:start", self.on_typing_start)
        self.sio.on("typing:stop", self.on_typing_stop)
        self.sio.on("presence:online", self.on_presence_online)
        for client_event, server_event in ECHOED_EVENTS.items():
            self.sio.on(client_event, self._make_echo(server_event))

    def asgi_app(self, other_asgi_app) -> socketio.ASGIApp:
        """Wrap the HTTP app; /socket.io goes to the hub, everything else to other_asgi_app."""
        return socketio.ASGIApp(self.sio, other_asgi_app=other_asgi_app)

    async def on_connect(self, sid: str, environ: dict, auth: Any = None) -> None:
        token = auth.get("token") if isinstance(auth, dict) else None
        if not token:
            logger.info("Realtime connection %s refused: no token", sid)
            raise ConnectionRefusedError("Authentication error")
        try:
            payload = decode_access_token(token)
        except TokenError:
            logger.info("Realtime connection %s refused: bad token", sid)
            raise ConnectionRefusedError("Authentication error")

        user_id = payload["sub"]
        self.connections[sid] = user_id
        await self.sio.enter_room(sid, user_room(user_id))
        logger.info("User connected: %s (sid=%s)", user_id, sid)

    async def on_disconnect(self, sid: str, *args: Any) -> None:
        user_id = self.connections.pop(sid, None)
        logger.info("User disconnected: %s (sid=%s)", user_id, sid)
        await self.sio.emit(PRESENCE_OFFLINE, {"userId": user_id}, skip_sid=sid)

    async def on_message_send(self, sid: str, data: Any = None) -> None:
        await self.broadcast(MESSAGE_NEW, data)

    async def on_typing_start(self, sid: str, data: Any = None) -> None:
        payload = {"userId": self.connections.get(sid)}
        if isinstance(data, dict):
            payload = {**data, **payload}
        await self.sio.emit(TYPING_USER, payload, skip_sid=sid)

    async def on_typing_stop(self, sid: str, data: Any = None) -> None:
        await self.sio.emit(TYPING_STOP, {"userId": self.connections.get(sid)}, skip_sid=sid)

    async def on_presence_online(self, sid: str, data: Any = None) -> None:
        await self.sio.emit(
            PRESENCE_ONLINE, {"userId": self.connections.get(sid)}, skip_sid=sid
        )

    def _make_echo(self, server_event: str):
        async def echo(sid: str, data: Any = None) -> None:
            await self.broadcast(server_event, data)

        return echo

    async def broadcast(self, event: str, data: Any) -> None:
        """Push to every connected client, best effort."""
        await self.sio.emit(event, data)

    async def emit_to_user(self, user_id: str, event: str, data: Any) -> None:
        """Push to all connections of one user (their per-user room)."""
        await self.sio.emit(event, data, room=user_room(user_id))

    def online_users(self) -> set[str]:
        return set(self.connections.values())
