# File: fellowship/core/websocket_manager.py
import asyncio
import json
import logging
import threading
from typing import Any, Dict, List, Optional, Set

from fastapi import WebSocket

from fellowship.core.config import settings
from fellowship.models.user import UserRole

logger = logging.getLogger(__name__)


class ClientConnection:
    """One open socket and the identity captured at handshake time.

    Outbound frames go through a bounded queue drained by a single writer task,
    so each socket sees frames in the order they were pushed.
    """

    def __init__(
        self,
        websocket: WebSocket,
        account_id: str,
        tenant_id: Optional[str],
        role: UserRole,
        queue_size: int = settings.WEBSOCKET_SEND_QUEUE_SIZE,
    ):
        self.websocket = websocket
        self.account_id = account_id
        self.tenant_id = tenant_id
        self.role = role
        self.channels: Set[str] = set()
        self.queue: "asyncio.Queue[Optional[Dict[str, Any]]]" = asyncio.Queue(maxsize=queue_size)
        self.closed = False

    @property
    def is_platform_admin(self) -> bool:
        return self.role == UserRole.PLATFORM_ADMIN

    def push(self, frame: Dict[str, Any]) -> bool:
        """Queue a frame; a closed or backed-up connection misses it."""
        if self.closed:
            return False
        try:
            self.queue.put_nowait(frame)
        except asyncio.QueueFull:
            logger.warning(f"Send queue full for user {self.account_id}, dropping frame")
            return False
        return True

    async def run_writer(self) -> None:
        while True:
            frame = await self.queue.get()
            try:
                if frame is None:
                    return
                await self.websocket.send_text(json.dumps(frame))
            except Exception as e:
                logger.info(f"Stopped writing to socket of user {self.account_id}: {e}")
                self.closed = True
                return
            finally:
                self.queue.task_done()

    def close(self) -> None:
        self.closed = True
        try:
            self.queue.put_nowait(None)
        except asyncio.QueueFull:
            pass


class ConnectionRegistry:
    """Channel fanout sets and the per-account connection index.

    Built once at startup and handed to handlers through ``app.state``.
    """

    def __init__(self, max_subscriptions: int = settings.WEBSOCKET_MAX_SUBSCRIPTIONS):
        self.max_subscriptions = max_subscriptions
        self._channels: Dict[str, Set[ClientConnection]] = {}
        self._accounts: Dict[str, Set[ClientConnection]] = {}
        self._lock = threading.Lock()

    def register(self, connection: ClientConnection) -> None:
        with self._lock:
            self._accounts.setdefault(connection.account_id, set()).add(connection)
        logger.info(f"Socket opened for user {connection.account_id}")

    def subscribe(self, connection: ClientConnection, channel_id: str) -> bool:
        """Add the connection to a channel's fanout set.

        Returns False when the connection is already at its subscription cap.
        Subscribing twice to the same channel is a no-op.
        """
        with self._lock:
            if channel_id in connection.channels:
                return True
            if len(connection.channels) >= self.max_subscriptions:
                return False
            self._channels.setdefault(channel_id, set()).add(connection)
            connection.channels.add(channel_id)
        return True

    def disconnect(self, connection: ClientConnection) -> None:
        with self._lock:
            for channel_id in connection.channels:
                members = self._channels.get(channel_id)
                if members is None:
                    continue
                members.discard(connection)
                if not members:
                    del self._channels[channel_id]
            connection.channels.clear()

            account_connections = self._accounts.get(connection.account_id)
            if account_connections is not None:
                account_connections.discard(connection)
                if not account_connections:
                    del self._accounts[connection.account_id]
        connection.close()
        logger.info(f"Socket closed for user {connection.account_id}")

    def subscribers(self, channel_id: str) -> List[ClientConnection]:
        with self._lock:
            return list(self._channels.get(channel_id, ()))

    def connections_for(self, account_id: str) -> List[ClientConnection]:
        with self._lock:
            return list(self._accounts.get(account_id, ()))

    def channel_ids(self) -> List[str]:
        with self._lock:
            return list(self._channels)

    def account_ids(self) -> List[str]:
        with self._lock:
            return list(self._accounts)

    async def broadcast(self, channel_id: str, payload: Dict[str, Any]) -> int:
        """Push a message frame to every live subscriber of ``channel_id``.

        Best effort: returns how many connections accepted the frame.
        """
        frame = {"type": "message", "payload": payload}
        delivered = 0
        for connection in self.subscribers(channel_id):
            if connection.push(frame):
                delivered += 1
        logger.debug(f"Broadcast to {delivered} connections in channel {channel_id}")
        return delivered
