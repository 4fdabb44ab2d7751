"""In-memory registry of live duplex connections, one per user."""

import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..utils.logger import get_app_logger


def timestamp() -> str:
    return datetime.utcnow().isoformat()


class Connection:
    """
    A registered duplex connection.

    ``transport`` is anything with async ``send_json`` and ``close`` (a
    FastAPI ``WebSocket`` in production). ``is_alive`` is cleared by each
    heartbeat sweep and set again by any inbound frame.
    """

    def __init__(self, user_id: int, transport: Any):
        self.user_id = user_id
        self.transport = transport
        self.is_alive = True
        self.logger = get_app_logger()

    def mark_alive(self):
        self.is_alive = True

    async def send(self, payload: Dict[str, Any]) -> bool:
        try:
            await self.transport.send_json(payload)
            return True
        except Exception as e:
            self.logger.warning(f"Failed to send to user {self.user_id}: {e}")
            return False

    async def terminate(self):
        try:
            await self.transport.close()
        except Exception as e:
            self.logger.debug(f"Close failed for user {self.user_id}: {e}")


class ConnectionRegistry:
    """Keyed map of user id to connection with last-writer-wins registration."""

    def __init__(self):
        self._connections: Dict[int, Connection] = {}
        self.logger = get_app_logger()

    def register(self, user_id: int, connection: Connection) -> Optional[Connection]:
        """
        Register a connection for a user, replacing any existing one.

        Returns:
            The replaced connection, or None
        """
        previous = self._connections.get(user_id)
        self._connections[user_id] = connection
        if previous is not None and previous is not connection:
            self.logger.info(f"Replaced existing connection for user {user_id}")
            return previous
        self.logger.info(f"Registered connection for user {user_id}")
        return None

    def deregister(self, user_id: int, connection: Optional[Connection] = None) -> bool:
        """
        Remove a user's connection.

        When ``connection`` is given, the entry is removed only if it is still
        that connection, so a stale socket closing late cannot evict its
        replacement.
        """
        current = self._connections.get(user_id)
        if current is None:
            return False
        if connection is not None and current is not connection:
            return False
        del self._connections[user_id]
        self.logger.info(f"Deregistered connection for user {user_id}")
        return True

    def get(self, user_id: int) -> Optional[Connection]:
        return self._connections.get(user_id)

    def is_current(self, user_id: int, connection: Connection) -> bool:
        return self._connections.get(user_id) is connection

    def is_user_connected(self, user_id: int) -> bool:
        return user_id in self._connections

    def connected_users(self) -> List[int]:
        return list(self._connections.keys())

    def count(self) -> int:
        return len(self._connections)

    async def send_to_user(self, user_id: int, payload: Dict[str, Any]) -> bool:
        connection = self._connections.get(user_id)
        if connection is None:
            return False
        return await connection.send(payload)

    async def broadcast(self, payload: Dict[str, Any]) -> int:
        """Send a payload to every connection; returns how many sends succeeded."""
        delivered = 0
        for connection in list(self._connections.values()):
            if await connection.send(payload):
                delivered += 1
        return delivered

    async def sweep(self) -> List[int]:
        """
        Run one heartbeat tick.

        Connections that stayed silent since the previous tick are terminated
        and removed. The rest are marked not-alive and sent a ping probe.

        Returns:
            User ids removed in this tick
        """
        removed = []
        for user_id, connection in list(self._connections.items()):
            if not connection.is_alive:
                self.logger.info(f"Connection for user {user_id} missed heartbeat, terminating")
                self.deregister(user_id, connection)
                await connection.terminate()
                removed.append(user_id)
                continue

            connection.is_alive = False
            await connection.send({"type": "ping", "timestamp": timestamp()})

        return removed

    async def close_all(self):
        for user_id, connection in list(self._connections.items()):
            self.deregister(user_id, connection)
            await connection.terminate()
        self.logger.info("All connections closed")


class HeartbeatMonitor:
    """Runs ``registry.sweep()`` every ``interval`` seconds in a background task."""

    def __init__(self, registry: ConnectionRegistry, interval: float = 30.0):
        self.registry = registry
        self.interval = interval
        self.logger = get_app_logger()
        self._task: Optional[asyncio.Task] = None

    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.is_running():
            return
        self._task = asyncio.create_task(self._run())
        self.logger.info(f"Heartbeat monitor started (interval: {self.interval}s)")

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self.logger.info("Heartbeat monitor stopped")

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval)
            try:
                removed = await self.registry.sweep()
                if removed:
                    self.logger.info(f"Heartbeat removed {len(removed)} dead connection(s)")
            except Exception as e:
                self.logger.error(f"Heartbeat sweep failed: {e}")
