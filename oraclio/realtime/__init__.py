"""Real-time delivery: connection registry and heartbeat."""

from .registry import Connection, ConnectionRegistry, HeartbeatMonitor, timestamp

__all__ = ["Connection", "ConnectionRegistry", "HeartbeatMonitor", "timestamp"]
