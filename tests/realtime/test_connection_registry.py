"""Tests for ConnectionRegistry and HeartbeatMonitor."""

import asyncio

import pytest

from oraclio.realtime.registry import Connection, ConnectionRegistry, HeartbeatMonitor


class FakeTransport:
    """Records frames; optionally fails on send."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.closed = False
        self.fail = fail

    async def send_json(self, payload):
        if self.fail:
            raise RuntimeError("socket gone")
        self.sent.append(payload)

    async def close(self):
        self.closed = True


def make_connection(user_id, fail=False):
    return Connection(user_id, FakeTransport(fail=fail))


@pytest.fixture
def registry():
    return ConnectionRegistry()


class TestConnectionRegistry:
    """Tests for ConnectionRegistry."""

    class TestRegister:
        """SUT: ConnectionRegistry.register"""

        def test_register_new(self, registry):
            connection = make_connection(1)
            assert registry.register(1, connection) is None
            assert registry.get(1) is connection
            assert registry.is_user_connected(1)

        def test_last_writer_wins(self, registry):
            first = make_connection(1)
            second = make_connection(1)
            registry.register(1, first)

            assert registry.register(1, second) is first
            assert registry.get(1) is second
            assert registry.count() == 1

    class TestDeregister:
        """SUT: ConnectionRegistry.deregister"""

        def test_stale_connection_does_not_evict_replacement(self, registry):
            first = make_connection(1)
            second = make_connection(1)
            registry.register(1, first)
            registry.register(1, second)

            assert registry.deregister(1, first) is False
            assert registry.get(1) is second

        def test_deregister_current(self, registry):
            connection = make_connection(1)
            registry.register(1, connection)
            assert registry.deregister(1, connection) is True
            assert not registry.is_user_connected(1)

        def test_deregister_unknown(self, registry):
            assert registry.deregister(42) is False

    class TestSend:
        """SUT: ConnectionRegistry.send_to_user / broadcast"""

        async def test_send_to_user(self, registry):
            connection = make_connection(1)
            registry.register(1, connection)

            assert await registry.send_to_user(1, {"type": "x"}) is True
            assert connection.transport.sent == [{"type": "x"}]

        async def test_send_to_absent_user(self, registry):
            assert await registry.send_to_user(9, {"type": "x"}) is False

        async def test_broadcast_counts_successes(self, registry):
            registry.register(1, make_connection(1))
            registry.register(2, make_connection(2, fail=True))
            registry.register(3, make_connection(3))

            assert await registry.broadcast({"type": "notice"}) == 2

    class TestSweep:
        """SUT: ConnectionRegistry.sweep"""

        async def test_first_tick_pings(self, registry):
            connection = make_connection(1)
            registry.register(1, connection)

            assert await registry.sweep() == []
            assert connection.is_alive is False
            assert connection.transport.sent[0]["type"] == "ping"
            assert "timestamp" in connection.transport.sent[0]

        async def test_silent_connection_removed_on_second_tick(self, registry):
            connection = make_connection(1)
            registry.register(1, connection)

            await registry.sweep()
            assert await registry.sweep() == [1]
            assert not registry.is_user_connected(1)
            assert connection.transport.closed

        async def test_activity_keeps_connection(self, registry):
            connection = make_connection(1)
            registry.register(1, connection)

            await registry.sweep()
            connection.mark_alive()
            assert await registry.sweep() == []
            assert registry.is_user_connected(1)

    async def test_close_all(self, registry):
        connections = [make_connection(1), make_connection(2)]
        for connection in connections:
            registry.register(connection.user_id, connection)

        await registry.close_all()

        assert registry.count() == 0
        assert all(c.transport.closed for c in connections)

    def test_connected_users(self, registry):
        registry.register(1, make_connection(1))
        registry.register(2, make_connection(2))
        assert sorted(registry.connected_users()) == [1, 2]


class TestHeartbeatMonitor:
    """Tests for HeartbeatMonitor."""

    async def test_removes_silent_connections(self, registry):
        registry.register(1, make_connection(1))
        monitor = HeartbeatMonitor(registry, interval=0.01)

        monitor.start()
        assert monitor.is_running()
        await asyncio.sleep(0.1)
        await monitor.stop()

        assert not monitor.is_running()
        assert not registry.is_user_connected(1)

    async def test_stop_without_start(self, registry):
        await HeartbeatMonitor(registry).stop()
