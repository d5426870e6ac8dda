"""
Tests for the python-osc host.

Network classes are mostly replaced with mocks; dispatch, parameter and
value stores are exercised directly. Restarts under traffic use real
loopback sockets.
"""

import socket
import threading
import time
from unittest.mock import MagicMock

import pytest
from pythonosc import udp_client

from eos_osc_lib import host as host_module
from eos_osc_lib.host import OscHost
from eos_osc_lib.session import EosSession


@pytest.fixture
def fake_network(monkeypatch):
    """Replace the UDP client and server with mocks."""
    client_cls = MagicMock(name="SimpleUDPClient")
    server_cls = MagicMock(name="BlockingOSCUDPServer")
    monkeypatch.setattr(host_module.udp_client, "SimpleUDPClient", client_cls)
    monkeypatch.setattr(host_module.osc_server, "BlockingOSCUDPServer", server_cls)
    return client_cls, server_cls


def free_udp_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestDispatch:
    """Pattern registration and inbound dispatch."""

    def test_matching_handler_called(self):
        host = OscHost()
        calls = []
        host.register("/eos/out/*/cue/text", lambda address, args: calls.append((address, args)))

        host.dispatch("/eos/out/active/cue/text", ["1/1 Label 0:01 5"])
        host.dispatch("/eos/out/active/cue/1/1", [])

        assert calls == [("/eos/out/active/cue/text", ["1/1 Label 0:01 5"])]

    def test_handler_called_once_for_overlapping_patterns(self):
        host = OscHost()
        calls = []

        def handler(address, args):
            calls.append(address)

        host.register("/eos/out/pending/cue", handler)
        host.register("/eos/out/*/cue", handler)
        host.dispatch("/eos/out/pending/cue", [])

        assert calls == ["/eos/out/pending/cue"]

    def test_handler_error_does_not_stop_dispatch(self):
        host = OscHost()
        calls = []

        def broken(address, args):
            raise RuntimeError("boom")

        host.register("/eos/out/cmd", broken)
        host.register("/eos/*/cmd", lambda address, args: calls.append(address))
        host.dispatch("/eos/out/cmd", ["x"])

        assert calls == ["/eos/out/cmd"]

    def test_matches(self):
        host = OscHost()
        assert host.matches("/eos/out/active/cue/1/2", "/eos/out/*/cue/*/*")
        assert not host.matches("/eos/out/active/cue", "/eos/out/*/cue/*/*")


class TestStores:
    """Parameter and value stores."""

    def test_defaults_and_overrides(self):
        host = OscHost({"startChannel": 11})
        assert host.get_parameter("startChannel") == 11
        assert host.get_parameter("user") == "console"
        assert host.get_parameter("missing") is None

    def test_parameter_listener(self):
        host = OscHost()
        changes = []
        host.add_parameter_listener(lambda name, value: changes.append((name, value)))

        host.set_parameter("userID", 5)
        host.set_parameter("userID", 5)

        assert changes == [("userID", 5)]

    def test_value_listener(self):
        host = OscHost()
        changes = []
        host.add_value_listener(lambda name, value: changes.append((name, value)))

        host.set_value("commandLine", "LIVE:")

        assert host.get_value("commandLine") == "LIVE:"
        assert host.values == {"commandLine": "LIVE:"}
        assert changes == [("commandLine", "LIVE:")]


class TestTransport:
    """Start, send and stop with mocked sockets."""

    def test_send_before_start_is_dropped(self, fake_network):
        client_cls, _ = fake_network
        OscHost().send("/eos/subscribe", 1)
        client_cls.return_value.send_message.assert_not_called()

    def test_start_and_send(self, fake_network):
        client_cls, server_cls = fake_network
        host = OscHost({"remoteHost": "10.0.0.2", "remotePort": 8000, "localPort": 8001})

        assert host.start()
        host.send("/eos/user", -1)
        host.stop()

        client_cls.assert_called_once_with("10.0.0.2", 8000)
        assert server_cls.call_args[0][0] == ("0.0.0.0", 8001)
        client_cls.return_value.send_message.assert_called_once_with("/eos/user", [-1])
        server_cls.return_value.shutdown.assert_called_once()
        assert not host.is_running()

    def test_local_sends_to_loopback(self, fake_network):
        client_cls, _ = fake_network
        host = OscHost({"remoteHost": "10.0.0.2", "local": True})
        host.start()
        host.stop()
        assert client_cls.call_args[0][0] == "127.0.0.1"

    def test_start_failure(self, fake_network):
        _, server_cls = fake_network
        server_cls.side_effect = OSError("address in use")
        host = OscHost()
        assert not host.start()
        assert not host.is_running()

    def test_send_error_logged(self, fake_network):
        client_cls, _ = fake_network
        client_cls.return_value.send_message.side_effect = OSError("unreachable")
        host = OscHost()
        host.start()
        host.send("/eos/subscribe", 1)
        host.stop()

    def test_endpoint_change_restarts_transport(self, fake_network):
        client_cls, _ = fake_network
        host = OscHost()
        host.start()
        host.set_parameter("remoteHost", "10.0.0.9")
        host.stop()
        assert client_cls.call_args_list[-1][0] == ("10.0.0.9", 8000)

    def test_send_only_start_binds_nothing(self, fake_network):
        client_cls, server_cls = fake_network
        host = OscHost({"remoteHost": "10.0.0.2"})

        assert host.start(receive=False)
        host.send("/eos/macro/fire", 5)
        host.set_parameter("remotePort", 9000)
        host.stop()

        server_cls.assert_not_called()
        assert client_cls.call_args_list[-1][0] == ("10.0.0.2", 9000)
        client_cls.return_value.send_message.assert_called_once_with("/eos/macro/fire", [5])


class TestWithSession:
    """End to end through the host's dispatch."""

    def test_session_round_trip(self, fake_network):
        client_cls, _ = fake_network
        host = OscHost()
        session = EosSession(host)
        host.add_parameter_listener(session.on_parameter_changed)
        host.start()
        session.start()

        host.dispatch("/eos/out/active/cue/text", ["2/7 Sunrise 0:10 40%"])
        host.set_parameter("user", "background")
        host.stop()

        assert host.get_value("activeCueLabel") == "Sunrise"
        assert host.get_value("activeCuePercent") == 40
        sent = [c.args for c in client_cls.return_value.send_message.call_args_list]
        assert sent == [("/eos/user", [-1]), ("/eos/subscribe", [1]), ("/eos/user", [0])]


class TestLiveRestart:
    """Endpoint changes while the console keeps streaming."""

    def test_endpoint_changes_under_inbound_traffic(self):
        port = free_udp_port()
        host = OscHost({"localPort": port}, bind_host="127.0.0.1")
        host.register("/eos/out/cmd", lambda address, args: time.sleep(0.001))
        assert host.start()

        done = threading.Event()

        def flood():
            sender = udp_client.SimpleUDPClient("127.0.0.1", port)
            while not done.is_set():
                try:
                    sender.send_message("/eos/out/cmd", ["Chan 1 @ 50"])
                except OSError:
                    pass

        flooders = [threading.Thread(target=flood, daemon=True) for _ in range(3)]
        for thread in flooders:
            thread.start()

        try:
            for n in range(20):
                change = threading.Thread(
                    target=host.set_parameter,
                    args=("remoteHost", f"10.0.0.{n + 1}"),
                    daemon=True,
                )
                change.start()
                change.join(timeout=3.0)
                assert not change.is_alive(), f"endpoint change {n} did not return"
        finally:
            done.set()
            for thread in flooders:
                thread.join(timeout=1.0)
            host.stop()

        assert host.config.remote_host == "10.0.0.20"
