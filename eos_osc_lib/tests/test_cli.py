"""
Tests for the command line front end.
"""

import argparse
import socket

import pytest

from eos_osc_lib.cli import (
    build_parser,
    parse_selection,
    parse_color,
    parameters_from_args,
    run_action,
    main,
)
from eos_osc_lib.model import Color, Selection
from eos_osc_lib.session import EosSession


class TestArgumentTypes:
    """Selection and color argument parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("all", Selection.all()),
        ("ALL", Selection.all()),
        ("5", Selection.one(5)),
        ("0-7", Selection.range(0, 7)),
        ("7-0", Selection.range(7, 0)),
    ])
    def test_selection(self, text, expected):
        assert parse_selection(text) == expected

    @pytest.mark.parametrize("text", ["", "x", "1-", "-1"])
    def test_bad_selection(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_selection(text)

    def test_color(self):
        assert parse_color("1,0.5,0") == Color(1.0, 0.5, 0.0)

    @pytest.mark.parametrize("text", ["1,0", "a,b,c", "1,0,0,0"])
    def test_bad_color(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_color(text)


class TestParameters:
    """Command line options overlay the config file."""

    def test_overrides(self, tmp_path):
        args = build_parser().parse_args([
            "--config", str(tmp_path / "none.yaml"),
            "--remote-host", "10.0.0.2",
            "--start-channel", "101",
            "--profile", "group",
            "listen",
        ])
        parameters = parameters_from_args(args)
        assert parameters["remoteHost"] == "10.0.0.2"
        assert parameters["startChannel"] == 101
        assert parameters["profile"] == "group"
        assert parameters["local"] is False

    def test_local_flag(self, tmp_path):
        args = build_parser().parse_args([
            "--config", str(tmp_path / "none.yaml"), "--local", "macro", "1",
        ])
        assert parameters_from_args(args)["local"] is True


class TestRunAction:
    """Subcommands reach the session."""

    def _run(self, host, argv):
        args = build_parser().parse_args(argv)
        run_action(EosSession(host), args)
        return host.sent

    def test_value(self, host):
        assert self._run(host, ["value", "0-3", "0.5"]) == [
            ("/eos/newcmd", ("Chan 1 Thru 4 @ 50#",)),
        ]

    def test_blackout(self, host):
        assert len(self._run(host, ["blackout", "all"])) == 2

    def test_gradient(self, host):
        sent = self._run(host, ["gradient", "0", "1", "--from", "1,0,0", "--to", "0,0,1"])
        assert ("/eos/color/rgb", (1.0, 0.0, 0.0)) in sent
        assert ("/eos/color/rgb", (0.0, 0.0, 1.0)) in sent

    def test_point_value(self, host):
        sent = self._run(host, ["point", "0", "2", "--position", "0", "--value", "1"])
        assert sent[0] == ("/eos/newcmd", ("Chan 1 @ 100#",))

    def test_macro(self, host):
        assert self._run(host, ["macro", "12"]) == [("/eos/macro/fire", (12,))]

    def test_cmd_append(self, host):
        assert self._run(host, ["cmd", "Chan 1", "--append", "--no-terminate"]) == [
            ("/eos/cmd", ("Chan 1",)),
        ]


class TestMain:
    """One-shot commands over real loopback sockets."""

    def test_one_shot_does_not_need_local_port(self, tmp_path):
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as listener, \
                socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as console:
            # Another process already listens on localPort
            listener.bind(("127.0.0.1", 0))
            console.bind(("127.0.0.1", 0))
            console.settimeout(2.0)
            local_port = listener.getsockname()[1]
            console_port = console.getsockname()[1]

            result = main([
                "--config", str(tmp_path / "none.yaml"),
                "--remote-host", "127.0.0.1",
                "--local-port", str(local_port),
                "--remote-port", str(console_port),
                "macro", "5",
            ])

            received = [console.recv(1024) for _ in range(2)]

        assert result == 0
        assert received[0].startswith(b"/eos/user")
        assert received[1].startswith(b"/eos/macro/fire")
