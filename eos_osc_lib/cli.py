"""
Eos OSC Library - CLI Application

Sends single actions to an Eos console or listens to its status feed.

Usage:
    python -m eos_osc_lib --remote-host 10.0.0.2 listen
    python -m eos_osc_lib value 0-7 0.75
    python -m eos_osc_lib gradient 0 11 --from 1,0,0 --to 0,0,1
    python -m eos_osc_lib point 0 10 --position 0.5 --size 0.2 --value 1.0
"""

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DEFAULT_CONFIG_PATH, load_config, save_config
from .host import OscHost
from .model import Color, Selection
from .profiles import (
    PARAM_USER, PARAM_USER_ID, PARAM_START_CHANNEL, PARAM_LOCAL,
    PARAM_REMOTE_HOST, PARAM_LOCAL_PORT, PARAM_REMOTE_PORT, PARAM_PROFILE,
    PROFILES,
)
from .session import EosSession

logger = logging.getLogger(__name__)


# =============================================================================
# ARGUMENT TYPES
# =============================================================================

def parse_selection(text: str) -> Selection:
    """
    Parse "all", "5" or "0-7" (ids are zero-based).

    Raises:
        argparse.ArgumentTypeError: on anything else
    """
    text = text.strip().lower()
    try:
        if text == "all":
            return Selection.all()
        if "-" in text:
            start, end = text.split("-", 1)
            return Selection.range(int(start), int(end))
        return Selection.one(int(text))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid selection '{text}' (use all, N or N-M)"
        ) from None


def parse_color(text: str) -> Color:
    """Parse "r,g,b" with components 0.0-1.0."""
    try:
        red, green, blue = (float(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid color '{text}' (use r,g,b e.g. 1,0.5,0)"
        ) from None
    return Color(red, green, blue)


# =============================================================================
# PARSER
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eos-osc",
        description="Eos OSC bridge - send commands and watch cue status"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--config", type=Path, default=DEFAULT_CONFIG_PATH,
        help=f"Parameter file (default: {DEFAULT_CONFIG_PATH})"
    )
    parser.add_argument(
        "--save", action="store_true",
        help="Save the effective parameters back to the config file"
    )
    parser.add_argument("--profile", choices=sorted(PROFILES), help="Protocol profile")
    parser.add_argument("--remote-host", help="Console address")
    parser.add_argument("--remote-port", type=int, help="Console OSC receive port")
    parser.add_argument("--local-port", type=int, help="Local OSC receive port")
    parser.add_argument(
        "--local", action="store_true", default=None,
        help="Send to 127.0.0.1 instead of the remote host"
    )
    parser.add_argument("--start-channel", type=int, help="First console channel (offset)")
    parser.add_argument(
        "--user", choices=["console", "background", "explicit"],
        help="Eos user to operate as"
    )
    parser.add_argument("--user-id", type=int, help="User id for --user explicit")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("listen", help="Print command line and cue status until interrupted")

    p = sub.add_parser("value", help="Set intensity")
    p.add_argument("selection", type=parse_selection)
    p.add_argument("value", type=float, help="0.0-1.0")

    p = sub.add_parser("color", help="Set color")
    p.add_argument("selection", type=parse_selection)
    p.add_argument("color", type=parse_color, help="r,g,b")

    p = sub.add_parser("blackout", help="Zero color and intensity")
    p.add_argument("selection", type=parse_selection)

    p = sub.add_parser("gradient", help="Color gradient across a channel range")
    p.add_argument("start", type=int)
    p.add_argument("end", type=int)
    p.add_argument("--from", dest="color_a", type=parse_color, required=True)
    p.add_argument("--to", dest="color_b", type=parse_color, required=True)

    p = sub.add_parser("point", help="Point effect across a channel range")
    p.add_argument("start", type=int)
    p.add_argument("end", type=int)
    p.add_argument("--position", type=float, default=0.5)
    p.add_argument("--size", type=float, default=0.2)
    p.add_argument("--fade", type=float, default=1.0)
    payload = p.add_mutually_exclusive_group(required=True)
    payload.add_argument("--value", type=float)
    payload.add_argument("--color", type=parse_color)

    p = sub.add_parser("macro", help="Fire a macro")
    p.add_argument("number", type=int)

    p = sub.add_parser("cmd", help="Send raw command line text")
    p.add_argument("text")
    p.add_argument("--no-terminate", action="store_true", help="Do not append #")
    p.add_argument("--append", action="store_true", help="Keep the existing command line")

    return parser


def parameters_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Load the config file and overlay command line options."""
    parameters = load_config(args.config)
    overrides = {
        PARAM_PROFILE: args.profile,
        PARAM_REMOTE_HOST: args.remote_host,
        PARAM_REMOTE_PORT: args.remote_port,
        PARAM_LOCAL_PORT: args.local_port,
        PARAM_LOCAL: args.local,
        PARAM_START_CHANNEL: args.start_channel,
        PARAM_USER: args.user,
        PARAM_USER_ID: args.user_id,
    }
    parameters.update({k: v for k, v in overrides.items() if v is not None})
    return parameters


# =============================================================================
# COMMANDS
# =============================================================================

def run_action(session: EosSession, args: argparse.Namespace) -> None:
    """Dispatch a one-shot subcommand to the session."""
    if args.command == "value":
        session.set_value(args.selection, args.value)
    elif args.command == "color":
        session.set_color(args.selection, args.color)
    elif args.command == "blackout":
        session.blackout(args.selection)
    elif args.command == "gradient":
        session.gradient(args.start, args.end, args.color_a, args.color_b)
    elif args.command == "point":
        payload = args.color if args.color is not None else args.value
        session.point(args.start, args.end, args.position, args.size, args.fade, payload)
    elif args.command == "macro":
        session.fire_macro(args.number)
    elif args.command == "cmd":
        session.send_command(args.text, terminate=not args.no_terminate, clear=not args.append)


def listen(host: OscHost, session: EosSession) -> None:
    """Run until SIGINT/SIGTERM, printing every output value change."""
    stop = threading.Event()

    def on_value(name: str, value: Any) -> None:
        print(f"{name} = {value!r}", flush=True)

    def signal_handler(signum, frame):
        logger.info("Shutting down...")
        stop.set()

    host.add_value_listener(on_value)
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    session.start()
    logger.info("Listening for Eos output (Ctrl+C to quit)")
    stop.wait()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s"
    )

    parameters = parameters_from_args(args)
    if args.save:
        save_config(parameters, args.config)

    host = OscHost(parameters)
    session = EosSession(host)
    host.add_parameter_listener(session.on_parameter_changed)

    # One-shot commands only send, leaving localPort to a running listener
    if not host.start(receive=args.command == "listen"):
        return 1

    try:
        if args.command == "listen":
            listen(host, session)
        else:
            session.update_user()
            run_action(session, args)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        host.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
