"""
Command Formatting

Builds Eos command-line text: numeric levels, color clauses and the
terminated command sends for each protocol profile.
"""

import logging
import math
from typing import List

from .model import Color, Effect, LogEffect, OscCommand, SendOscEffect
from .profiles import (
    CMD_ADDRESS,
    NEWCMD_ADDRESS,
    COMMAND_TERMINATOR,
    ProtocolProfile,
    DEFAULT_PROFILE,
)

logger = logging.getLogger(__name__)

# Auxiliary emitters zeroed alongside RGB so a blackout clears every emitter
OTHER_EMITTERS = ("Cyan", "Amber", "Indigo", "White")


def format_command(clause: str, action: str) -> str:
    """Join a selection clause and an action with a single space."""
    if not action:
        return clause
    return f"{clause} {action}"


def to_level(v: float) -> int:
    """
    Scale a normalized 0.0-1.0 value to an Eos 0-100 level.

    Rounds half up. Out-of-range input is clamped.
    """
    if v < 0.0 or v > 1.0:
        logger.warning(f"Level {v} outside 0.0-1.0, clamping")
        v = min(max(v, 0.0), 1.0)
    return int(math.floor(v * 100 + 0.5))


def format_level(level: int) -> str:
    """Pad single digit levels 1-9 to two digits; 0 stays "0"."""
    if 0 < level < 10:
        return f"0{level}"
    return str(level)


def format_value(v: float) -> str:
    """
    Format a normalized value for the command line.

    Example:
        format_value(0.0) -> "0"
        format_value(0.09) -> "09"
        format_value(0.5) -> "50"
        format_value(1.0) -> "100"
    """
    return format_level(to_level(v))


def color_clause(color: Color, include_other_emitters: bool = False) -> str:
    """
    Build "Red r Green g Blue b" with each channel on the 0-100 scale.

    Args:
        color: RGB color 0.0-1.0
        include_other_emitters: Also zero Cyan, Amber, Indigo and White

    Example:
        color_clause(Color(1.0, 0.05, 0.0)) -> "Red 100 Green 05 Blue 0"
    """
    clause = (
        f"Red {format_value(color.red)} "
        f"Green {format_value(color.green)} "
        f"Blue {format_value(color.blue)}"
    )
    if include_other_emitters:
        clause += "".join(f" {emitter} 0" for emitter in OTHER_EMITTERS)
    return clause


def send_command(
    text: str,
    profile: ProtocolProfile = DEFAULT_PROFILE,
    terminate: bool = True,
    clear: bool = True,
) -> List[Effect]:
    """
    Effects that send a command line to the console.

    Args:
        text: Command text without terminator
        profile: Dialect deciding the target address
        terminate: Append "#" so Eos executes the command
        clear: Clear the console command line first (split-address
            profiles send to /eos/newcmd instead of /eos/cmd)

    Returns:
        Log effect followed by the send effect
    """
    if terminate:
        text = text + COMMAND_TERMINATOR

    if profile.split_command_addresses and clear:
        return [
            LogEffect(f"New Command: {text}", "DEBUG"),
            SendOscEffect(OscCommand(NEWCMD_ADDRESS, [text])),
        ]

    return [
        LogEffect(f"Command: {text}", "DEBUG"),
        SendOscEffect(OscCommand(CMD_ADDRESS, [text])),
    ]
