"""
Eos OSC Configuration

Single source of truth for Eos-specific constants:
- Outbound and inbound OSC addresses
- Host parameter and output value names
- Protocol profiles (the dialect variants the console integration speaks)

This is the ONLY place where Eos address knowledge should live.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, FrozenSet, Tuple


# =============================================================================
# OUTBOUND ADDRESSES
# =============================================================================

USER_ADDRESS = "/eos/user"
SUBSCRIBE_ADDRESS = "/eos/subscribe"
CMD_ADDRESS = "/eos/cmd"
NEWCMD_ADDRESS = "/eos/newcmd"
MACRO_FIRE_ADDRESS = "/eos/macro/fire"
COLOR_RGB_ADDRESS = "/eos/color/rgb"

COMMAND_TERMINATOR = "#"


# =============================================================================
# INBOUND ADDRESS PATTERNS
# =============================================================================

# `*` matches exactly one address segment
CMD_LINE_PATTERN = "/eos/out/cmd"
CUE_NUMBER_PATTERN = "/eos/out/*/cue/*/*"      # /eos/out/<category>/cue/<list>/<cue>
PENDING_CUE_PATTERN = "/eos/out/pending/cue"
CUE_CATEGORY_PATTERN = "/eos/out/*/cue"
CUE_TEXT_PATTERN = "/eos/out/*/cue/text"

# Segment positions after splitting the address on "/" (leading empty segment included)
CATEGORY_SEGMENT = 3
CUELIST_SEGMENT = 5
CUE_NUMBER_SEGMENT = 6


# =============================================================================
# HOST PARAMETERS AND VALUES
# =============================================================================

PARAM_USER = "user"
PARAM_USER_ID = "userID"
PARAM_START_CHANNEL = "startChannel"
PARAM_LOCAL = "local"
PARAM_REMOTE_HOST = "remoteHost"
PARAM_LOCAL_PORT = "localPort"
PARAM_REMOTE_PORT = "remotePort"
PARAM_PROFILE = "profile"

# Changing any of these re-announces the active user
USER_ANNOUNCE_PARAMETERS: FrozenSet[str] = frozenset({
    PARAM_USER,
    PARAM_USER_ID,
    PARAM_LOCAL,
    PARAM_REMOTE_HOST,
    PARAM_LOCAL_PORT,
    PARAM_REMOTE_PORT,
})

# Endpoint parameters: the host has to rebuild its transport
ENDPOINT_PARAMETERS: FrozenSet[str] = frozenset({
    PARAM_LOCAL,
    PARAM_REMOTE_HOST,
    PARAM_LOCAL_PORT,
    PARAM_REMOTE_PORT,
})

DEFAULT_PARAMETERS: Dict[str, object] = {
    PARAM_USER: "console",
    PARAM_USER_ID: 1,
    PARAM_START_CHANNEL: 1,
    PARAM_LOCAL: False,
    PARAM_REMOTE_HOST: "127.0.0.1",
    PARAM_LOCAL_PORT: 8001,
    PARAM_REMOTE_PORT: 8000,
    PARAM_PROFILE: "standard",
}

VALUE_COMMAND_LINE = "commandLine"
VALUE_ACTIVE_CUE_NO = "activeCueNo"
VALUE_ACTIVE_CUELIST_NO = "activeCuelistNo"
VALUE_PENDING_CUE_NO = "pendingCueNo"
VALUE_PENDING_CUELIST_NO = "pendingCuelistNo"
VALUE_ACTIVE_CUE_NAME = "activeCueName"
VALUE_ACTIVE_CUE_LABEL = "activeCueLabel"
VALUE_ACTIVE_CUE_TIME = "activeCueTime"
VALUE_ACTIVE_CUE_PERCENT = "activeCuePercent"
VALUE_PENDING_CUE_NAME = "pendingCueName"
VALUE_PENDING_CUE_LABEL = "pendingCueLabel"
VALUE_PENDING_CUE_TIME = "pendingCueTime"

OUTPUT_VALUES: Tuple[str, ...] = (
    VALUE_COMMAND_LINE,
    VALUE_ACTIVE_CUE_NO,
    VALUE_ACTIVE_CUELIST_NO,
    VALUE_PENDING_CUE_NO,
    VALUE_PENDING_CUELIST_NO,
    VALUE_ACTIVE_CUE_NAME,
    VALUE_ACTIVE_CUE_LABEL,
    VALUE_ACTIVE_CUE_TIME,
    VALUE_ACTIVE_CUE_PERCENT,
    VALUE_PENDING_CUE_NAME,
    VALUE_PENDING_CUE_LABEL,
    VALUE_PENDING_CUE_TIME,
)


# =============================================================================
# PROTOCOL PROFILES
# =============================================================================

class AllTarget(Enum):
    """How a select-everything command is addressed."""
    SELECT_ALL = auto()  # "Select_All"
    GROUP = auto()       # "Group <startChannel>"


class ColorMode(Enum):
    """How colors reach the console."""
    RGB_ADDRESS = auto()   # select on the command line, then /eos/color/rgb r g b
    COLOR_CLAUSE = auto()  # "Red r Green g Blue b" on the command line


@dataclass(frozen=True)
class ProtocolProfile:
    """
    One Eos dialect variant.

    Attributes:
        name: Profile name used in configuration
        all_target: Select-all clause style
        color_mode: Color transport style
        split_command_addresses: Send clearing commands to /eos/newcmd and
            appending ones to /eos/cmd (otherwise everything goes to /eos/cmd)
        cue_patterns: Inbound patterns routed to the cue number decoder
        description: Human readable summary
    """
    name: str
    all_target: AllTarget
    color_mode: ColorMode
    split_command_addresses: bool
    cue_patterns: Tuple[str, ...]
    description: str = ""

    @property
    def inbound_patterns(self) -> Tuple[str, ...]:
        """Every pattern the session registers with the host."""
        return (CMD_LINE_PATTERN,) + self.cue_patterns + (CUE_TEXT_PATTERN,)


STANDARD = ProtocolProfile(
    name="standard",
    all_target=AllTarget.SELECT_ALL,
    color_mode=ColorMode.RGB_ADDRESS,
    split_command_addresses=True,
    cue_patterns=(CUE_NUMBER_PATTERN, PENDING_CUE_PATTERN),
    description="Intensity values, RGB via /eos/color/rgb, Select_All",
)

COLOR = ProtocolProfile(
    name="color",
    all_target=AllTarget.SELECT_ALL,
    color_mode=ColorMode.COLOR_CLAUSE,
    split_command_addresses=False,
    cue_patterns=(CUE_NUMBER_PATTERN, PENDING_CUE_PATTERN),
    description="Full emitter color on the command line, Select_All",
)

GROUP = ProtocolProfile(
    name="group",
    all_target=AllTarget.GROUP,
    color_mode=ColorMode.COLOR_CLAUSE,
    split_command_addresses=False,
    cue_patterns=(CUE_NUMBER_PATTERN, PENDING_CUE_PATTERN, CUE_CATEGORY_PATTERN),
    description="Full emitter color on the command line, all addresses a group",
)

PROFILES: Dict[str, ProtocolProfile] = {
    profile.name: profile for profile in (STANDARD, COLOR, GROUP)
}

DEFAULT_PROFILE = STANDARD


def get_profile(name: str) -> ProtocolProfile:
    """
    Look up a profile by name.

    Raises:
        ValueError: if no profile has that name
    """
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown protocol profile '{name}' (choose from {', '.join(PROFILES)})"
        ) from None
