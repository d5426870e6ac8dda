"""
Domain Models for Eos OSC Translation

Immutable data structures for channel selections, colors, the active
console user, cue status projections, outbound commands and the
effects returned by the pure translation functions.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, List, Mapping, NamedTuple, Optional


# =============================================================================
# SELECTION
# =============================================================================

class SelectionKind(Enum):
    """Which channels a command addresses."""
    ONE = auto()
    RANGE = auto()
    ALL = auto()


@dataclass(frozen=True)
class Selection:
    """
    Abstract channel selection, resolved against the channel offset later.

    Ids are zero-based logical indices local to this integration.

    Attributes:
        kind: ONE, RANGE or ALL
        id: Channel id for ONE
        start_id: First channel id for RANGE
        end_id: Last channel id for RANGE (inclusive, may be below start_id)
    """
    kind: SelectionKind
    id: int = 0
    start_id: int = 0
    end_id: int = 0

    def __post_init__(self):
        """Validate ids."""
        if min(self.id, self.start_id, self.end_id) < 0:
            raise ValueError(f"Selection ids must be non-negative: {self}")

    @classmethod
    def one(cls, id: int) -> "Selection":
        return cls(SelectionKind.ONE, id=id)

    @classmethod
    def range(cls, start_id: int, end_id: int) -> "Selection":
        return cls(SelectionKind.RANGE, start_id=start_id, end_id=end_id)

    @classmethod
    def all(cls) -> "Selection":
        return cls(SelectionKind.ALL)

    def __str__(self) -> str:
        if self.kind == SelectionKind.ONE:
            return f"one({self.id})"
        elif self.kind == SelectionKind.RANGE:
            return f"range({self.start_id}-{self.end_id})"
        return "all"


# =============================================================================
# COLOR
# =============================================================================

class Color(NamedTuple):
    """RGB color, each channel normalized to 0.0-1.0."""
    red: float
    green: float
    blue: float

    @classmethod
    def black(cls) -> "Color":
        return cls(0.0, 0.0, 0.0)

    def scaled(self, factor: float) -> "Color":
        """Multiply every channel by factor."""
        return Color(self.red * factor, self.green * factor, self.blue * factor)

    def lerp(self, other: "Color", p: float) -> "Color":
        """Linear interpolation towards other; p=0 is self, p=1 is other."""
        return Color(
            self.red + (other.red - self.red) * p,
            self.green + (other.green - self.green) * p,
            self.blue + (other.blue - self.blue) * p,
        )


# =============================================================================
# ACTIVE USER
# =============================================================================

class UserKind(Enum):
    """
    Which Eos user the integration operates as.

    CONSOLE: share the console's own user (announced as -1)
    BACKGROUND: the background user (announced as 0)
    EXPLICIT: a numbered user id (real users start at 1)
    """
    CONSOLE = "console"
    BACKGROUND = "background"
    EXPLICIT = "explicit"


CONSOLE_USER_ID = -1
BACKGROUND_USER_ID = 0


@dataclass(frozen=True)
class ActiveUser:
    """The user announced to the console via /eos/user."""
    kind: UserKind
    user_id: int = 0

    @property
    def announce_id(self) -> int:
        if self.kind == UserKind.CONSOLE:
            return CONSOLE_USER_ID
        elif self.kind == UserKind.BACKGROUND:
            return BACKGROUND_USER_ID
        return self.user_id


def derive_active_user(user: Any, user_id: Any) -> ActiveUser:
    """
    Derive the active user from the `user` and `userID` parameters.

    "console" and "background" ignore user_id; anything else means the
    numeric id is used verbatim.

    Example:
        derive_active_user("console", 7).announce_id -> -1
        derive_active_user("explicit", 7).announce_id -> 7
    """
    if user == UserKind.CONSOLE.value:
        return ActiveUser(UserKind.CONSOLE)
    elif user == UserKind.BACKGROUND.value:
        return ActiveUser(UserKind.BACKGROUND)
    return ActiveUser(UserKind.EXPLICIT, int(user_id))


# =============================================================================
# SESSION CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class SessionConfig:
    """
    Snapshot of the host parameters the session depends on.

    Rebuilt from the host whenever a relevant parameter changes, never
    mutated in place.
    """
    user: str = UserKind.CONSOLE.value
    user_id: int = 1
    start_channel: int = 1
    local: bool = False
    remote_host: str = "127.0.0.1"
    local_port: int = 8001
    remote_port: int = 8000
    profile: str = "standard"

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, Any]) -> "SessionConfig":
        """Build from a host parameter mapping keyed by host parameter names."""
        defaults = cls()
        return cls(
            user=str(parameters.get("user", defaults.user)),
            user_id=int(parameters.get("userID", defaults.user_id)),
            start_channel=int(parameters.get("startChannel", defaults.start_channel)),
            local=bool(parameters.get("local", defaults.local)),
            remote_host=str(parameters.get("remoteHost", defaults.remote_host)),
            local_port=int(parameters.get("localPort", defaults.local_port)),
            remote_port=int(parameters.get("remotePort", defaults.remote_port)),
            profile=str(parameters.get("profile", defaults.profile)),
        )

    @property
    def active_user(self) -> ActiveUser:
        return derive_active_user(self.user, self.user_id)

    @property
    def send_host(self) -> str:
        """Where outbound messages go; `local` overrides the remote host."""
        return "127.0.0.1" if self.local else self.remote_host


# =============================================================================
# CUE STATUS
# =============================================================================

class CueCategory(str, Enum):
    """Status category carried in the address (/eos/out/<category>/cue...)."""
    ACTIVE = "active"
    PENDING = "pending"

    @classmethod
    def parse(cls, text: str) -> Optional["CueCategory"]:
        try:
            return cls(text)
        except ValueError:
            return None


@dataclass(frozen=True)
class CueLocator:
    """Cue list and cue number; cue numbers allow sub-cues like 2.3."""
    cuelist: int = 0
    cue_number: float = 0.0


@dataclass(frozen=True)
class CueText:
    """
    Decoded cue text.

    Attributes:
        raw: Text exactly as received
        label: Cue label (may contain spaces)
        elapsed_seconds: Elapsed/fade time in seconds
        percent: Completion percent (active cues only)
    """
    raw: str = ""
    label: str = ""
    elapsed_seconds: float = 0.0
    percent: int = 0


# =============================================================================
# OSC COMMAND
# =============================================================================

@dataclass(frozen=True)
class OscCommand:
    """
    OSC message to send.

    Attributes:
        address: OSC address (e.g., "/eos/newcmd")
        args: List of arguments (strings, floats, ints)
    """
    address: str
    args: List[Any] = field(default_factory=list)

    def __str__(self) -> str:
        args_str = " ".join(str(a) for a in self.args) if self.args else ""
        return f"{self.address} {args_str}".strip()


# =============================================================================
# EFFECTS (Side effect descriptions for imperative shell)
# =============================================================================

@dataclass(frozen=True)
class Effect:
    """Base class for side effects."""
    pass


@dataclass(frozen=True)
class SendOscEffect(Effect):
    """Effect: Send an OSC command."""
    command: OscCommand


@dataclass(frozen=True)
class SetValueEffect(Effect):
    """Effect: Write a named output value to the host value store."""
    name: str
    value: Any


@dataclass(frozen=True)
class LogEffect(Effect):
    """Effect: Log a message."""
    message: str
    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
