"""
Eos OSC Library

Translation layer between a control-surface host and the ETC Eos OSC dialect.

Features:
- Target resolution: one channel, channel ranges, select-all or group
- Command formatting for intensity, color and blackout
- Gradient and point effects across channel ranges
- Decoding of command line, cue number and cue text status
- Protocol profiles for the Eos dialect variants
- Pure functions returning effects; EosSession executes them on a host

Usage:
    from eos_osc_lib import EosSession, OscHost, Selection, Color

    host = OscHost({"remoteHost": "10.0.0.2", "startChannel": 1})
    session = EosSession(host)
    host.add_parameter_listener(session.on_parameter_changed)
    host.start()
    session.start()

    session.set_value(Selection.range(0, 7), 0.75)
    session.gradient(0, 11, Color(1, 0, 0), Color(0, 0, 1))
    print(host.get_value("activeCueLabel"))
"""

from .model import (
    # Selection and color
    SelectionKind,
    Selection,
    Color,
    # User and session configuration
    UserKind,
    ActiveUser,
    derive_active_user,
    SessionConfig,
    # Cue status
    CueCategory,
    CueLocator,
    CueText,
    # Commands and effects
    OscCommand,
    Effect,
    SendOscEffect,
    SetValueEffect,
    LogEffect,
)
from .profiles import (
    AllTarget,
    ColorMode,
    ProtocolProfile,
    STANDARD,
    COLOR,
    GROUP,
    PROFILES,
    DEFAULT_PROFILE,
    DEFAULT_PARAMETERS,
    OUTPUT_VALUES,
    get_profile,
)
from .targets import resolve
from .formatter import (
    format_command,
    format_value,
    color_clause,
    send_command,
)
from .effect_engine import (
    value_effects,
    color_effects,
    blackout_effects,
    macro_effects,
    command_effects,
    gradient_effects,
    point_effects,
    point_factor,
)
from .decoder import (
    address_matches,
    parse_eos_time,
    parse_cue_text,
    decode_command_line,
    decode_cue,
    decode_cue_text,
)
from .session import EosSession, HostInterface
from .host import OscHost
from .config import save_config, load_config, DEFAULT_CONFIG_PATH
from .cli import main as cli_main

__all__ = [
    # Selection and color
    "SelectionKind",
    "Selection",
    "Color",
    # User and session configuration
    "UserKind",
    "ActiveUser",
    "derive_active_user",
    "SessionConfig",
    # Cue status
    "CueCategory",
    "CueLocator",
    "CueText",
    # Commands and effects
    "OscCommand",
    "Effect",
    "SendOscEffect",
    "SetValueEffect",
    "LogEffect",
    # Profiles
    "AllTarget",
    "ColorMode",
    "ProtocolProfile",
    "STANDARD",
    "COLOR",
    "GROUP",
    "PROFILES",
    "DEFAULT_PROFILE",
    "DEFAULT_PARAMETERS",
    "OUTPUT_VALUES",
    "get_profile",
    # Targets and formatting
    "resolve",
    "format_command",
    "format_value",
    "color_clause",
    "send_command",
    # Effect engine
    "value_effects",
    "color_effects",
    "blackout_effects",
    "macro_effects",
    "command_effects",
    "gradient_effects",
    "point_effects",
    "point_factor",
    # Status decoding
    "address_matches",
    "parse_eos_time",
    "parse_cue_text",
    "decode_command_line",
    "decode_cue",
    "decode_cue_text",
    # Session and host
    "EosSession",
    "HostInterface",
    "OscHost",
    # Config persistence
    "save_config",
    "load_config",
    "DEFAULT_CONFIG_PATH",
    # CLI
    "cli_main",
]

__version__ = "1.0.0"
