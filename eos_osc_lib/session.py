"""
Eos Session Controller

Orchestrates:
- Registration of the status decoders with the host
- Announcing the active user (startup and relevant parameter changes)
- User actions (value, color, blackout, gradient, point, macro, command)
- Execution of the effects returned by the pure modules

The host (OSC transport, parameter store, value store, pattern matching)
is injected; see HostInterface.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Protocol

from .model import (
    Color, Selection, SessionConfig,
    Effect, SendOscEffect, SetValueEffect, LogEffect, OscCommand,
)
from .profiles import (
    CMD_LINE_PATTERN,
    CUE_TEXT_PATTERN,
    USER_ADDRESS,
    SUBSCRIBE_ADDRESS,
    USER_ANNOUNCE_PARAMETERS,
    PARAM_PROFILE,
    PARAM_START_CHANNEL,
    DEFAULT_PARAMETERS,
    ProtocolProfile,
    get_profile,
)
from .decoder import decode_command_line, decode_cue, decode_cue_text
from .effect_engine import (
    Payload,
    value_effects,
    color_effects,
    blackout_effects,
    macro_effects,
    command_effects,
    gradient_effects,
    point_effects,
)

logger = logging.getLogger(__name__)

Handler = Callable[[str, List[Any]], None]


# =============================================================================
# PROTOCOL FOR HOST ABSTRACTION
# =============================================================================

class HostInterface(Protocol):
    """Protocol for the control-surface host the session runs inside."""

    def register(self, pattern: str, handler: Handler) -> None:
        """Dispatch inbound messages matching pattern (`*` = one segment) to handler."""
        ...

    def send(self, address: str, *args: Any) -> None:
        """Send one OSC message."""
        ...

    def matches(self, address: str, pattern: str) -> bool:
        """Check an address against a registration pattern."""
        ...

    def get_parameter(self, name: str) -> Any:
        """Read a configuration parameter."""
        ...

    def set_value(self, name: str, value: Any) -> None:
        """Write a named output value."""
        ...

    def get_value(self, name: str) -> Any:
        """Read a named output value."""
        ...


# =============================================================================
# SESSION
# =============================================================================

def announce_user_effects(config: SessionConfig) -> List[Effect]:
    """Effects announcing the configured user to the console."""
    user_id = config.active_user.announce_id
    return [
        SendOscEffect(OscCommand(USER_ADDRESS, [user_id])),
        LogEffect(f"Change Eos User: {user_id}"),
    ]


class EosSession:
    """
    One Eos integration bound to a host.

    Usage:
        session = EosSession(host)
        session.start()

        session.set_value(Selection.range(0, 7), 0.75)
        session.gradient(0, 11, Color(1, 0, 0), Color(0, 0, 1))

        # Host calls these back
        session.on_parameter_changed("user", "background")
    """

    def __init__(self, host: HostInterface):
        self._host = host
        self.config = self._read_config()
        self._on_log: Optional[Callable[[str], None]] = None

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    def _read_config(self) -> SessionConfig:
        parameters = {}
        for name, default in DEFAULT_PARAMETERS.items():
            value = self._host.get_parameter(name)
            parameters[name] = default if value is None else value
        return SessionConfig.from_parameters(parameters)

    @property
    def profile(self) -> ProtocolProfile:
        return get_profile(self.config.profile)

    @property
    def offset(self) -> int:
        """Current channel offset, read from the host on every action."""
        value = self._host.get_parameter(PARAM_START_CHANNEL)
        return self.config.start_channel if value is None else int(value)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start(self) -> None:
        """Register decoders, announce the user and subscribe to console output."""
        logger.info("Initializing Eos OSC")

        self._host.register(CMD_LINE_PATTERN, self.on_command_line)
        for pattern in self.profile.cue_patterns:
            self._host.register(pattern, self.on_cue)
        self._host.register(CUE_TEXT_PATTERN, self.on_cue_text)

        self.update_user()
        self._execute([SendOscEffect(OscCommand(SUBSCRIBE_ADDRESS, [1]))])

        logger.info(f"Eos OSC ready (profile: {self.profile.name})")

    def on_parameter_changed(self, name: str, value: Any) -> None:
        """Host callback for configuration parameter changes."""
        logger.debug(f"{name} parameter changed, new value: {value}")

        if name == PARAM_PROFILE:
            previous = self.profile
            self.config = self._read_config()
            if self.profile is not previous:
                logger.warning(
                    f"Profile changed to {self.profile.name}; "
                    "restart the session to update cue registrations"
                )
        elif name in USER_ANNOUNCE_PARAMETERS:
            self.config = self._read_config()
            self.update_user()

    def update_user(self) -> None:
        """Announce the active user derived from the current configuration."""
        self._execute(announce_user_effects(self.config))

    # =========================================================================
    # ACTIONS
    # =========================================================================

    def set_value(self, selection: Selection, value: float) -> None:
        self._execute(value_effects(selection, value, self.offset, self.profile))

    def set_color(self, selection: Selection, color: Color) -> None:
        self._execute(color_effects(selection, color, self.offset, self.profile))

    def blackout(self, selection: Selection) -> None:
        self._execute(blackout_effects(selection, self.offset, self.profile))

    def gradient(self, start_id: int, end_id: int, color_a: Color, color_b: Color) -> None:
        self._execute(gradient_effects(
            start_id, end_id, color_a, color_b, self.offset, self.profile
        ))

    def point(
        self,
        start_id: int,
        end_id: int,
        position: float,
        size: float,
        fade: float,
        payload: Payload,
    ) -> None:
        self._execute(point_effects(
            start_id, end_id, position, size, fade, payload, self.offset, self.profile
        ))

    def fire_macro(self, macro_number: int) -> None:
        self._execute(macro_effects(macro_number))

    def send_command(self, text: str, terminate: bool = True, clear: bool = True) -> None:
        self._execute(command_effects(text, self.profile, terminate=terminate, clear=clear))

    # =========================================================================
    # INBOUND HANDLERS (registered with the host)
    # =========================================================================

    # One handler may serve overlapping patterns, so each re-checks the address

    def on_command_line(self, address: str, args: List[Any]) -> None:
        if self._host.matches(address, CMD_LINE_PATTERN):
            self._execute(decode_command_line(address, args))

    def on_cue(self, address: str, args: List[Any]) -> None:
        if any(self._host.matches(address, p) for p in self.profile.cue_patterns):
            self._execute(decode_cue(address, args, self.profile))

    def on_cue_text(self, address: str, args: List[Any]) -> None:
        if self._host.matches(address, CUE_TEXT_PATTERN):
            self._execute(decode_cue_text(address, args))

    # =========================================================================
    # EFFECT EXECUTION
    # =========================================================================

    def _execute(self, effects: List[Effect]) -> None:
        for effect in effects:
            self._execute_effect(effect)

    def _execute_effect(self, effect: Effect) -> None:
        """Execute a single effect."""
        if isinstance(effect, SendOscEffect):
            self._host.send(effect.command.address, *effect.command.args)

        elif isinstance(effect, SetValueEffect):
            self._host.set_value(effect.name, effect.value)

        elif isinstance(effect, LogEffect):
            level = getattr(logging, effect.level, logging.INFO)
            logger.log(level, effect.message)
            if self._on_log:
                self._on_log(effect.message)

    def set_log_callback(self, callback: Callable[[str], None]) -> None:
        """Set callback for log messages."""
        self._on_log = callback
