"""
Effect Engine - Pure Functions

All functions are pure: same input = same output, no side effects.
Each returns the ordered list of effects to be executed by the session.

Single-shot actions:
- value (intensity), color, blackout, macro fire, raw command

Multi-channel effects (one command per channel, ascending order):
- gradient: linear color blend across a channel range
- point: triangular falloff around a position in a channel range
"""

from typing import List, Sequence, Union

from .model import (
    Color, Selection,
    Effect, SendOscEffect, LogEffect, OscCommand,
)
from .profiles import (
    COLOR_RGB_ADDRESS,
    MACRO_FIRE_ADDRESS,
    ColorMode,
    ProtocolProfile,
    DEFAULT_PROFILE,
)
from .targets import resolve
from .formatter import format_command, format_value, color_clause, send_command

Payload = Union[Color, Sequence[float], float]

# Shaping constant for the point falloff ramp
POINT_FADE_SHAPE = 3


# =============================================================================
# SINGLE-SHOT ACTIONS
# =============================================================================

def value_effects(
    selection: Selection,
    value: float,
    offset: int,
    profile: ProtocolProfile = DEFAULT_PROFILE,
) -> List[Effect]:
    """Set intensity: "<target> @ <level>#"."""
    target = resolve(selection, offset, profile)
    level = format_value(value)

    effects: List[Effect] = [LogEffect(f"Value [{level}]: {target}", "DEBUG")]
    effects += send_command(format_command(target, f"@ {level}"), profile)
    return effects


def color_effects(
    selection: Selection,
    color: Color,
    offset: int,
    profile: ProtocolProfile = DEFAULT_PROFILE,
) -> List[Effect]:
    """
    Set color.

    RGB_ADDRESS profiles select the target on the command line and then send
    /eos/color/rgb with the raw floats. COLOR_CLAUSE profiles put the whole
    color on the command line.
    """
    target = resolve(selection, offset, profile)

    effects: List[Effect] = [
        LogEffect(f"Color [{color.red}, {color.green}, {color.blue}]: {target}", "DEBUG")
    ]
    if profile.color_mode == ColorMode.RGB_ADDRESS:
        effects += send_command(target, profile)
        effects.append(SendOscEffect(OscCommand(
            COLOR_RGB_ADDRESS, [float(color.red), float(color.green), float(color.blue)]
        )))
    else:
        effects += send_command(format_command(target, color_clause(color)), profile)
    return effects


def blackout_effects(
    selection: Selection,
    offset: int,
    profile: ProtocolProfile = DEFAULT_PROFILE,
) -> List[Effect]:
    """Zero the color (every emitter on COLOR_CLAUSE profiles), then intensity Out."""
    target = resolve(selection, offset, profile)

    if profile.color_mode == ColorMode.RGB_ADDRESS:
        zero_color = "Color 0"
    else:
        zero_color = color_clause(Color.black(), include_other_emitters=True)

    effects: List[Effect] = [LogEffect(f"Blackout: {target}")]
    effects += send_command(format_command(target, zero_color), profile)
    effects += send_command(format_command(target, "@ Out"), profile)
    return effects


def macro_effects(macro_number: int) -> List[Effect]:
    """Fire a macro by number (1-99,999)."""
    return [
        LogEffect(f"Macro: {macro_number}"),
        SendOscEffect(OscCommand(MACRO_FIRE_ADDRESS, [int(macro_number)])),
    ]


def command_effects(
    text: str,
    profile: ProtocolProfile = DEFAULT_PROFILE,
    terminate: bool = True,
    clear: bool = True,
) -> List[Effect]:
    """Send raw command-line text."""
    return send_command(text, profile, terminate=terminate, clear=clear)


# =============================================================================
# MULTI-CHANNEL EFFECTS
# =============================================================================

def gradient_effects(
    start_id: int,
    end_id: int,
    color_a: Color,
    color_b: Color,
    offset: int,
    profile: ProtocolProfile = DEFAULT_PROFILE,
) -> List[Effect]:
    """
    Blend linearly from color_a to color_b across an inclusive channel range.

    The range is normalized to min/max; color_a is always attached to the
    lowest channel. A single-channel range gets color_a unblended.
    """
    effects: List[Effect] = [LogEffect(f"Gradient: Chan {start_id} Thru {end_id}")]

    if start_id == end_id:
        effects += color_effects(Selection.one(start_id), color_a, offset, profile)
        return effects

    min_id = min(start_id, end_id)
    max_id = max(start_id, end_id)

    for i in range(min_id, max_id + 1):
        p = (i - min_id) / (max_id - min_id)
        effects += color_effects(Selection.one(i), color_a.lerp(color_b, p), offset, profile)

    return effects


def point_factor(p: float, position: float, size: float, fade: float) -> float:
    """
    Falloff factor (0.0-1.0) for a channel at fraction p of the range.

    Channels with |position - p| >= size are outside the point and get 0.
    Inside, the ramp steepens with fade before being clamped.
    """
    distance = position - p
    if abs(distance) >= size:
        return 0.0
    fac = distance * fade * POINT_FADE_SHAPE
    fac = 1 - abs(fac / size)
    return min(max(fac, 0.0), 1.0)


def _as_color(payload: Payload):
    if isinstance(payload, Color):
        return payload
    if isinstance(payload, (tuple, list)):
        return Color(*payload)
    return None


def point_effects(
    start_id: int,
    end_id: int,
    position: float,
    size: float,
    fade: float,
    payload: Payload,
    offset: int,
    profile: ProtocolProfile = DEFAULT_PROFILE,
) -> List[Effect]:
    """
    Light a point centered at position (0.0-1.0) across start_id..end_id.

    Every channel in the range is sent: channels inside the point get the
    payload scaled by the falloff factor, the rest are blanked.

    Args:
        start_id: First channel id (must be below end_id)
        end_id: Last channel id (inclusive)
        position: Center of the point as a fraction of the range
        size: Half-width of the point as a fraction of the range (> 0)
        fade: Steepness of the ramp inside the point
        payload: Color (color commands) or float level (value commands)
        offset: First real console channel
        profile: Dialect

    Returns:
        Effects, or a single warning log if the range or size is unusable
    """
    if end_id <= start_id:
        return [LogEffect(
            f"Point needs end channel above start channel, got {start_id}-{end_id}", "WARNING"
        )]
    if size <= 0:
        return [LogEffect(f"Point size must be positive, got {size}", "WARNING")]

    color = _as_color(payload)
    effects: List[Effect] = [LogEffect(f"Point: Chan {start_id} Thru {end_id}")]

    for i in range(start_id, end_id + 1):
        p = (i - start_id) / (end_id - start_id)
        fac = point_factor(p, position, size, fade)

        if color is not None:
            effects += color_effects(Selection.one(i), color.scaled(fac), offset, profile)
        else:
            effects += value_effects(Selection.one(i), float(payload) * fac, offset, profile)

    return effects
