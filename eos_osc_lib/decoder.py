"""
Eos Status Decoding - Pure Functions

Parses the console's status feed into named output values:
- /eos/out/cmd                    command line echo
- /eos/out/<category>/cue/<l>/<c> active/pending cue number
- /eos/out/pending/cue            pending cue cleared
- /eos/out/<category>/cue         cue cleared (three-pattern profiles)
- /eos/out/<category>/cue/text    cue text "<l>/<c> Label 0:05 75%"

Malformed input never raises: numbers that fail to parse become 0 and
addresses that do not match produce no effects.
"""

import re
from typing import Any, List, Optional, Sequence

from .model import (
    CueCategory, CueLocator, CueText,
    Effect, SetValueEffect, LogEffect,
)
from .profiles import (
    CMD_LINE_PATTERN,
    CUE_NUMBER_PATTERN,
    CUE_TEXT_PATTERN,
    CATEGORY_SEGMENT,
    CUELIST_SEGMENT,
    CUE_NUMBER_SEGMENT,
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
    ProtocolProfile,
    DEFAULT_PROFILE,
)

_INT_PREFIX = re.compile(r"\s*([-+]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


# =============================================================================
# ADDRESS MATCHING
# =============================================================================

def address_matches(address: str, pattern: str) -> bool:
    """
    Check an OSC address against a pattern where `*` is exactly one segment.

    Example:
        address_matches("/eos/out/active/cue/1/2.3", "/eos/out/*/cue/*/*") -> True
        address_matches("/eos/out/active/cue/text", "/eos/out/*/cue/*/*") -> False
    """
    address_parts = address.split("/")
    pattern_parts = pattern.split("/")
    if len(address_parts) != len(pattern_parts):
        return False
    return all(
        p == "*" or p == a
        for a, p in zip(address_parts, pattern_parts)
    )


def _segment(address: str, index: int) -> str:
    parts = address.split("/")
    return parts[index] if index < len(parts) else ""


# =============================================================================
# NUMBER PARSING
# =============================================================================

def parse_int(text: Any) -> int:
    """Parse leading integer digits ("75%" -> 75); 0 when there are none."""
    if isinstance(text, (int, float)):
        return int(text)
    match = _INT_PREFIX.match(str(text))
    return int(match.group(1)) if match else 0


def parse_float(text: Any) -> float:
    """Parse a leading decimal number ("2.3" -> 2.3); 0.0 when there is none."""
    if isinstance(text, (int, float)):
        return float(text)
    match = _FLOAT_PREFIX.match(str(text))
    return float(match.group(1)) if match else 0.0


def parse_eos_time(text: str) -> float:
    """
    Convert an Eos time string to seconds.

    Accepts "s", "m:s" and "h:m:s"; seconds may be fractional. Any other
    shape decodes as 0.0.

    Example:
        parse_eos_time("5") -> 5.0
        parse_eos_time("1:30") -> 90.0
        parse_eos_time("1:01:01") -> 3661.0
    """
    parts = text.split(":")

    if len(parts) == 1:
        return parse_float(parts[0])
    elif len(parts) == 2:
        return parse_int(parts[0]) * 60 + parse_float(parts[1])
    elif len(parts) == 3:
        return parse_int(parts[0]) * 3600 + parse_int(parts[1]) * 60 + parse_float(parts[2])
    return 0.0


# =============================================================================
# CUE TEXT
# =============================================================================

def parse_cue_text(text: str, category: CueCategory) -> CueText:
    """
    Split cue text into label, elapsed time and percent.

    Tokens are read from the back: active text ends in "<time> <percent>",
    pending text ends in "<time>". The first token (list/cue) is dropped
    and whatever lies between forms the label.

    Example:
        parse_cue_text("1/2.3 My Label 0:05 75", CueCategory.ACTIVE)
            -> CueText(label="My Label", elapsed_seconds=5.0, percent=75)
    """
    tokens = text.split(" ") if text else []

    label = ""
    elapsed = 0.0
    percent = 0

    if category == CueCategory.ACTIVE:
        if len(tokens) >= 2:
            percent = parse_int(tokens[-1])
        if len(tokens) >= 3:
            elapsed = parse_eos_time(tokens[-2])
            label = " ".join(tokens[1:-2])
    elif len(tokens) >= 2:
        elapsed = parse_eos_time(tokens[-1])
        label = " ".join(tokens[1:-1])

    return CueText(raw=text, label=label, elapsed_seconds=elapsed, percent=percent)


# =============================================================================
# MESSAGE DECODERS
# =============================================================================

def _first_arg(args: Sequence[Any]) -> str:
    return str(args[0]) if args else ""


def _category(address: str) -> Optional[CueCategory]:
    return CueCategory.parse(_segment(address, CATEGORY_SEGMENT))


def decode_command_line(address: str, args: Sequence[Any]) -> List[Effect]:
    """Command line echo -> commandLine."""
    if not address_matches(address, CMD_LINE_PATTERN):
        return []

    text = _first_arg(args)
    return [
        SetValueEffect(VALUE_COMMAND_LINE, text),
        LogEffect(f"Command Line: \"{text}\"", "DEBUG"),
    ]


def decode_cue_locator(address: str, profile: ProtocolProfile = DEFAULT_PROFILE) -> Optional[CueLocator]:
    """
    Cue list and number carried in a cue address.

    Returns None when the address is not one of the profile's cue patterns.
    Shapes without list/cue segments decode to CueLocator(0, 0.0).
    """
    if not any(address_matches(address, pattern) for pattern in profile.cue_patterns):
        return None

    if address_matches(address, CUE_NUMBER_PATTERN):
        return CueLocator(
            cuelist=parse_int(_segment(address, CUELIST_SEGMENT)),
            cue_number=parse_float(_segment(address, CUE_NUMBER_SEGMENT)),
        )
    return CueLocator()


def decode_cue(
    address: str,
    args: Sequence[Any],
    profile: ProtocolProfile = DEFAULT_PROFILE,
) -> List[Effect]:
    """Active/pending cue number -> <category>CueNo, <category>CuelistNo."""
    locator = decode_cue_locator(address, profile)
    category = _category(address)
    if locator is None or category is None:
        return []

    if category == CueCategory.ACTIVE:
        return [
            SetValueEffect(VALUE_ACTIVE_CUE_NO, locator.cue_number),
            SetValueEffect(VALUE_ACTIVE_CUELIST_NO, locator.cuelist),
            LogEffect(f"Active Cue - List: {locator.cuelist}, Cue: {locator.cue_number}", "DEBUG"),
        ]
    return [
        SetValueEffect(VALUE_PENDING_CUE_NO, locator.cue_number),
        SetValueEffect(VALUE_PENDING_CUELIST_NO, locator.cuelist),
        LogEffect(f"Pending Cue - List: {locator.cuelist}, Cue: {locator.cue_number}", "DEBUG"),
    ]


def decode_cue_text(address: str, args: Sequence[Any]) -> List[Effect]:
    """Active/pending cue text -> name, label, time (and percent for active)."""
    if not address_matches(address, CUE_TEXT_PATTERN):
        return []
    category = _category(address)
    if category is None:
        return []

    cue = parse_cue_text(_first_arg(args), category)

    if category == CueCategory.ACTIVE:
        return [
            LogEffect(
                f"Parse Active Cue - Label: {cue.label}, Time: {cue.elapsed_seconds}, "
                f"Percent: {cue.percent}",
                "DEBUG",
            ),
            SetValueEffect(VALUE_ACTIVE_CUE_NAME, cue.raw),
            SetValueEffect(VALUE_ACTIVE_CUE_LABEL, cue.label),
            SetValueEffect(VALUE_ACTIVE_CUE_TIME, cue.elapsed_seconds),
            SetValueEffect(VALUE_ACTIVE_CUE_PERCENT, cue.percent),
        ]
    return [
        LogEffect(f"Parse Pending Cue - Label: {cue.label}, Time: {cue.elapsed_seconds}", "DEBUG"),
        SetValueEffect(VALUE_PENDING_CUE_NAME, cue.raw),
        SetValueEffect(VALUE_PENDING_CUE_LABEL, cue.label),
        SetValueEffect(VALUE_PENDING_CUE_TIME, cue.elapsed_seconds),
    ]
