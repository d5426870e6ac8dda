"""
Configuration Persistence

Save/load host parameters (user, channel offset, endpoints, profile)
to a YAML file.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .profiles import DEFAULT_PARAMETERS, PARAM_PROFILE, PROFILES

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "eos_osc_lib" / "config.yaml"


def _coerce(name: str, value: Any) -> Any:
    """
    Convert a loaded value to the type of its default.

    Raises:
        ValueError: if the value cannot stand for that parameter
    """
    default = DEFAULT_PARAMETERS[name]

    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(name)
        return value
    if isinstance(default, int):
        if isinstance(value, bool):
            raise ValueError(name)
        return int(value)

    if not isinstance(value, (str, int, float)):
        raise ValueError(name)
    value = str(value)
    if name == PARAM_PROFILE and value not in PROFILES:
        raise ValueError(name)
    return value


def save_config(
    parameters: Mapping[str, Any],
    path: Optional[Path] = None
) -> bool:
    """
    Save parameters to YAML file.

    Only known parameters are written.

    Args:
        parameters: Parameter mapping keyed by host parameter name
        path: File path (default: ~/.config/eos_osc_lib/config.yaml)

    Returns:
        True if saved successfully
    """
    path = path or DEFAULT_CONFIG_PATH

    data = {
        "parameters": {
            name: parameters[name]
            for name in DEFAULT_PARAMETERS
            if name in parameters
        }
    }

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False)
    except OSError as e:
        logger.error(f"Failed to save config: {e}")
        return False

    logger.info(f"Saved {len(data['parameters'])} parameters to {path}")
    return True


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load parameters from YAML file.

    Missing or unreadable files yield the defaults; unknown keys are ignored
    and values of the wrong type fall back to their default.

    Args:
        path: File path (default: ~/.config/eos_osc_lib/config.yaml)

    Returns:
        Full parameter dict (defaults overlaid with the file's values)
    """
    path = path or DEFAULT_CONFIG_PATH
    parameters: Dict[str, Any] = dict(DEFAULT_PARAMETERS)

    if not path.exists():
        logger.info(f"No config file at {path}")
        return parameters

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load config: {e}")
        return parameters

    if not isinstance(data, dict) or not isinstance(data.get("parameters"), dict):
        return parameters

    for name, value in data["parameters"].items():
        if name not in DEFAULT_PARAMETERS:
            logger.warning(f"Ignoring unknown parameter '{name}' in {path}")
            continue
        try:
            parameters[name] = _coerce(name, value)
        except (TypeError, ValueError):
            logger.warning(
                f"Invalid value {value!r} for '{name}' in {path}, "
                f"using default {DEFAULT_PARAMETERS[name]!r}"
            )

    logger.info(f"Loaded config from {path}")
    return parameters
