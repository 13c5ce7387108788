"""Environment-driven configuration for pi-stylish.

Values are read once from ``PI_STYLISH_*`` environment variables and cached.
Invalid values are logged and replaced by their defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Literal, get_args

logger = logging.getLogger(__name__)

ShiftPolicy = Literal["lenient", "saturate", "strict"]

_SHIFT_POLICIES: tuple[str, ...] = get_args(ShiftPolicy)


@dataclass
class Config:
    """Library configuration."""

    ellipsis: str = "…"
    tab_width: int = 3
    width_cache_size: int = 512
    shift_policy: ShiftPolicy = "lenient"


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value < 0:
        logger.warning("Ignoring %s=%r: must not be negative", name, raw)
        return default
    return value


def load_config() -> Config:
    """Build a :class:`Config` from the current environment."""
    defaults = Config()

    policy = os.environ.get("PI_STYLISH_SHIFT_POLICY", defaults.shift_policy).strip().lower()
    if policy not in _SHIFT_POLICIES:
        logger.warning(
            "Ignoring PI_STYLISH_SHIFT_POLICY=%r: expected one of %s",
            policy,
            ", ".join(_SHIFT_POLICIES),
        )
        policy = defaults.shift_policy

    return Config(
        ellipsis=os.environ.get("PI_STYLISH_ELLIPSIS", defaults.ellipsis),
        tab_width=_int_from_env("PI_STYLISH_TAB_WIDTH", defaults.tab_width),
        width_cache_size=_int_from_env("PI_STYLISH_WIDTH_CACHE_SIZE", defaults.width_cache_size),
        shift_policy=policy,  # type: ignore[arg-type]
    )


_global_config: Config | None = None


def get_config() -> Config:
    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config


def set_config(config: Config) -> None:
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Drop the cached config so the next :func:`get_config` re-reads the environment."""
    global _global_config
    _global_config = None
