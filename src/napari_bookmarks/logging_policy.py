from __future__ import annotations

"""Debug/logging policy for bookmark transitions.

All env var parsing happens here so the interpolation and camera helpers can
depend on a structured policy rather than scattered ``os.getenv`` calls.
"""

import logging
import math
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from napari_bookmarks.interpolation import VAN_WIJK_RHO

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_flag(env: Mapping[str, str], name: str) -> Optional[bool]:
    raw = env.get(name)
    if raw is None:
        return None
    val = raw.strip().lower()
    if val in _TRUTHY:
        return True
    if val in _FALSY:
        return False
    return None


def _env_bool(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    flag = _env_flag(env, name)
    return default if flag is None else flag


def _env_rho(env: Mapping[str, str], name: str) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return VAN_WIJK_RHO
    try:
        value = float(raw)
    except ValueError:
        logger.warning("%s=%r is not a number; using rho=%.6f", name, raw, VAN_WIJK_RHO)
        return VAN_WIJK_RHO
    if not math.isfinite(value) or value <= 0.0:
        logger.warning("%s=%r must be finite and positive; using rho=%.6f", name, raw, VAN_WIJK_RHO)
        return VAN_WIJK_RHO
    return value


@dataclass(frozen=True)
class BookmarkLogging:
    log_interp: bool = False
    log_duration: bool = False
    log_camera: bool = False


@dataclass(frozen=True)
class BookmarkPolicy:
    rho: float = VAN_WIJK_RHO
    logging: BookmarkLogging = field(default_factory=BookmarkLogging)


def load_bookmark_policy(env: Optional[Mapping[str, str]] = None) -> BookmarkPolicy:
    """Read bookmark debug/logging flags from the provided environment mapping."""

    if env is None:
        env = os.environ

    debug_all = _env_bool(env, "NAPARI_BOOKMARKS_DEBUG", False)

    # The master switch turns every toggle on unless one is explicitly disabled.
    toggles = BookmarkLogging(
        log_interp=_env_bool(env, "NAPARI_BOOKMARKS_LOG_INTERP", debug_all),
        log_duration=_env_bool(env, "NAPARI_BOOKMARKS_LOG_DURATION", debug_all),
        log_camera=_env_bool(env, "NAPARI_BOOKMARKS_LOG_CAMERA", debug_all),
    )

    return BookmarkPolicy(
        rho=_env_rho(env, "NAPARI_BOOKMARKS_RHO"),
        logging=toggles,
    )


__all__ = [
    "BookmarkLogging",
    "BookmarkPolicy",
    "load_bookmark_policy",
]
