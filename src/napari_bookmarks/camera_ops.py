"""Camera operations (free functions) bridging bookmarks and VisPy cameras.

``PanZoomCamera`` views map onto map bookmarks and ``TurntableCamera`` views
onto orbit bookmarks. The caller owns the animation clock: it decides which
``t`` to sample and how fast ``t`` advances (see :func:`transition_duration`).
"""

from __future__ import annotations

from typing import Any, Optional
import logging
import math

from vispy.geometry import Rect
from vispy.scene.cameras import PanZoomCamera, TurntableCamera

from napari_bookmarks.bookmark import (
    Bookmark,
    BookmarkMode,
    ModeMismatchError,
    UnsupportedModeError,
)
from napari_bookmarks.interpolation import duration, interpolate
from napari_bookmarks.logging_policy import BookmarkPolicy

logger = logging.getLogger(__name__)


def capture_bookmark(camera: Any) -> Bookmark:
    """Snapshot the camera's current view as a bookmark."""
    if isinstance(camera, PanZoomCamera):
        rect = Rect(camera.rect)
        cx, cy = rect.center
        return Bookmark.map((float(cx), float(cy)), 0.5 * float(rect.width))

    if isinstance(camera, TurntableCamera):
        distance = getattr(camera, "distance", None)
        if distance is None:
            raise ValueError("turntable camera has no resolved distance to capture")
        center = tuple(float(v) for v in camera.center)
        if len(center) == 2:
            center = (center[0], center[1], 0.0)
        return Bookmark.orbit(
            phi=math.radians(float(camera.elevation)),
            theta=math.radians(float(camera.azimuth)),
            distance=float(distance),
            pivot=center,
        )

    raise UnsupportedModeError(f"no bookmark mode for camera {type(camera).__name__}")


def apply_bookmark(camera: Any, bookmark: Bookmark, *, debug: bool = False) -> None:
    """Write ``bookmark`` onto a camera of the matching kind."""
    if bookmark.mode is BookmarkMode.FLIGHT:
        raise UnsupportedModeError("flight bookmarks cannot be applied to VisPy cameras")

    if bookmark.mode is BookmarkMode.MAP:
        if not isinstance(camera, PanZoomCamera):
            raise ModeMismatchError(
                f"map bookmark requires a PanZoomCamera, got {type(camera).__name__}"
            )
        params = bookmark.map_params
        current = Rect(camera.rect)
        aspect = float(current.height) / float(current.width) if current.width else 1.0
        half_w = float(params.extent)
        half_h = half_w * aspect
        cx, cy = params.center
        camera.rect = (cx - half_w, cy - half_h, 2.0 * half_w, 2.0 * half_h)  # type: ignore[attr-defined]
        if debug and logger.isEnabledFor(logging.INFO):
            logger.info(
                "apply map bookmark center=(%.3f,%.3f) extent=%.3f aspect=%.3f",
                cx,
                cy,
                half_w,
                aspect,
            )
        return

    if not isinstance(camera, TurntableCamera):
        raise ModeMismatchError(
            f"orbit bookmark requires a TurntableCamera, got {type(camera).__name__}"
        )
    params = bookmark.orbit_params
    camera.azimuth = math.degrees(params.theta)  # type: ignore[attr-defined]
    camera.elevation = math.degrees(params.phi)  # type: ignore[attr-defined]
    camera.distance = float(params.distance)  # type: ignore[attr-defined]
    camera.center = tuple(params.pivot)  # type: ignore[attr-defined]
    if debug and logger.isEnabledFor(logging.INFO):
        logger.info(
            "apply orbit bookmark az=%.2f el=%.2f dist=%.3f pivot=%s",
            math.degrees(params.theta),
            math.degrees(params.phi),
            params.distance,
            params.pivot,
        )


def apply_transition(
    camera: Any,
    start: Bookmark,
    end: Bookmark,
    t: float,
    *,
    policy: Optional[BookmarkPolicy] = None,
) -> Bookmark:
    """Sample the start->end path at ``t``, apply it and return the sample."""
    if policy is None:
        policy = BookmarkPolicy()
    sampled = interpolate(start, end, t, rho=policy.rho, debug=policy.logging.log_interp)
    apply_bookmark(camera, sampled, debug=policy.logging.log_camera)
    return sampled


def transition_duration(
    start: Bookmark,
    end: Bookmark,
    *,
    policy: Optional[BookmarkPolicy] = None,
) -> float:
    """Duration multiplier for a map transition under ``policy``."""
    if policy is None:
        policy = BookmarkPolicy()
    return duration(start, end, rho=policy.rho, debug=policy.logging.log_duration)


__all__ = [
    "apply_bookmark",
    "apply_transition",
    "capture_bookmark",
    "transition_duration",
]
