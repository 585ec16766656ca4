"""Bookmark interpolation and animation-duration heuristics.

Map bookmarks follow the Van Wijk & Nuij smooth zoom-and-pan path ("Smooth and
efficient zooming and panning", 2003); orbit bookmarks are interpolated
linearly. Arithmetic runs in single precision so results match the float32
camera state they are applied to.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math

import numpy as np

from napari_bookmarks.bookmark import (
    Bookmark,
    BookmarkMode,
    DegenerateInputError,
    MapParams,
    ModeMismatchError,
    OrbitParams,
    UnsupportedModeError,
)


logger = logging.getLogger(__name__)

VAN_WIJK_RHO = math.sqrt(2.0)

_F = np.float32


def _check_endpoints(a: Bookmark, b: Bookmark, op: str) -> BookmarkMode:
    for bookmark in (a, b):
        if bookmark.mode is BookmarkMode.FLIGHT:
            raise UnsupportedModeError(f"{op}: no path is defined for flight bookmarks")
    if a.mode is not b.mode:
        raise ModeMismatchError(
            f"{op}: endpoint modes differ ({a.mode.value} vs {b.mode.value})"
        )
    return a.mode


def _check_rho(rho: float) -> np.float32:
    value = float(rho)
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError(f"rho must be a finite positive number, got {rho!r}")
    return _F(value)


def _map_terms(params: MapParams, label: str) -> tuple[np.float32, np.float32, np.float32]:
    """Return ``(ux, uy, w)`` in single precision, rejecting unusable values."""
    with np.errstate(over="ignore", under="ignore"):
        ux, uy, w = _F(params.center[0]), _F(params.center[1]), _F(params.extent)
    if not np.isfinite(w) or w <= 0:
        raise DegenerateInputError(
            f"{label} extent must be finite and positive in single precision, got {params.extent!r}"
        )
    if not (np.isfinite(ux) and np.isfinite(uy)):
        raise DegenerateInputError(
            f"{label} center must be finite in single precision, got {params.center!r}"
        )
    return ux, uy, w


@dataclass(frozen=True)
class VanWijkPath:
    """Derived terms of the optimal zoom/pan path between two map views.

    ``total`` is the path length divided by ``rho``; sampling at ``t`` walks
    ``t * total`` along it. ``degenerate`` marks paths without a zoom-sweep
    term (``dr == 0``), which fall back to a linear pan with geometric zoom.
    """

    rho: np.float32
    rho2: np.float32
    ux0: np.float32
    uy0: np.float32
    w0: np.float32
    w1: np.float32
    dx: np.float32
    dy: np.float32
    d1: np.float32
    r0: np.float32
    r1: np.float32
    dr: np.float32
    total: np.float32
    degenerate: bool

    def sample(self, t: float) -> MapParams:
        t32 = _F(t)
        s = t32 * self.total
        rho = self.rho
        if not self.degenerate:
            cosh_r0 = np.cosh(self.r0)
            arg = rho * s + self.r0
            u = self.w0 / (self.rho2 * self.d1) * (cosh_r0 * np.tanh(arg) - np.sinh(self.r0))
            cx = self.ux0 + u * self.dx
            cy = self.uy0 + u * self.dy
            extent = self.w0 * cosh_r0 / np.cosh(arg)
        else:
            cx = self.ux0 + t32 * self.dx
            cy = self.uy0 + t32 * self.dy
            extent = self.w0 * np.exp(rho * s)
        return MapParams(extent=float(extent), center=(float(cx), float(cy)))


def van_wijk_path(start: MapParams, end: MapParams, *, rho: float = VAN_WIJK_RHO) -> VanWijkPath:
    """Derive the Van Wijk path terms shared by interpolation and duration.

    Coincident centers have no pan component; they take the degenerate branch
    directly instead of dividing by a zero distance. Endpoints whose terms
    overflow single precision raise :class:`DegenerateInputError`.
    """

    ux0, uy0, w0 = _map_terms(start, "start")
    ux1, uy1, w1 = _map_terms(end, "end")
    rho32 = _check_rho(rho)
    # powers taken in double precision so the default rho gives exactly 2 and 4
    rho2 = _F(float(rho) ** 2)
    rho4 = _F(float(rho) ** 4)
    two = _F(2.0)

    with np.errstate(over="ignore", invalid="ignore", divide="ignore", under="ignore"):
        dx = ux1 - ux0
        dy = uy1 - uy0
        d2 = dx * dx + dy * dy
        d1 = np.sqrt(d2)
        if not np.isfinite(d1):
            raise DegenerateInputError("center distance overflows single precision")

        if d1 == 0:
            r0 = r1 = _F(0.0)
        else:
            b0 = (w1 * w1 - w0 * w0 + rho4 * d2) / (two * w0 * rho2 * d1)
            b1 = (w1 * w1 - w0 * w0 - rho4 * d2) / (two * w1 * rho2 * d1)
            if not (np.isfinite(b0) and np.isfinite(b1)):
                raise DegenerateInputError("zoom/pan terms overflow single precision")
            # ln(sqrt(b^2 + 1) - b) == -asinh(b)
            r0 = -np.arcsinh(b0)
            r1 = -np.arcsinh(b1)
        dr = r1 - r0
        degenerate = bool(dr == 0)
        total = (np.log(w1 / w0) if degenerate else dr) / rho32
    if not np.isfinite(total):
        raise DegenerateInputError("path length overflows single precision")

    return VanWijkPath(
        rho=rho32,
        rho2=rho2,
        ux0=ux0,
        uy0=uy0,
        w0=w0,
        w1=w1,
        dx=dx,
        dy=dy,
        d1=d1,
        r0=_F(r0),
        r1=_F(r1),
        dr=_F(dr),
        total=_F(total),
        degenerate=degenerate,
    )


def _lerp(x0: float, x1: float, t: np.float32) -> float:
    a = _F(x0)
    return float(a + (_F(x1) - a) * t)


def _interpolate_orbit(a: OrbitParams, b: OrbitParams, t: float) -> OrbitParams:
    t32 = _F(t)
    return OrbitParams(
        phi=_lerp(a.phi, b.phi, t32),
        theta=_lerp(a.theta, b.theta, t32),
        distance=_lerp(a.distance, b.distance, t32),
        pivot=(
            _lerp(a.pivot[0], b.pivot[0], t32),
            _lerp(a.pivot[1], b.pivot[1], t32),
            _lerp(a.pivot[2], b.pivot[2], t32),
        ),
    )


def interpolate(
    a: Bookmark,
    b: Bookmark,
    t: float,
    *,
    rho: float = VAN_WIJK_RHO,
    debug: bool = False,
) -> Bookmark:
    """Interpolate between two bookmarks of the same mode (map or orbit).

    ``t`` is normally in ``[0, 1]`` but is not clamped; values outside that
    range extrapolate along the same path. Orbit angles are not wrapped.

    Raises
    ------
    UnsupportedModeError
        Either endpoint is a flight bookmark.
    ModeMismatchError
        The endpoints have different modes.
    DegenerateInputError
        A map endpoint has a non-positive or non-finite extent.
    """

    mode = _check_endpoints(a, b, "interpolate")

    if mode is BookmarkMode.ORBIT:
        if a == b:
            return a
        return Bookmark(mode, _interpolate_orbit(a.orbit_params, b.orbit_params, t))

    path = van_wijk_path(a.map_params, b.map_params, rho=rho)
    if a == b:
        return a
    sampled = path.sample(t)
    if debug and logger.isEnabledFor(logging.INFO):
        logger.info(
            "interpolate map t=%.4f degenerate=%s center=(%.4f,%.4f) extent=%.4f",
            float(t),
            path.degenerate,
            sampled.center[0],
            sampled.center[1],
            sampled.extent,
        )
    return Bookmark(mode, sampled)


def duration(
    a: Bookmark,
    b: Bookmark,
    *,
    rho: float = VAN_WIJK_RHO,
    debug: bool = False,
) -> float:
    """Recommend a unitless duration multiplier for a map-to-map transition.

    The value is the Van Wijk path length, so long pans and deep zooms take
    proportionally longer. Only map endpoints are accepted: orbit endpoints
    raise :class:`ModeMismatchError` because the heuristic reads map
    parameters.
    """

    mode = _check_endpoints(a, b, "duration")
    if mode is not BookmarkMode.MAP:
        raise ModeMismatchError(
            f"duration: heuristic reads map parameters, got {mode.value} endpoints"
        )

    path = van_wijk_path(a.map_params, b.map_params, rho=rho)
    value = abs(float(path.total))
    if debug and logger.isEnabledFor(logging.INFO):
        logger.info(
            "duration map d=%.4f dr=%.6f degenerate=%s value=%.4f",
            float(path.d1),
            float(path.dr),
            path.degenerate,
            value,
        )
    return value


__all__ = [
    "VAN_WIJK_RHO",
    "VanWijkPath",
    "duration",
    "interpolate",
    "van_wijk_path",
]
