"""Camera bookmarks: immutable viewpoint snapshots.

A ``Bookmark`` pairs a viewing mode with exactly one parameter payload. The
payload type must agree with the mode, so reading the parameters of an inactive
mode is rejected instead of returning stale values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence, Union


_BOOKMARK_PAYLOAD_VERSION = 1


class BookmarkError(ValueError):
    """Base class for bookmark precondition failures."""


class ModeMismatchError(BookmarkError):
    """Raised when bookmark modes (or a mode and its payload) disagree."""


class UnsupportedModeError(BookmarkError):
    """Raised when an operation has no formula for the requested mode."""


class DegenerateInputError(BookmarkError):
    """Raised when endpoint parameters would drive a division by zero."""


class BookmarkMode(Enum):
    """Viewing mode a bookmark was captured in."""

    MAP = "map"
    ORBIT = "orbit"
    FLIGHT = "flight"


@dataclass(frozen=True)
class MapParams:
    """Planar pan/zoom view: half-width ``extent`` around ``center``."""

    extent: float
    center: tuple[float, float]

    def __post_init__(self) -> None:
        if len(self.center) != 2:
            raise ValueError(f"map center requires 2 components, got {len(self.center)}")


@dataclass(frozen=True)
class OrbitParams:
    """Spherical view around ``pivot``; angles in radians."""

    phi: float
    theta: float
    distance: float
    pivot: tuple[float, float, float]

    def __post_init__(self) -> None:
        if len(self.pivot) != 3:
            raise ValueError(f"orbit pivot requires 3 components, got {len(self.pivot)}")


@dataclass(frozen=True)
class FlightParams:
    """First-person view; angles in radians."""

    pitch: float
    yaw: float
    position: tuple[float, float, float]

    def __post_init__(self) -> None:
        if len(self.position) != 3:
            raise ValueError(f"flight position requires 3 components, got {len(self.position)}")


BookmarkParams = Union[MapParams, OrbitParams, FlightParams]

_PARAMS_FOR_MODE: dict[BookmarkMode, type] = {
    BookmarkMode.MAP: MapParams,
    BookmarkMode.ORBIT: OrbitParams,
    BookmarkMode.FLIGHT: FlightParams,
}


@dataclass(frozen=True)
class Bookmark:
    """Opaque memento of a viewing position and orientation.

    Bookmarks are plain values: they hold no references to cameras or scene
    entities and can be copied, hashed and compared freely.
    """

    mode: BookmarkMode
    params: BookmarkParams

    def __post_init__(self) -> None:
        if not isinstance(self.mode, BookmarkMode):
            raise TypeError(f"bookmark mode must be BookmarkMode, got {type(self.mode)!r}")
        expected = _PARAMS_FOR_MODE[self.mode]
        if not isinstance(self.params, expected):
            raise ModeMismatchError(
                f"{self.mode.value} bookmark requires {expected.__name__}, "
                f"got {type(self.params).__name__}"
            )

    @classmethod
    def map(cls, center: Sequence[float], extent: float) -> "Bookmark":
        cx, cy = center
        return cls(BookmarkMode.MAP, MapParams(extent=float(extent), center=(float(cx), float(cy))))

    @classmethod
    def orbit(
        cls,
        phi: float,
        theta: float,
        distance: float,
        pivot: Sequence[float],
    ) -> "Bookmark":
        px, py, pz = pivot
        params = OrbitParams(
            phi=float(phi),
            theta=float(theta),
            distance=float(distance),
            pivot=(float(px), float(py), float(pz)),
        )
        return cls(BookmarkMode.ORBIT, params)

    @classmethod
    def flight(cls, pitch: float, yaw: float, position: Sequence[float]) -> "Bookmark":
        x, y, z = position
        params = FlightParams(pitch=float(pitch), yaw=float(yaw), position=(float(x), float(y), float(z)))
        return cls(BookmarkMode.FLIGHT, params)

    def _require(self, mode: BookmarkMode) -> None:
        if self.mode is not mode:
            raise ModeMismatchError(
                f"bookmark holds {self.mode.value} parameters, not {mode.value}"
            )

    @property
    def map_params(self) -> MapParams:
        self._require(BookmarkMode.MAP)
        return self.params  # type: ignore[return-value]

    @property
    def orbit_params(self) -> OrbitParams:
        self._require(BookmarkMode.ORBIT)
        return self.params  # type: ignore[return-value]

    @property
    def flight_params(self) -> FlightParams:
        self._require(BookmarkMode.FLIGHT)
        return self.params  # type: ignore[return-value]


def bookmark_to_payload(bookmark: Bookmark) -> dict[str, Any]:
    """Encode ``bookmark`` as a JSON-friendly mapping (active payload only)."""

    params = bookmark.params
    if isinstance(params, MapParams):
        body: dict[str, Any] = {
            "extent": params.extent,
            "center": list(params.center),
        }
    elif isinstance(params, OrbitParams):
        body = {
            "phi": params.phi,
            "theta": params.theta,
            "distance": params.distance,
            "pivot": list(params.pivot),
        }
    else:
        body = {
            "pitch": params.pitch,
            "yaw": params.yaw,
            "position": list(params.position),
        }
    return {
        "version": _BOOKMARK_PAYLOAD_VERSION,
        "mode": bookmark.mode.value,
        "params": body,
    }


def _float_seq(entry: Any, name: str, size: int) -> tuple[float, ...]:
    if isinstance(entry, (str, bytes)) or not isinstance(entry, Sequence):
        raise TypeError(f"bookmark payload field {name!r} must be a sequence")
    if len(entry) != size:
        raise ValueError(f"bookmark payload field {name!r} requires {size} components, got {len(entry)}")
    return tuple(float(v) for v in entry)


def bookmark_from_payload(data: Mapping[str, Any]) -> Bookmark:
    """Decode a mapping produced by :func:`bookmark_to_payload`."""

    if not isinstance(data, Mapping):
        raise TypeError(f"bookmark payload must be a mapping, got {type(data)!r}")
    version = int(data.get("version", _BOOKMARK_PAYLOAD_VERSION))
    if version != _BOOKMARK_PAYLOAD_VERSION:
        raise ValueError(f"unsupported bookmark payload version {version}")
    mode_value = data.get("mode")
    try:
        mode = BookmarkMode(mode_value)
    except ValueError as exc:
        raise UnsupportedModeError(f"unknown bookmark mode {mode_value!r}") from exc
    body = data.get("params")
    if not isinstance(body, Mapping):
        raise TypeError("bookmark payload requires a params mapping")

    try:
        if mode is BookmarkMode.MAP:
            return Bookmark.map(_float_seq(body["center"], "center", 2), float(body["extent"]))
        if mode is BookmarkMode.ORBIT:
            return Bookmark.orbit(
                float(body["phi"]),
                float(body["theta"]),
                float(body["distance"]),
                _float_seq(body["pivot"], "pivot", 3),
            )
        return Bookmark.flight(
            float(body["pitch"]),
            float(body["yaw"]),
            _float_seq(body["position"], "position", 3),
        )
    except KeyError as exc:
        raise ValueError(f"bookmark payload missing field {exc.args[0]!r}") from exc


__all__ = [
    "Bookmark",
    "BookmarkError",
    "BookmarkMode",
    "BookmarkParams",
    "DegenerateInputError",
    "FlightParams",
    "MapParams",
    "ModeMismatchError",
    "OrbitParams",
    "UnsupportedModeError",
    "bookmark_from_payload",
    "bookmark_to_payload",
]
