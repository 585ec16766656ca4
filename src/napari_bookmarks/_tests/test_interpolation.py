from __future__ import annotations

import logging
import math

import pytest

from napari_bookmarks.bookmark import (
    Bookmark,
    BookmarkMode,
    DegenerateInputError,
    ModeMismatchError,
    UnsupportedModeError,
)
from napari_bookmarks.interpolation import (
    VAN_WIJK_RHO,
    duration,
    interpolate,
    van_wijk_path,
)


def _approx_map(result: Bookmark, center, extent, *, rel: float = 1e-4, abs_: float = 1e-4) -> None:
    params = result.map_params
    assert params.center[0] == pytest.approx(center[0], rel=rel, abs=abs_)
    assert params.center[1] == pytest.approx(center[1], rel=rel, abs=abs_)
    assert params.extent == pytest.approx(extent, rel=rel, abs=abs_)


def _approx_orbit(result: Bookmark, expected: Bookmark) -> None:
    got = result.orbit_params
    want = expected.orbit_params
    assert got.phi == pytest.approx(want.phi, abs=1e-5)
    assert got.theta == pytest.approx(want.theta, abs=1e-5)
    assert got.distance == pytest.approx(want.distance, abs=1e-5)
    assert got.pivot == pytest.approx(want.pivot, abs=1e-5)


# ---- orbit -------------------------------------------------------------------


ORBIT_A = Bookmark.orbit(0.1, 0.2, 5.0, (0.0, 0.0, 0.0))
ORBIT_B = Bookmark.orbit(1.0, -0.5, 10.0, (2.0, 4.0, -6.0))


def test_orbit_endpoints_match_inputs() -> None:
    _approx_orbit(interpolate(ORBIT_A, ORBIT_B, 0.0), ORBIT_A)
    _approx_orbit(interpolate(ORBIT_A, ORBIT_B, 1.0), ORBIT_B)


def test_orbit_midpoint_is_linear() -> None:
    mid = interpolate(ORBIT_A, ORBIT_B, 0.5)
    assert mid.mode is BookmarkMode.ORBIT
    assert mid.orbit_params.distance == 7.5
    assert mid.orbit_params.pivot == pytest.approx((1.0, 2.0, -3.0))
    assert mid.orbit_params.phi == pytest.approx(0.55)


def test_orbit_angles_are_not_wrapped() -> None:
    a = Bookmark.orbit(0.0, 0.0, 1.0, (0.0, 0.0, 0.0))
    b = Bookmark.orbit(4.0 * math.pi, 0.0, 1.0, (0.0, 0.0, 0.0))
    mid = interpolate(a, b, 0.5)
    assert mid.orbit_params.phi == pytest.approx(2.0 * math.pi, rel=1e-6)


def test_orbit_extrapolates_outside_unit_interval() -> None:
    assert interpolate(ORBIT_A, ORBIT_B, 2.0).orbit_params.distance == pytest.approx(15.0)
    assert interpolate(ORBIT_A, ORBIT_B, -1.0).orbit_params.distance == pytest.approx(0.0)


@pytest.mark.parametrize("t", [0.0, 0.25, 0.6, 1.0])
def test_orbit_reverse_symmetry(t: float) -> None:
    _approx_orbit(interpolate(ORBIT_A, ORBIT_B, t), interpolate(ORBIT_B, ORBIT_A, 1.0 - t))


# ---- map ---------------------------------------------------------------------


def test_identical_map_bookmarks_take_degenerate_branch() -> None:
    home = Bookmark.map((1.5, -2.0), 10.0)
    path = van_wijk_path(home.map_params, home.map_params)
    assert path.degenerate is True
    assert float(path.total) == 0.0
    assert duration(home, home) == 0.0
    for t in (0.0, 0.3, 1.0):
        assert interpolate(home, home, t) == home


def test_equal_extent_pan_hits_both_endpoints() -> None:
    a = Bookmark.map((0.0, 0.0), 10.0)
    b = Bookmark.map((10.0, 0.0), 10.0)
    _approx_map(interpolate(a, b, 0.0), (0.0, 0.0), 10.0)
    _approx_map(interpolate(a, b, 1.0), (10.0, 0.0), 10.0)


def test_equal_extent_pan_zooms_out_midway() -> None:
    a = Bookmark.map((0.0, 0.0), 10.0)
    b = Bookmark.map((10.0, 0.0), 10.0)
    mid = interpolate(a, b, 0.5)
    assert mid.map_params.center[0] == pytest.approx(5.0, abs=1e-4)
    assert mid.map_params.center[1] == pytest.approx(0.0, abs=1e-6)
    # r0 = -asinh(1), the apex extent is w0 * cosh(r0)
    assert mid.map_params.extent == pytest.approx(10.0 * math.sqrt(2.0), rel=1e-5)


def test_general_path_lands_on_end_bookmark() -> None:
    a = Bookmark.map((0.0, 0.0), 4.0)
    b = Bookmark.map((30.0, 10.0), 1.0)
    path = van_wijk_path(a.map_params, b.map_params)
    assert path.degenerate is False
    _approx_map(interpolate(a, b, 0.0), (0.0, 0.0), 4.0)
    _approx_map(interpolate(a, b, 1.0), (30.0, 10.0), 1.0)


@pytest.mark.parametrize("t", [0.1, 0.5, 0.85])
def test_map_reverse_symmetry(t: float) -> None:
    a = Bookmark.map((0.0, 0.0), 4.0)
    b = Bookmark.map((30.0, 10.0), 1.0)
    forward = interpolate(a, b, t).map_params
    backward = interpolate(b, a, 1.0 - t)
    _approx_map(backward, forward.center, forward.extent, rel=1e-3, abs_=1e-3)


def test_coincident_centers_zoom_geometrically() -> None:
    a = Bookmark.map((2.0, 3.0), 1.0)
    b = Bookmark.map((2.0, 3.0), 8.0)
    path = van_wijk_path(a.map_params, b.map_params)
    assert path.degenerate is True
    mid = interpolate(a, b, 0.5)
    assert mid.map_params.center == (2.0, 3.0)
    assert mid.map_params.extent == pytest.approx(math.sqrt(8.0), rel=1e-5)
    _approx_map(interpolate(a, b, 1.0), (2.0, 3.0), 8.0)
    assert duration(a, b) == pytest.approx(math.log(8.0) / VAN_WIJK_RHO, rel=1e-5)


def test_custom_rho_still_reaches_endpoints() -> None:
    a = Bookmark.map((-5.0, 5.0), 2.0)
    b = Bookmark.map((15.0, -5.0), 6.0)
    _approx_map(interpolate(a, b, 1.0, rho=1.0), (15.0, -5.0), 6.0)
    assert duration(a, b, rho=1.0) != pytest.approx(duration(a, b))


@pytest.mark.parametrize("rho", [0.0, -1.0, float("nan"), float("inf")])
def test_invalid_rho_is_rejected(rho: float) -> None:
    a = Bookmark.map((0.0, 0.0), 1.0)
    b = Bookmark.map((1.0, 0.0), 1.0)
    with pytest.raises(ValueError):
        interpolate(a, b, 0.5, rho=rho)
    with pytest.raises(ValueError):
        duration(a, b, rho=rho)


@pytest.mark.parametrize("extent", [0.0, -2.0, float("inf"), float("nan")])
def test_degenerate_extents_raise(extent: float) -> None:
    good = Bookmark.map((0.0, 0.0), 1.0)
    bad = Bookmark.map((3.0, 0.0), extent)
    with pytest.raises(DegenerateInputError):
        interpolate(good, bad, 0.5)
    with pytest.raises(DegenerateInputError):
        duration(bad, good)


@pytest.mark.parametrize("extent", [1e-50, 1e39])
def test_extents_outside_single_precision_raise(extent: float) -> None:
    good = Bookmark.map((0.0, 0.0), 1.0)
    bad = Bookmark.map((3.0, 0.0), extent)
    for t in (0.0, 0.5, 1.0):
        with pytest.raises(DegenerateInputError):
            interpolate(good, bad, t)
    with pytest.raises(DegenerateInputError):
        duration(good, bad)


def test_overflowing_zoom_terms_raise() -> None:
    a = Bookmark.map((0.0, 0.0), 1e20)
    b = Bookmark.map((1.0, 0.0), 2e20)
    with pytest.raises(DegenerateInputError):
        interpolate(a, b, 0.5)
    with pytest.raises(DegenerateInputError):
        duration(a, b)


def test_overflowing_center_distance_raises() -> None:
    a = Bookmark.map((-3e38, 0.0), 1.0)
    b = Bookmark.map((3e38, 0.0), 1.0)
    with pytest.raises(DegenerateInputError):
        interpolate(a, b, 0.5)


def test_default_rho_powers_are_exact() -> None:
    a = Bookmark.map((0.0, 0.0), 1.0)
    b = Bookmark.map((1.0, 0.0), 1.0)
    path = van_wijk_path(a.map_params, b.map_params)
    assert float(path.rho2) == 2.0
    # b0 == 1 and b1 == -1 for a unit pan at unit extent
    assert float(path.r0) == pytest.approx(-math.asinh(1.0), rel=1e-6)
    assert float(path.r1) == pytest.approx(math.asinh(1.0), rel=1e-6)


def test_identical_zero_extent_bookmarks_still_raise() -> None:
    flat = Bookmark.map((0.0, 0.0), 0.0)
    with pytest.raises(DegenerateInputError):
        interpolate(flat, flat, 0.5)


# ---- duration ----------------------------------------------------------------


def test_duration_equal_extent_pan() -> None:
    a = Bookmark.map((0.0, 0.0), 10.0)
    b = Bookmark.map((10.0, 0.0), 10.0)
    expected = 2.0 * math.asinh(1.0) / math.sqrt(2.0)
    assert duration(a, b) == pytest.approx(expected, rel=1e-5)


@pytest.mark.parametrize(
    "start, end",
    [
        (((0.0, 0.0), 4.0), ((30.0, 10.0), 1.0)),
        (((0.0, 0.0), 1.0), ((0.5, 0.5), 100.0)),
        (((-100.0, 50.0), 0.01), ((100.0, -50.0), 0.02)),
    ],
)
def test_duration_is_non_negative_and_symmetric(start, end) -> None:
    a = Bookmark.map(*start)
    b = Bookmark.map(*end)
    forward = duration(a, b)
    assert forward > 0.0
    assert duration(b, a) == pytest.approx(forward, rel=1e-4)


def test_longer_pan_takes_longer() -> None:
    home = Bookmark.map((0.0, 0.0), 1.0)
    near = Bookmark.map((2.0, 0.0), 1.0)
    far = Bookmark.map((200.0, 0.0), 1.0)
    assert duration(home, far) > duration(home, near)


# ---- preconditions -----------------------------------------------------------


FLIGHT = Bookmark.flight(0.0, 0.0, (0.0, 0.0, 0.0))
HOME = Bookmark.map((0.0, 0.0), 1.0)


def test_flight_is_unsupported() -> None:
    with pytest.raises(UnsupportedModeError):
        interpolate(FLIGHT, FLIGHT, 0.5)
    with pytest.raises(UnsupportedModeError):
        interpolate(HOME, FLIGHT, 0.5)
    with pytest.raises(UnsupportedModeError):
        duration(FLIGHT, FLIGHT)


def test_mixed_modes_are_rejected_before_arithmetic() -> None:
    broken = Bookmark.map((0.0, 0.0), 0.0)
    with pytest.raises(ModeMismatchError):
        interpolate(broken, ORBIT_A, 0.5)
    with pytest.raises(ModeMismatchError):
        duration(ORBIT_A, broken)


def test_duration_rejects_orbit_endpoints() -> None:
    with pytest.raises(ModeMismatchError):
        duration(ORBIT_A, ORBIT_B)


def test_debug_flag_logs_samples(caplog) -> None:
    a = Bookmark.map((0.0, 0.0), 10.0)
    b = Bookmark.map((10.0, 0.0), 10.0)
    caplog.set_level(logging.INFO, logger="napari_bookmarks.interpolation")
    interpolate(a, b, 0.5)
    assert not caplog.records
    interpolate(a, b, 0.5, debug=True)
    duration(a, b, debug=True)
    messages = [record.getMessage() for record in caplog.records]
    assert any(msg.startswith("interpolate map") for msg in messages)
    assert any(msg.startswith("duration map") for msg in messages)
