"""
napari-bookmarks: camera bookmarks for napari/VisPy viewers

Bookmarks are immutable viewpoint snapshots. Map bookmarks animate along the
Van Wijk smooth zoom-and-pan path, orbit bookmarks interpolate linearly.
Camera helpers live in ``napari_bookmarks.camera_ops`` and are imported on
demand so the core stays free of VisPy.
"""

from napari_bookmarks.bookmark import (
    Bookmark,
    BookmarkError,
    BookmarkMode,
    DegenerateInputError,
    FlightParams,
    MapParams,
    ModeMismatchError,
    OrbitParams,
    UnsupportedModeError,
    bookmark_from_payload,
    bookmark_to_payload,
)
from napari_bookmarks.interpolation import (
    VAN_WIJK_RHO,
    VanWijkPath,
    duration,
    interpolate,
    van_wijk_path,
)
from napari_bookmarks.logging_policy import (
    BookmarkLogging,
    BookmarkPolicy,
    load_bookmark_policy,
)

__version__ = "0.1.0"

__all__ = [
    "Bookmark",
    "BookmarkError",
    "BookmarkLogging",
    "BookmarkMode",
    "BookmarkPolicy",
    "DegenerateInputError",
    "FlightParams",
    "MapParams",
    "ModeMismatchError",
    "OrbitParams",
    "UnsupportedModeError",
    "VAN_WIJK_RHO",
    "VanWijkPath",
    "__version__",
    "bookmark_from_payload",
    "bookmark_to_payload",
    "duration",
    "interpolate",
    "load_bookmark_policy",
    "van_wijk_path",
]
