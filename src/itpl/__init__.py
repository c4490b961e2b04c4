"""itpl core package.

- **formatter**: playlist listing and the item path transformation pipeline
- **library**: the read-only ``MediaLibrary`` interface and source factory
- **itunes_xml** / **plex_library**: library sources
- **cli**: command-line entry point

The main entry point for formatting is the ``PlaylistFormatter`` class.
"""

from .config import FormatOptions
from .formatter import PlaylistFormatter
from .library import LibraryError, MediaLibrary, StaticLibrary
from .version import __version__

__all__ = [
    "__version__",
    "FormatOptions",
    "LibraryError",
    "MediaLibrary",
    "PlaylistFormatter",
    "StaticLibrary",
]
