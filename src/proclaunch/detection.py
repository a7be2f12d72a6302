"""Host platform detection."""

import logging
import os
import platform
from enum import Enum

log = logging.getLogger(__name__)

PLATFORM_OVERRIDE_ENV = "PROCLAUNCH_PLATFORM"
PATH_EXTENSIONS_ENV = "PATHEXT"


class Platform(str, Enum):
    POSIX_LIKE = "posix"
    WINDOWS_LIKE = "windows"
    UNKNOWN = "unknown"


_POSIX_SYSTEMS = {"linux", "darwin", "freebsd", "openbsd", "netbsd", "sunos", "aix"}


def _classify_system(system: str) -> Platform:
    """Return the platform classification for a `platform.system()` value."""
    name = system.strip().lower()
    if name == "windows":
        return Platform.WINDOWS_LIKE
    # Cygwin and MSYS Pythons use a colon-separated POSIX PATH
    if name in _POSIX_SYSTEMS or name.startswith(("cygwin", "msys")):
        return Platform.POSIX_LIKE
    return Platform.UNKNOWN


def current_platform() -> Platform:
    """Return the platform classification of the running host."""
    override = os.environ.get(PLATFORM_OVERRIDE_ENV, "").strip().lower()
    if override:
        try:
            return Platform(override)
        except ValueError:
            log.debug("ignoring unrecognised %s=%r", PLATFORM_OVERRIDE_ENV, override)
    return _classify_system(platform.system())


def path_env_key(host: Platform) -> str:
    """Return the name of the search-path variable."""
    if host is Platform.WINDOWS_LIKE:
        return "Path"
    return "PATH"


def path_separator(host: Platform) -> str:
    """Return the separator joining entries of the search-path variable."""
    if host is Platform.WINDOWS_LIKE:
        return ";"
    return ":"


def uses_path_extensions(host: Platform) -> bool:
    return host is Platform.WINDOWS_LIKE


def can_spawn_processes() -> bool:
    """Return whether this interpreter can create child processes."""
    if os.name == "nt":
        return True
    return hasattr(os, "fork") or hasattr(os, "posix_spawn")
