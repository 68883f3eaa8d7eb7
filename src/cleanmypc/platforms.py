"""Platform detection and per-platform path tables."""

from __future__ import annotations

import logging
import os
import string
import sys
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cleanmypc.settings import CleanupConfig

log = logging.getLogger(__name__)


class Platform(str, Enum):
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"

    @classmethod
    def current(cls) -> Platform:
        """Map ``sys.platform`` to a Platform; unknown systems count as linux."""
        if sys.platform.startswith("win"):
            return cls.WINDOWS
        if sys.platform == "darwin":
            return cls.MACOS
        return cls.LINUX


class Category(str, Enum):
    TEMP = "temp"
    CACHE = "cache"
    TRASH = "trash"
    LARGE_FILE_SEEDS = "large_file_seeds"


BROWSERS = ("chrome", "firefox", "edge", "safari")

_DEFAULT_DRIVES = ("C:", "D:", "E:", "F:")


@dataclass(frozen=True)
class HostEnvironment:
    """Everything the path tables need to know about the running system.

    ``root`` is the filesystem root that absolute system locations are
    resolved against ("/" on unix, "C:/" on windows).
    """

    platform: Platform
    home: str
    temp_dir: str
    root: str = "/"
    local_app_data: str = ""
    app_data: str = ""
    drives: tuple[str, ...] = field(default=())

    @classmethod
    def detect(cls) -> HostEnvironment:
        platform = Platform.current()
        root = "/"
        drives: tuple[str, ...] = ()
        if platform is Platform.WINDOWS:
            system_drive = os.environ.get("SystemDrive", "C:")
            root = f"{system_drive}/"
            drives = _DEFAULT_DRIVES
        return cls(
            platform=platform,
            home=str(Path.home()),
            temp_dir=tempfile.gettempdir(),
            root=root,
            local_app_data=os.environ.get("LOCALAPPDATA", ""),
            app_data=os.environ.get("APPDATA", ""),
            drives=drives,
        )


@dataclass(frozen=True)
class PlatformProfile:
    """One row of the platform table.

    Path entries are templates with ``{home}``, ``{tmp}``, ``{root}``,
    ``{local}``, ``{roaming}`` and ``{drive}`` placeholders.  Entries may
    contain ``*`` wildcard segments, which are expanded later by discovery.
    """

    temp: tuple[str, ...]
    cache: tuple[str, ...]
    trash: tuple[str, ...]
    large_file_seeds: tuple[str, ...]
    browsers: dict[str, tuple[str, ...]]
    skip_roots: tuple[str, ...]
    case_insensitive: bool = False


_WINDOWS = PlatformProfile(
    temp=(
        "{tmp}",
        "{local}/Temp",
        "{roaming}/Local/Temp",
        "{root}Windows/Temp",
        "{root}Windows/SoftwareDistribution/Download",
        "{root}Windows/Prefetch",
    ),
    cache=(
        "{local}/Microsoft/Windows/Explorer/thumbcache_*.db",
        "{local}/Microsoft/Windows/WebCache",
        "{local}/Microsoft/Windows/INetCache",
        "{local}/IconCache.db",
        "{local}/npm-cache",
        "{roaming}/npm-cache",
        "{local}/yarn/cache",
        "{local}/pip/cache",
        "{local}/composer/cache",
        "{roaming}/Code/logs",
        "{roaming}/Code/CachedData",
        "{local}/JetBrains/*/caches",
        "{local}/JetBrains/*/logs",
    ),
    trash=(
        "{drive}/$Recycle.Bin",
        "{drive}/RECYCLER",
    ),
    large_file_seeds=(
        "{home}",
        "{root}Users",
        "{root}Downloads",
        "{home}/Documents",
        "{home}/Videos",
        "{home}/Pictures",
        "{home}/Desktop",
    ),
    browsers={
        "chrome": (
            "{local}/Google/Chrome/User Data/Default/Cache",
            "{local}/Google/Chrome/User Data/Default/Code Cache",
            "{local}/Google/Chrome/User Data/Default/GPUCache",
            "{local}/Google/Chrome/User Data/ShaderCache",
            "{local}/Google/Chrome/User Data/SwiftShader",
        ),
        "firefox": (
            "{local}/Mozilla/Firefox/Profiles/*/cache2",
            "{local}/Mozilla/Firefox/Profiles/*/startupCache",
            "{roaming}/Mozilla/Firefox/Profiles/*/cache2",
            "{roaming}/Mozilla/Firefox/Profiles/*/startupCache",
        ),
        "edge": (
            "{local}/Microsoft/Edge/User Data/Default/Cache",
            "{local}/Microsoft/Edge/User Data/Default/Code Cache",
            "{local}/Microsoft/Edge/User Data/Default/GPUCache",
            "{local}/Microsoft/Edge/User Data/ShaderCache",
        ),
    },
    skip_roots=(
        "{root}Windows",
        "{root}Program Files",
        "{root}Program Files (x86)",
        "{root}ProgramData",
    ),
    case_insensitive=True,
)

_MACOS = PlatformProfile(
    temp=(
        "{tmp}",
        "{root}tmp",
        "{home}/Library/Caches",
        "{root}var/tmp",
        "{root}private/tmp",
    ),
    cache=(
        "{home}/Library/Caches",
        "{root}Library/Caches",
        "{root}System/Library/Caches",
        "{home}/.npm/_cacache",
        "{home}/.yarn/cache",
        "{home}/.cache/pip",
        "{home}/.composer/cache",
        "{home}/Library/Caches/com.microsoft.VSCode",
        "{home}/Library/Logs/DiagnosticReports",
        "{home}/Library/Application Support/Code/logs",
    ),
    trash=(
        "{home}/.Trash",
        "{root}Volumes/*/.Trashes",
        "{root}.Trashes",
    ),
    large_file_seeds=(
        "{home}",
        "{home}/Documents",
        "{home}/Movies",
        "{home}/Pictures",
        "{home}/Desktop",
        "{home}/Library",
        "{root}Applications",
    ),
    browsers={
        "chrome": (
            "{home}/Library/Caches/Google/Chrome",
            "{home}/Library/Application Support/Google/Chrome/Default/GPUCache",
            "{home}/Library/Application Support/Google/Chrome/ShaderCache",
        ),
        "firefox": (
            "{home}/Library/Caches/Firefox",
            "{home}/Library/Application Support/Firefox/Profiles/*/cache2",
            "{home}/Library/Application Support/Firefox/Profiles/*/startupCache",
        ),
        "edge": (
            "{home}/Library/Caches/Microsoft Edge",
            "{home}/Library/Application Support/Microsoft Edge/Default/GPUCache",
        ),
        "safari": (
            "{home}/Library/Caches/com.apple.Safari",
            "{home}/Library/Safari/WebpageIcons.db",
            "{home}/Library/Safari/Webpage Previews",
        ),
    },
    skip_roots=(
        "{root}System",
        "{root}Library/System",
        "{root}usr/bin",
        "{root}usr/sbin",
        "{root}bin",
        "{root}sbin",
    ),
)

_LINUX = PlatformProfile(
    temp=(
        "{tmp}",
        "{root}tmp",
        "{root}var/tmp",
        "{home}/.cache",
    ),
    cache=(
        "{home}/.cache",
        "{root}var/cache",
        "{root}tmp",
        "{home}/.npm/_cacache",
        "{home}/.yarn/cache",
        "{home}/.cache/pip",
        "{home}/.composer/cache",
        "{home}/.config/Code/logs",
        "{home}/.vscode/extensions/.obsolete",
    ),
    trash=(
        "{home}/.local/share/Trash",
        "{root}tmp/.Trash-*",
    ),
    large_file_seeds=(
        "{home}",
        "{home}/Documents",
        "{home}/Videos",
        "{home}/Pictures",
        "{home}/Desktop",
        "{root}opt",
        "{root}usr/share",
    ),
    browsers={
        "chrome": (
            "{home}/.cache/google-chrome",
            "{home}/.config/google-chrome/Default/GPUCache",
            "{home}/.config/google-chrome/ShaderCache",
        ),
        "firefox": (
            "{home}/.cache/mozilla/firefox",
            "{home}/.mozilla/firefox/*/cache2",
            "{home}/.mozilla/firefox/*/startupCache",
        ),
        "edge": (
            "{home}/.cache/microsoft-edge",
            "{home}/.config/microsoft-edge/Default/GPUCache",
        ),
    },
    skip_roots=(
        "{root}bin",
        "{root}sbin",
        "{root}usr/bin",
        "{root}usr/sbin",
        "{root}lib",
        "{root}lib64",
        "{root}usr/lib",
        "{root}usr/lib64",
        "{root}sys",
        "{root}proc",
        "{root}dev",
    ),
)

PROFILES: dict[Platform, PlatformProfile] = {
    Platform.WINDOWS: _WINDOWS,
    Platform.MACOS: _MACOS,
    Platform.LINUX: _LINUX,
}

# Names skipped anywhere during the large-file scan.
SYSTEM_DIR_NAMES = frozenset({
    "System Volume Information",
    "$RECYCLE.BIN",
    "Windows",
    "Program Files",
    "Program Files (x86)",
    "ProgramData",
    "AppData",
    "node_modules",
    ".git",
    ".svn",
    ".hg",
})


def profile_for(platform: Platform | str) -> PlatformProfile:
    """Return the table row for *platform*, falling back to linux."""
    try:
        return PROFILES[Platform(platform)]
    except ValueError:
        log.debug("Unsupported platform %r, using linux paths", platform)
        return PROFILES[Platform.LINUX]


def _expand(templates: tuple[str, ...], host: HostEnvironment) -> list[str]:
    """Fill templates from *host*, dropping those whose value is unknown."""
    root = host.root if host.root.endswith(("/", "\\")) else host.root + "/"
    values = {
        "home": host.home,
        "tmp": host.temp_dir,
        "root": root,
        "local": host.local_app_data,
        "roaming": host.app_data,
    }
    paths: list[str] = []
    for template in templates:
        keys = {name for _, name, _, _ in string.Formatter().parse(template) if name}
        if "drive" in keys:
            for drive in host.drives:
                paths.append(template.format(drive=drive, **values))
            continue
        if any(not values.get(k) for k in keys):
            continue
        paths.append(template.format(**values))
    return paths


def _dedupe(paths: list[str]) -> list[str]:
    """Drop later entries that name the same location as an earlier one."""
    seen: set[str] = set()
    unique: list[str] = []
    for p in paths:
        key = os.path.normcase(os.path.realpath(p.replace("\\", "/")))
        if key in seen:
            continue
        seen.add(key)
        unique.append(p)
    return unique


def resolve_paths(
    category: Category | str,
    host: HostEnvironment,
    config: CleanupConfig | None = None,
) -> list[str]:
    """Return candidate paths for *category*.

    Built-in entries for the host platform come first, in declared order,
    followed by the custom temp/cache paths from *config*.  Entries that
    point at the same location are reported once.
    """
    category = Category(category)
    profile = profile_for(host.platform)
    paths = _expand(getattr(profile, category.value), host)

    if config is not None:
        if category is Category.TEMP:
            paths.extend(config.custom_temp_paths)
        elif category is Category.CACHE:
            paths.extend(config.custom_cache_paths)

    return _dedupe([p for p in paths if p])


def browser_paths(browser: str, host: HostEnvironment) -> list[str]:
    """Return the cache locations of *browser* on the host platform.

    Browsers without an entry for the platform (safari outside macOS)
    resolve to an empty list.
    """
    profile = profile_for(host.platform)
    return _dedupe(_expand(profile.browsers.get(browser, ()), host))


def skip_roots(host: HostEnvironment) -> tuple[list[str], bool]:
    """Return the system-root prefixes for the large-file scan and
    whether they compare case-insensitively."""
    profile = profile_for(host.platform)
    return _expand(profile.skip_roots, host), profile.case_insensitive
