"""JSON-backed cleanup configuration."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cleanmypc.platforms import HostEnvironment, Platform

log = logging.getLogger(__name__)

_CONFIG_DIR = ".cleanmypc"
_CONFIG_FILE = "config.json"

GIB = 1024 * 1024 * 1024

Categories = tuple[tuple[str, tuple[str, ...]], ...]

DEFAULT_CATEGORIES: Categories = (
    ("Images", (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".svg", ".webp", ".ico")),
    ("Videos", (".mp4", ".avi", ".mkv", ".mov", ".wmv", ".flv", ".webm", ".m4v")),
    ("Audio", (".mp3", ".wav", ".flac", ".aac", ".ogg", ".wma", ".m4a")),
    ("Documents", (".pdf", ".doc", ".docx", ".txt", ".rtf", ".odt", ".pages")),
    ("Spreadsheets", (".xls", ".xlsx", ".csv", ".ods", ".numbers")),
    ("Presentations", (".ppt", ".pptx", ".odp", ".key")),
    ("Archives", (".zip", ".rar", ".7z", ".tar", ".gz", ".bz2", ".xz")),
    ("Installers", (".exe", ".msi", ".dmg", ".pkg", ".deb", ".rpm", ".appimage")),
    ("Code", (".js", ".ts", ".html", ".css", ".py", ".java", ".cpp", ".c", ".php", ".rb")),
)


class ConfigError(Exception):
    """Raised when the configuration cannot be written."""


@dataclass(frozen=True)
class BrowserFlags:
    chrome: bool = True
    firefox: bool = True
    edge: bool = True
    safari: bool = False

    def enabled(self) -> list[str]:
        """Names of enabled browsers in fixed order."""
        return [name for name in ("chrome", "firefox", "edge", "safari") if getattr(self, name)]


@dataclass(frozen=True)
class CleanupConfig:
    """Settings for one cleanup run. Immutable once loaded."""

    large_file_threshold: int = GIB
    custom_temp_paths: tuple[str, ...] = ()
    custom_cache_paths: tuple[str, ...] = ()
    downloads_path: str = ""
    exclusions: tuple[str, ...] = ()
    browsers: BrowserFlags = field(default_factory=BrowserFlags)
    organize_downloads: bool = True
    categories: Categories = DEFAULT_CATEGORIES
    confirm_deletions: bool = True
    backup_before_delete: bool = False
    max_file_age: int = 0

    def category_for(self, extension: str) -> str | None:
        """Return the first category listing *extension*, or None."""
        extension = extension.lower()
        for category, extensions in self.categories:
            if extension in extensions:
                return category
        return None


def default_config_path(home: str | os.PathLike | None = None) -> Path:
    """Return ``~/.cleanmypc/config.json``."""
    base = Path(home) if home is not None else Path.home()
    return base / _CONFIG_DIR / _CONFIG_FILE


def default_config(host: HostEnvironment) -> CleanupConfig:
    """Built-in defaults for *host*."""
    return CleanupConfig(
        downloads_path=str(Path(host.home) / "Downloads"),
        browsers=BrowserFlags(safari=host.platform == Platform.MACOS),
    )


def _typed(data: dict[str, Any], key: str, kind: type | tuple[type, ...], default: Any) -> Any:
    """Fetch *key* from *data* if it has the expected type."""
    if key not in data:
        return default
    value = data[key]
    # bool is an int subclass; don't let true/false pass as a number
    if isinstance(value, bool) and bool not in (kind if isinstance(kind, tuple) else (kind,)):
        log.warning("Ignoring config field '%s': expected %s, got bool", key, kind)
        return default
    if not isinstance(value, kind):
        log.warning("Ignoring config field '%s': unexpected type %s", key, type(value).__name__)
        return default
    return value


def _positive(data: dict[str, Any], key: str, default: int) -> int:
    value = _typed(data, key, int, default)
    if value <= 0:
        log.warning("Ignoring config field '%s': must be positive, got %d", key, value)
        return default
    return value


def _str_tuple(data: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    values = _typed(data, key, list, None)
    if values is None:
        return default
    return tuple(str(v) for v in values if isinstance(v, str) and v)


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def _parse_categories(raw: Any, default: Categories) -> Categories:
    if not isinstance(raw, dict):
        if raw is not None:
            log.warning("Ignoring organizeDownloads.categories: expected a mapping")
        return default
    parsed: list[tuple[str, tuple[str, ...]]] = []
    for name, extensions in raw.items():
        if not isinstance(extensions, list):
            log.warning("Ignoring category '%s': expected a list of extensions", name)
            continue
        parsed.append((str(name), tuple(_normalize_extension(e) for e in extensions if isinstance(e, str) and e)))
    return tuple(parsed)


def config_from_dict(data: dict[str, Any], host: HostEnvironment) -> CleanupConfig:
    """Merge a parsed config document over the defaults for *host*.

    Missing or wrongly typed fields keep their default; unknown fields
    are ignored.  A ``categories`` mapping replaces the default map as a
    whole so its declaration order is the match order.
    """
    defaults = default_config(host)

    browsers_raw = _typed(data, "browsers", dict, {})
    browsers = BrowserFlags(**{
        name: _typed(browsers_raw, name, bool, getattr(defaults.browsers, name))
        for name in ("chrome", "firefox", "edge", "safari")
    })

    organize_raw = _typed(data, "organizeDownloads", dict, {})

    return CleanupConfig(
        large_file_threshold=_positive(data, "largeFileThreshold", defaults.large_file_threshold),
        custom_temp_paths=_str_tuple(data, "customTempPaths", defaults.custom_temp_paths),
        custom_cache_paths=_str_tuple(data, "customCachePaths", defaults.custom_cache_paths),
        downloads_path=_typed(data, "downloadsPath", str, defaults.downloads_path) or defaults.downloads_path,
        exclusions=_str_tuple(data, "exclusions", defaults.exclusions),
        browsers=browsers,
        organize_downloads=_typed(organize_raw, "enabled", bool, defaults.organize_downloads),
        categories=_parse_categories(organize_raw.get("categories"), defaults.categories),
        confirm_deletions=_typed(data, "confirmDeletions", bool, defaults.confirm_deletions),
        backup_before_delete=_typed(data, "backupBeforeDelete", bool, defaults.backup_before_delete),
        max_file_age=max(0, _typed(data, "maxFileAge", int, defaults.max_file_age)),
    )


def config_to_dict(config: CleanupConfig) -> dict[str, Any]:
    """Serialise *config* to the on-disk document shape."""
    return {
        "largeFileThreshold": config.large_file_threshold,
        "customTempPaths": list(config.custom_temp_paths),
        "customCachePaths": list(config.custom_cache_paths),
        "downloadsPath": config.downloads_path,
        "exclusions": list(config.exclusions),
        "browsers": {
            "chrome": config.browsers.chrome,
            "firefox": config.browsers.firefox,
            "edge": config.browsers.edge,
            "safari": config.browsers.safari,
        },
        "organizeDownloads": {
            "enabled": config.organize_downloads,
            "categories": {name: list(exts) for name, exts in config.categories},
        },
        "confirmDeletions": config.confirm_deletions,
        "backupBeforeDelete": config.backup_before_delete,
        "maxFileAge": config.max_file_age,
    }


def load_config(path: Path | None, host: HostEnvironment) -> CleanupConfig:
    """Load the config file at *path*, gracefully falling back to defaults."""
    path = path or default_config_path(host.home)
    if not path.exists():
        log.debug("No config file at %s, using defaults", path)
        return default_config(host)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        log.warning("Could not load config from %s: %s. Using defaults.", path, e)
        return default_config(host)
    if not isinstance(data, dict):
        log.warning("Config file %s does not hold an object. Using defaults.", path)
        return default_config(host)
    return config_from_dict(data, host)


def save_config(config: CleanupConfig, path: Path) -> None:
    """Persist *config* to *path*."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(config_to_dict(config), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as e:
        raise ConfigError(f"Failed to save config to {path}: {e}") from e


def create_default_config_file(path: Path, host: HostEnvironment) -> bool:
    """Write the defaults to *path* unless a file is already there.

    Returns True when a file was written.
    """
    if path.exists():
        return False
    save_config(default_config(host), path)
    return True
