"""Built-in cleanup tasks, in canonical run order."""

from cleanmypc.tasks.browser_cache import BrowserCacheTask
from cleanmypc.tasks.cache_files import CacheFilesTask
from cleanmypc.tasks.downloads import DownloadsTask
from cleanmypc.tasks.large_files import LargeFilesTask
from cleanmypc.tasks.temp_files import TempFilesTask
from cleanmypc.tasks.trash import TrashTask

BUILTIN_TASKS = (
    TempFilesTask,
    CacheFilesTask,
    BrowserCacheTask,
    TrashTask,
    DownloadsTask,
    LargeFilesTask,
)

__all__ = [
    "BUILTIN_TASKS",
    "BrowserCacheTask",
    "CacheFilesTask",
    "DownloadsTask",
    "LargeFilesTask",
    "TempFilesTask",
    "TrashTask",
]
