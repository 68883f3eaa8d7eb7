"""Immutable per-run context handed to every task."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from cleanmypc.platforms import HostEnvironment
from cleanmypc.settings import CleanupConfig


@dataclass(frozen=True)
class TaskContext:
    """Configuration, host description and run mode for a cleanup run.

    ``clock`` returns the current time as a Unix timestamp; tests pin it
    to make age comparisons exact.
    """

    config: CleanupConfig
    host: HostEnvironment
    dry_run: bool = False
    clock: Callable[[], float] = field(default=time.time)
