"""Shared test fixtures."""

from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path

import pytest

from cleanmypc.models.context import TaskContext
from cleanmypc.platforms import HostEnvironment, Platform
from cleanmypc.settings import default_config

NOW = 1_700_000_000.0
DAY = 86400


@pytest.fixture
def fake_root(tmp_path) -> Path:
    """Filesystem root that every system location resolves against."""
    root = tmp_path / "root"
    (root / "tmp").mkdir(parents=True)
    (root / "home" / "user").mkdir(parents=True)
    return root


@pytest.fixture
def host(fake_root) -> HostEnvironment:
    return HostEnvironment(
        platform=Platform.LINUX,
        home=str(fake_root / "home" / "user"),
        temp_dir=str(fake_root / "tmp"),
        root=str(fake_root),
    )


@pytest.fixture
def make_context(host):
    """Build a TaskContext over *host* with a pinned clock."""

    def _make(dry_run: bool = False, host_env: HostEnvironment | None = None, **overrides) -> TaskContext:
        env = host_env or host
        config = replace(default_config(env), **overrides)
        return TaskContext(config=config, host=env, dry_run=dry_run, clock=lambda: NOW)

    return _make


@pytest.fixture
def make_file():
    """Create a file of *size* bytes, optionally *age_days* old relative to NOW."""

    def _make(path: Path, size: int = 10, age_days: float | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)
        if age_days is not None:
            mtime = NOW - age_days * DAY
            os.utime(path, (mtime, mtime))
        return path

    return _make


def snapshot(root: Path) -> dict[str, tuple[bool, int]]:
    """Map every path below *root* to (is_dir, size)."""
    state: dict[str, tuple[bool, int]] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames:
            state[os.path.join(dirpath, name)] = (True, 0)
        for name in filenames:
            full = os.path.join(dirpath, name)
            state[full] = (False, os.lstat(full).st_size)
    return state


needs_non_root = pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="permission checks do not apply to root",
)
