"""Application bootstrap for the terminal player's option layer.

Responsibilities:
 - Build the settings state, notification bus and option registry
 - Load persisted options and populate the registry before the command
   interpreter becomes reachable
 - Flush persisted options on shutdown
 - Optional capture of log records for the messages panel
 - Single-instance guard so two players never overwrite each other's
   ``options.json``

Nothing here touches the terminal; the returned context is what the UI and
the command interpreter are built on.
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Optional

import psutil

from config.settings import CHUNK_SIZE, CONFIG_DIR, LOCK_NAME
from tui.services.event_bus import EventBus
from tui.services.logging_service import LoggingService
from tui.services.option_registry import OptionRegistry
from tui.services.options_lifecycle import exit_options, init_options
from tui.services.settings_service import SettingsState

from .config_store import OptionConfig, load_config, save_config

__all__ = [
    "AppContext",
    "create_app",
    "shutdown_app",
    "acquire_single_instance",
    "release_single_instance",
    "single_instance",
]

_log = logging.getLogger(__name__)


@dataclass
class AppContext:
    """References created during bootstrap.

    Attributes
    ----------
    state: Owners of every option value
    bus: Notification bus shared by accessors and UI
    registry: Populated option registry
    config: Persisted options as loaded at startup
    config_dir: Directory ``options.json`` is read from and written to
    logging_service: Log capture, ``None`` unless requested
    started_at: Monotonic timestamp when bootstrap started
    duration_s: Elapsed seconds for bootstrap
    """

    state: SettingsState
    bus: EventBus
    registry: OptionRegistry
    config: OptionConfig
    config_dir: Path
    logging_service: Optional[LoggingService]
    started_at: float
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)


def create_app(
    config_dir: str | Path | None = None,
    *,
    state: SettingsState | None = None,
    bus: EventBus | None = None,
    capture_logs: bool = False,
    chunk_size: int = CHUNK_SIZE,
) -> AppContext:
    """Create the option layer and populate the registry.

    Parameters
    ----------
    config_dir: Directory holding ``options.json`` (defaults to ``CONFIG_DIR``).
    state: Pre-built settings state; a default one is created otherwise.
    bus: Notification bus; must be the one ``state`` reports errors on.
    capture_logs: Attach a ``LoggingService`` to the root logger.
    """
    started = time.perf_counter()
    base = Path(config_dir) if config_dir else Path(CONFIG_DIR)
    bus = bus or EventBus()
    state = state or SettingsState.create(bus)

    logging_service = None
    if capture_logs:
        logging_service = LoggingService(bus=bus)
        logging_service.attach_root()

    config = load_config(base)
    registry = OptionRegistry(bus)
    init_options(registry, state, config, bus, chunk_size=chunk_size)

    duration = time.perf_counter() - started
    _log.debug("option layer ready in %.1f ms", duration * 1000)
    return AppContext(
        state=state,
        bus=bus,
        registry=registry,
        config=config,
        config_dir=base,
        logging_service=logging_service,
        started_at=started,
        duration_s=duration,
        metadata={"option_count": len(registry), "stored_options": len(config.options)},
    )


def shutdown_app(ctx: AppContext) -> Path:
    """Store persisted options and release log capture; returns the file written."""
    exit_options(ctx.state, ctx.config)
    path = save_config(ctx.config, ctx.config_dir)
    if ctx.logging_service is not None:
        ctx.logging_service.detach_root()
    _log.debug("options saved to %s", path)
    return path


# --------------------------------------------------------------------------------------
# Single-instance guard (file lock)
# --------------------------------------------------------------------------------------

_LOCK_FD: int | None = None
_LOCK_PATH: str | None = None


def _lock_path(lock_dir: str | Path | None, name: str) -> str:
    return os.path.join(str(lock_dir) if lock_dir else CONFIG_DIR, name)


def _write_pid(path: str) -> int:
    fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_RDWR, 0o644)
    os.write(fd, str(os.getpid()).encode("utf-8"))
    return fd


def acquire_single_instance(
    lock_dir: str | Path | None = None,
    name: str = LOCK_NAME,
    *,
    force_reclaim_stale: bool = True,
) -> bool:
    """Take the lock file in ``lock_dir``; False if a live process holds it.

    A lock left behind by a process that no longer exists is removed and
    taken over when ``force_reclaim_stale`` is set.
    """
    global _LOCK_FD, _LOCK_PATH
    if _LOCK_FD is not None:
        return True
    path = _lock_path(lock_dir, name)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    try:
        _LOCK_FD = _write_pid(path)
        _LOCK_PATH = path
        return True
    except FileExistsError:
        pass
    try:
        with open(path, "r", encoding="utf-8") as f:
            contents = f.read().strip()
    except OSError:
        return False
    holder = int(contents) if contents.isdigit() else None
    if holder is None or psutil.pid_exists(holder) or not force_reclaim_stale:
        return False
    _log.info("reclaiming stale lock %s held by pid %d", path, holder)
    try:
        os.unlink(path)
        _LOCK_FD = _write_pid(path)
    except OSError:
        return False
    _LOCK_PATH = path
    return True


def release_single_instance() -> None:
    global _LOCK_FD, _LOCK_PATH
    if _LOCK_FD is None:
        return
    try:
        os.close(_LOCK_FD)
        if _LOCK_PATH and os.path.exists(_LOCK_PATH):
            os.unlink(_LOCK_PATH)
    finally:
        _LOCK_FD = None
        _LOCK_PATH = None


@contextmanager
def single_instance(lock_dir: str | Path | None = None, name: str = LOCK_NAME) -> Iterator[bool]:
    """Yield True if the lock was acquired; released on exit."""
    acquired = acquire_single_instance(lock_dir, name)
    try:
        yield acquired
    finally:
        if acquired:
            release_single_instance()
