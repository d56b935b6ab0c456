"""Interrupt handling that turns a partial project into a single archive.

:class:`InterruptGuard` installs handlers for SIGINT and SIGTERM for the
lifetime of a scaffold run. A delivered signal marks the context as
interrupted and raises :class:`ProvisioningInterrupted` at whatever point
the main path was executing, so any prefix of the provisioning steps may
have completed. The supervisor then calls :meth:`InterruptGuard.cleanup`,
which archives whatever exists under the project directory and removes it
while further signals are ignored.
"""

from __future__ import annotations

import shutil
import signal
import tarfile
import threading
from contextlib import contextmanager
from types import FrameType
from typing import Any, Dict, Iterator, Optional, Sequence

from loguru import logger

from .models import CleanupResult, ProvisioningContext, ProvisioningInterrupted


def _default_signals() -> tuple[signal.Signals, ...]:
    signals = [signal.SIGINT]
    if hasattr(signal, "SIGTERM"):
        signals.append(signal.SIGTERM)
    return tuple(signals)


def archive_and_purge(context: ProvisioningContext) -> CleanupResult:
    """Archive the project directory next to it, then delete it.

    Nothing is touched when no layout is bound yet, when the run never
    claimed the directory, or when the directory does not exist. Archive and
    removal failures are recorded on the result and never retried.
    """

    layout = context.layout
    if layout is None or not context.claimed or not layout.project_dir.is_dir():
        logger.info("Interrupted before provisioning started; nothing to clean up")
        return CleanupResult(skipped=True)

    result = CleanupResult(archive_path=layout.archive_path)

    logger.info("Creating archive {}", layout.archive_path)
    try:
        with tarfile.open(layout.archive_path, "w:gz") as archive:
            archive.add(layout.project_dir, arcname=layout.project_name)
    except (OSError, tarfile.TarError) as exc:
        logger.error("Failed to create archive {}: {}", layout.archive_path, exc)
        result.errors.append(f"archive: {exc}")
    else:
        result.archived = True

    logger.info("Removing incomplete directory {}", layout.project_dir)
    try:
        shutil.rmtree(layout.project_dir)
    except OSError as exc:
        logger.error("Failed to remove {}: {}", layout.project_dir, exc)
        result.errors.append(f"remove: {exc}")
    else:
        result.removed = True

    return result


class InterruptGuard:
    """Context manager owning the interrupt handlers for one scaffold run."""

    def __init__(
        self,
        context: ProvisioningContext,
        signals: Optional[Sequence[int]] = None,
    ) -> None:
        self._context = context
        self._signals = tuple(signals) if signals is not None else _default_signals()
        self._previous: Dict[int, Any] = {}
        self._closing = False

    @property
    def context(self) -> ProvisioningContext:
        return self._context

    @property
    def active(self) -> bool:
        return bool(self._previous)

    def __enter__(self) -> "InterruptGuard":
        if threading.current_thread() is not threading.main_thread():
            raise RuntimeError("InterruptGuard must be entered from the main thread")
        self._closing = False
        for signum in self._signals:
            self._previous[signum] = signal.signal(signum, self.handle)
        logger.debug("Interrupt guard installed for signals {}", list(self._signals))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._closing = True
        for signum, previous in self._previous.items():
            signal.signal(signum, previous)
        self._previous.clear()
        logger.debug("Interrupt guard removed")

    def handle(self, signum: int, frame: Optional[FrameType]) -> None:
        """Signal handler: the first signal unwinds the main path.

        Later signals are dropped, as are signals that arrive after the run
        completed or while the guard is being removed.
        """

        if self._context.interrupted or self._context.completed or self._closing:
            return
        self._context.mark_interrupted()
        logger.warning("Signal {} received during step '{}'", signum, self._context.current_step)
        raise ProvisioningInterrupted(signum)

    @contextmanager
    def _shielded(self) -> Iterator[None]:
        for signum in self._signals:
            signal.signal(signum, signal.SIG_IGN)
        try:
            yield
        finally:
            for signum in self._signals:
                signal.signal(signum, self.handle)

    def cleanup(self) -> CleanupResult:
        """Run the archive-and-purge transition without being re-interrupted."""

        self._context.enter_step("cleanup")
        if not self.active:
            return archive_and_purge(self._context)
        with self._shielded():
            return archive_and_purge(self._context)


__all__ = ["InterruptGuard", "archive_and_purge"]
