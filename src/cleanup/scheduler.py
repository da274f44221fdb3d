"""File cleanup for uploads and generated documents.

Uploads are removed as soon as a request finishes. Delivered documents are
removed after a retention delay by asyncio tasks that this scheduler owns;
on shutdown the pending tasks are cancelled and their files removed right
away, so a restart inside the retention window leaves nothing behind.
"""

import asyncio
import logging
import re
import time
from pathlib import Path

logger = logging.getLogger(__name__)

# <32 hex request id>-<name>.docx, as written by ConversionService
OUTPUT_NAME_PATTERN = re.compile(r"^[0-9a-f]{32}-.+\.docx$")


class CleanupScheduler:
    """Owns immediate and delayed file removals for the process lifetime."""

    def __init__(self, retention_seconds: float, *, purge_on_shutdown: bool = True) -> None:
        """Initialize the scheduler.

        Args:
            retention_seconds: Default delay before a scheduled removal.
            purge_on_shutdown: Remove files of cancelled removals on shutdown.
        """
        self.retention_seconds = retention_seconds
        self.purge_on_shutdown = purge_on_shutdown
        self._pending: dict[asyncio.Task[None], Path] = {}

    @property
    def pending(self) -> list[Path]:
        """Files with a removal still scheduled."""
        return list(self._pending.values())

    def remove_now(self, path: Path, *, label: str = "file") -> bool:
        """Delete a file, logging instead of raising on failure.

        Args:
            path: File to delete.
            label: What the file is, for log messages.

        Returns:
            True if the file was deleted.
        """
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning(f"Cannot delete {label}, already gone: {path}")
            return False
        except OSError as e:
            logger.error(f"Error deleting {label}: {path}: {e}")
            return False
        logger.info(f"Deleted {label}: {path}")
        return True

    def schedule_removal(self, path: Path, delay: float | None = None) -> asyncio.Task[None]:
        """Delete a file after a delay without blocking the caller.

        Must be called from inside a running event loop.

        Args:
            path: File to delete.
            delay: Seconds to wait; defaults to the retention delay.

        Returns:
            The task performing the removal.
        """
        wait = self.retention_seconds if delay is None else delay
        task = asyncio.create_task(self._remove_later(path, wait))
        self._pending[task] = path
        task.add_done_callback(self._forget)
        logger.info(f"Scheduled deletion of {path} in {wait:g}s")
        return task

    def _forget(self, task: asyncio.Task[None]) -> None:
        self._pending.pop(task, None)

    async def _remove_later(self, path: Path, delay: float) -> None:
        await asyncio.sleep(delay)
        self.remove_now(path, label="converted file")

    def sweep_stale(self, directory: Path, max_age: float | None = None) -> int:
        """Delete generated documents in a directory older than max_age seconds.

        Only names matching OUTPUT_NAME_PATTERN are considered; anything else
        in the directory is left alone.

        Args:
            directory: Directory to sweep (not recursive).
            max_age: Age threshold; defaults to the retention delay.

        Returns:
            Number of files deleted.
        """
        if not directory.is_dir():
            return 0

        threshold = time.time() - (self.retention_seconds if max_age is None else max_age)
        removed = 0
        for path in directory.iterdir():
            try:
                if not path.is_file() or not OUTPUT_NAME_PATTERN.match(path.name):
                    continue
                if path.stat().st_mtime > threshold:
                    continue
            except OSError as e:
                logger.warning(f"Cannot inspect {path}: {e}")
                continue
            if self.remove_now(path, label="stale file"):
                removed += 1

        if removed:
            logger.info(f"Swept {removed} stale file(s) from {directory}")
        return removed

    async def shutdown(self) -> None:
        """Cancel pending removals and, if configured, delete their files now."""
        pending = dict(self._pending)
        if not pending:
            return

        logger.info(f"Cancelling {len(pending)} scheduled deletion(s)")
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        if self.purge_on_shutdown:
            for path in pending.values():
                if path.exists():
                    self.remove_now(path, label="converted file")
