"""Removal of uploads and retention-limited output documents."""

from src.cleanup.scheduler import CleanupScheduler

__all__ = ["CleanupScheduler"]
