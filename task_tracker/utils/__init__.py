"""Utility modules for the task tracker."""

from task_tracker.utils.logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
