"""HTTP API for the task tracker."""

from task_tracker.api.main import create_app, run

__all__ = ["create_app", "run"]
