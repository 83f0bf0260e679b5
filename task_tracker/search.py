"""Free-text search across task titles and descriptions."""

from __future__ import annotations

from collections.abc import Iterable

from task_tracker.filters import where_description, where_title
from task_tracker.models import Task


def search_tasks(tasks: Iterable[Task], term: str) -> list[Task]:
    """Return tasks whose title or description contains ``term``, ignoring case.

    Title matches come first in input order, followed by tasks matching only
    on description. Each task appears once. An empty term matches everything.
    """
    snapshot = list(tasks)
    results: list[Task] = []
    seen = set()
    for task in where_title(snapshot, term) + where_description(snapshot, term):
        if task.id not in seen:
            seen.add(task.id)
            results.append(task)
    return results
