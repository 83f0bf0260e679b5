"""Composable predicate filters over a task collection.

Every filter narrows its input to the tasks matching one criterion and is a
no-op when that criterion is ``None``. ``apply_filters`` runs them all in a
fixed order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from task_tracker.models import Priority, Task, as_local_naive


@dataclass(frozen=True)
class FilterCriteria:
    """Optional criterion per filterable field."""

    title: Optional[str] = None
    description: Optional[str] = None
    is_completed: Optional[bool] = None
    priority: Optional[Priority] = None
    tags: Optional[tuple[str, ...]] = None
    due_before: Optional[datetime] = None
    due_after: Optional[datetime] = None


def _contains(haystack: Optional[str], needle: str) -> bool:
    if haystack is None:
        return False
    return needle.casefold() in haystack.casefold()


def where_title(tasks: Iterable[Task], title: Optional[str]) -> list[Task]:
    """Keep tasks whose title contains ``title``, ignoring case."""
    if title is None:
        return list(tasks)
    return [t for t in tasks if _contains(t.title, title)]


def where_description(tasks: Iterable[Task], description: Optional[str]) -> list[Task]:
    """Keep tasks whose description contains ``description``, ignoring case.

    Tasks without a description never match.
    """
    if description is None:
        return list(tasks)
    return [t for t in tasks if _contains(t.description, description)]


def where_priority(tasks: Iterable[Task], priority: Optional[Priority]) -> list[Task]:
    """Keep tasks with exactly this priority."""
    if priority is None:
        return list(tasks)
    return [t for t in tasks if t.priority == priority]


def where_tags(tasks: Iterable[Task], tags: Optional[Iterable[str]]) -> list[Task]:
    """Keep tasks carrying at least one of ``tags``."""
    if tags is None:
        return list(tasks)
    wanted = set(tags)
    return [t for t in tasks if not wanted.isdisjoint(t.tags)]


def where_completed(tasks: Iterable[Task], is_completed: Optional[bool]) -> list[Task]:
    """Keep tasks with this completion status."""
    if is_completed is None:
        return list(tasks)
    return [t for t in tasks if t.is_completed == is_completed]


def where_due_before(tasks: Iterable[Task], due_before: Optional[datetime]) -> list[Task]:
    """Keep tasks due on or before ``due_before``; undated tasks never match."""
    if due_before is None:
        return list(tasks)
    due_before = as_local_naive(due_before)
    return [t for t in tasks if t.due_date is not None and t.due_date <= due_before]


def where_due_after(tasks: Iterable[Task], due_after: Optional[datetime]) -> list[Task]:
    """Keep tasks due on or after ``due_after``; undated tasks never match."""
    if due_after is None:
        return list(tasks)
    due_after = as_local_naive(due_after)
    return [t for t in tasks if t.due_date is not None and t.due_date >= due_after]


def apply_filters(tasks: Iterable[Task], criteria: FilterCriteria) -> list[Task]:
    """Run every filter in order: title, description, completed, priority,
    tags, due-before, due-after."""
    result = where_title(tasks, criteria.title)
    result = where_description(result, criteria.description)
    result = where_completed(result, criteria.is_completed)
    result = where_priority(result, criteria.priority)
    result = where_tags(result, criteria.tags)
    result = where_due_before(result, criteria.due_before)
    result = where_due_after(result, criteria.due_after)
    return result
