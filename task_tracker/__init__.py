"""
Task Tracker - create, update, complete, filter, search and export tasks.

The query engine (filters, sorting, search) works over whatever the
configured repository returns; the CLI and HTTP API are thin layers on top.
"""

from task_tracker.models import Priority, Task
from task_tracker.queries import FilterTasksQuery, SearchTasksQuery, TaskQueryHandler
from task_tracker.service import TaskService
from task_tracker.sorting import SortField

__version__ = "0.1.0"
__all__ = [
    "FilterTasksQuery",
    "Priority",
    "SearchTasksQuery",
    "SortField",
    "Task",
    "TaskQueryHandler",
    "TaskService",
    "__version__",
]
