"""Base class for task export strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional

from task_tracker.cancellation import CancellationToken, check_cancelled
from task_tracker.models import Task


class ExportStrategy(ABC):
    """Encodes a task sequence as text.

    Subclasses implement :meth:`render`; :meth:`export` checks for
    cancellation first. Tasks are written in the order given, so callers
    pass an already filtered and sorted sequence.
    """

    #: Format name used for lookups, e.g. ``csv``
    name: str = ""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension including the leading dot."""

    @abstractmethod
    def render(self, tasks: list[Task]) -> str:
        """Encode tasks as text."""

    def export(
        self, tasks: Iterable[Task], cancel_token: Optional[CancellationToken] = None
    ) -> str:
        check_cancelled(cancel_token, f"export_{self.name}")
        return self.render(list(tasks))
