"""Task repository interface."""

from typing import Protocol

from phabprint.core.tasks import RawTask


class TaskRepository(Protocol):
    """Interface for fetching assigned tasks from the tracker."""

    def fetch_assigned_tasks(self) -> list[RawTask]:
        """Fetch tasks assigned to the configured user. Raises FetchError."""
        ...
