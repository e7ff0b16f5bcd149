"""Printed-task cache interface."""

from typing import Protocol


class PrintCache(Protocol):
    """Interface for remembering which tasks were already printed."""

    def load(self) -> set[str]:
        """Load persisted ids. Never raises; starts empty on failure."""
        ...

    def has(self, task_id: str) -> bool:
        """Check if a task was already printed."""
        ...

    def mark_printed(self, task_id: str) -> None:
        """Record a successful print and persist immediately."""
        ...

    def clear(self) -> None:
        """Forget every printed task."""
        ...
