"""Ports - interfaces/protocols for external dependencies."""

from .task_repo import TaskRepository
from .ticket_printer import TicketPrinter
from .print_cache import PrintCache

__all__ = [
    "TaskRepository",
    "TicketPrinter",
    "PrintCache",
]
