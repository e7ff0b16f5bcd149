"""Functional core - pure business logic with no I/O."""

from .tasks import Board, Column, RawTask, column_names, in_sprint_column, select_sprint_tasks
from .tickets import SAMPLE_TICKET, Ticket, format_task, line_width, truncate

__all__ = [
    # Tasks
    "Board",
    "Column",
    "RawTask",
    "column_names",
    "in_sprint_column",
    "select_sprint_tasks",
    # Tickets
    "SAMPLE_TICKET",
    "Ticket",
    "format_task",
    "line_width",
    "truncate",
]
