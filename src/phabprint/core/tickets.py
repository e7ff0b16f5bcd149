"""Ticket formatting - maps raw tasks to what gets printed."""

from dataclasses import dataclass, field

from .tasks import RawTask, column_names


@dataclass(frozen=True)
class Ticket:
    """A task flattened for printing."""

    id: str
    title: str
    priority: str
    points: str
    status: str
    columns: tuple[str, ...]
    url: str
    numeric_id: int = 0
    project_phids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def column_label(self) -> str:
        return ", ".join(self.columns) or "N/A"


SAMPLE_TICKET = Ticket(
    id="T00000",
    title="Test Ticket - PhabPrint",
    priority="Normal",
    points="3",
    status="Open",
    columns=("Test Column",),
    url="https://phabricator.example.com/T00000",
)


def web_base_url(api_url: str) -> str:
    """Strip the Conduit '/api' suffix to get the web UI root."""
    base = api_url.rstrip("/")
    if base.endswith("/api"):
        base = base[: -len("/api")]
    return base


def format_task(task: RawTask, api_url: str) -> Ticket:
    """
    Build a Ticket from a RawTask.

    Pure function - no I/O.
    """
    ticket_id = f"T{task.id}"
    return Ticket(
        id=ticket_id,
        title=task.title or "Untitled",
        priority=task.priority or "Unknown",
        points=task.points if task.points is not None else "N/A",
        status=task.status or "Unknown",
        columns=tuple(column_names(task)),
        url=f"{web_base_url(api_url)}/{ticket_id}",
        numeric_id=task.id,
        project_phids=tuple(task.project_phids),
    )


def truncate(text: str, max_len: int) -> str:
    if not text:
        return ""
    return text[: max_len - 3] + "..." if len(text) > max_len else text


def line_width(paper_width: int) -> int:
    """Characters per line for the given paper width in mm."""
    return 48 if paper_width == 80 else 32
