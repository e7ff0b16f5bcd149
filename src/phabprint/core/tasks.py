"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Column:
    """A workboard column."""

    phid: str
    name: str


@dataclass(frozen=True)
class Board:
    """A project workboard the task is placed on."""

    phid: str
    columns: list[Column] = field(default_factory=list)


@dataclass
class RawTask:
    """
    A Maniphest task as returned by the tracker.

    `boards` is None when the response carried no column attachment at all,
    and an empty list when the task is attached to no board.
    """

    id: int
    phid: str = ""
    title: str | None = None
    priority: str | None = None
    status: str | None = None
    points: str | None = None
    boards: list[Board] | None = None
    project_phids: list[str] = field(default_factory=list)

    @property
    def has_board_data(self) -> bool:
        return self.boards is not None

    @classmethod
    def from_api(cls, data: dict) -> "RawTask":
        """Create RawTask from a maniphest.search result item."""
        fields = data.get("fields") or {}
        attachments = data.get("attachments") or {}

        points = fields.get("points")
        return cls(
            id=int(data["id"]),
            phid=data.get("phid", ""),
            title=fields.get("name"),
            priority=_named(fields.get("priority")),
            status=_named(fields.get("status")),
            points=str(points) if points is not None else None,
            boards=_parse_boards(attachments.get("columns")),
            project_phids=list((attachments.get("projects") or {}).get("projectPHIDs") or []),
        )


def _named(value: dict | None) -> str | None:
    if not isinstance(value, dict):
        return None
    return value.get("name")


def _parse_boards(columns_attachment: dict | None) -> list[Board] | None:
    if not isinstance(columns_attachment, dict) or "boards" not in columns_attachment:
        return None

    boards_data = columns_attachment["boards"]
    # PHP serializes an empty map as []
    if not isinstance(boards_data, dict):
        return []

    boards = []
    for board_phid, board in boards_data.items():
        columns = [
            Column(phid=col.get("phid", ""), name=col.get("name") or "")
            for col in (board or {}).get("columns") or []
        ]
        boards.append(Board(phid=board_phid, columns=columns))
    return boards


def column_names(task: RawTask) -> list[str]:
    """All column names across all boards, in board order."""
    if not task.boards:
        return []
    return [col.name for board in task.boards for col in board.columns]


def in_sprint_column(task: RawTask, keywords: list[str]) -> bool:
    """True if any column on any board contains any keyword (case-insensitive)."""
    if not task.has_board_data:
        return False

    needles = [k.lower() for k in keywords if k]
    if not needles:
        return False

    for name in column_names(task):
        haystack = name.lower()
        if any(needle in haystack for needle in needles):
            return True
    return False


def select_sprint_tasks(tasks: list[RawTask], keywords: list[str]) -> list[RawTask]:
    """
    Filter to tasks sitting in a sprint column.

    Pure function - no I/O. Preserves input order.
    """
    return [t for t in tasks if in_sprint_column(t, keywords)]
