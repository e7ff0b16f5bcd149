"""File-based printed-task cache adapter."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FilePrintCache:
    """
    File-based dedup cache.

    Implements PrintCache protocol. The file holds a JSON array of task ids
    and is fully rewritten after every mutation.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self._printed: set[str] = set()

    def __len__(self) -> int:
        return len(self._printed)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._printed

    def load(self) -> set[str]:
        """Load printed ids from disk. Returns the loaded set."""
        self._printed = set()

        if not self.path.exists():
            logger.debug(f"No printed-task cache at {self.path}, starting empty")
            return set(self._printed)

        try:
            data = json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load printed tasks cache: {e}")
            return set(self._printed)

        if not isinstance(data, list):
            logger.warning(f"Ignoring printed tasks cache at {self.path}: expected a JSON array")
            return set(self._printed)

        self._printed = {str(task_id) for task_id in data}
        logger.info(f"Loaded {len(self._printed)} previously printed tasks")
        return set(self._printed)

    def has(self, task_id: str) -> bool:
        return task_id in self._printed

    def mark_printed(self, task_id: str) -> None:
        self._printed.add(task_id)
        self._save()

    def clear(self) -> None:
        self._printed.clear()
        self._save()
        logger.info("Printed tasks cache cleared")

    def _save(self) -> None:
        """Persist the full set, replacing the file atomically."""
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(sorted(self._printed)))
            tmp_path.replace(self.path)
        except OSError as e:
            logger.warning(f"Could not save printed tasks cache: {e}")
