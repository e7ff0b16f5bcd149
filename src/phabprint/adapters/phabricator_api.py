"""Phabricator Conduit adapter - HTTP client for task fetching."""

import logging

import requests

from phabprint.config import Config, load_config
from phabprint.core.tasks import RawTask

logger = logging.getLogger(__name__)

PAGE_LIMIT = 100


class FetchError(Exception):
    """Raised when the tracker is unreachable or rejects a request."""

    pass


def flatten_params(params: dict, prefix: str = "") -> dict[str, str]:
    """
    Flatten nested params to PHP-style form fields.

    {"constraints": {"assigned": ["PHID-USER-x"]}} becomes
    {"constraints[assigned][0]": "PHID-USER-x"}.
    """
    result: dict[str, str] = {}

    for key, value in params.items():
        name = f"{prefix}[{key}]" if prefix else str(key)

        if isinstance(value, dict):
            result.update(flatten_params(value, name))
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                item_name = f"{name}[{index}]"
                if isinstance(item, dict):
                    result.update(flatten_params(item, item_name))
                else:
                    result[item_name] = _form_value(item)
        else:
            result[name] = _form_value(value)

    return result


def _form_value(value) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class PhabricatorAdapter:
    """
    Phabricator Conduit API adapter.

    Implements TaskRepository protocol. Handles request encoding, paging and
    error translation. No business logic - just I/O.
    """

    def __init__(
        self,
        base_url: str,
        api_token: str,
        user_phid: str,
        statuses: list[str] | None = None,
        session: requests.Session | None = None,
        timeout: int = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.user_phid = user_phid
        self.statuses = statuses or ["open"]
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Config | None = None) -> "PhabricatorAdapter":
        config = config or load_config()
        return cls(
            base_url=config.phab_url,
            api_token=config.phab_api_token,
            user_phid=config.user_phid,
            statuses=config.task_statuses,
        )

    def _conduit_call(self, method: str, params: dict) -> dict:
        """Make a Conduit API call and return its result payload."""
        form = {"api.token": self.api_token}
        form.update(flatten_params(params))

        try:
            resp = self._session.post(
                f"{self.base_url}/{method}",
                data=form,
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Request to {method} failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {method}: {e}") from e

        if not isinstance(data, dict):
            raise FetchError(f"Unexpected response from {method}: expected a JSON object")

        if data.get("error_code"):
            raise FetchError(f"Phabricator API error: {data.get('error_info') or data['error_code']}")

        result = data.get("result")
        return result if isinstance(result, dict) else {}

    def _search_params(self, after: str | None = None) -> dict:
        params = {
            "constraints": {
                "assigned": [self.user_phid],
                "statuses": self.statuses,
            },
            "attachments": {
                "projects": True,
                "columns": True,
            },
            "limit": PAGE_LIMIT,
        }
        if after:
            params["after"] = after
        return params

    def fetch_all_raw(self) -> list[dict]:
        """Fetch every assigned task as raw API dicts, following the cursor."""
        items: list[dict] = []
        after = None

        while True:
            result = self._conduit_call("maniphest.search", self._search_params(after))
            items.extend(result.get("data") or [])

            next_after = (result.get("cursor") or {}).get("after")
            if not next_after:
                break
            if next_after == after:
                logger.warning(f"Cursor did not advance past {after}, stopping")
                break
            after = next_after
            logger.debug(f"Fetching next page of tasks after cursor {after}")

        return items

    def fetch_assigned_tasks(self) -> list[RawTask]:
        """Fetch tasks assigned to the configured user."""
        tasks = []
        for item in self.fetch_all_raw():
            try:
                tasks.append(RawTask.from_api(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.debug(f"Skipping malformed task record: {e}")
        return tasks
