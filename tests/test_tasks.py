"""Tests for core task logic."""

import pytest

from phabprint.core.tasks import (
    Board,
    Column,
    RawTask,
    column_names,
    in_sprint_column,
    select_sprint_tasks,
)


def make_task(task_id: int, *column_lists: list[str]) -> RawTask:
    """Task with one board per column list."""
    boards = [
        Board(phid=f"PHID-PROJ-{i}", columns=[Column(phid=f"PHID-PCOL-{n}", name=n) for n in cols])
        for i, cols in enumerate(column_lists)
    ]
    return RawTask(id=task_id, title=f"Task {task_id}", boards=boards)


@pytest.fixture
def keywords():
    return ["sprint", "doing"]


class TestSelectSprintTasks:
    def test_example_scenario(self, keywords):
        t1 = make_task(1, ["Backlog"])
        t2 = make_task(2, ["Doing"])
        t3 = make_task(3, [])

        assert select_sprint_tasks([t1, t2, t3], keywords) == [t2]

    def test_preserves_input_order(self, keywords):
        tasks = [
            make_task(5, ["Sprint 12"]),
            make_task(1, ["Backlog"]),
            make_task(3, ["Doing"]),
            make_task(2, ["Sprint 12"]),
        ]

        result = select_sprint_tasks(tasks, keywords)

        assert [t.id for t in result] == [5, 3, 2]

    def test_case_insensitive(self):
        assert in_sprint_column(make_task(1, ["DOING"]), ["doing"]) is True

    def test_uppercase_keyword(self):
        assert in_sprint_column(make_task(1, ["doing"]), ["DOING"]) is True

    def test_substring_match(self):
        assert in_sprint_column(make_task(1, ["Doing Now"]), ["doing"]) is True

    def test_non_matching_column(self):
        assert in_sprint_column(make_task(1, ["Backlog"]), ["doing"]) is False

    def test_match_on_any_board(self, keywords):
        task = make_task(1, ["Backlog"], ["Archive", "Current Sprint"])
        assert in_sprint_column(task, keywords) is True

    def test_no_board_data_excluded(self, keywords):
        task = RawTask(id=1, title="No attachment", boards=None)
        assert select_sprint_tasks([task], keywords) == []

    def test_empty_boards_excluded(self, keywords):
        task = RawTask(id=1, title="Not on a board", boards=[])
        assert select_sprint_tasks([task], keywords) == []

    def test_empty_keywords_select_nothing(self):
        assert select_sprint_tasks([make_task(1, ["Doing"])], []) == []

    def test_blank_keyword_ignored(self):
        assert in_sprint_column(make_task(1, ["Backlog"]), [""]) is False

    def test_does_not_mutate_input(self, keywords):
        tasks = [make_task(1, ["Backlog"]), make_task(2, ["Doing"])]
        select_sprint_tasks(tasks, keywords)
        assert [t.id for t in tasks] == [1, 2]


class TestColumnNames:
    def test_flattens_in_board_order(self):
        task = make_task(1, ["A", "B"], ["C"])
        assert column_names(task) == ["A", "B", "C"]

    def test_no_boards(self):
        assert column_names(RawTask(id=1)) == []


class TestRawTaskFromApi:
    @pytest.fixture
    def api_item(self):
        return {
            "id": 123,
            "type": "TASK",
            "phid": "PHID-TASK-abc",
            "fields": {
                "name": "Fix the login page",
                "status": {"value": "open", "name": "Open"},
                "priority": {"value": 80, "name": "High"},
                "points": 3,
            },
            "attachments": {
                "columns": {
                    "boards": {
                        "PHID-PROJ-1": {
                            "columns": [{"id": 9, "phid": "PHID-PCOL-9", "name": "In Progress"}]
                        }
                    }
                },
                "projects": {"projectPHIDs": ["PHID-PROJ-1"]},
            },
        }

    def test_parses_fields(self, api_item):
        task = RawTask.from_api(api_item)

        assert task.id == 123
        assert task.phid == "PHID-TASK-abc"
        assert task.title == "Fix the login page"
        assert task.status == "Open"
        assert task.priority == "High"
        assert task.points == "3"
        assert task.project_phids == ["PHID-PROJ-1"]

    def test_parses_boards(self, api_item):
        task = RawTask.from_api(api_item)

        assert task.boards == [
            Board(phid="PHID-PROJ-1", columns=[Column(phid="PHID-PCOL-9", name="In Progress")])
        ]

    def test_missing_columns_attachment_is_none(self, api_item):
        del api_item["attachments"]["columns"]
        assert RawTask.from_api(api_item).boards is None

    def test_php_empty_boards_list(self, api_item):
        api_item["attachments"]["columns"]["boards"] = []
        task = RawTask.from_api(api_item)
        assert task.boards == []
        assert task.has_board_data is True

    def test_null_points(self, api_item):
        api_item["fields"]["points"] = None
        assert RawTask.from_api(api_item).points is None

    def test_missing_fields(self):
        task = RawTask.from_api({"id": "7"})

        assert task.id == 7
        assert task.title is None
        assert task.priority is None
        assert task.boards is None
        assert task.project_phids == []
