"""Tests for command processing."""

from datetime import datetime
from unittest.mock import patch

from taskpad.config import ConfigModel
from taskpad.controller import (
    BAD_TASK_ERROR,
    MARKING_ERROR,
    NO_SUCH_TASK_ERROR,
    NO_TASKS_RESPONSE,
    NOT_SAVED_WARNING,
    UNDEFINED_COMMAND_ERROR,
    Controller,
)
from taskpad.storage import Storage
from taskpad.task_list import TaskList


class TestScenario:
    """A typical session from an empty list."""

    def test_add_mark_delete(self, controller, data_file):
        response = controller.process("todo buy milk")
        assert "[T][ ] buy milk" in response.message
        assert "Now you have 1 tasks in the list." in response.message
        assert len(controller.tasks) == 1

        response = controller.process("deadline submit | 2023-12-25 1400")
        assert "[D][ ] submit (by: Dec 25 2023 14:00)" in response.message
        assert len(controller.tasks) == 2

        response = controller.process("mark 1")
        assert response.message == "done:\n  [T][X] buy milk"
        assert controller.tasks.get(1).render() == "[T][X] buy milk"

        response = controller.process("delete 2")
        assert response.message.startswith("Deleted task [D][ ] submit (by: Dec 25 2023 14:00)")
        assert response.message.endswith("Guess ur not locked-in enough for this")
        assert len(controller.tasks) == 1

        assert data_file.read_text(encoding="utf-8") == "1. [T][X] buy milk\n"

    def test_state_survives_restart(self, controller, storage):
        controller.process("todo buy milk")
        controller.process("event fair | 2024-05-01 1000 | 2024-05-01 1600")
        controller.process("mark 2")

        restarted = Controller(storage.load(), storage)
        assert restarted.process("List").message == (
            "1. [T][ ] buy milk\n"
            "2. [E][X] fair (from: May 01 2024 10:00 to: May 01 2024 16:00)"
        )

    def test_names_with_unicode_line_separators_survive_restart(self, controller, storage):
        """Only newlines end a stored line; other separators stay in the name."""
        controller.process("todo buy milk")
        controller.process("deadline a\x1cb | 2023-12-25")

        reloaded = storage.load()
        assert [task.name for task in reloaded] == ["buy milk", "a\x1cb"]
        assert reloaded.get(2).due == datetime(2023, 12, 25)


class TestResponses:
    """Test the text of each response."""

    def test_bye(self, controller):
        response = controller.process("bye")
        assert response.message == "Bye."
        assert response.exit is True

    def test_list_empty(self, controller):
        assert controller.process("List").message == NO_TASKS_RESPONSE

    def test_unmark(self, controller):
        controller.process("todo a")
        controller.process("mark 1")
        assert controller.process("unmark 1").message == "not done:\n  [T][ ] a"

    def test_delete_done_task_has_no_taunt(self, controller):
        controller.process("todo a")
        controller.process("mark 1")
        assert controller.process("delete 1").message == "Deleted task [T][X] a"

    def test_find(self, controller):
        controller.process("todo buy milk")
        controller.process("todo walk dog")
        controller.process("todo MILK the cow")
        assert controller.process("find milk").message == (
            "Found:\n1. [T][ ] buy milk\n2. [T][ ] MILK the cow"
        )

    def test_find_nothing(self, controller):
        assert controller.process("find cat").message == "No tasks found containing: cat"

    def test_day_past_month_end(self, controller):
        response = controller.process("deadline rent | 2023-02-30")
        assert "[D][ ] rent (by: Feb 28 2023 00:00)" in response.message

    def test_event_with_trailing_pipe(self, controller):
        response = controller.process("event fair | 2024-05-01 | 2024-05-02 |")
        assert response.error is False
        assert controller.tasks.get(1).end == datetime(2024, 5, 2)


class TestErrors:
    """Errors become messages and leave the list untouched."""

    def test_undefined(self, controller):
        response = controller.process("dance")
        assert response.message == UNDEFINED_COMMAND_ERROR
        assert response.error is True
        assert response.exit is False

    def test_bad_task(self, controller):
        assert controller.process("todo").message == BAD_TASK_ERROR
        assert controller.process("deadline x | 2023-02-32").message == BAD_TASK_ERROR
        assert controller.process("find   ").message == BAD_TASK_ERROR
        assert controller.tasks.is_empty()

    def test_marking(self, controller):
        controller.process("todo a")
        assert controller.process("unmark 1").message == MARKING_ERROR
        controller.process("mark 1")
        assert controller.process("mark 1").message == MARKING_ERROR
        assert controller.tasks.get(1).done is True

    def test_no_such_task(self, controller):
        controller.process("todo a")
        assert controller.process("delete 0").message == NO_SUCH_TASK_ERROR
        assert controller.process("delete 2").message == NO_SUCH_TASK_ERROR
        assert controller.process("mark x").message == NO_SUCH_TASK_ERROR
        assert len(controller.tasks) == 1

    def test_task_number_must_be_ascii_digits(self, controller):
        controller.process("todo a")
        assert controller.process("mark ١").message == NO_SUCH_TASK_ERROR
        assert controller.process("mark 0_1").message == NO_SUCH_TASK_ERROR
        assert controller.tasks.get(1).done is False

    def test_failed_command_does_not_write(self, controller, data_file):
        controller.process("dance")
        controller.process("delete 1")
        assert not data_file.exists()


class TestPersistence:
    """Test saving after each change."""

    def test_every_change_is_written(self, controller, data_file):
        controller.process("todo a")
        assert data_file.read_text(encoding="utf-8") == "1. [T][ ] a\n"
        controller.process("mark 1")
        assert data_file.read_text(encoding="utf-8") == "1. [T][X] a\n"

    def test_save_failure_warns(self, controller):
        with patch.object(Storage, "save", return_value=False):
            response = controller.process("todo a")
        assert response.message.endswith(NOT_SAVED_WARNING)
        assert len(controller.tasks) == 1

    def test_from_config_loads_file(self, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("1. [T][X] loaded\n", encoding="utf-8")
        controller = Controller.from_config(ConfigModel(data_file=str(data_file)))
        assert controller.tasks.get(1).name == "loaded"


class TestEdit:
    """Test editing through the controller."""

    def test_edit(self, controller, data_file):
        controller.process("deadline submit | 2023-12-25 1400")
        response = controller.edit(1, first="2024-01-05 0900")
        assert response.message == "Edited:\n  [D][ ] submit (by: Jan 05 2024 09:00)"
        assert "Jan 05 2024 09:00" in data_file.read_text(encoding="utf-8")

    def test_edit_errors(self, controller):
        controller.process("todo a")
        assert controller.edit(1, first="2024-01-05").message == BAD_TASK_ERROR
        assert controller.edit(5, name="b").message == NO_SUCH_TASK_ERROR
        assert controller.tasks.get(1).name == "a"

    def test_controller_owns_its_list(self, storage):
        first = Controller(TaskList(), storage)
        second = Controller(TaskList(), storage)
        first.process("todo only here")
        assert second.tasks.is_empty()
