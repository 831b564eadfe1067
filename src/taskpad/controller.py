"""Command processing shared by every taskpad shell.

A shell hands each input line to ``Controller.process`` and shows the
returned message. All taskpad errors are turned into a message here, so
a bad command never ends the session or leaves the list half-changed.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import ConfigModel
from .exceptions import (
    BadTaskError,
    MarkingError,
    NumberFormatError,
    RangeError,
    TaskpadError,
    UndefinedCommandError,
)
from .parser import Command, CommandKind, CommandParser
from .storage import Storage
from .task_list import KEEP, TaskList


logger = logging.getLogger(__name__)

BYE_RESPONSE = "Bye."
NO_TASKS_RESPONSE = "No tasks in your list."
TASK_DONE_PREFIX = "done:\n  "
TASK_NOT_DONE_PREFIX = "not done:\n  "
TASK_EDITED_PREFIX = "Edited:\n  "
TASK_DELETED_PREFIX = "Deleted task "
TASK_NOT_LOCKED_IN = "\nGuess ur not locked-in enough for this"
FOUND_TASKS_PREFIX = "Found:\n"
NOT_SAVED_WARNING = "\n(Warning: change not saved to disk)"

UNDEFINED_COMMAND_ERROR = "I don't understand that command. Please try again."
BAD_TASK_ERROR = "Invalid task format. Please check your input."
MARKING_ERROR = "Unable to change task status. Please check the task number."
NO_SUCH_TASK_ERROR = "No such task"

ERROR_MESSAGES = (
    (UndefinedCommandError, UNDEFINED_COMMAND_ERROR),
    (BadTaskError, BAD_TASK_ERROR),
    (MarkingError, MARKING_ERROR),
    (RangeError, NO_SUCH_TASK_ERROR),
    (NumberFormatError, NO_SUCH_TASK_ERROR),
)


@dataclass
class Response:
    """What a shell should show after a command."""
    message: str
    exit: bool = False
    error: bool = False


def format_numbered(task_list: TaskList) -> str:
    return "\n".join(f"{n}. {task.render()}" for n, task in enumerate(task_list, start=1))


def error_message(error: TaskpadError) -> str:
    for error_type, message in ERROR_MESSAGES:
        if isinstance(error, error_type):
            return message
    return str(error)


class Controller:
    """Wires the parser, the task list and storage together."""

    def __init__(self, task_list: TaskList, storage: Storage,
                 parser: Optional[CommandParser] = None):
        self.tasks = task_list
        self.storage = storage
        self.parser = parser or CommandParser()

    @classmethod
    def from_config(cls, config: ConfigModel) -> "Controller":
        """Create a controller with the task list loaded from the configured file."""
        storage = Storage(config.data_path)
        return cls(storage.load(), storage)

    def process(self, line: str) -> Response:
        """Run one command line and describe the outcome."""
        try:
            command = self.parser.parse(line)
            return self._dispatch(command)
        except TaskpadError as e:
            logger.debug("Command %r failed: %s", line, e)
            return Response(error_message(e), error=True)

    def edit(self, number: int, name: str = KEEP, first: str = KEEP,
             second: str = KEEP) -> Response:
        """Edit a task's fields; use ``KEEP`` for fields to leave alone."""
        try:
            task = self.tasks.edit(number, name, first, second)
        except TaskpadError as e:
            logger.debug("Edit of task %s failed: %s", number, e)
            return Response(error_message(e), error=True)
        return self._saved(TASK_EDITED_PREFIX + task.render())

    def _dispatch(self, command: Command) -> Response:
        kind = command.kind

        if kind is CommandKind.BYE:
            return Response(BYE_RESPONSE, exit=True)

        if kind is CommandKind.LIST:
            if self.tasks.is_empty():
                return Response(NO_TASKS_RESPONSE)
            return Response(format_numbered(self.tasks))

        if kind is CommandKind.FIND:
            matches = self.tasks.find(command.keyword)
            if matches.is_empty():
                return Response(f"No tasks found containing: {command.keyword}")
            return Response(FOUND_TASKS_PREFIX + format_numbered(matches))

        if kind is CommandKind.MARK:
            task = self.tasks.mark(command.index)
            return self._saved(TASK_DONE_PREFIX + task.render())

        if kind is CommandKind.UNMARK:
            task = self.tasks.unmark(command.index)
            return self._saved(TASK_NOT_DONE_PREFIX + task.render())

        if kind is CommandKind.DELETE:
            task = self.tasks.delete(command.index)
            message = TASK_DELETED_PREFIX + task.render()
            if not task.done:
                message += TASK_NOT_LOCKED_IN
            return self._saved(message)

        if kind is CommandKind.ADD:
            self.tasks.add(command.task)
            return self._saved(
                f"Got it. I've added this task:\n  {command.task.render()}\n"
                f"Now you have {len(self.tasks)} tasks in the list."
            )

        raise UndefinedCommandError(f"Unhandled command: {kind}")

    def _saved(self, message: str) -> Response:
        """Persist after a change; warn in the message if the write failed."""
        if not self.storage.save(self.tasks):
            message += NOT_SAVED_WARNING
        return Response(message)
