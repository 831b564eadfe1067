"""Command-line grammar for taskpad.

Turns one line of user input into a ``Command``. Matching is
case-sensitive, so ``List`` is a command and ``list`` is not.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .exceptions import BadTaskError, NumberFormatError, UndefinedCommandError
from .task import Deadline, Event, Task, Todo
from .utils.datetime import parse_datetime


class CommandKind(Enum):
    """Recognized commands."""
    BYE = "bye"
    LIST = "list"
    MARK = "mark"
    UNMARK = "unmark"
    DELETE = "delete"
    FIND = "find"
    ADD = "add"


@dataclass
class Command:
    """A parsed command line."""
    kind: CommandKind
    index: Optional[int] = None
    keyword: Optional[str] = None
    task: Optional[Task] = None

    @property
    def mutates(self) -> bool:
        return self.kind in (CommandKind.MARK, CommandKind.UNMARK,
                             CommandKind.DELETE, CommandKind.ADD)


BYE_COMMAND = "bye"
LIST_COMMAND = "List"
MARK_PREFIX = "mark "
UNMARK_PREFIX = "unmark "
DELETE_PREFIX = "delete "
FIND_KEYWORD = "find"
FIND_PREFIX = FIND_KEYWORD + " "
TODO_KEYWORD = "todo"
DEADLINE_KEYWORD = "deadline"
EVENT_KEYWORD = "event"

TASK_NUMBER_RE = re.compile(r"[+-]?[0-9]+")

INDEX_COMMANDS = (
    (MARK_PREFIX, CommandKind.MARK),
    (UNMARK_PREFIX, CommandKind.UNMARK),
    (DELETE_PREFIX, CommandKind.DELETE),
)


def _require_space_after(line: str, keyword: str, label: str) -> str:
    """Return the text after ``keyword`` provided a space follows it."""
    offset = len(keyword)
    if len(line) <= offset or line[offset] != " ":
        raise BadTaskError(f"Invalid {label} format")
    return line[offset + 1:]


class CommandParser:
    """Parses raw input lines into commands."""

    def parse(self, line: str) -> Command:
        """Parse one input line.

        Raises:
            UndefinedCommandError: If no command matches
            BadTaskError: If a task or find command is malformed
            NumberFormatError: If an index argument is not an integer
        """
        if line == BYE_COMMAND:
            return Command(CommandKind.BYE)
        if line == LIST_COMMAND:
            return Command(CommandKind.LIST)

        for prefix, kind in INDEX_COMMANDS:
            if line.startswith(prefix):
                return Command(kind, index=self.parse_task_number(line, len(prefix)))

        if line.startswith(FIND_PREFIX):
            return Command(CommandKind.FIND, keyword=self.parse_find(line))

        if line.startswith((TODO_KEYWORD, DEADLINE_KEYWORD, EVENT_KEYWORD)):
            return Command(CommandKind.ADD, task=self.parse_task(line))

        raise UndefinedCommandError(f"Undefined command: {line!r}")

    def parse_task_number(self, line: str, prefix_length: int) -> int:
        """Read the integer after an index command prefix.

        Only ASCII digits with an optional sign are accepted. No bounds
        check happens here; the task list does that.
        """
        raw = line[prefix_length:].strip()
        if not TASK_NUMBER_RE.fullmatch(raw):
            raise NumberFormatError(f"Not a task number: {raw!r}")
        return int(raw)

    def parse_find(self, line: str) -> str:
        keyword = _require_space_after(line, FIND_KEYWORD, "find").strip()
        if not keyword:
            raise BadTaskError("Empty search keyword")
        return keyword

    def parse_task(self, line: str) -> Task:
        """Build a task from a ``todo``, ``deadline`` or ``event`` line."""
        if line.startswith(TODO_KEYWORD):
            return self.parse_todo(line)
        if line.startswith(DEADLINE_KEYWORD):
            return self.parse_deadline(line)
        if line.startswith(EVENT_KEYWORD):
            return self.parse_event(line)
        raise BadTaskError("Unknown task type")

    def parse_todo(self, line: str) -> Todo:
        name = _require_space_after(line, TODO_KEYWORD, "todo").strip()
        if not name:
            raise BadTaskError("Empty task name")
        return Todo(name)

    def parse_deadline(self, line: str) -> Deadline:
        """``deadline <name> | <date> [time]``; splits on the last pipe."""
        remaining = _require_space_after(line, DEADLINE_KEYWORD, "deadline").strip()
        name, pipe, due = remaining.rpartition("|")
        if not pipe:
            raise BadTaskError("Invalid deadline format")

        name, due = name.strip(), due.strip()
        if not name or not due:
            raise BadTaskError("Empty task name or deadline")
        return Deadline(name, due=parse_datetime(due))

    def parse_event(self, line: str) -> Event:
        """``event <name> | <start> [time] | <end> [time]``; exactly three fields."""
        remaining = _require_space_after(line, EVENT_KEYWORD, "event").strip()
        parts = remaining.split("|")
        # Trailing empty fields are ignored, so "a | b | c |" has three.
        while parts and not parts[-1]:
            parts.pop()
        parts = [part.strip() for part in parts]
        if len(parts) != 3:
            raise BadTaskError("Invalid event format")

        name, start, end = parts
        if not name or not start or not end:
            raise BadTaskError("Empty task name, start date, or end date")
        return Event(name, start=parse_datetime(start), end=parse_datetime(end))
