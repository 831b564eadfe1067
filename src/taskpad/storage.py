"""Flat text storage for the task list.

One task per line, numbered from 1::

    1. [T][ ] buy milk
    2. [D][X] submit report (by: Dec 25 2023 14:00)
    3. [E][ ] conference (from: Jan 10 2024 09:00 to: Jan 12 2024 17:00)

The whole file is rewritten after every change. Lines that cannot be read
back are skipped one at a time so a hand-edited file never blocks a load.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .exceptions import DateFormatError
from .task import DONE_MARK, Deadline, Event, Task, TaskKind, Todo
from .task_list import TaskList
from .utils.datetime import parse_display_datetime


logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path("data") / "tasks.txt"

INDEX_SEPARATOR = ". "
DEADLINE_MARKER = " (by: "
EVENT_START_MARKER = " (from: "
EVENT_END_MARKER = " to: "
HEADER_LENGTH = 6  # "[T][X]"


class TaskLineFormat:
    """Conversion between tasks and their stored line body."""

    @staticmethod
    def to_line(task: Task) -> str:
        return task.render()

    @staticmethod
    def from_line(body: str) -> Optional[Task]:
        """Parse a line body (index prefix already removed).

        Returns:
            The task, or None if the body is malformed
        """
        if len(body) < HEADER_LENGTH:
            return None
        if body[0] != "[" or body[2] != "]" or body[3] != "[" or body[5] != "]":
            return None

        type_tag = body[1]
        done = body[4] == DONE_MARK
        content = body[HEADER_LENGTH:].strip()

        try:
            kind = TaskKind(type_tag)
        except ValueError:
            return None

        try:
            if kind is TaskKind.TODO:
                task = TaskLineFormat._todo_from(content)
            elif kind is TaskKind.DEADLINE:
                task = TaskLineFormat._deadline_from(content)
            else:
                task = TaskLineFormat._event_from(content)
        except DateFormatError:
            return None

        if task is not None and done:
            task.mark_done()
        return task

    @staticmethod
    def _todo_from(content: str) -> Optional[Todo]:
        return Todo(content) if content else None

    @staticmethod
    def _deadline_from(content: str) -> Optional[Deadline]:
        by_index = content.rfind(DEADLINE_MARKER)
        if by_index == -1 or not content.endswith(")"):
            return None

        name = content[:by_index]
        due = content[by_index + len(DEADLINE_MARKER):-1]
        return Deadline(name, due=parse_display_datetime(due))

    @staticmethod
    def _event_from(content: str) -> Optional[Event]:
        from_index = content.rfind(EVENT_START_MARKER)
        to_index = content.rfind(EVENT_END_MARKER)
        if from_index == -1 or to_index < from_index or not content.endswith(")"):
            return None

        name = content[:from_index]
        start = content[from_index + len(EVENT_START_MARKER):to_index]
        end = content[to_index + len(EVENT_END_MARKER):-1]
        return Event(name, start=parse_display_datetime(start), end=parse_display_datetime(end))


def serialize(task_list: TaskList) -> str:
    """Render a task list as numbered, newline-terminated lines."""
    return "".join(
        f"{number}{INDEX_SEPARATOR}{TaskLineFormat.to_line(task)}\n"
        for number, task in enumerate(task_list, start=1)
    )


def deserialize(text: str) -> TaskList:
    """Rebuild a task list from stored text, dropping malformed lines."""
    task_list = TaskList()
    # Only \n (with an optional \r before it) ends a line; names may hold
    # other characters that str.splitlines() would treat as breaks.
    for line_no, raw in enumerate(text.split("\n"), start=1):
        raw = raw.rstrip("\r")
        line = raw.strip()
        if not line:
            continue

        sep = line.find(INDEX_SEPARATOR)
        if sep == -1:
            logger.debug("Skipping line %d: no index prefix", line_no)
            continue

        task = TaskLineFormat.from_line(line[sep + len(INDEX_SEPARATOR):])
        if task is None:
            logger.debug("Skipping malformed line %d: %r", line_no, line)
            continue
        task_list.add(task)
    return task_list


class Storage:
    """Reads and writes the task list file."""

    def __init__(self, path: Union[str, Path] = DEFAULT_DATA_FILE):
        self.path = Path(path).expanduser()

    def load(self) -> TaskList:
        """Load tasks from disk.

        A missing or unreadable file gives an empty list.
        """
        if not self.path.exists():
            logger.debug("No task file at %s, starting empty", self.path)
            return TaskList()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error loading tasks from %s: %s", self.path, e)
            return TaskList()

        task_list = deserialize(content)
        logger.debug("Loaded %d tasks from %s", len(task_list), self.path)
        return task_list

    def save(self, task_list: TaskList) -> bool:
        """Overwrite the task file with the full list.

        Returns:
            True if saved, False if the write failed (the change then only
            lives in memory)
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(serialize(task_list))
        except OSError as e:
            logger.error("Error saving tasks to %s: %s", self.path, e)
            return False
        return True
