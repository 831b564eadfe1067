"""Task record model for taskpad."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from .utils.datetime import format_datetime


class TaskKind(Enum):
    """Task variants; the value is the type tag written to disk."""
    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


DONE_MARK = "X"
NOT_DONE_MARK = " "


@dataclass
class Task:
    """Common fields of every task record."""

    name: str
    done: bool = False

    kind: ClassVar[TaskKind]

    def mark_done(self):
        """Mark the task as done."""
        self.done = True

    def mark_not_done(self):
        """Mark the task as not done."""
        self.done = False

    def render(self) -> str:
        """Canonical single-line representation, e.g. ``[T][X] buy milk``."""
        return render_task(self)

    def __str__(self) -> str:
        return self.render()


@dataclass
class Todo(Task):
    """A task with no date attached."""

    kind: ClassVar[TaskKind] = TaskKind.TODO


@dataclass
class Deadline(Task):
    """A task that must be done by ``due``."""

    due: Optional[datetime] = None
    kind: ClassVar[TaskKind] = TaskKind.DEADLINE

    def __post_init__(self):
        if self.due is None:
            raise TypeError("Deadline requires a due date")


@dataclass
class Event(Task):
    """A task spanning ``start`` to ``end``. The order of the two is not checked."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None
    kind: ClassVar[TaskKind] = TaskKind.EVENT

    def __post_init__(self):
        if self.start is None or self.end is None:
            raise TypeError("Event requires a start and an end date")


def render_task(task: Task) -> str:
    """Render any task variant to its display/storage line."""
    status = DONE_MARK if task.done else NOT_DONE_MARK
    head = f"[{task.kind.value}][{status}] {task.name}"

    if task.kind is TaskKind.TODO:
        return head
    if task.kind is TaskKind.DEADLINE:
        return f"{head} (by: {format_datetime(task.due)})"
    if task.kind is TaskKind.EVENT:
        return f"{head} (from: {format_datetime(task.start)} to: {format_datetime(task.end)})"
    raise ValueError(f"Unknown task kind: {task.kind}")
