"""Ordered, 1-based task list."""

from typing import Iterator, List, Optional

from .exceptions import BadTaskError, MarkingError, RangeError
from .task import Deadline, Event, Task, TaskKind
from .utils.datetime import parse_datetime

# Passed to ``TaskList.edit`` for any field that should stay as it is.
KEEP = "_"


class TaskList:
    """Mutable ordered collection of tasks.

    Positions are 1-based on every public method. Deleting a task shifts
    all later tasks down by one, so there are never gaps.
    """

    def __init__(self, tasks: Optional[List[Task]] = None):
        self._tasks: List[Task] = list(tasks) if tasks else []

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def is_empty(self) -> bool:
        return not self._tasks

    def _check_number(self, number: int) -> int:
        if number < 1 or number > len(self._tasks):
            raise RangeError(f"Task number out of range: {number}")
        return number - 1

    def add(self, task: Task) -> None:
        self._tasks.append(task)

    def get(self, number: int) -> Task:
        return self._tasks[self._check_number(number)]

    def delete(self, number: int) -> Task:
        return self._tasks.pop(self._check_number(number))

    def mark(self, number: int) -> Task:
        task = self.get(number)
        if task.done:
            raise MarkingError("Task already done")
        task.mark_done()
        return task

    def unmark(self, number: int) -> Task:
        task = self.get(number)
        if not task.done:
            raise MarkingError("Task already not done")
        task.mark_not_done()
        return task

    def find(self, keyword: str) -> "TaskList":
        """Tasks whose name contains ``keyword``, ignoring case.

        The result shares task objects with this list and keeps their order.
        """
        needle = keyword.lower()
        return TaskList([t for t in self._tasks if needle in t.name.lower()])

    def edit(self, number: int, name: str = KEEP, first: str = KEEP,
             second: str = KEEP) -> Task:
        """Replace selected fields of a task in place.

        Args:
            number: 1-based task position
            name: New name, or ``KEEP``
            first: New due date (deadline) or start date (event), or ``KEEP``
            second: New end date (event only), or ``KEEP``

        Returns:
            The edited task

        Raises:
            RangeError: If the position is out of range
            BadTaskError: If a field does not apply to the task type, the
                new name is empty, or a date cannot be parsed
        """
        task = self.get(number)

        new_name = None
        if name != KEEP:
            new_name = name.strip()
            if not new_name:
                raise BadTaskError("Empty task name")

        if task.kind is TaskKind.TODO and (first != KEEP or second != KEEP):
            raise BadTaskError("A todo has no dates to edit")
        if task.kind is TaskKind.DEADLINE and second != KEEP:
            raise BadTaskError("A deadline has only one date")

        # Parse everything before touching the task so a bad date changes nothing.
        new_first = parse_datetime(first) if first != KEEP else None
        new_second = parse_datetime(second) if second != KEEP else None

        if new_name is not None:
            task.name = new_name
        if isinstance(task, Deadline) and new_first is not None:
            task.due = new_first
        if isinstance(task, Event):
            if new_first is not None:
                task.start = new_first
            if new_second is not None:
                task.end = new_second
        return task
