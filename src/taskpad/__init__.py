"""taskpad - a line-oriented personal task tracker."""

__version__ = "0.1.0"

from .task import Task, Todo, Deadline, Event, TaskKind
from .task_list import TaskList, KEEP
from .parser import CommandParser, Command, CommandKind
from .storage import Storage
from .controller import Controller, Response

__all__ = [
    "Task",
    "Todo",
    "Deadline",
    "Event",
    "TaskKind",
    "TaskList",
    "KEEP",
    "CommandParser",
    "Command",
    "CommandKind",
    "Storage",
    "Controller",
    "Response",
    "__version__",
]
