"""Error types raised by the taskpad core.

Every error here is recoverable: the controller catches them and turns
them into a single response line for the shell.
"""


class TaskpadError(Exception):
    """Base exception for taskpad operations."""
    pass


class UndefinedCommandError(TaskpadError):
    """The input line matches no known command."""
    pass


class BadTaskError(TaskpadError):
    """A recognized command has structurally invalid arguments."""
    pass


class DateFormatError(BadTaskError):
    """A date/time literal matches no accepted pattern or is out of range."""
    pass


class MarkingError(TaskpadError):
    """Task is already in the requested completion state."""
    pass


class RangeError(TaskpadError, IndexError):
    """Task number outside the list bounds."""
    pass


class NumberFormatError(TaskpadError, ValueError):
    """Task number argument is not an integer."""
    pass
