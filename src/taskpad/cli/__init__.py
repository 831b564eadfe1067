"""Command-line interface package for taskpad."""

__all__ = ["main"]


def main(*args, **kwargs):
    """Entry point that defers heavy imports until needed."""
    from .shell import main as shell_main

    return shell_main(*args, **kwargs)
