"""Console shell for taskpad."""

import logging
import sys
from pathlib import Path

import click

from ..config import ConfigModel, get_config_path, load_config, save_config
from ..controller import Controller, Response
from ..task_list import KEEP
from ..theme import BANNER, SEPARATOR, configure_logging, get_console, style_response


logger = logging.getLogger(__name__)


def _config(ctx) -> ConfigModel:
    return ctx.obj['config']


def _controller(ctx) -> Controller:
    if 'controller' not in ctx.obj:
        logger.debug("Using task file %s", _config(ctx).data_path)
        ctx.obj['controller'] = Controller.from_config(_config(ctx))
    return ctx.obj['controller']


def _show(console, response: Response) -> None:
    console.print(style_response(response.message, response.error), soft_wrap=True)


@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to config file")
@click.option("--data-file", type=click.Path(dir_okay=False), help="Task file to use instead of the configured one")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx, config_path, data_file, verbose):
    """taskpad - track todos, deadlines and events from the terminal.

    Run without a command to start the interactive shell.
    """
    ctx.ensure_object(dict)
    config = load_config(config_path)
    if data_file:
        config.data_file = data_file
    configure_logging("DEBUG" if verbose else config.log_level)

    ctx.obj['config'] = config
    ctx.obj['config_path'] = get_config_path(config_path)
    ctx.obj['console'] = get_console(no_color=config.no_color)

    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@cli.command()
@click.pass_context
def shell(ctx):
    """Interactive shell: one command per line, ``bye`` to quit.

    Commands:
      List
      todo <name>
      deadline <name> | <date> [time]
      event <name> | <start> [time] | <end> [time]
      mark <n> / unmark <n> / delete <n>
      find <keyword>
      bye
    """
    console = ctx.obj['console']
    controller = _controller(ctx)

    if _config(ctx).show_banner:
        console.print(BANNER, style='header')
        console.print()

    while True:
        try:
            line = console.input("[prompt]> [/prompt]").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            console.print("Bye.")
            break

        if not line:
            continue

        response = controller.process(line)
        _show(console, response)
        if response.exit:
            break
        console.print(SEPARATOR, style='muted')


@cli.command()
@click.argument("lines", nargs=-1, required=True)
@click.pass_context
def run(ctx, lines):
    """Run each LINE as one shell command.

    Example:
      taskpad run "todo buy milk" "deadline submit | 2023-12-25 1400" List
    """
    console = ctx.obj['console']
    controller = _controller(ctx)
    for line in lines:
        response = controller.process(line.strip())
        _show(console, response)
        if response.exit:
            break


@cli.command(name="list")
@click.pass_context
def list_tasks(ctx):
    """Show all tasks."""
    _show(ctx.obj['console'], _controller(ctx).process("List"))


@cli.command()
@click.argument("index", type=int)
@click.option("--name", default=KEEP, show_default=True, help="New task name")
@click.option("--first", default=KEEP, show_default=True,
              help="New due date (deadline) or start date (event)")
@click.option("--second", default=KEEP, show_default=True, help="New end date (event)")
@click.pass_context
def edit(ctx, index, name, first, second):
    """Edit task INDEX; fields left as '_' are not changed.

    Example:
      taskpad edit 2 --first "2024-01-05 0900"
    """
    response = _controller(ctx).edit(index, name, first, second)
    _show(ctx.obj['console'], response)
    if response.error:
        sys.exit(1)


@cli.command()
@click.option("--init", is_flag=True, help="Write the effective config to the config file")
@click.option("--path", "show_path", is_flag=True, help="Only print the config file location")
@click.pass_context
def config(ctx, init, show_path):
    """Show or initialize configuration."""
    console = ctx.obj['console']
    config_path: Path = ctx.obj['config_path']

    if show_path:
        console.print(str(config_path), soft_wrap=True, markup=False)
        return

    if init:
        written = save_config(_config(ctx), config_path)
        console.print(f"Configuration saved to {written}", style='success', soft_wrap=True, markup=False)
        return

    console.print(_config(ctx).to_yaml().rstrip(), soft_wrap=True, markup=False)


def main(*args, **kwargs):
    return cli(*args, **kwargs)


if __name__ == "__main__":
    main()
