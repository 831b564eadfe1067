"""Console styling for the taskpad shell."""

import logging
import re
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text
from rich.theme import Theme


CITY_LIGHTS_COLORS = {
    'primary': '#68D5F3',
    'secondary': '#5CCFE6',
    'success': '#8BD649',
    'warning': '#FFD93D',
    'error': '#F78C6C',
    'text_primary': '#B7C5D3',
    'text_muted': '#4F5B66',
    'text_bright': '#FFFFFF',
}

TASKPAD_THEME = Theme({
    'default': CITY_LIGHTS_COLORS['text_primary'],
    'muted': CITY_LIGHTS_COLORS['text_muted'],
    'header': f"{CITY_LIGHTS_COLORS['text_bright']} bold",
    'success': f"{CITY_LIGHTS_COLORS['success']} bold",
    'warning': f"{CITY_LIGHTS_COLORS['warning']} bold",
    'error': f"{CITY_LIGHTS_COLORS['error']} bold",
    'prompt': f"{CITY_LIGHTS_COLORS['primary']} bold",
    'task_todo': CITY_LIGHTS_COLORS['primary'],
    'task_deadline': CITY_LIGHTS_COLORS['warning'],
    'task_event': CITY_LIGHTS_COLORS['secondary'],
    'task_done': CITY_LIGHTS_COLORS['success'],
})

TASK_STYLES = {
    'T': 'task_todo',
    'D': 'task_deadline',
    'E': 'task_event',
}

TASK_LINE_RE = re.compile(r"\[(?P<kind>[TDE])\]\[(?P<status>[X ])\]")

SEPARATOR = "==========="
BANNER = "taskpad, what do you want?"


def get_console(no_color: bool = False, stderr: bool = False) -> Console:
    """Create a themed console."""
    return Console(theme=TASKPAD_THEME, no_color=no_color, stderr=stderr, highlight=False)


def style_response(message: str, error: bool = False) -> Text:
    """Colour a controller response; task lines get their type's style."""
    if error:
        return Text(message, style='error')

    text = Text()
    for i, line in enumerate(message.split("\n")):
        if i:
            text.append("\n")
        m = TASK_LINE_RE.search(line)
        if not m:
            text.append(line)
            continue
        style = 'task_done' if m.group('status') == 'X' else TASK_STYLES[m.group('kind')]
        text.append(line[:m.start()])
        text.append(line[m.start():], style=style)
    return text


def configure_logging(level: str = "WARNING", console: Optional[Console] = None) -> None:
    """Send log records to stderr through rich."""
    handler = RichHandler(console=console or get_console(stderr=True),
                          show_path=False, markup=False)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]",
                        handlers=[handler], force=True)
