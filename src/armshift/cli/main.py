from enum import Enum

import typer

from armshift.common import bus
from .commands.migrate import migrate_command
from .commands.preview import preview_command
from .rendering import CliRenderer

app = typer.Typer(
    name="armshift",
    help=bus.render_to_string("cli.app.help"),
    no_args_is_help=True,
)


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@app.callback()
def main(
    loglevel: LogLevel = typer.Option(
        LogLevel.INFO,
        "--loglevel",
        case_sensitive=False,
        help=bus.render_to_string("cli.option.loglevel"),
    ),
):
    bus.set_renderer(CliRenderer())
    bus.set_level(loglevel.value)


app.command(name="migrate", help=bus.render_to_string("cli.command.migrate"))(
    migrate_command
)
app.command(name="preview", help=bus.render_to_string("cli.command.preview"))(
    preview_command
)


if __name__ == "__main__":
    app()
