from pathlib import Path
from typing import List, Optional

import typer

from armshift.app import MigrationRunner
from armshift.common import bus
from armshift.config import load_config_from_path, merge_cli_overrides
from armshift.errors import ConfigError, MigrationError

nexus = bus.render_to_string


def migrate_command(
    patterns: Optional[List[str]] = typer.Argument(
        None,
        help=nexus("cli.option.patterns"),
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help=nexus("cli.option.dry_run"),
    ),
    show_diff: bool = typer.Option(
        False,
        "--diff",
        help=nexus("cli.option.diff"),
    ),
    yes: bool = typer.Option(
        False,
        "-y",
        "--yes",
        help=nexus("cli.option.yes"),
    ),
    passes: Optional[List[str]] = typer.Option(
        None,
        "--pass",
        help=nexus("cli.option.passes"),
    ),
):
    root_path = Path.cwd()

    try:
        config = merge_cli_overrides(load_config_from_path(root_path), patterns, passes)
        bus.info("migrate.run.banner")
        runner = MigrationRunner.for_root(root_path, config)
        tm = runner.run()
    except ConfigError as e:
        bus.error("error.config", error=str(e))
        raise typer.Exit(code=1)
    except (MigrationError, FileNotFoundError) as e:
        bus.error("error.generic", error=str(e))
        raise typer.Exit(code=1)

    exit_code = 1 if runner.failed_paths else 0

    if tm.pending_count == 0:
        raise typer.Exit(code=exit_code)

    # 1. Preview
    bus.warning("migrate.run.preview_header", count=tm.pending_count)
    for desc in tm.preview():
        typer.echo(f"  {desc}")
    if show_diff:
        for diff in tm.diff():
            typer.echo(diff)

    if dry_run:
        bus.info("migrate.run.dry_run")
        raise typer.Exit(code=exit_code)

    # 2. Confirm
    confirmed = yes or typer.confirm(nexus("migrate.run.confirm"), default=False)
    if not confirmed:
        bus.error("migrate.run.aborted")
        raise typer.Exit(code=1)

    # 3. Execute
    bus.info("migrate.run.applying")
    count = tm.pending_count
    tm.commit()
    bus.success("migrate.run.success", count=count)
    raise typer.Exit(code=exit_code)
