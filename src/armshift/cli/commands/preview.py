from pathlib import Path
from typing import List, Optional

import typer

from armshift.common import bus
from armshift.config import load_config_from_path, merge_cli_overrides
from armshift.errors import ConfigError, MigrationError, SourceParseError
from armshift.lang.typescript import Dialect, dialect_for_path
from armshift.refactor.engine import migrate_source
from armshift.refactor.migration import build_spec
from armshift.refactor.transforms import DEFAULT_POLICY

nexus = bus.render_to_string


def preview_command(
    file: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help=nexus("cli.option.preview_file"),
    ),
    passes: Optional[List[str]] = typer.Option(
        None,
        "--pass",
        help=nexus("cli.option.passes"),
    ),
):
    try:
        config = merge_cli_overrides(load_config_from_path(Path.cwd()), passes=passes)
        policy = DEFAULT_POLICY.with_extra_keys(config.extra_top_level_keys)
        spec = build_spec(config.passes, policy)
    except ConfigError as e:
        bus.error("error.config", error=str(e))
        raise typer.Exit(code=1)
    except MigrationError as e:
        bus.error("error.generic", error=str(e))
        raise typer.Exit(code=1)

    dialect = dialect_for_path(file) or Dialect.TYPESCRIPT
    try:
        migrated, _ = migrate_source(
            spec, file.read_text(encoding="utf-8"), dialect, file
        )
    except SourceParseError as e:
        bus.error("migrate.file.parse_error", path=file, error=str(e))
        raise typer.Exit(code=1)

    typer.echo(migrated, nl=False)
