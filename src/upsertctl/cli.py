"""Root CLI group for upsertctl with global flags and command registration."""

from __future__ import annotations

import click

from upsertctl import __version__
from upsertctl.commands import register_commands
from upsertctl.commands._base import UpsertGroup
from upsertctl.commands._context import AppContext
from upsertctl.config.settings import UpsertSettings

_ROOT_EXAMPLES = """\
  upsertctl --db sqlite:///school.db find users --set id=4
  upsertctl find-or-create users --by name --set name=Slughorn
  upsertctl --json upsert users --by email --set email=h@hogwarts.edu --set name=Harry"""


@click.group(cls=UpsertGroup, invoke_without_command=True, examples=_ROOT_EXAMPLES)
@click.version_option(version=__version__, prog_name="upsertctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--db", "db_url", default=None, help="Database URL (overrides [store] url).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    db_url: str | None,
) -> None:
    """upsertctl — find-or-create and upsert rows of an existing database."""
    ctx.ensure_object(dict)
    settings = UpsertSettings.from_cli(
        config_path=config_path,
        db_url=db_url,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
