import click

from secretenv.cli.check import check
from secretenv.cli.env import env
from secretenv.cli.run import run
from secretenv.cli.schema import schema
from secretenv.sdk.core.version import PACKAGE_VERSION


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar="SECRETENV_CONFIG",
    help="Path to the configuration file",
)
@click.version_option(PACKAGE_VERSION, prog_name="secretenv")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """secretenv CLI"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    # Show help when no subcommand is provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(check)
cli.add_command(env)
cli.add_command(run)
cli.add_command(schema)


if __name__ == "__main__":
    cli()
