import asyncio
import os
import subprocess

import click

from secretenv.cli.utils import configure_logging, load_cli_config, output_error
from secretenv.sdk.secrets import collect_secrets_ordered, env_map_to_environ


@click.command(name="run", context_settings={"ignore_unknown_options": True})
@click.argument("name")
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.option("--debug", is_flag=True, help="Show detailed debug information")
@click.pass_context
def run(ctx: click.Context, name: str, command: tuple[str, ...], debug: bool) -> None:
    """Run a command with an environment's variables set.

    The resolved variables are layered over the current process environment.
    The command's exit code becomes this command's exit code, or 128 plus
    the signal number if the command was killed by a signal.

    \b
    Examples:
        secretenv run github -- gh auth status
        secretenv run db -- psql
    """
    configure_logging(debug)

    try:
        config = load_cli_config(ctx)
        env_map = config.get_environment(name)
        resolver = config.create_resolver()
        asyncio.run(resolver.pre_resolve(collect_secrets_ordered([env_map])))
        variables = env_map_to_environ(resolver.resolve_env_map(env_map))
    except Exception as e:
        output_error(e, False, debug)
        return

    cmd_env = os.environ.copy()
    cmd_env.update(variables)

    try:
        result = subprocess.run(list(command), env=cmd_env, check=False)
    except OSError as e:
        output_error(e, False, debug)
        return

    returncode = result.returncode
    if returncode < 0:
        # Killed by a signal; report it the way shells do
        returncode = 128 - returncode
    ctx.exit(returncode)
