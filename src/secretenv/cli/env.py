import asyncio

import click

from secretenv.cli.utils import (
    MASK,
    configure_logging,
    load_cli_config,
    output_error,
    output_result,
)
from secretenv.sdk.secrets import collect_secrets_ordered, env_map_to_environ


@click.command(name="env")
@click.argument("name")
@click.option("--show-values", is_flag=True, help="Print resolved values instead of masking them")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
@click.pass_context
def env(ctx: click.Context, name: str, show_values: bool, json_output: bool, debug: bool) -> None:
    """Resolve an environment and print its variables.

    Values that came from secrets are masked unless --show-values is given.

    \b
    Examples:
        secretenv env github                  # KEY=value lines, secrets masked
        secretenv env github --show-values    # Print secret values too
        secretenv env github --json-output    # Output in JSON format
    """
    configure_logging(debug)

    try:
        config = load_cli_config(ctx)
        env_map = config.get_environment(name)
        resolver = config.create_resolver()
        asyncio.run(resolver.pre_resolve(collect_secrets_ordered([env_map])))
        variables = env_map_to_environ(resolver.resolve_env_map(env_map))
    except Exception as e:
        output_error(e, json_output, debug)
        return

    if not show_values:
        variables = {
            key: (MASK if env_map[key].as_secret() is not None else value)
            for key, value in variables.items()
        }

    if json_output:
        output_result(variables, json_output, debug)
    else:
        output_result([f"{key}={value}" for key, value in variables.items()])
