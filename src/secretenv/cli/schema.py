import json

import click

from secretenv.sdk.core.config import json_schema


@click.command(name="schema")
def schema() -> None:
    """Print the JSON schema of the configuration file."""
    click.echo(json.dumps(json_schema(), indent=2))
