import asyncio
import json
from typing import Any

import click

from secretenv.cli.utils import configure_logging, load_cli_config, output_error
from secretenv.sdk.secrets import SecretResolutionError, collect_secrets_ordered


@click.command(name="check")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
@click.pass_context
def check(ctx: click.Context, json_output: bool, debug: bool) -> None:
    """Resolve every secret in every environment and report the outcome.

    Secrets are resolved one at a time, so a provider that asks for
    authentication (e.g. 1Password) prompts only once. Values are never printed.

    \b
    Examples:
        secretenv check                 # Check all secrets
        secretenv check --json-output   # Output in JSON format
    """
    configure_logging(debug)

    try:
        config = load_cli_config(ctx)
        resolver = config.create_resolver()
        secrets = collect_secrets_ordered(config.environments.values())

        try:
            asyncio.run(resolver.pre_resolve(secrets))
        except SecretResolutionError:
            # Reported per secret below
            pass

        results: list[dict[str, Any]] = []
        for secret in secrets:
            error = resolver.failure_for(secret)
            results.append(
                {
                    "provider": secret.provider,
                    "reference": secret.reference,
                    "status": "error" if error else "ok",
                    "error": error,
                }
            )

        environments: dict[str, str | None] = {}
        for name, env in config.environments.items():
            try:
                resolver.resolve_env_map(env)
                environments[name] = None
            except Exception as e:
                environments[name] = str(e)
    except Exception as e:
        output_error(e, json_output, debug)
        return

    failed = [r for r in results if r["status"] == "error"]

    if json_output:
        report = {
            "status": "error" if failed else "ok",
            "secrets": results,
            "environments": environments,
        }
        click.echo(json.dumps(report, indent=2))
    else:
        if not results:
            click.echo(click.style("No secrets found in configuration", fg="blue"))
        else:
            click.echo(f"\n{click.style('Secrets', fg='cyan', bold=True)}")
            for result in results:
                label = f"{result['provider']}: {result['reference']}"
                if result["status"] == "ok":
                    click.echo(f"  {click.style('✓', fg='green')} {label}")
                else:
                    click.echo(f"  {click.style('✗', fg='red')} {label}")
                    click.echo(f"    {click.style(result['error'], fg='red')}")

            resolved_count = len(results) - len(failed)
            click.echo(
                f"\n  {click.style(f'{resolved_count} resolved', fg='green')}, "
                f"{click.style(f'{len(failed)} failed', fg='red' if failed else 'green')}"
            )

        if environments:
            click.echo(f"\n{click.style('Environments', fg='cyan', bold=True)}")
            for name, error in environments.items():
                if error is None:
                    click.echo(f"  {click.style('✓', fg='green')} {name}")
                else:
                    click.echo(f"  {click.style('✗', fg='red')} {name}")

    if failed:
        ctx.exit(1)
