#!/usr/bin/env python3
"""
Main CLI Entry Point for moneyboard

Provides the command-line interface over the transaction store and reports.
"""


import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    moneyboard - Personal Finance Tracking Client

    Lists and records transactions against the finance API and produces
    period summaries, category breakdowns, CSV exports and charts.
    """
    ctx.ensure_object(dict)

    if config_env:
        import os

        os.environ["MONEYBOARD_ENV"] = config_env

    if debug:
        import logging
        import os

        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("moneyboard").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"API: {ctx.obj['config'].api.base_url}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from moneyboard import __author__, __version__

    click.echo(f"moneyboard v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration (secrets redacted)."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  API Base URL: {config_obj.api.base_url}")
    click.echo(f"  API Timeout: {config_obj.api.timeout}s")
    click.echo(f"  API Token: {'***REDACTED***' if config_obj.api.api_token else 'not set'}")
    click.echo(f"  Output Directory: {config_obj.reports.output_dir}")
    click.echo(f"  Locale: {config_obj.reports.locale}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .ai import ai  # noqa: E402
from .reports import reports  # noqa: E402
from .transactions import transactions  # noqa: E402

main.add_command(transactions)
main.add_command(reports)
main.add_command(ai)


if __name__ == "__main__":
    main()
