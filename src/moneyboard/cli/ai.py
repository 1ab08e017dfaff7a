#!/usr/bin/env python3
"""
AI CLI - Questions for the Server's Analysis Assistant
"""

import click

from .client import auth_options, open_gateway, run


@click.group()
def ai() -> None:
    """Ask the analysis assistant about your finances."""
    pass


@ai.command()
@auth_options
@click.argument("prompt", nargs=-1, required=True)
@click.pass_context
def ask(ctx: click.Context, email: str | None, password: str | None, prompt: tuple[str, ...]) -> None:
    """
    Send PROMPT to the assistant and print its answer.

    Example:
      moneyboard ai ask "Where did most of my money go this month?"
    """
    question = " ".join(prompt).strip()
    if not question:
        raise click.BadParameter("Prompt is required", param_hint="PROMPT")

    async def operation() -> str:
        async with open_gateway(ctx, email, password) as gateway:
            return await gateway.ask_ai(question)

    click.echo(f"🤖 {run(operation)}")
