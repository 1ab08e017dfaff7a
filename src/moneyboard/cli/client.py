#!/usr/bin/env python3
"""
CLI Client Helpers

Builds the session, gateway and store for a single CLI invocation and runs
store operations on a fresh event loop.
"""

import asyncio
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, TypeVar

import click

from ..api.errors import AuthorizationError, GatewayError
from ..api.gateway import TransactionGateway
from ..api.session import Session
from ..core.config import get_config
from ..transactions.store import TransactionStore

T = TypeVar("T")

GatewayFactory = Callable[[Session], TransactionGateway]


class ClickNotifier:
    """
    Echo store notifications to the terminal.

    Errors are not echoed here; commands report them once, as a
    ClickException.
    """

    def notify(self, message: str, level: str) -> None:
        if level == "success":
            click.echo(f"✅ {message}")
        elif level != "error":
            click.echo(message)


def auth_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add --email/--password options (also read from the environment)."""
    func = click.option(
        "--password", envvar="MONEYBOARD_PASSWORD", help="Account password (or MONEYBOARD_PASSWORD)"
    )(func)
    func = click.option("--email", envvar="MONEYBOARD_EMAIL", help="Account email (or MONEYBOARD_EMAIL)")(func)
    return func


@asynccontextmanager
async def open_gateway(
    ctx: click.Context, email: str | None, password: str | None
) -> AsyncIterator[TransactionGateway]:
    """
    Authenticated gateway for one command.

    Uses MONEYBOARD_API_TOKEN when configured, otherwise logs in with the
    given credentials.
    """
    config = get_config()
    session = Session(token=config.api.api_token)

    factory: GatewayFactory | None = (ctx.obj or {}).get("gateway_factory")
    gateway = factory(session) if factory else TransactionGateway(session)

    async with gateway:
        if not session.is_authenticated:
            if not email or not password:
                raise click.UsageError("Provide --email and --password, or set MONEYBOARD_API_TOKEN")
            await gateway.login(email, password)
        yield gateway


@asynccontextmanager
async def open_store(
    ctx: click.Context, email: str | None, password: str | None
) -> AsyncIterator[TransactionStore]:
    """Authenticated store for one command."""
    async with open_gateway(ctx, email, password) as gateway:
        yield TransactionStore(gateway, notifier=ClickNotifier())


def run(operation: Callable[[], Awaitable[T]]) -> T:
    """Run an async CLI operation and translate gateway failures."""
    try:
        return asyncio.run(operation())
    except AuthorizationError as e:
        raise click.ClickException(e.server_message or "Not authorized; please log in again") from e
    except GatewayError as e:
        raise click.ClickException(e.user_message(str(e))) from e
