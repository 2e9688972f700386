"""CLI commands for storefront sessions."""

from __future__ import annotations

import asyncio

import click

from storefront.application.auth_session import AuthSessionContext, AuthSnapshot
from storefront.domain.exceptions import DomainException
from storefront.domain.gateway.auth_gateway import SessionGateway
from storefront.infrastructure.bootstrap import (
    profile_repository,
    role_repository,
    session_gateway,
)
from storefront.infrastructure.config import settings


async def _bootstrap(
    gateway: SessionGateway, email: str | None, password: str | None
) -> AuthSnapshot:
    if email:
        await gateway.sign_in_with_password(email, password or "")
    context = AuthSessionContext(
        gateway=gateway,
        profile_repo=profile_repository(),
        role_repo=role_repository(),
        timeout=settings.AUTH_TIMEOUT_SECONDS,
    )
    async with context as auth:
        return await auth.wait_settled()


@click.command("status")
@click.option("--email", default=None, help="Sign in with this account first.")
@click.option("--password", default=None, help="Password for --email (prompted if omitted).")
def auth_status(email: str | None, password: str | None) -> None:
    """Resolve a session like the storefront does and show its permissions."""
    if email and password is None:
        password = click.prompt("Password", hide_input=True)

    try:
        snapshot = asyncio.run(_bootstrap(session_gateway(), email, password))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"State: {snapshot.state.value}")
    if snapshot.user_id:
        click.echo(f"User:  {snapshot.user_id}")
    if snapshot.role:
        click.echo(f"Role:  {snapshot.role.value}")
    click.echo(f"Admin: {'yes' if snapshot.is_admin else 'no'}")
    click.echo(f"Staff: {'yes' if snapshot.is_staff else 'no'}")
    if snapshot.error:
        click.echo(f"Note:  {snapshot.error}")
