"""CLI commands for the device session.

The auth provider issues the user id and access token; these commands
only record them in local storage.
"""

from __future__ import annotations

import click

from freshcart.domain.exceptions import DomainException
from freshcart.infrastructure.bootstrap import Container


@click.command("login")
@click.option("--user-id", required=True, help="Customer id from the auth provider.")
@click.option("--token", required=True, help="Access token (JWT).")
@click.option("--role", default="customer", show_default=True)
@click.option("--email", default=None, help="Create the profile if it does not exist.")
@click.option("--name", default=None)
@click.pass_obj
def auth_login(
    container: Container,
    user_id: str,
    token: str,
    role: str,
    email: str | None,
    name: str | None,
) -> None:
    """Store the session for this device."""
    container.session.login(user_id, token, role)
    click.echo(f"Logged in as {user_id} ({role}).")

    if email:
        try:
            profile = container.profiles.get_or_create(user_id, email, name)
        except DomainException as exc:
            raise click.ClickException(str(exc))
        if not profile.is_complete:
            click.echo("Please complete your profile before making a purchase.")


@click.command("logout")
@click.pass_obj
def auth_logout(container: Container) -> None:
    """Forget the session on this device."""
    container.session.logout()
    click.echo("Logged out.")
