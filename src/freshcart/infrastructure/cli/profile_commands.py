"""CLI commands for the customer profile."""

from __future__ import annotations

import click

from freshcart.domain.exceptions import DomainException
from freshcart.infrastructure.bootstrap import Container


@click.command("show")
@click.pass_obj
def profile_show(container: Container) -> None:
    """Show the logged-in customer's profile."""
    try:
        profile = container.profiles.current()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    if profile is None:
        raise click.ClickException("No profile found. Please login.")

    click.echo(f"Name:    {profile.name}")
    click.echo(f"Email:   {profile.email}")
    click.echo(f"Phone:   {profile.phone or '-'}")
    click.echo(f"College: {profile.college or '-'}")
    click.echo(f"Complete: {'yes' if profile.is_complete else 'no'}")


@click.command("update")
@click.option("--name", default=None)
@click.option("--email", default=None)
@click.option("--phone", default=None, help="10-digit mobile number.")
@click.option("--college", default=None)
@click.pass_obj
def profile_update(
    container: Container,
    name: str | None,
    email: str | None,
    phone: str | None,
    college: str | None,
) -> None:
    """Update profile fields."""
    try:
        profile = container.profiles.update(
            name=name, email=email, phone=phone, college=college
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Profile updated." if profile.is_complete else "Profile saved but still incomplete.")
