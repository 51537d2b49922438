"""Command-line administration, via ``flask --app ellarises.wsgi ...``."""

from flask import Flask
from flask.cli import with_appcontext
import click

from .services import identity, util


@click.command('create-db')
@with_appcontext
def create_db() -> None:
    """Create all database tables."""
    util.create_all()
    click.echo('Created tables.')


@click.command('create-admin')
@click.option('--email', prompt='Email address')
@click.option('--password', prompt='Password', hide_input=True,
              confirmation_prompt=True)
@click.option('--first-name', prompt='First name')
@click.option('--last-name', prompt='Last name')
@with_appcontext
def create_admin(email: str, password: str, first_name: str,
                 last_name: str) -> None:
    """Create an administrator, or promote an existing account."""
    try:
        admin = identity.register_admin(email, password, first_name,
                                        last_name)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    click.echo(f'Account {admin.account_id} ({admin.email}) is an admin.')


def init_app(app: Flask) -> None:
    """Register the commands on the app's ``flask`` CLI."""
    app.cli.add_command(create_db)
    app.cli.add_command(create_admin)
