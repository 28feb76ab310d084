"""
Flask CLI commands for provisioning data.

Commands:
- flask create-user: Create a user with any role (the only way to add admins and reps)
- flask create-product: Add a product to the catalog
"""

import click
from cashcarry.database import get_stores
from cashcarry.exceptions import ApiError
from cashcarry.models import UserRole
from cashcarry.services.auth_service import create_user
from cashcarry.services.product_service import create_product


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('create-user')
    @click.option('--name', prompt=True, help='Display name')
    @click.option('--phone', prompt=True, help='Login phone number (unique)')
    @click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
    @click.option('--role', type=click.Choice([r.value for r in UserRole]), default=UserRole.CUSTOMER.value,
                  show_default=True, help='Account role')
    def create_user_command(name, phone, password, role):
        """Create a new user account."""
        try:
            user = create_user(get_stores().users, name, phone, password, UserRole(role))
        except ApiError as e:
            raise click.ClickException(e.message)

        click.echo(click.style(f'User created: id={user.id} phone={user.phone} role={user.role_name}', fg='green'))

    @app.cli.command('create-product')
    @click.option('--name', prompt=True, help='Product name')
    @click.option('--pack-size', prompt=True, help='Pack size, e.g. "6 x 1L"')
    @click.option('--price', prompt=True, type=float, help='Unit price')
    @click.option('--special/--no-special', default=False, help='Mark as special offer')
    def create_product_command(name, pack_size, price, special):
        """Add a product to the catalog."""
        try:
            product = create_product(get_stores().products, name, pack_size, price, special)
        except ApiError as e:
            raise click.ClickException(e.message)

        click.echo(click.style(f"Product created: id={product['id']} {product['name']} @ {product['price']}", fg='green'))
