# rotation_guard/cli.py
"""Flask CLI commands: flask rotation ..."""
import click
from flask import current_app, url_for
from flask.cli import AppGroup

from rotation_guard.extensions import db, guard
from rotation_guard.models.user import User
from rotation_guard.utils.security import generate_reset_token, hash_password

rotation_cli = AppGroup('rotation', help='Forced password rotation.')


def _get_user(username):
    user = User.query.filter_by(username=username).first()
    if user is None:
        raise click.ClickException(f'No such user: {username}')
    return user


@rotation_cli.command('install')
def install_command():
    """Arm the requirement unless it was armed before."""
    if guard.install():
        click.echo(f'Rotation armed at {guard.clock.store.read_activation()}')
    else:
        click.echo('Rotation already armed')


@rotation_cli.command('arm')
def arm_command():
    """Require every user to change their password again."""
    click.echo(f'Rotation armed at {guard.clock.arm_rotation_requirement()}')


@rotation_cli.command('status')
@click.argument('username')
def status_command(username):
    """Show rotation status of a user."""
    user = _get_user(username)
    status = guard.clock.status(user.id)
    click.echo(f'activated_at={status.activated_at} changed_at={status.changed_at} '
               f'required={"yes" if status.required else "no"}')


@rotation_cli.command('reset-link')
@click.argument('username')
def reset_link_command(username):
    """Print a password reset link for a user."""
    user = _get_user(username)
    base_url = current_app.config['PASSWORD_RESET_BASE_URL']
    with current_app.test_request_context(base_url=base_url):
        click.echo(url_for('auth.reset_password', token=generate_reset_token(user), _external=True))


@rotation_cli.command('create-admin')
@click.argument('username')
@click.password_option()
def create_admin_command(username, password):
    """Create an administrator account."""
    violations = guard.policy.evaluate(password)
    if not password or violations:
        raise click.ClickException(' '.join(guard.policy.messages(violations)) or 'Password required')
    if User.query.filter_by(username=username).first():
        raise click.ClickException('Username already exists')

    user = User(username=username, password_hash=hash_password(password), is_admin=True)
    db.session.add(user)
    db.session.commit()
    guard.on_password_changed(user.id)
    click.echo(f'Administrator {username} created')
