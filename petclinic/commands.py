import click
from flask.cli import with_appcontext
from petclinic import db
from petclinic.services.medical_record_service import referenced_paths
from petclinic.utils.storage import get_storage


@click.command('init-db')
@with_appcontext
def init_db():
    """Create all tables."""
    db.create_all()
    click.echo('Database initialized.')


@click.command('sweep-uploads')
@click.option('--dry-run', is_flag=True, help='List orphaned files without deleting them.')
@with_appcontext
def sweep_uploads(dry_run):
    """Delete upload files that no medical record references."""
    orphans = get_storage().sweep_orphans(referenced_paths(), dry_run=dry_run)
    for path in orphans:
        click.echo(path)
    verb = 'Found' if dry_run else 'Removed'
    click.echo(f'{verb} {len(orphans)} orphaned file(s).')


def register_commands(app):
    app.cli.add_command(init_db)
    app.cli.add_command(sweep_uploads)
