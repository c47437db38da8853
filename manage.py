"""
manage.py — CLI admin commands for Trail Scout.

Usage:
    python manage.py init-db
    python manage.py seed-trails
    python manage.py check-duplicates --name "Angels Landing" --coordinates 37.2690,-112.9469
"""

import click

from database import SessionLocal, init_db, seed_sample_trails
from schemas import TrailCandidate
from trails import check_for_duplicate_trails


@click.group()
def cli():
    """Trail Scout administration."""


@cli.command('init-db')
def init_db_command():
    """Create database tables."""
    init_db()
    click.echo('✓ Tables created')


@cli.command('seed-trails')
def seed_trails():
    """Insert the sample trails into an empty database."""
    init_db()
    with SessionLocal() as session:
        added = seed_sample_trails(session)
    if added:
        click.echo(f'✓ Added {added} sample trail(s)')
    else:
        click.echo('Trails table is not empty; nothing seeded.')


@cli.command('check-duplicates')
@click.option('--name',        default=None, help='Proposed trail name')
@click.option('--coordinates', required=True, help='"lat,lng" of the trailhead')
@click.option('--difficulty',  default=None, help='e.g. Easy, Moderate, Strenuous')
@click.option('--distance',    default=None, help='Distance text, e.g. "5.4 miles"')
def check_duplicates(name: str | None, coordinates: str,
                     difficulty: str | None, distance: str | None):
    """Report stored trails that look like the proposed one. Always exits 0."""
    candidate = TrailCandidate(
        name=name, coordinates=coordinates, difficulty=difficulty, distance=distance,
    )
    init_db()
    with SessionLocal() as session:
        result = check_for_duplicate_trails(session, candidate)
    click.echo(result.warning or 'No similar trails found.')


if __name__ == '__main__':
    cli()
