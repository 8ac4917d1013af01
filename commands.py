import click
from flask import Flask
from flask.cli import with_appcontext
from extensions import db
from models import User, Listing

DEMO_PASSWORD = 'password123'


@click.command('init-db')
@click.option('--drop', is_flag=True, help='Drop every table first.')
@with_appcontext
def init_db_command(drop):
    """Create the users and listings tables."""
    if drop:
        click.echo("Dropping Users and Listings...")
        db.drop_all()
    db.create_all()
    click.echo("Database tables are ready.")


@click.command('seed-demo')
@with_appcontext
def seed_demo_command():
    """Insert a demo donor, a demo receiver and one available listing."""
    # 1. Check if the demo donor exists
    if User.query.filter_by(email='donor@foodbridge.demo').first():
        click.echo("Demo data already exists. Skipping.")
        return

    # 2. Create demo accounts
    donor = User(
        name='Demo Donor',
        email='donor@foodbridge.demo',
        role='donor',
        organization='Fresh Farms',
        location='Cape Town',
        phone='+27 123 456 789'
    )
    donor.set_password(DEMO_PASSWORD)

    receiver = User(
        name='Demo Receiver',
        email='receiver@foodbridge.demo',
        role='receiver',
        organization='Hope Kitchen NGO',
        location='Durban'
    )
    receiver.set_password(DEMO_PASSWORD)

    db.session.add_all([donor, receiver])
    db.session.flush()

    db.session.add(Listing(
        food_type='Bread',
        quantity='5 kg',
        description='Day-old loaves',
        location='Cape Town',
        user_id=donor.id
    ))
    db.session.commit()
    click.echo("Demo donor, receiver and listing created.")


def register_commands(app: Flask):
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_demo_command)
