import sys
import os
import pytest

# 1. Add the parent directory to Python's path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# 2. NOW import from app
from app import create_app
from config import TestConfig
from extensions import db
from models import User, Listing


@pytest.fixture
def app():
    """Create and configure a new app instance for each test."""
    app = create_app(TestConfig)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


# ==========================================
#  USERS & TOKENS
# ==========================================

@pytest.fixture
def user_factory(app):
    def _create(email, role, password="password", **kwargs):
        defaults = {
            "name": email.split('@')[0].title(),
            "organization": None,
            "location": None,
            "phone": None,
        }
        defaults.update(kwargs)
        user = User(email=email, role=role, **defaults)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user
    return _create


@pytest.fixture
def donor_user(user_factory):
    return user_factory(
        "donor@test.com", "donor",
        name="Fresh Farms Owner", organization="Fresh Farms",
        location="Cape Town", phone="+27 123 456 789"
    )


@pytest.fixture
def receiver_user(user_factory):
    return user_factory(
        "receiver@test.com", "receiver",
        name="Hope Kitchen", organization="Hope Kitchen NGO",
        location="Durban", phone="+27 987 654 321"
    )


@pytest.fixture
def other_receiver(user_factory):
    return user_factory("receiver2@test.com", "receiver", name="Second Receiver")


def _login_headers(client, user):
    resp = client.post('/auth/login', json={"email": user.email, "password": "password"})
    return {'Authorization': f'Bearer {resp.get_json()["token"]}'}


@pytest.fixture
def donor_headers(client, donor_user):
    return _login_headers(client, donor_user)


@pytest.fixture
def receiver_headers(client, receiver_user):
    return _login_headers(client, receiver_user)


@pytest.fixture
def other_receiver_headers(client, other_receiver):
    return _login_headers(client, other_receiver)


# ==========================================
#  LISTINGS
# ==========================================

@pytest.fixture
def listing_factory(donor_user):
    def _create(**kwargs):
        defaults = {
            "food_type": "Bread",
            "quantity": "5 kg",
            "description": "Day-old loaves",
            "location": "Cape Town",
            "user_id": donor_user.id,
            "status": "available"
        }
        defaults.update(kwargs)
        item = Listing(**defaults)
        db.session.add(item)
        db.session.commit()
        return item
    return _create
