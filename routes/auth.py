from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import IntegrityError
from models import db, User, USER_ROLES
from errors import InvalidInput, InvalidCredential, Conflict
from guards import auth_required
from tokens import issue_token
from utils import get_json_body, get_str

auth_bp = Blueprint('auth', __name__)


# ==========================================
#  1. REGISTER
# ==========================================
@auth_bp.route('/auth/register', methods=['POST'])
def register():
    data = get_json_body()

    # Older clients send 'userType'
    role = get_str(data, 'role') or get_str(data, 'userType')
    name = get_str(data, 'name')
    email = get_str(data, 'email')
    password = get_str(data, 'password')
    organization = get_str(data, 'organization')
    location = get_str(data, 'location')
    phone = get_str(data, 'phone')

    if not name or not email or not password or not role:
        raise InvalidInput('Name, email, password, and role are required')

    if role not in USER_ROLES:
        raise InvalidInput('role must be either "donor" or "receiver"')

    if User.query.filter_by(email=email).first():
        raise Conflict('User already exists')

    new_user = User(
        name=name,
        email=email,
        role=role,
        organization=organization,
        location=location,
        phone=phone
    )
    new_user.set_password(password)

    try:
        db.session.add(new_user)
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.session.rollback()
        raise Conflict('User already exists')

    current_app.logger.info("Registered %s user %s", new_user.role, new_user.id)

    return jsonify({
        'token': issue_token(new_user),
        'user': new_user.to_dict(),
        'message': 'User registered successfully'
    }), 201


# ==========================================
#  2. LOGIN
# ==========================================
@auth_bp.route('/auth/login', methods=['POST'])
def login():
    data = get_json_body()

    email = get_str(data, 'email')
    password = get_str(data, 'password')

    if not email or not password:
        raise InvalidInput('Email and password are required')

    user = User.query.filter_by(email=email).first()

    # Same answer for unknown email and wrong password
    if not user or not user.check_password(password):
        current_app.logger.warning("Failed login attempt")
        raise InvalidCredential()

    return jsonify({
        'token': issue_token(user),
        'user': user.to_dict(),
        'message': 'Login successful'
    }), 200


# ==========================================
#  3. TOKEN CHECKS
# ==========================================
@auth_bp.route('/auth/verify', methods=['GET'])
@auth_required
def verify(auth):
    return jsonify({
        'valid': True,
        'user': auth.user.to_dict(),
        'message': 'Token is valid'
    }), 200


@auth_bp.route('/auth/me', methods=['GET'])
@auth_required
def me(auth):
    return jsonify(auth.user.to_dict()), 200
