from dataclasses import dataclass
from functools import wraps
from flask import current_app, request
from flask_jwt_extended import verify_jwt_in_request, get_current_user, get_jwt
from jwt import ImmatureSignatureError
from extensions import db, jwt
from errors import Forbidden, error_response
from models import User

NO_TOKEN_MESSAGE = 'Access denied. No authorization token provided.'
BAD_FORMAT_MESSAGE = 'Invalid token format. Please use Bearer authentication.'
EXPIRED_MESSAGE = 'Token has expired. Please login again.'
NOT_YET_VALID_MESSAGE = 'Token not active yet.'
INVALID_TOKEN_MESSAGE = 'Invalid token. Please provide a valid token.'
USER_NOT_FOUND_MESSAGE = 'Token is invalid. User not found.'


@dataclass(frozen=True)
class AuthContext:
    """The caller of a protected view, as resolved by auth_required."""
    user: User
    claims: dict

    @property
    def user_id(self):
        return self.user.id

    @property
    def role(self):
        return self.user.role


# ==========================================
#  JWT CALLBACKS
# ==========================================

@jwt.user_lookup_loader
def load_user(jwt_header, jwt_data):
    try:
        user_id = int(jwt_data['sub'])
    except (KeyError, TypeError, ValueError):
        return None
    return db.session.get(User, user_id)


@jwt.user_lookup_error_loader
def user_not_found(jwt_header, jwt_data):
    # A token for a user that no longer exists is just an invalid token
    return error_response(USER_NOT_FOUND_MESSAGE, 401)


@jwt.unauthorized_loader
def missing_token(reason):
    if request.headers.get('Authorization'):
        return error_response(BAD_FORMAT_MESSAGE, 401)
    return error_response(NO_TOKEN_MESSAGE, 401)


@jwt.expired_token_loader
def expired_token(jwt_header, jwt_data):
    return error_response(EXPIRED_MESSAGE, 401)


@jwt.invalid_token_loader
def invalid_token(reason):
    current_app.logger.info("Rejected token: %s", reason)
    return error_response(INVALID_TOKEN_MESSAGE, 401)


def register_jwt_handlers(app):
    # nbf in the future would otherwise fall into the generic invalid-token handler
    @app.errorhandler(ImmatureSignatureError)
    def token_not_yet_valid(error):
        return error_response(NOT_YET_VALID_MESSAGE, 401)


# ==========================================
#  GATE & ROLE CHECK
# ==========================================

def auth_required(view):
    """Runs the JWT check and hands the resolved caller to the view as ``auth``."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        kwargs['auth'] = AuthContext(user=get_current_user(), claims=get_jwt())
        return view(*args, **kwargs)
    return wrapper


def require_role(auth, *roles, message=None):
    if auth.role not in roles:
        raise Forbidden(message or f"Access forbidden. Required role: {', '.join(roles)}")
