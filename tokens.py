"""
Access token issue/verify.

Tokens are ordinary Flask-JWT-Extended access tokens signed with
JWT_SECRET_KEY. The subject is the user id as a string and a ``role`` claim
rides along. Verification never touches the database; the auth gate decides
whether to re-fetch the user.
"""
import jwt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

MALFORMED = 'malformed'
EXPIRED = 'expired'
NOT_YET_VALID = 'not_yet_valid'


class TokenError(Exception):
    def __init__(self, kind, detail=None):
        super().__init__(detail or kind)
        self.kind = kind


def issue_token(user, expires_delta=None):
    additional_claims = {"role": user.role}
    kwargs = {}
    if expires_delta is not None:
        kwargs['expires_delta'] = expires_delta
    return create_access_token(identity=str(user.id), additional_claims=additional_claims, **kwargs)


def verify_token(token):
    """Returns the decoded claims or raises TokenError."""
    try:
        claims = decode_token(token)
    except jwt.ExpiredSignatureError as e:
        raise TokenError(EXPIRED, str(e))
    except jwt.ImmatureSignatureError as e:
        raise TokenError(NOT_YET_VALID, str(e))
    except (jwt.InvalidTokenError, JWTExtendedException) as e:
        raise TokenError(MALFORMED, str(e))

    if claims.get('type') != 'access':
        raise TokenError(MALFORMED, 'Only access tokens are accepted')
    return claims
