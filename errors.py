"""
Error taxonomy for the API.

Views raise one of the ApiError subclasses below; the handlers registered by
register_error_handlers() turn them into a JSON body of the form
``{"success": false, "message": "..."}`` with the matching status code.
Anything else becomes a generic 500 so internals never reach the client.
"""
from flask import jsonify
from werkzeug.exceptions import HTTPException
from extensions import db


class ApiError(Exception):
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidInput(ApiError):
    status_code = 400
    message = 'Invalid request'


class Unauthenticated(ApiError):
    status_code = 401
    message = 'Authentication required.'


class InvalidCredential(ApiError):
    """Login failure. Unknown email and wrong password share one message."""
    status_code = 401
    message = 'Invalid email or password'


class Forbidden(ApiError):
    status_code = 403
    message = 'Access forbidden.'


class NotFound(ApiError):
    status_code = 404
    message = 'Resource not found'


class Conflict(ApiError):
    status_code = 409
    message = 'Conflict'


def error_response(message, status_code):
    return jsonify({'success': False, 'message': message}), status_code


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        # 404 for unknown routes, 405, malformed JSON bodies, ...
        return error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", error)
        return error_response('Internal server error', 500)
