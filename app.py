import logging
from flask import Flask, jsonify

# 1. IMPORT EXTENSIONS (From extensions.py)
from extensions import db, migrate, jwt, cors
from config import Config
from errors import register_error_handlers
from guards import register_jwt_handlers
from commands import register_commands

LOG_FORMAT = '%(asctime)s %(levelname)-8s [%(name)s] %(message)s'


def create_app(config_object=Config, overrides=None):
    """
    The Application Factory.
    Creates and configures the app, but does not run it.
    `overrides` is applied on top of `config_object` before any extension
    reads the config (tests use it to point at a different database).
    """
    app = Flask(__name__)

    # --- CONFIGURATION ---
    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)

    # --- LOGGING ---
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    for handler in app.logger.handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # --- INITIALIZE EXTENSIONS ---
    # We attach the tools to this specific app instance
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # --- CORS CONFIGURATION ---
    cors.init_app(app, resources={
        r"/*": {
            "origins": app.config['CORS_ORIGINS'],
            "methods": ["GET", "POST", "PATCH", "PUT", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"]
        }
    })

    register_error_handlers(app)
    register_jwt_handlers(app)
    register_commands(app)

    # --- REGISTER BLUEPRINTS ---
    # Import inside the function to avoid circular imports
    from routes.auth import auth_bp
    from routes.listings import listings_bp
    from routes.profile import profile_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(listings_bp)
    app.register_blueprint(profile_bp)

    @app.route('/', methods=['GET'])
    def health():
        return jsonify({'message': 'FoodBridge API is running!'}), 200

    return app


# --- ENTRY POINT ---
# This only runs if you type 'python app.py'
if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
    app.run(debug=True)
