# liftlog/__init__.py

import logging
from logging.handlers import RotatingFileHandler
from flask import Flask, jsonify, request
from .config import DevelopmentConfig, ProductionConfig, TestingConfig
from .errors import LiftLogError
from .extensions import cors, jwt, limiter
import os

CONFIGS = {
    "production": ProductionConfig,
    "testing": TestingConfig,
    "development": DevelopmentConfig,
}


def create_app(config_object=None):
    app = Flask(__name__)

    # Load configuration based on FLASK_ENV
    if config_object is None:
        env = os.getenv('FLASK_ENV', 'development')
        config_object = CONFIGS.get(env, DevelopmentConfig)
    app.config.from_object(config_object)

    # Allow the configured frontend origins to send credentials
    origins = [o.strip() for o in app.config["CORS_ORIGIN"].split(",") if o.strip()]
    cors.init_app(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)

    # Initialize JWT and rate limiter
    jwt.init_app(app)
    limiter.init_app(app)

    from liftlog.auth.routes import auth_bp
    from liftlog.profiles.routes import profiles_bp
    from liftlog.exercises.routes import exercises_bp
    from liftlog.planner.routes import planner_bp
    from liftlog.sessions.routes import sessions_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(profiles_bp, url_prefix="/profile")
    app.register_blueprint(exercises_bp, url_prefix="/exercises")
    app.register_blueprint(planner_bp, url_prefix="/ai")
    app.register_blueprint(sessions_bp, url_prefix="/sessions")

    # Set up logging if not in debug mode
    if not app.debug and not app.testing:
        handler = RotatingFileHandler(app.config["LOG_FILE"], maxBytes=100000, backupCount=3)
        handler.setLevel(logging.ERROR)
        formatter = logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        )
        handler.setFormatter(formatter)
        app.logger.addHandler(handler)

    # Error handlers
    @app.errorhandler(LiftLogError)
    def handle_liftlog_error(error):
        if error.status_code >= 500:
            app.logger.error(f"{type(error).__name__}: {error}, Path: {request.path}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not Found"}), 404

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify({"error": "Too many requests"}), 429

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f"Server Error: {error}, Path: {request.path}")
        return jsonify({"error": "Internal Server Error"}), 500

    return app
