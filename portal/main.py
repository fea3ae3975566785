from flask import Flask
from marshmallow import ValidationError as SchemaValidationError
from .config import DevelopmentConfig, ProductionConfig, TestingConfig
from .extensions import db, migrate, jwt, ma, cors, limiter
from .utils.exceptions import ServiceError
from .utils.response_formatter import success_response, error_response, service_error_response
import os

CONFIGS = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}

def create_app(config_name=None):
    app = Flask(__name__, instance_relative_config=False)
    env = config_name or os.getenv("FLASK_ENV", "development")
    app.config.from_object(CONFIGS.get(env, DevelopmentConfig))
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)
    origins = [o.strip() for o in app.config["CORS_ORIGINS"].split(",")]
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": origins}},
        supports_credentials=True,
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )
    limiter.init_app(app)

    # models must be imported before the mappers are configured
    from portal.models import submission, message, user_profile, role_assignment  # noqa: F401

    # register blueprints
    from portal.routes.submission_routes import bp as submission_bp
    from portal.routes.message_routes import bp as message_bp
    from portal.routes.admin_routes import bp as admin_bp
    from portal.routes.profile_routes import bp as profile_bp, roles_bp
    from portal.routes.music_routes import bp as music_bp

    app.register_blueprint(submission_bp)
    app.register_blueprint(message_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(roles_bp)
    app.register_blueprint(music_bp)

    @app.route("/api/v1/health", methods=["GET"])
    def health():
        return success_response({"status": "healthy", "service": "nebadon-portal"})

    # error handlers to match required error format
    @app.errorhandler(ServiceError)
    def service_error(e):
        app.logger.warning(f"{e.code}: {e.message}")
        return service_error_response(e)

    @app.errorhandler(SchemaValidationError)
    def schema_error(e):
        return error_response("VALIDATION_ERROR", "Invalid input", details=e.messages, status=422)

    @jwt.unauthorized_loader
    def missing_token(reason):
        return error_response("UNAUTHORIZED", reason, status=401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error_response("UNAUTHORIZED", reason, status=401)

    @app.errorhandler(400)
    def bad_request(e):
        return error_response("BAD_REQUEST", str(e), status=400)

    @app.errorhandler(404)
    def not_found(e):
        return error_response("NOT_FOUND", "Resource not found", status=404)

    @app.errorhandler(429)
    def rate_limited(e):
        return error_response("RATE_LIMITED", str(e.description), status=429)

    @app.errorhandler(500)
    def server_error(e):
        return error_response("SERVER_ERROR", "Internal server error", status=500)

    return app
