import logging

import click
from flask import Flask, jsonify
from sqlalchemy import text
from werkzeug.exceptions import HTTPException

from parceldesk.core import config
from parceldesk.core.exceptions import DomainError

logger = logging.getLogger(__name__)


def test_database_connection() -> bool:
    """Ping the database with SELECT 1."""
    from parceldesk.db.session import get_engine

    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(
            "Database connection failed",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return False


def register_error_handlers(app: Flask) -> None:
    """Render every error as {"error": message}."""

    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        logger.error(
            "Unhandled error",
            extra={"context": {"error": str(error)}},
            exc_info=True,
        )
        return jsonify({"error": "Internal server error"}), 500


def create_app() -> Flask:
    app = Flask(__name__)

    if config.is_test_mode():
        app.config["TESTING"] = True

    # Configure structured logging (after app creation so we can register hooks)
    from parceldesk.core.logging_config import setup_logging

    setup_logging(
        app=app,
        log_level=config.LOG_LEVEL,
        enable_sql_echo=config.SQL_ECHO,
        log_to_file=config.LOG_TO_FILE,
        use_json_format=config.IS_PRODUCTION,
    )
    logger.info(
        "Logging configured",
        extra={
            "context": {
                "environment": config.FLASK_ENV,
                "json_format": config.IS_PRODUCTION,
                "sql_echo": config.SQL_ECHO,
            }
        },
    )
    config.log_timezone_config()

    # Initialize Flask-Limiter (rate limiting)
    from parceldesk.core.limiter_config import limiter

    app.config["RATELIMIT_STORAGE_URI"] = config.LIMITER_STORAGE_URI
    limiter.init_app(app)
    limiter.enabled = True
    if app.config.get("TESTING") or not config.RATE_LIMIT_ENABLED:
        limiter.enabled = False
        logger.info(
            "Rate limiting disabled",
            extra={"context": {"test_mode": bool(app.config.get("TESTING"))}},
        )

    from parceldesk.controllers.contact_controller import contact_bp
    from parceldesk.controllers.delivery_controller import delivery_bp
    from parceldesk.controllers.recipient_controller import recipient_bp
    from parceldesk.controllers.stats_controller import stats_bp

    app.register_blueprint(recipient_bp)
    app.register_blueprint(delivery_bp)
    app.register_blueprint(stats_bp)
    app.register_blueprint(contact_bp)

    register_error_handlers(app)

    @app.route("/health")
    def health_check():
        """Health check endpoint for container probes"""
        db_status = test_database_connection()
        return jsonify(
            {
                "status": "healthy" if db_status else "unhealthy",
                "database": "connected" if db_status else "disconnected",
            }
        ), (200 if db_status else 503)

    @app.cli.command("init-db")
    @click.option("--drop", is_flag=True, help="Drop existing tables first.")
    def init_db_command(drop):
        """Create the recipients, deliveries and contacts tables."""
        from parceldesk.db.session import create_tables, drop_tables

        if drop:
            drop_tables()
            click.echo("Dropped existing tables")
        create_tables()
        click.echo("Database tables created")

    return app
