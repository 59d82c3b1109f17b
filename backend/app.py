"""
Flask application factory.
Run with: python run.py (so SocketIO uses eventlet for WebSocket support).
"""
import logging

from flask import Flask
from flask_cors import CORS

from config.config import config
from config.db_config import DB_URL
from extensions import socketio
from models import db
from routes import api
from utils.error_handler import register_error_handlers


def configure_logging(level: str) -> None:
    """Root logging setup; leaves existing handlers (e.g. pytest's) alone."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(overrides: dict | None = None):
    """Create and configure Flask app. overrides are applied on top of Config (tests use this)."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.SECRET_KEY
    app.config["SQLALCHEMY_DATABASE_URI"] = DB_URL
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_CONTENT_LENGTH
    app.config["STORAGE_BACKEND"] = config.STORAGE_BACKEND
    app.config["UPLOAD_FOLDER"] = config.UPLOAD_FOLDER
    app.config["SAMPLE_BATCH_SIZE"] = config.SAMPLE_BATCH_SIZE
    app.config["MAX_HEADER_LINES"] = config.MAX_HEADER_LINES
    app.config["LOG_LEVEL"] = config.LOG_LEVEL
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config["LOG_LEVEL"])
    CORS(app, origins=config.CORS_ORIGINS)

    db.init_app(app)
    socketio.init_app(app)

    with app.app_context():
        db.create_all()

    app.register_blueprint(api)
    register_error_handlers(app)
    return app


if __name__ == "__main__":
    app = create_app()
    socketio.run(app, host="0.0.0.0", port=5001, debug=config.DEBUG)
