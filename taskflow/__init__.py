# taskflow/__init__.py

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import SQLAlchemyError

from config import Config

db = SQLAlchemy()


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(level=app.config.get("LOG_LEVEL", "INFO"))
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Init extensions
    db.init_app(app)

    # CORS: the browser client calls /api/*
    CORS(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # -----------------------------
    # Error handlers
    # -----------------------------
    from .errors import StorageError, TaskFlowError

    @app.errorhandler(TaskFlowError)
    def taskflow_error(err):
        if isinstance(err, StorageError):
            db.session.rollback()
            app.logger.error(f"Storage error: {err.message}", exc_info=err.__cause__ or err)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(SQLAlchemyError)
    def database_error(err):
        db.session.rollback()
        app.logger.exception(f"Unhandled database error: {err.__class__.__name__}")
        return jsonify({"message": "Internal server error"}), 500

    # -----------------------------
    # IMPORT BLUEPRINTS
    # -----------------------------
    from .routes.task_routes import tasks_bp, subtasks_bp, notes_bp
    from .routes.time_tracking_routes import time_sessions_bp
    from .routes.habit_routes import habits_bp
    from .routes.stats_routes import stats_bp
    from .routes.quote_routes import quote_bp

    # -----------------------------
    # REGISTER BLUEPRINTS
    # -----------------------------
    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")
    app.register_blueprint(subtasks_bp, url_prefix="/api/subtasks")
    app.register_blueprint(notes_bp, url_prefix="/api/notes")
    app.register_blueprint(time_sessions_bp, url_prefix="/api/time-sessions")
    app.register_blueprint(habits_bp, url_prefix="/api/habits")
    app.register_blueprint(stats_bp, url_prefix="/api/stats")
    app.register_blueprint(quote_bp, url_prefix="/api/quote")

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    # -----------------------------
    # DB init
    # -----------------------------
    from . import models  # noqa: F401  (register tables before create_all)

    with app.app_context():
        db.create_all()

    return app
