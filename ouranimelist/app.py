"""
Our Anime List - Application Factory and startup
"""
import logging
import os
import sys

import structlog
from flask import Flask

from ouranimelist.auth import auth_blueprint, login_manager
from ouranimelist.constants import BUILD_VERSION, CONFIG_DIR, OUR_ANIME_LIST_DB
from ouranimelist.db import db, init_db
from ouranimelist.exceptions import register_exception_handlers
from ouranimelist.extensions import limiter, socketio
from ouranimelist.jobs import JobScheduler
from ouranimelist.metrics import init_metrics
from ouranimelist.notifications import NotificationSink, get_socketio_emitter
from ouranimelist.routes import admin_bp, banners_bp, system_bp
from ouranimelist.services import access_control
from ouranimelist.services.anomaly_monitor import AnomalyMonitor
from ouranimelist.services.catalog_store import CatalogStore
from ouranimelist.settings import load_settings
from ouranimelist.utils import ColoredFormatter, FilterRemoveDateFromWerkzeugLogs, get_or_create_secret_key

logger = logging.getLogger("main")


def configure_logging(level=logging.INFO):
    formatter = ColoredFormatter(
        "[%(asctime)s.%(msecs)03d] %(levelname)s (%(module)s) %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=[handler])

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
            if os.environ.get("LOG_FORMAT") == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Apply filter to hide date from http access logs
    logging.getLogger("werkzeug").addFilter(FilterRemoveDateFromWerkzeugLogs())
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


def create_app(config=None):
    """Application factory"""
    config = dict(config or {})

    app = Flask(__name__)
    app.config["SQLALCHEMY_DATABASE_URI"] = OUR_ANIME_LIST_DB
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config.update(config)
    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = get_or_create_secret_key(CONFIG_DIR)

    # Load settings
    settings_kwargs = {"force": True}
    if app.config.get("SETTINGS_FILE"):
        settings_kwargs["config_file"] = app.config["SETTINGS_FILE"]
    app_settings = load_settings(**settings_kwargs)
    app.config["APP_SETTINGS"] = app_settings
    app.config.setdefault("MONITOR_ENABLED", app_settings["monitor"]["enabled"])

    # Initialize database
    db.init_app(app)
    init_db(app)

    # Initialize login manager
    login_manager.init_app(app)

    limiter.init_app(app)

    # Register exception handlers
    register_exception_handlers(app)

    # Register blueprints
    app.register_blueprint(auth_blueprint)
    app.register_blueprint(banners_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(system_bp)

    # Initialize metrics
    init_metrics(app)

    # Initialize SocketIO
    socketio.init_app(app, cors_allowed_origins="*", async_mode="threading", engineio_logger=False, logger=False)

    @socketio.on("connect")
    def handle_connect():
        logger.info("Client connected")

    @socketio.on("disconnect")
    def handle_disconnect():
        logger.info("Client disconnected")

    notifier = NotificationSink(emitter=get_socketio_emitter(socketio))
    services = {
        "catalog_store": CatalogStore(),
        "notifier": notifier,
        "monitor": None,
        "scheduler": None,
    }
    app.extensions["ouranimelist"] = services

    monitor_settings = app_settings["monitor"]
    services["monitor"] = AnomalyMonitor(
        app,
        notifier,
        interval_seconds=monitor_settings["interval_seconds"],
        threshold=monitor_settings["threshold"],
    )

    with app.app_context():
        access_control.init_admin_from_environment()

    # Initialize job scheduler
    if app.config["MONITOR_ENABLED"]:
        job_scheduler = JobScheduler()
        job_scheduler.init_monitor(services["monitor"])
        services["scheduler"] = job_scheduler
    else:
        logger.info("Anomaly monitor disabled")

    return app


def main():
    configure_logging()
    app = create_app()
    server = app.config["APP_SETTINGS"]["server"]

    logger.info(f"Build Version: {BUILD_VERSION}")
    logger.info(f"Starting server on {server['host']}:{server['port']}...")
    try:
        socketio.run(
            app,
            host=server["host"],
            port=server["port"],
            debug=False,
            use_reloader=False,
            allow_unsafe_werkzeug=True,
        )
    finally:
        scheduler = app.extensions["ouranimelist"]["scheduler"]
        if scheduler is not None:
            scheduler.shutdown()
        logger.info("Shutting down server...")
