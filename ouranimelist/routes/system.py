"""
System Routes - network reachability and health
"""
import logging

from flask import Blueprint, current_app, jsonify

from ouranimelist.api_responses import success_response
from ouranimelist.constants import BUILD_VERSION
from ouranimelist.db import health_check
from ouranimelist.extensions import get_services
from ouranimelist.services.network import check_network_reachability
from ouranimelist.utils import now_utc

logger = logging.getLogger("main")

system_bp = Blueprint("system", __name__, url_prefix="/api/system")


@system_bp.route("/network", methods=["GET"])
def network():
    network_settings = current_app.config["APP_SETTINGS"]["network"]
    reachable = check_network_reachability(network_settings["probe_url"], timeout=network_settings["timeout_seconds"])
    return success_response(data={"reachable": reachable})


@system_bp.route("/health", methods=["GET"])
def health():
    """
    Health check endpoint for monitoring
    """
    database_ok = health_check()
    scheduler = get_services().get("scheduler")
    checks = {
        "timestamp": now_utc().isoformat(),
        "version": BUILD_VERSION,
        "database": "healthy" if database_ok else "unhealthy",
        "monitor": "running" if scheduler is not None and scheduler.scheduler.running else "disabled",
    }
    status = "healthy" if database_ok else "unhealthy"
    response = {"code": "SUCCESS" if database_ok else "INTERNAL_ERROR", "success": database_ok, "status": status, "data": checks}
    return jsonify(response), 200 if database_ok else 503
