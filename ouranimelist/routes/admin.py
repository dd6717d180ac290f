"""
Admin Routes - account overview, flagged accounts, audit trail and attack simulation
"""
import logging

from flask import Blueprint, current_app, request
from flask_login import current_user

from ouranimelist.api_responses import ErrorCode, error_response, not_found_response, success_response
from ouranimelist.auth import access_required
from ouranimelist.constants import CONFIG_FILE
from ouranimelist.exceptions import ValidationException
from ouranimelist.extensions import get_catalog_store
from ouranimelist.repositories.flagged_account_repository import FlaggedAccountRepository
from ouranimelist.routes._params import int_arg, json_body
from ouranimelist.services import access_control
from ouranimelist.services.audit_recorder import AuditRecorder
from ouranimelist.settings import load_settings, set_monitor_settings

logger = logging.getLogger("main")

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")

# Title used for simulated bursts; updates against a missing banner are no-ops
SIMULATED_TITLE = "__simulated_attack__"


@admin_bp.route("/accounts", methods=["GET"])
@access_required("admin")
def list_accounts():
    accounts = access_control.list_accounts()
    return success_response(data=[{"name": account.name, "role": account.role} for account in accounts])


@admin_bp.route("/flagged", methods=["GET"])
@access_required("admin")
def list_flagged():
    return success_response(data=[flag.to_dict() for flag in FlaggedAccountRepository.get_all()])


@admin_bp.route("/audit", methods=["GET"])
@access_required("admin")
def audit_trail():
    limit = int_arg("limit", 100)
    if limit < 1:
        raise ValidationException("limit must be a positive integer")
    entries = AuditRecorder().recent_entries(account_name=request.args.get("account") or None, limit=limit)
    return success_response(data=[entry.to_dict() for entry in entries])


@admin_bp.route("/simulate-attack", methods=["POST"])
@access_required("admin")
def simulate_attack():
    """
    Burst of no-op updates for one account, enough to cross the monitor
    threshold within a single window.
    """
    data = request.get_json(silent=True) or {}
    account_name = data.get("account") or current_user.name
    if access_control.get_account(account_name) is None:
        return not_found_response("Account", account_name)

    threshold = current_app.config["APP_SETTINGS"]["monitor"]["threshold"]
    count = data.get("count", threshold)
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValidationException("count must be a positive integer")

    store = get_catalog_store()
    for _ in range(count):
        store.update_current_episodes(SIMULATED_TITLE, account_name, 0)

    logger.warning(f"Admin {current_user.name} simulated {count} rapid changes for account {account_name}")
    return success_response(data={"account": account_name, "changes": count})


@admin_bp.route("/settings/monitor", methods=["GET"])
@access_required("admin")
def get_monitor_settings():
    return success_response(data=current_app.config["APP_SETTINGS"]["monitor"])


@admin_bp.route("/settings/monitor", methods=["PUT"])
@access_required("admin")
def update_monitor_settings():
    """Persist monitor settings. The running schedule picks them up on restart."""
    config_file = current_app.config.get("SETTINGS_FILE", CONFIG_FILE)
    success, errors = set_monitor_settings(json_body(), config_file=config_file)
    if not success:
        return error_response(ErrorCode.VALIDATION_ERROR, details=errors, status_code=400)

    current_app.config["APP_SETTINGS"] = load_settings(config_file=config_file)
    return success_response(data=current_app.config["APP_SETTINGS"]["monitor"], message="Applies after restart")
