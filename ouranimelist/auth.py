from functools import wraps
import logging

from flask import Blueprint, request
from flask_login import LoginManager, current_user, login_user, logout_user

from ouranimelist.api_responses import ErrorCode, error_response, success_response
from ouranimelist.exceptions import AuthenticationException, AuthorizationException, ValidationException
from ouranimelist.extensions import limiter
from ouranimelist.repositories.account_repository import AccountRepository
from ouranimelist.services import access_control
from ouranimelist.utils import sanitize_sensitive_data

# Retrieve main logger
logger = logging.getLogger("main")

auth_blueprint = Blueprint("auth", __name__, url_prefix="/api/auth")

login_manager = LoginManager()


@login_manager.user_loader
def load_account(name):
    """Load account for Flask-Login"""
    return AccountRepository.get_by_name(name)


@login_manager.unauthorized_handler
def unauthorized_json():
    return error_response(ErrorCode.UNAUTHORIZED, status_code=401, log_error=False)


def access_required(access: str):
    """Require a logged-in account; 'admin' additionally requires the admin role"""
    def _access_required(f):
        @wraps(f)
        def decorated_view(*args, **kwargs):
            if not current_user.is_authenticated:
                raise AuthenticationException()
            if not current_user.has_access(access):
                raise AuthorizationException(f"Account {current_user.name} lacks {access} access")
            return f(*args, **kwargs)

        return decorated_view

    return _access_required


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationException("Expected a JSON object body")
    return data


@auth_blueprint.route("/register", methods=["POST"])
def register():
    data = _json_body()
    logger.debug(f"Register request: {sanitize_sensitive_data(data)}")
    registered = access_control.register(data.get("name"), data.get("password"), bool(data.get("admin", False)))
    if not registered:
        return success_response(data={"registered": False}, message="Account already exists")
    return success_response(data={"registered": True}, status_code=201)


@auth_blueprint.route("/login", methods=["POST"])
@limiter.limit("20 per minute")
def login():
    data = _json_body()
    name = data.get("name")
    result = access_control.login(name, data.get("password"))
    if result.ok:
        login_user(access_control.get_account(name), remember=bool(data.get("remember")))
    return success_response(data=result.to_dict())


@auth_blueprint.route("/logout", methods=["POST"])
@access_required("user")
def logout():
    logger.info(f"Account {current_user.name} logged out")
    logout_user()
    return success_response(message="Logged out")


@auth_blueprint.route("/me")
@access_required("user")
def whoami():
    return success_response(data={"name": current_user.name, "role": current_user.role})
