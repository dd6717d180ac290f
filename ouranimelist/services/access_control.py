"""
Account registration and credential checks.

Login never raises for bad credentials; it returns a LoginResult with one of
three statuses so callers have to handle each of them.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from ouranimelist.exceptions import DatabaseException, ValidationException
from ouranimelist.repositories.account_repository import AccountRepository

logger = logging.getLogger("main")

STATUS_ADMIN = "Admin"
STATUS_USER = "User"
STATUS_FAIL = "Fail"

USER_NOT_FOUND = "user not found"
INVALID_PASSWORD = "invalid password"


@dataclass(frozen=True)
class LoginResult:
    status: str
    error: Optional[str] = None

    @classmethod
    def admin(cls):
        return cls(STATUS_ADMIN)

    @classmethod
    def user(cls):
        return cls(STATUS_USER)

    @classmethod
    def fail(cls, reason):
        return cls(STATUS_FAIL, reason)

    @property
    def ok(self):
        return self.status != STATUS_FAIL

    def to_dict(self):
        data = {"status": self.status}
        if self.error:
            data["error"] = self.error
        return data


def _require_credentials(name, password):
    if not isinstance(name, str) or not name.strip():
        raise ValidationException("Account name is required and must be a string")
    if not isinstance(password, str) or not password:
        raise ValidationException("Password is required and must be a string")


def register(name: str, password: str, is_admin: bool = False) -> bool:
    """
    Create an account. Returns False when the name is already taken; any other
    failure raises DatabaseException.
    """
    _require_credentials(name, password)
    try:
        if AccountRepository.get_by_name(name) is not None:
            logger.info(f"Registration refused, account {name} already exists")
            return False
        AccountRepository.create(
            name=name,
            password=generate_password_hash(password, method="pbkdf2:sha256"),
            admin_access=bool(is_admin),
        )
    except IntegrityError:
        logger.info(f"Registration refused, account {name} already exists")
        return False
    except SQLAlchemyError as e:
        raise DatabaseException(f"Could not register account {name}", detail=e)

    logger.info(f"Registered {'admin' if is_admin else 'standard'} account {name}")
    return True


def login(name: str, password: str) -> LoginResult:
    if not isinstance(name, str) or not name:
        return LoginResult.fail(USER_NOT_FOUND)
    try:
        account = AccountRepository.get_by_name(name)
    except SQLAlchemyError as e:
        raise DatabaseException(f"Could not look up account {name}", detail=e)

    if account is None:
        logger.warning(f"Login attempt for unknown account {name}")
        return LoginResult.fail(USER_NOT_FOUND)

    if not check_password_hash(account.password, password if isinstance(password, str) else ""):
        logger.warning(f"Incorrect password for account {name}")
        return LoginResult.fail(INVALID_PASSWORD)

    logger.info(f"Successful login for account {name}")
    return LoginResult.admin() if account.is_admin else LoginResult.user()


def get_account(name):
    try:
        return AccountRepository.get_by_name(name)
    except SQLAlchemyError as e:
        raise DatabaseException(f"Could not look up account {name}", detail=e)


def list_accounts():
    try:
        return AccountRepository.get_all()
    except SQLAlchemyError as e:
        raise DatabaseException("Could not list accounts", detail=e)


def init_admin_from_environment(environment_name="USER_ADMIN"):
    """
    Allow creating the first admin from environment variables without using the UI.
    An existing account with the same name is left untouched.
    """
    username = os.getenv(environment_name + "_NAME")
    password = os.getenv(environment_name + "_PASSWORD")
    if not username or not password:
        return False

    logger.info("Initializing an admin account from environment variables...")
    created = register(username, password, is_admin=True)
    if not created:
        logger.info(f"Admin account {username} already exists, keeping stored credentials")
    return created
