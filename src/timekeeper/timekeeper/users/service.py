from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash

from ..common.pagination import Page, paginate
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_PAGE_SIZE, DEFAULT_TOKEN_MAX_AGE_SECONDS
from ..core.exceptions import AuthenticationError, ValidationError
from ..core.permissions import Operation, require
from .model import Employee, Identity
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    identity: Identity


def to_identity(user: Employee) -> Identity:
    return Identity(
        user_id=user.user_id,
        name=user.name,
        employee_id=user.employee_id,
        role=user.role,
        department=user.department,
    )


class AuthService:
    """Use case: issue and verify bearer tokens."""

    _SALT = "timekeeper-auth"

    def __init__(self, users: UserRepository, *, secret_key: str, max_age: int = DEFAULT_TOKEN_MAX_AGE_SECONDS):
        self._users = users
        self._serializer = URLSafeTimedSerializer(secret_key, salt=self._SALT)
        self._max_age = int(max_age)

    def issue_token(self, user: Employee) -> str:
        return self._serializer.dumps({"uid": user.user_id})

    def authenticate(self, email: str, password: str) -> LoginResult:
        email = require_non_empty(email, "Email")
        if not isinstance(password, str):
            raise ValidationError("Password must be text")
        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")
        if not user.is_active:
            raise AuthenticationError("Account is inactive")

        logger.info("User %s signed in", user.user_id)
        return LoginResult(token=self.issue_token(user), identity=to_identity(user))

    def identify(self, token: Optional[str]) -> Identity:
        if not token:
            raise AuthenticationError("No token provided")

        try:
            payload = self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired:
            raise AuthenticationError("Token expired")
        except BadSignature:
            raise AuthenticationError("Invalid token")

        user = self._users.get_by_id(int(payload.get("uid", 0)))
        if not user or not user.is_active:
            raise AuthenticationError("Invalid token or inactive user")
        return to_identity(user)


class RosterService:
    """Use case: browse the active roster (manager/HR/admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_roster(
        self,
        *,
        caller: Identity,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        search: Optional[str] = None,
        department: Optional[str] = None,
    ) -> Page[Employee]:
        require(caller.role, Operation.LIST_ROSTER)
        users = self._users.list_active(
            department=(department or "").strip() or None,
            search=(search or "").strip() or None,
        )
        return paginate(users, page, page_size)

    def list_departments(self) -> list[str]:
        return list(self._users.list_departments())
