from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.enums import DigestFrequency, NotificationCategory
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..notifications.email_service import EmailResult, EmailService
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    email: str


def _password_matches(user: User, password: str) -> bool:
    try:
        return check_password_hash(user.password_hash, password or "")
    except ValueError:
        # e.g. placeholder or corrupted hash values
        return False


class AuthService:
    """Use case: register and authenticate students."""

    def __init__(self, users: UserRepository, *, on_register=None):
        self._users = users
        # Called with (user_id, semester) after a successful registration.
        self._on_register = on_register

    def register(self, *, name: str, email: str, password: str, current_semester: Any = 1) -> SessionUser:
        name = require_non_empty(name, "name")
        email = require_email(email)
        require_min_length(password, "password", 6)
        try:
            semester = int(current_semester or 1)
        except (TypeError, ValueError):
            raise ValidationError("currentSemester must be a number", [{"field": "currentSemester", "msg": "invalid"}])
        if semester < 1:
            raise ValidationError("currentSemester must be >= 1", [{"field": "currentSemester", "msg": "min 1"}])

        if self._users.get_by_email(email):
            raise ValidationError("User already exists", [{"field": "email", "msg": "already registered"}])

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            current_semester=semester,
        )
        logger.info("Registered user %s (%s)", user_id, email)

        if self._on_register:
            self._on_register(user_id, semester)

        return SessionUser(user_id=user_id, name=name, email=email)

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("Invalid credentials")

        if not _password_matches(user, password):
            raise AuthenticationError("Invalid credentials")

        return SessionUser(user_id=user.user_id, name=user.name, email=user.email)

    def change_password(self, user_id: int, *, current_password: str, new_password: str) -> None:
        require_non_empty(current_password, "currentPassword")
        require_min_length(new_password, "newPassword", 6)
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if not _password_matches(user, current_password):
            raise AuthenticationError("Current password is incorrect")

        self._users.update_password(user.user_id, password_hash=generate_password_hash(new_password))
        logger.info("Password changed for user %s", user.user_id)


class UserService:
    """Use case: profile, auto-attendance flag and notification preferences."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def set_auto_attendance(self, user_id: int, *, enabled: Any) -> bool:
        if not isinstance(enabled, bool):
            raise ValidationError("enabled must be a boolean", [{"field": "enabled", "msg": "must be boolean"}])
        self.get(user_id)
        self._users.set_auto_attendance(int(user_id), enabled=enabled)
        return enabled

    def is_auto_attendance_enabled(self, user_id: int) -> bool:
        return self.get(user_id).auto_attendance_enabled

    def record_pdf_upload(self, user_id: int, *, path: str) -> None:
        self._users.set_pdf_schedule_path(int(user_id), path=path)

    def clear_pdf_upload(self, user_id: int) -> None:
        self._users.set_pdf_schedule_path(int(user_id), path=None)

    def update_profile(self, user_id: int, payload: Mapping[str, Any]) -> User:
        user = self.get(user_id)
        name = user.name
        semester = user.current_semester
        if "name" in payload:
            name = require_non_empty(payload["name"], "name")
        if payload.get("currentSemester") not in (None, ""):
            try:
                semester = int(payload["currentSemester"])
            except (TypeError, ValueError):
                raise ValidationError(
                    "Current semester must be a number", [{"field": "currentSemester", "msg": "invalid"}]
                )
            if semester < 1:
                raise ValidationError("currentSemester must be >= 1", [{"field": "currentSemester", "msg": "min 1"}])

        self._users.update_profile(user.user_id, name=name, current_semester=semester)
        return replace(user, name=name, current_semester=semester)

    def update_notification_preferences(self, user_id: int, payload: Mapping[str, Any]) -> User:
        """Merge a partial `emailNotifications` payload into stored preferences."""

        user = self.get(user_id)
        prefs = user.preferences
        email_prefs: Optional[Mapping[str, Any]] = payload.get("emailNotifications")

        if email_prefs:
            changes: dict[str, Any] = {}
            if "enabled" in email_prefs:
                changes["email_enabled"] = bool(email_prefs["enabled"])
            if "frequency" in email_prefs:
                try:
                    changes["frequency"] = DigestFrequency(email_prefs["frequency"])
                except ValueError:
                    raise ValidationError(
                        "frequency must be one of: instant, daily, weekly",
                        [{"field": "frequency", "msg": "invalid choice"}],
                    )
            if "mutedTypes" in email_prefs:
                known = {c.value for c in NotificationCategory}
                muted = tuple(t for t in email_prefs.get("mutedTypes") or [] if t in known)
                changes["muted_categories"] = muted
            prefs = replace(prefs, **changes)

        if "attendanceThreshold" in payload:
            try:
                threshold = int(payload["attendanceThreshold"])
            except (TypeError, ValueError):
                raise ValidationError("attendanceThreshold must be a number")
            if not 0 <= threshold <= 100:
                raise ValidationError("attendanceThreshold must be between 0 and 100")
            prefs = replace(prefs, attendance_threshold=threshold)

        if prefs.email_enabled and not user.email:
            raise ValidationError("User account does not have a valid email address")

        self._users.update_preferences(user.user_id, prefs)
        logger.info(
            "Updated email preferences for user %s: enabled=%s frequency=%s",
            user.user_id,
            prefs.email_enabled,
            prefs.frequency.value,
        )
        return replace(user, preferences=prefs)


class PasswordResetService:
    """Use case: mail a one-hour reset link and redeem it for a new password."""

    def __init__(
        self,
        users: UserRepository,
        *,
        email: EmailService,
        frontend_url: str,
        token_ttl: timedelta = timedelta(hours=1),
    ):
        self._users = users
        self._email = email
        self._frontend_url = frontend_url.rstrip("/")
        self._token_ttl = token_ttl

    def request_reset(self, email: str, *, now: Optional[datetime] = None) -> EmailResult:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise NotFoundError("No user found with that email")

        token = secrets.token_urlsafe(32)
        self._users.set_reset_token(user.user_id, token=token, expires_at=(now or now_local()) + self._token_ttl)
        reset_url = f"{self._frontend_url}/reset-password?token={token}"

        result = self._email.send_email(
            user.email,
            "Password Reset Request",
            "You requested a password reset. Open this link to choose a new password:\n"
            f"{reset_url}\n\nThis link expires in 1 hour.",
        )
        if not result.success:
            logger.warning("Reset email for user %s failed: %s", user.user_id, result.error)
        return result

    def reset_password(self, token: str, password: str, *, now: Optional[datetime] = None) -> None:
        require_min_length(password, "password", 6)
        user = self._users.get_by_reset_token(token) if token else None
        if not user or not user.reset_token_expires or (now or now_local()) > user.reset_token_expires:
            raise ValidationError("Invalid or expired token")

        self._users.update_password(user.user_id, password_hash=generate_password_hash(password))
        logger.info("Password reset for user %s", user.user_id)
