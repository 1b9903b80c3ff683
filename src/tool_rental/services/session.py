"""Signed-in user session kept in the local config file.

There is no credential check: any non-empty e-mail and password sign in.
"""

from __future__ import annotations

import secrets
import string
from pathlib import Path
from typing import Any, Optional

from tool_rental.config import SESSION_KEY
from tool_rental.domain.models import User
from tool_rental.logging_config import get_logger
from tool_rental.services.errors import ValidationError
from tool_rental.utils.config_store import load_config_data, update_config_value

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 7


def _new_user_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def _user_from_payload(payload: Any) -> Optional[User]:
    if not isinstance(payload, dict):
        return None
    try:
        return User(
            id=str(payload["id"]),
            email=str(payload["email"]),
            name=str(payload["name"]),
        )
    except KeyError:
        return None


class SessionManager:
    """Holds at most one signed-in user, mirrored to ``config.json``."""

    def __init__(self, config_path: Path) -> None:
        self._config_path = config_path
        self._user: Optional[User] = None
        self._logger = get_logger(self.__class__.__name__)

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def restore(self) -> Optional[User]:
        """Load the stored session, if any."""
        data = load_config_data(self._config_path)
        self._user = _user_from_payload(data.get(SESSION_KEY))
        if self._user:
            self._logger.info("Restored session for %s", self._user.email)
        return self._user

    def login(self, email: str, password: str) -> User:
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Invalid credentials")
        user = User(id=_new_user_id(), email=email, name=email.split("@")[0])
        self._store(user)
        self._logger.info("Logged in %s", email)
        return user

    def signup(self, name: str, email: str, password: str) -> User:
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email or not password:
            raise ValidationError("Please fill all fields")
        user = User(id=_new_user_id(), email=email, name=name)
        self._store(user)
        self._logger.info("Created account for %s", email)
        return user

    def logout(self) -> None:
        if self._user:
            self._logger.info("Logged out %s", self._user.email)
        self._user = None
        try:
            update_config_value(self._config_path, SESSION_KEY, None)
        except OSError:
            self._logger.warning("Could not clear the stored session.")

    def _store(self, user: User) -> None:
        self._user = user
        try:
            update_config_value(
                self._config_path,
                SESSION_KEY,
                {"id": user.id, "email": user.email, "name": user.name},
            )
        except OSError:
            self._logger.warning("Could not persist the session to %s", self._config_path)
