"""
Console password gate.

The console is unlocked by a single shared secret (ADMIN_PASSWORD).
"""

import logging
import secrets
from typing import Optional

from outline_admin.config import settings

from .errors import AccessDenied

logger = logging.getLogger(__name__)


class PasswordGate:
    """Checks the shared console password."""

    def __init__(self, secret: Optional[str] = None):
        self.secret = secret if secret is not None else settings.admin_password

    def check(self, password: Optional[str]) -> None:
        """
        Raises:
            AccessDenied: If no secret is configured or the password is wrong
        """
        if not self.secret:
            raise AccessDenied("Console is locked: ADMIN_PASSWORD is not set")
        if password is None or not secrets.compare_digest(
            password.encode("utf-8"), self.secret.encode("utf-8")
        ):
            logger.warning("Rejected console password")
            raise AccessDenied("Incorrect password. Please try again.")
