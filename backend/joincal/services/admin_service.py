"""
Admin gate: check a password against the configured SHA-256 hash.
Only the hash lives in config (ADMIN_PASSWORD_HASH); the password itself is never stored or logged.
"""
import hashlib
import hmac
import logging
from typing import Any

from joincal.config import settings
from joincal.core.errors import Unauthorized, Unavailable, ValidationError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_admin_password(password: Any, expected_hash: str | None = None) -> bool:
    """
    Raise unless password matches. expected_hash defaults to settings.admin_password_hash.
    ValidationError: no password; Unavailable: admin not configured; Unauthorized: mismatch.
    """
    if not password or not isinstance(password, str):
        raise ValidationError("Password is required")
    expected = (settings.admin_password_hash if expected_hash is None else expected_hash).strip().lower()
    if not expected:
        raise Unavailable("Admin access is not configured")
    if not hmac.compare_digest(hash_password(password), expected):
        logger.warning("Rejected admin password attempt")
        raise Unauthorized("Incorrect password")
    return True
