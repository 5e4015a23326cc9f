"""Revoked access tokens"""
import logging
import time

logger = logging.getLogger(__name__)


class SessionService:
    """Tracks logged-out token ids until the tokens would have expired anyway"""

    def __init__(self):
        self._revoked: dict[str, float] = {}

    def revoke(self, jti: str, expires_at: float) -> None:
        self._purge()
        self._revoked[jti] = expires_at
        logger.info("Token revoked: jti=%s", jti)

    def is_revoked(self, jti: str | None) -> bool:
        if not jti:
            return False
        expires_at = self._revoked.get(jti)
        if expires_at is None:
            return False
        if time.time() >= expires_at:
            del self._revoked[jti]
            return False
        return True

    def clear(self) -> None:
        self._revoked.clear()

    def _purge(self) -> None:
        now = time.time()
        for jti in [k for k, exp in self._revoked.items() if exp <= now]:
            del self._revoked[jti]


session_service = SessionService()
