"""
CSRF Service - Signed double-submit tokens for the public check-in form
"""
import hmac
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from site_compliance.core.config import settings

CSRF_PURPOSE = "csrf"


class CsrfService:
    def __init__(self) -> None:
        self.secret = settings.CSRF_SECRET
        self.algorithm = settings.CSRF_ALG
        self.ttl_seconds = settings.CSRF_TOKEN_TTL_SECONDS

    def issue_token(self, now: Optional[datetime] = None) -> str:
        """
        Generate a CSRF token for the check-in form

        The same value is set as a cookie and echoed back in the form body.
        """
        now = now or datetime.now(timezone.utc)
        exp = now + timedelta(seconds=self.ttl_seconds)

        payload = {
            "purpose": CSRF_PURPOSE,
            "nonce": str(uuid.uuid4()),
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def is_valid(self, cookie_token: Optional[str], submitted_token: Optional[str]) -> bool:
        """Cookie and body must match and carry a live signature from this server"""
        if not cookie_token or not submitted_token:
            return False
        if not hmac.compare_digest(cookie_token.encode(), submitted_token.encode()):
            return False

        try:
            payload = jwt.decode(
                submitted_token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": True}
            )
        except jwt.InvalidTokenError:
            return False

        return payload.get("purpose") == CSRF_PURPOSE
