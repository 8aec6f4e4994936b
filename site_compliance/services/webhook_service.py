"""
Webhook Service - Signed JSON delivery to the automation platform
"""
import hashlib
import hmac
import json
from typing import Any, Dict, Optional

import httpx

from site_compliance.core.config import settings

COMPLIANCE_USER_AGENT = "BBWA-ComplianceAlerts/1.0"
EXPIRY_USER_AGENT = "BBWA-ExpiryReminders/1.0"
SIGNATURE_PREFIX = "sha256="


def sign_payload(body: str, secret: str) -> str:
    """Return the X-Signature header value for a serialized body"""
    digest = hmac.new(secret.encode(), body.encode(), hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_webhook_signature(body: str, signature: str, secret: str) -> bool:
    """
    Verify an HMAC signature produced by sign_payload

    Receivers of our webhooks use this; any malformed input is simply invalid.
    """
    if not body or not signature or not secret:
        return False

    provided = signature[len(SIGNATURE_PREFIX):] if signature.startswith(SIGNATURE_PREFIX) else signature
    try:
        provided_bytes = bytes.fromhex(provided)
    except ValueError:
        return False

    expected = hmac.new(secret.encode(), body.encode(), hashlib.sha256).digest()
    return hmac.compare_digest(expected, provided_bytes)


class WebhookService:
    def __init__(
        self,
        url: Optional[str] = None,
        secret: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        user_agent: str = COMPLIANCE_USER_AGENT
    ) -> None:
        self.url = url if url is not None else settings.AUTOMATION_WEBHOOK_URL
        self.secret = secret if secret is not None else settings.AUTOMATION_WEBHOOK_SECRET
        self.timeout = timeout if timeout is not None else settings.WEBHOOK_TIMEOUT_SECONDS
        self.transport = transport
        self.user_agent = user_agent

    def missing_config_reason(self) -> Optional[str]:
        """None when the webhook can be used, otherwise why it can't"""
        if not self.url:
            return "Webhook URL not configured"
        if not self.secret:
            return "Webhook secret not configured"
        return None

    async def post(self, payload: Dict[str, Any]) -> httpx.Response:
        """
        POST a JSON payload with an X-Signature header

        Raises:
            httpx.HTTPError: On transport failures; non-2xx responses are returned
        """
        body = json.dumps(payload, separators=(",", ":"))
        headers = {
            "Content-Type": "application/json",
            "X-Signature": sign_payload(body, self.secret),
            "User-Agent": self.user_agent,
        }

        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            return await client.post(self.url, content=body, headers=headers)
