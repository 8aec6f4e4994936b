import json
from datetime import timedelta

import httpx
import pytest

from site_compliance.models import NotificationAudit, NotificationDedup
from site_compliance.schemas import ComplianceAlertPayload
from site_compliance.services.alert_service import ComplianceAlertService
from site_compliance.services.webhook_service import WebhookService, verify_webhook_signature
from tests.conftest import NOW

WEBHOOK_URL = "https://hooks.example.com/compliance"
SECRET = "webhook-secret"


def make_payload(site=True):
    return ComplianceAlertPayload(
        worker_id="worker-1",
        worker_name="John Worker",
        worker_email="john.worker@example.com",
        site_id="site-1" if site else None,
        site_name="Riverside Apartments" if site else None,
        reason="Expired white card",
        occurred_at=NOW,
    )


class Recorder:
    def __init__(self, status_code=200, body="accepted", error=None):
        self.requests = []
        self.status_code = status_code
        self.body = body
        self.error = error

    def __call__(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)


def make_service(recorder, url=WEBHOOK_URL, secret=SECRET):
    webhook = WebhookService(url=url, secret=secret, transport=httpx.MockTransport(recorder))
    return ComplianceAlertService(webhook=webhook)


@pytest.mark.asyncio
async def test_skipped_without_webhook_url(db_session):
    recorder = Recorder()
    result = await make_service(recorder, url="").queue_non_compliance_alert(db_session, make_payload(), now=NOW)

    assert result.skipped is True
    assert result.reason == "Webhook URL not configured"
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_skipped_without_webhook_secret(db_session):
    recorder = Recorder()
    result = await make_service(recorder, secret="").queue_non_compliance_alert(db_session, make_payload(), now=NOW)

    assert result.skipped is True
    assert result.reason == "Webhook secret not configured"
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_sends_signed_alert_and_records_dedup(db_session):
    recorder = Recorder()

    result = await make_service(recorder).queue_non_compliance_alert(db_session, make_payload(), now=NOW)

    assert result.success is True
    assert result.status == 200
    assert result.audit_id is not None

    request = recorder.requests[0]
    assert str(request.url) == WEBHOOK_URL
    assert request.headers["User-Agent"] == "BBWA-ComplianceAlerts/1.0"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["X-Signature"].startswith("sha256=")
    assert verify_webhook_signature(request.content.decode(), request.headers["X-Signature"], SECRET)

    body = json.loads(request.content)
    assert body["type"] == "compliance_alert"
    assert body["workerId"] == "worker-1"
    assert body["workerName"] == "John Worker"
    assert body["siteName"] == "Riverside Apartments"
    assert body["reason"] == "Expired white card"
    assert body["timestamp"] == body["occurredAt"]

    dedup = db_session.query(NotificationDedup).one()
    assert dedup.nd_worker_id == "worker-1"
    assert dedup.nd_type == "compliance_alert"

    audit = db_session.query(NotificationAudit).one()
    assert audit.na_kind == "compliance_alert"
    assert audit.na_result == "success"
    assert audit.na_payload["webhook_url"] == WEBHOOK_URL
    assert audit.na_payload["response_status"] == 200
    assert audit.na_payload["response_body"] == "accepted"


@pytest.mark.asyncio
async def test_alert_without_site_omits_site_fields(db_session):
    recorder = Recorder()

    await make_service(recorder).queue_non_compliance_alert(db_session, make_payload(site=False), now=NOW)

    body = json.loads(recorder.requests[0].content)
    assert "siteId" not in body
    assert "siteName" not in body


@pytest.mark.asyncio
async def test_second_alert_within_hour_is_rate_limited(db_session):
    recorder = Recorder()
    service = make_service(recorder)

    await service.queue_non_compliance_alert(db_session, make_payload(), now=NOW)
    result = await service.queue_non_compliance_alert(db_session, make_payload(), now=NOW + timedelta(minutes=30))

    assert result.skipped is True
    assert result.reason == "Rate limited - alert sent within past hour"
    assert len(recorder.requests) == 1

    audits = db_session.query(NotificationAudit).order_by(NotificationAudit.na_created_at).all()
    assert len(audits) == 2
    assert audits[1].na_payload["reason"] == "rate_limited"
    assert audits[1].na_result == "success"


@pytest.mark.asyncio
async def test_alert_sent_again_after_cooldown(db_session):
    recorder = Recorder()
    service = make_service(recorder)

    await service.queue_non_compliance_alert(db_session, make_payload(), now=NOW)
    result = await service.queue_non_compliance_alert(db_session, make_payload(), now=NOW + timedelta(minutes=61))

    assert result.success is True
    assert len(recorder.requests) == 2


@pytest.mark.asyncio
async def test_webhook_error_status_is_audited_as_failure(db_session):
    recorder = Recorder(status_code=500, body="boom")

    result = await make_service(recorder).queue_non_compliance_alert(db_session, make_payload(), now=NOW)

    assert result.success is False
    assert result.status == 500
    assert "500" in result.error
    assert db_session.query(NotificationDedup).count() == 0
    audit = db_session.query(NotificationAudit).one()
    assert audit.na_result == "failure"
    assert audit.na_payload["response_body"] == "boom"


@pytest.mark.asyncio
async def test_response_body_is_truncated_in_audit(db_session):
    recorder = Recorder(body="x" * 5000)

    await make_service(recorder).queue_non_compliance_alert(db_session, make_payload(), now=NOW)

    audit = db_session.query(NotificationAudit).one()
    assert len(audit.na_payload["response_body"]) == 1000


@pytest.mark.asyncio
async def test_transport_error_returns_failure_without_raising(db_session):
    recorder = Recorder(error=httpx.ConnectError("connection refused"))

    result = await make_service(recorder).queue_non_compliance_alert(db_session, make_payload(), now=NOW)

    assert result.success is False
    assert "connection refused" in result.error
    audit = db_session.query(NotificationAudit).one()
    assert audit.na_result == "failure"
    assert audit.na_payload["error"] == "connection refused"
