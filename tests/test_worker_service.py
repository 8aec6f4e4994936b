from datetime import date, timedelta

import pytest
from atams.exceptions import BadRequestException, ConflictException, NotFoundException

from site_compliance.models import Certification, Worker
from site_compliance.schemas import CertificationCreate, SafetyAcknowledgements, WorkerInductionCreate
from site_compliance.services.worker_service import WorkerService
from tests.conftest import NOW


def acknowledgements(**overrides):
    values = {name: True for name in SafetyAcknowledgements.model_fields}
    values.update(overrides)
    return SafetyAcknowledgements(**values)


def induction(**overrides):
    data = dict(
        wk_first_name="John",
        wk_last_name="Worker",
        wk_email="John.Worker@Example.com",
        wk_mobile="0412345678",
        wk_trade="Carpenter",
        wk_position="Leading hand",
        wk_emergency_name="Jane Worker",
        wk_emergency_phone="0498765432",
        wk_emergency_relationship="Partner",
        acknowledgements=acknowledgements(),
        white_card_number="WC-123456",
        white_card_expiry_date=date(2027, 3, 1),
    )
    data.update(overrides)
    return WorkerInductionCreate(**data)


def test_induction_creates_worker_and_pending_white_card(db_session):
    worker = WorkerService().submit_induction(db_session, induction(), now=NOW)

    assert worker.wk_email == "john.worker@example.com"
    assert worker.wk_induction_completed is True

    cert = db_session.query(Certification).filter(Certification.ce_worker_id == worker.wk_id).one()
    assert cert.ce_type == "White Card"
    assert cert.ce_status == "Awaiting Review"
    assert cert.ce_number == "WC-123456"
    assert cert.ce_expiry_date == date(2027, 3, 1)


def test_duplicate_email_is_a_conflict(db_session):
    service = WorkerService()
    service.submit_induction(db_session, induction(), now=NOW)

    with pytest.raises(ConflictException):
        service.submit_induction(db_session, induction(wk_email="JOHN.WORKER@example.com"), now=NOW)

    assert db_session.query(Worker).count() == 1


def test_every_acknowledgement_is_required(db_session):
    with pytest.raises(BadRequestException):
        WorkerService().submit_induction(db_session, induction(acknowledgements=acknowledgements(use_ppe=False)))

    assert db_session.query(Worker).count() == 0


def test_certification_update_appends_history(db_session):
    service = WorkerService()
    worker = service.submit_induction(db_session, induction(), now=NOW - timedelta(days=3))

    service.update_certification(
        db_session, worker.wk_id, CertificationCreate(ce_status="Valid", ce_expiry_date=date(2027, 3, 1)), now=NOW
    )

    assert db_session.query(Certification).filter(Certification.ce_worker_id == worker.wk_id).count() == 2
    detail = service.get_worker(db_session, worker.wk_id)
    assert detail.current_certification.ce_status == "Valid"


def test_valid_status_requires_expiry_date(db_session):
    service = WorkerService()
    worker = service.submit_induction(db_session, induction(), now=NOW)

    with pytest.raises(BadRequestException):
        service.update_certification(db_session, worker.wk_id, CertificationCreate(ce_status="Valid"), now=NOW)


def test_valid_status_rejects_past_expiry(db_session):
    service = WorkerService()
    worker = service.submit_induction(db_session, induction(), now=NOW)

    with pytest.raises(BadRequestException):
        service.update_certification(
            db_session, worker.wk_id, CertificationCreate(ce_status="Valid", ce_expiry_date=date(2025, 5, 31)), now=NOW
        )


def test_expired_status_needs_no_expiry(db_session):
    service = WorkerService()
    worker = service.submit_induction(db_session, induction(), now=NOW - timedelta(days=1))

    cert = service.update_certification(db_session, worker.wk_id, CertificationCreate(ce_status="Expired"), now=NOW)

    assert cert.ce_status == "Expired"


def test_unknown_worker(db_session):
    service = WorkerService()

    with pytest.raises(NotFoundException):
        service.get_worker(db_session, "missing")
    with pytest.raises(NotFoundException):
        service.update_certification(db_session, "missing", CertificationCreate(ce_status="Expired"))


def test_list_and_count_workers(db_session, make_worker):
    make_worker()
    make_worker(email="mary.chippy@example.com", first_name="Mary", last_name="Chippy")
    service = WorkerService()

    assert service.count_workers(db_session) == 2
    assert [w.wk_email for w in service.list_workers(db_session, search="mary")] == ["mary.chippy@example.com"]
