import os
from datetime import date, datetime, timedelta, timezone

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ATLAS_APP_CODE", "SITE_COMPLIANCE")
os.environ.setdefault("CSRF_SECRET", "test-csrf-secret-value")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ENCRYPTION_ENABLED", "false")
os.environ.setdefault("LOGGING_ENABLED", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from atams.db import Base
from site_compliance.models import Worker, JobSite, Certification

# Fixed evaluation instant for expiry and same-day rules
NOW = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)

SITE_LAT = -31.9505
SITE_LNG = 115.8605


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        execution_options={"schema_translate_map": {"compliance": None}},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_worker(db_session):
    def _make(email="john.worker@example.com", first_name="John", last_name="Worker"):
        worker = Worker(
            wk_email=email,
            wk_first_name=first_name,
            wk_last_name=last_name,
            wk_induction_completed=True,
            wk_induction_completed_at=NOW - timedelta(days=60),
            wk_created_at=NOW - timedelta(days=60),
        )
        db_session.add(worker)
        db_session.commit()
        db_session.refresh(worker)
        return worker
    return _make


@pytest.fixture
def make_site(db_session):
    def _make(name="Riverside Apartments", lat=SITE_LAT, lng=SITE_LNG, radius_m=100, active=True):
        site = JobSite(
            js_name=name,
            js_lat=lat,
            js_lng=lng,
            js_radius_m=radius_m,
            js_active=active,
            js_created_at=NOW - timedelta(days=90),
        )
        db_session.add(site)
        db_session.commit()
        db_session.refresh(site)
        return site
    return _make


@pytest.fixture
def make_certification(db_session):
    def _make(worker, status="Valid", expiry_date=date(2025, 12, 31), created_at=None, ce_id=None):
        cert = Certification(
            ce_worker_id=worker.wk_id,
            ce_type="White Card",
            ce_status=status,
            ce_number="WC-123456",
            ce_expiry_date=expiry_date,
            ce_created_at=created_at or NOW - timedelta(days=30),
        )
        if ce_id:
            cert.ce_id = ce_id
        db_session.add(cert)
        db_session.commit()
        db_session.refresh(cert)
        return cert
    return _make
