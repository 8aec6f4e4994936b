from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from site_compliance.main import app
from site_compliance.db.session import get_db
from site_compliance.api.deps import get_current_user
from site_compliance.models import SiteAttendance
from tests.conftest import NOW, SITE_LAT, SITE_LNG

ADMIN = {"user_id": 1, "username": "admin", "email": "admin@example.com", "role_level": 100, "roles": []}
WORKER_ROLE = {"user_id": 2, "username": "viewer", "email": "viewer@example.com", "role_level": 10, "roles": []}


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: ADMIN
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def acknowledgements():
    return {
        name: True for name in (
            "no_alcohol_drugs", "electrical_equipment", "hazardous_substances", "use_ppe",
            "high_risk_work_meeting", "appropriate_signage", "no_unauthorized_visitors", "housekeeping",
            "employer_training", "employer_swms", "discussed_swms", "pre_start_meeting",
            "read_safety_booklet", "understand_smp",
        )
    }


def test_root_and_health(client):
    assert client.get("/").json()["name"] == "BBWA Site Compliance"
    assert client.get("/health").json()["status"] == "ok"


def test_check_in_round_trip(client, db_session, make_worker, make_site, make_certification):
    worker = make_worker()
    make_site()
    make_certification(worker, expiry_date=date.today() + timedelta(days=365))

    token_response = client.get("/api/v1/check-in/csrf-token")
    assert token_response.status_code == 200
    token = token_response.json()["data"]["token"]
    assert client.cookies.get("csrf_token") == token

    body = {
        "email": "john.worker@example.com",
        "coords": {"lat": SITE_LAT, "lng": SITE_LNG},
        "csrfToken": token,
        "website": "",
    }
    first = client.post("/api/v1/check-in", json=body)
    second = client.post("/api/v1/check-in", json=body)

    assert first.status_code == 200
    assert first.json() == {
        "success": True,
        "message": "Successfully checked in to Riverside Apartments! Stay safe on site.",
    }
    assert second.json() == {"errors": {"form": "You have already checked in to Riverside Apartments today."}}
    assert db_session.query(SiteAttendance).count() == 1


def test_check_in_without_csrf_cookie(client):
    response = client.post("/api/v1/check-in", json={
        "email": "john.worker@example.com",
        "coords": {"lat": SITE_LAT, "lng": SITE_LNG},
        "csrfToken": "anything",
        "website": "",
    })

    assert response.json() == {
        "errors": {"form": "Security validation failed. Please refresh the page and try again."}
    }


@pytest.mark.parametrize("body", [
    {"email": "john.worker@example.com", "coords": {"lat": 123, "lng": 0}, "csrfToken": "forged", "website": ""},
    {"email": ["john"], "coords": "somewhere", "csrfToken": "forged", "website": None},
])
def test_check_in_security_runs_before_field_validation(client, body):
    client.get("/api/v1/check-in/csrf-token")

    response = client.post("/api/v1/check-in", json=body)

    assert response.status_code == 200
    assert response.json() == {
        "errors": {"form": "Security validation failed. Please refresh the page and try again."}
    }


def test_check_in_out_of_bounds_coordinates_with_valid_token(client):
    token = client.get("/api/v1/check-in/csrf-token").json()["data"]["token"]

    response = client.post("/api/v1/check-in", json={
        "email": "john.worker@example.com",
        "coords": {"lat": 123, "lng": 0},
        "csrfToken": token,
        "website": None,
    })

    assert response.status_code == 200
    assert response.json() == {
        "errors": {"location": "Invalid location coordinates. Please allow location access and try again."}
    }


def test_induction_then_admin_review(client):
    payload = {
        "wk_first_name": "Mary",
        "wk_last_name": "Chippy",
        "wk_email": "mary.chippy@example.com",
        "wk_mobile": "0412345678",
        "wk_trade": "Carpenter",
        "wk_emergency_name": "Sam Chippy",
        "wk_emergency_phone": "0498765432",
        "wk_emergency_relationship": "Sibling",
        "acknowledgements": acknowledgements(),
        "white_card_number": "WC-998877",
    }

    created = client.post("/api/v1/induction/workers", json=payload)
    assert created.status_code == 201
    wk_id = created.json()["data"]["wk_id"]

    duplicate = client.post("/api/v1/induction/workers", json=payload)
    assert duplicate.status_code == 409

    review = client.post(f"/api/v1/workers/{wk_id}/certifications", json={
        "ce_status": "Valid",
        "ce_expiry_date": (date.today() + timedelta(days=400)).isoformat(),
    })
    assert review.status_code == 201

    detail = client.get(f"/api/v1/workers/{wk_id}")
    assert detail.status_code == 200
    assert detail.json()["data"]["current_certification"]["ce_status"] == "Valid"

    listing = client.get("/api/v1/workers/", params={"search": "chippy"})
    assert listing.json()["total"] == 1


def test_job_site_crud(client):
    created = client.post("/api/v1/job-sites/", json={"js_name": "Riverside Apartments", "js_lat": -31.95, "js_lng": 115.86})
    assert created.status_code == 201
    js_id = created.json()["data"]["js_id"]
    assert created.json()["data"]["js_radius_m"] == 100

    updated = client.put(f"/api/v1/job-sites/{js_id}", json={"js_radius_m": 150})
    assert updated.json()["data"]["js_radius_m"] == 150

    listing = client.get("/api/v1/job-sites/")
    assert listing.json()["total"] == 1

    assert client.delete(f"/api/v1/job-sites/{js_id}").status_code == 204
    assert client.get(f"/api/v1/job-sites/{js_id}").status_code == 404


def test_job_site_validation(client):
    response = client.post("/api/v1/job-sites/", json={"js_name": "Nowhere", "js_lat": 95, "js_lng": 115.86})
    assert response.status_code == 422


def test_attendances_listing(client, db_session, make_worker, make_site):
    worker = make_worker()
    site = make_site()
    db_session.add(SiteAttendance(
        sa_worker_id=worker.wk_id,
        sa_job_site_id=site.js_id,
        sa_checked_in_at=NOW,
        sa_checked_in_on=date(2025, 6, 1),
        sa_lat=SITE_LAT,
        sa_lng=SITE_LNG,
    ))
    db_session.commit()

    response = client.get("/api/v1/attendances/", params={"worker_id": worker.wk_id, "date_from": "2025-06-01"})

    assert response.status_code == 200
    assert response.json()["total"] == 1

    bad_range = client.get("/api/v1/attendances/", params={"date_from": "2025-06-02", "date_to": "2025-06-01"})
    assert bad_range.status_code == 400


def test_expiry_reminders_skipped_without_webhook(client):
    response = client.post("/api/v1/maintenance/expiry-reminders")

    assert response.status_code == 200
    assert response.json()["data"]["skipped"] is True


def test_admin_endpoints_require_authentication(client):
    app.dependency_overrides[get_current_user] = lambda: None

    assert client.get("/api/v1/job-sites/").status_code == 401


def test_admin_endpoints_require_admin_role(client):
    app.dependency_overrides[get_current_user] = lambda: WORKER_ROLE

    assert client.get("/api/v1/workers/").status_code == 403
