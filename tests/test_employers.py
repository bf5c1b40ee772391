import pytest
from sqlmodel import Session

from assetdesk.api.v1.dependencies import get_mailer
from assetdesk.db.repositories.employers import EmployerRepository
from assetdesk.db.repositories.users import UserRepository
from assetdesk.main import app
from assetdesk.utils.mailer import Mailer
from conftest import API


class BrokenMailer(Mailer):
    def send(self, message):
        raise ConnectionError("SMTP unreachable")


def _payload(service_id, **overrides):
    payload = {
        "full_name": "Sara Benali",
        "email": "sara@example.com",
        "poste": "Comptable",
        "phone": "0612345678",
        "service_id": service_id,
    }
    payload.update(overrides)
    return payload


def test_create_sends_credentials_that_work(client, admin_headers, service_id, mailer):
    response = client.post(f"{API}/employers", headers=admin_headers, json=_payload(service_id))

    assert response.status_code == 201
    employer = response.json()["employer"]
    assert employer["email"] == "sara@example.com"
    assert employer["service"] == "IT"
    assert employer["is_active"] is True

    assert len(mailer.outbox) == 1
    sent = mailer.outbox[0]
    assert sent.to == "sara@example.com"
    assert sent.subject == "Your Account Credentials"
    password = sent.text.split("Password: ")[1].split("\n")[0]
    assert len(password) == 10

    login = client.post(f"{API}/login", json={"email": "sara@example.com", "password": password})
    assert login.status_code == 200
    assert login.json()["role"] == "Employer"


def test_create_validates_email_and_service(client, admin_headers, service_id, employer_id):
    taken = client.post(f"{API}/employers", headers=admin_headers, json=_payload(service_id, email="employer@example.com"))
    assert taken.status_code == 422
    assert "email" in taken.json()["errors"]

    bad_service = client.post(f"{API}/employers", headers=admin_headers, json=_payload(999))
    assert bad_service.status_code == 422
    assert bad_service.json()["errors"]["service_id"] == ["The selected service id is invalid."]


def test_create_rolls_back_when_the_mail_fails(client, engine, admin_headers, service_id):
    app.dependency_overrides[get_mailer] = lambda: BrokenMailer()

    response = client.post(f"{API}/employers", headers=admin_headers, json=_payload(service_id))

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Failed to create employer"
    assert "SMTP unreachable" in body["error"]
    with Session(engine) as session:
        assert UserRepository(session).get_by_email("sara@example.com") is None


def test_update_changes_user_and_employer_fields(client, admin_headers, factory, employer_id):
    finance = factory.service("Finance")

    response = client.put(
        f"{API}/employers/{employer_id}",
        headers=admin_headers,
        json={"full_name": "Renamed", "service_id": finance, "phone": "0101010101"},
    )

    assert response.status_code == 200
    employer = response.json()["employer"]
    assert employer["full_name"] == "Renamed"
    assert employer["service_id"] == finance
    assert employer["service"] == "Finance"
    assert employer["phone"] == "0101010101"
    assert employer["poste"] == "Technicien"


def test_toggle_active_flips_the_flag(client, admin_headers, employer_id):
    first = client.patch(f"{API}/employers/{employer_id}/toggle-active", headers=admin_headers)
    second = client.patch(f"{API}/employers/{employer_id}/toggle-active", headers=admin_headers)

    assert first.json() == {"message": "Employer status updated successfully", "is_active": False}
    assert second.json()["is_active"] is True


@pytest.mark.parametrize("term", ["ployer", "EMPLOYER", "user"])
def test_search_is_case_insensitive_substring_on_full_name(client, admin_headers, employer_id, term):
    response = client.post(f"{API}/employers/search", headers=admin_headers, json={"name": term})

    assert [e["id"] for e in response.json()["employers"]] == [employer_id]


def test_unknown_employer_is_404(client, admin_headers):
    response = client.get(f"{API}/employers/999", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Employer not found"


def test_failed_update_leaves_user_and_employer_untouched(client, engine, admin_headers, employer_id, monkeypatch):
    def fail(self, entity, *, commit=True, **changes):
        raise RuntimeError("disk full")

    monkeypatch.setattr(EmployerRepository, "update", fail)
    response = client.put(
        f"{API}/employers/{employer_id}",
        headers=admin_headers,
        json={"full_name": "Renamed", "phone": "0101010101"},
    )

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to update employer"
    with Session(engine) as session:
        employer = EmployerRepository(session).get(employer_id)
        assert employer.phone == "0600000000"
        assert UserRepository(session).get(employer.user_id).full_name == "Employer User"


@pytest.mark.parametrize("field", ["full_name", "email", "poste", "phone", "service_id"])
def test_update_rejects_explicit_nulls(client, admin_headers, employer_id, field):
    response = client.put(f"{API}/employers/{employer_id}", headers=admin_headers, json={field: None})

    assert response.status_code == 422
    assert response.json()["errors"][field] == [f"The {field.replace('_', ' ')} field is required."]
