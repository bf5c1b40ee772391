from sqlmodel import Session

from assetdesk.db.models.employers import Employer
from assetdesk.db.repositories.employers import EmployerRepository
from assetdesk.db.repositories.services import ServiceRepository
from conftest import API


def _service_ids_of_employers(engine):
    with Session(engine) as session:
        return {e.id: e.service_id for e in EmployerRepository(session).list()}


def test_crud_and_search(client, admin_headers):
    created = client.post(f"{API}/services", headers=admin_headers, json={"name": "Comptabilité"})
    assert created.status_code == 201
    service_id = created.json()["service"]["id"]

    duplicate = client.post(f"{API}/services", headers=admin_headers, json={"name": "Comptabilité"})
    assert duplicate.status_code == 422
    assert duplicate.json()["errors"]["name"] == ["The name has already been taken."]

    renamed = client.put(f"{API}/services/{service_id}", headers=admin_headers, json={"name": "Finance"})
    assert renamed.json()["service"]["name"] == "Finance"

    found = client.post(f"{API}/services/search", headers=admin_headers, json={"name": "fin"})
    assert [s["id"] for s in found.json()["services"]] == [service_id]

    assert client.get(f"{API}/services/999", headers=admin_headers).status_code == 404


def test_delete_reassigns_employers_to_another_service(client, engine, factory, admin_headers):
    it = factory.service("IT")
    rh = factory.service("RH")
    a = factory.employer("a@example.com", service_id=it)
    b = factory.employer("b@example.com", service_id=it)

    response = client.delete(f"{API}/services/{it}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Service deleted successfully"
    assert _service_ids_of_employers(engine) == {a: rh, b: rh}
    with Session(engine) as session:
        assert ServiceRepository(session).get(it) is None
        assert EmployerRepository(session).count(Employer.service_id == it) == 0


def test_delete_last_service_creates_default_service(client, engine, factory, admin_headers):
    it = factory.service("IT")
    employer = factory.employer("a@example.com", service_id=it)

    client.delete(f"{API}/services/{it}", headers=admin_headers)

    with Session(engine) as session:
        default = ServiceRepository(session).get_by_name("Default Service")
        assert default is not None
        assert default.id != it
    assert _service_ids_of_employers(engine) == {employer: default.id}


def test_delete_the_only_default_service_still_reassigns(client, engine, factory, admin_headers):
    default_id = factory.service("Default Service")
    employer = factory.employer("a@example.com", service_id=default_id)

    response = client.delete(f"{API}/services/{default_id}", headers=admin_headers)

    assert response.status_code == 200
    with Session(engine) as session:
        services = ServiceRepository(session).list()
    assert [s.name for s in services] == ["Default Service"]
    assert _service_ids_of_employers(engine) == {employer: services[0].id}


def test_delete_without_employers_just_deletes(client, factory, admin_headers):
    empty = factory.service("Vide")

    assert client.delete(f"{API}/services/{empty}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/services/{empty}", headers=admin_headers).status_code == 404


def test_failed_delete_rolls_everything_back(client, engine, factory, admin_headers, monkeypatch):
    it = factory.service("IT")
    rh = factory.service("RH")
    employer = factory.employer("a@example.com", service_id=it)

    def fail(self, entity, *, commit=True):
        raise RuntimeError("disk full")

    monkeypatch.setattr(ServiceRepository, "delete", fail)
    response = client.delete(f"{API}/services/{it}", headers=admin_headers)

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to delete service"
    assert _service_ids_of_employers(engine) == {employer: it}
    with Session(engine) as session:
        assert ServiceRepository(session).get(it) is not None
        assert ServiceRepository(session).get(rh) is not None
