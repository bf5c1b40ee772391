from datetime import datetime, timezone

import pytest

from conftest import API

EQUIPMENT = {
    "name": "PC-Compta-01",
    "type": "Laptop",
    "nsc": "NSC-001",
    "status": "active",
    "ip_address": "192.168.1.20",
    "serial_number": "SN-0001",
    "processor": "i5",
    "brand": "Dell",
    "office_version": "2021",
    "label": "Compta",
}


@pytest.fixture()
def equipment(client, admin_headers, employer_id):
    response = client.post(f"{API}/equipments", headers=admin_headers, json={**EQUIPMENT, "employer_id": employer_id})
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture()
def intervention(client, admin_headers, equipment):
    response = client.post(
        f"{API}/interventions",
        headers=admin_headers,
        json={
            "date": "2025-03-10T09:30:00",
            "technician_name": "Karim",
            "note": "Remplacement du disque",
            "equipment_id": equipment["id"],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_equipment_crud(client, admin_headers, equipment):
    assert equipment["backup_enabled"] is False
    assert equipment["status"] == "active"

    updated = client.put(
        f"{API}/equipments/{equipment['id']}",
        headers=admin_headers,
        json={"status": "on_hold", "backup_enabled": True},
    )
    assert updated.status_code == 200
    assert updated.json()["message"] == "Equipment updated successfully"
    assert updated.json()["data"]["status"] == "on_hold"
    assert updated.json()["data"]["name"] == "PC-Compta-01"

    shown = client.get(f"{API}/equipments/{equipment['id']}", headers=admin_headers)
    assert shown.json()["data"]["backup_enabled"] is True

    deleted = client.delete(f"{API}/equipments/{equipment['id']}", headers=admin_headers)
    assert deleted.json()["message"] == "Equipment deleted successfully"
    assert client.get(f"{API}/equipments/{equipment['id']}", headers=admin_headers).status_code == 404


def test_equipment_list_filters_by_status(client, admin_headers, employer_id, equipment):
    client.post(
        f"{API}/equipments",
        headers=admin_headers,
        json={**EQUIPMENT, "name": "PC-2", "status": "in_progress", "employer_id": employer_id},
    )

    everything = client.get(f"{API}/equipments", headers=admin_headers).json()["data"]
    in_progress = client.get(f"{API}/equipments", headers=admin_headers, params={"status": "in_progress"}).json()["data"]

    assert len(everything) == 2
    assert [e["name"] for e in in_progress] == ["PC-2"]
    assert client.get(f"{API}/equipments", headers=admin_headers, params={"status": "broken"}).status_code == 422


def test_equipment_requires_an_existing_employer(client, admin_headers):
    response = client.post(f"{API}/equipments", headers=admin_headers, json={**EQUIPMENT, "employer_id": 999})

    assert response.status_code == 422
    assert response.json()["errors"]["employer_id"] == ["The selected employer id is invalid."]


def test_invalid_equipment_status_is_rejected(client, admin_headers, employer_id):
    response = client.post(
        f"{API}/equipments",
        headers=admin_headers,
        json={**EQUIPMENT, "status": "broken", "employer_id": employer_id},
    )

    assert response.status_code == 422
    assert "status" in response.json()["errors"]


def test_interventions_list_by_equipment(client, admin_headers, intervention, equipment):
    response = client.get(f"{API}/interventions", headers=admin_headers, params={"equipment_id": equipment["id"]})
    other = client.get(f"{API}/interventions", headers=admin_headers, params={"equipment_id": 999})

    assert [i["id"] for i in response.json()["data"]] == [intervention["id"]]
    assert other.json()["data"] == []


def test_maintenance_nullable_fields_can_be_cleared(client, admin_headers, intervention):
    created = client.post(
        f"{API}/maintenances",
        headers=admin_headers,
        json={
            "intervention_id": intervention["id"],
            "maintenance_type": "preventive",
            "scheduled_date": "2025-04-01",
            "performed_date": "2025-04-02",
            "observations": "RAS",
        },
    )
    assert created.status_code == 201
    maintenance_id = created.json()["data"]["id"]

    updated = client.put(
        f"{API}/maintenances/{maintenance_id}",
        headers=admin_headers,
        json={"performed_date": None, "observations": None},
    )

    data = updated.json()["data"]
    assert data["performed_date"] is None
    assert data["observations"] is None
    assert data["scheduled_date"] == "2025-04-01"


def test_maintenance_requires_an_existing_intervention(client, admin_headers):
    response = client.post(
        f"{API}/maintenances",
        headers=admin_headers,
        json={"intervention_id": 999, "maintenance_type": "corrective", "scheduled_date": "2025-04-01"},
    )

    assert response.status_code == 422
    assert "intervention_id" in response.json()["errors"]


def test_license_crud(client, admin_headers, equipment):
    created = client.post(
        f"{API}/licenses",
        headers=admin_headers,
        json={
            "name": "Office 365",
            "type": "subscription",
            "key": "XXXX-YYYY",
            "expiration_date": "2026-01-31",
            "equipment_id": equipment["id"],
        },
    )
    assert created.status_code == 201
    license_id = created.json()["data"]["id"]

    updated = client.put(f"{API}/licenses/{license_id}", headers=admin_headers, json={"expiration_date": "2027-01-31"})
    assert updated.json()["data"]["expiration_date"] == "2027-01-31"

    assert client.delete(f"{API}/licenses/{license_id}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/licenses/{license_id}", headers=admin_headers).status_code == 404


def test_deleting_equipment_cascades(client, admin_headers, equipment, intervention):
    maintenance = client.post(
        f"{API}/maintenances",
        headers=admin_headers,
        json={"intervention_id": intervention["id"], "maintenance_type": "preventive", "scheduled_date": "2025-04-01"},
    ).json()["data"]
    license_ = client.post(
        f"{API}/licenses",
        headers=admin_headers,
        json={
            "name": "Antivirus",
            "type": "annual",
            "key": "AV-1",
            "expiration_date": "2026-06-30",
            "equipment_id": equipment["id"],
        },
    ).json()["data"]

    client.delete(f"{API}/equipments/{equipment['id']}", headers=admin_headers)

    assert client.get(f"{API}/interventions/{intervention['id']}", headers=admin_headers).status_code == 404
    assert client.get(f"{API}/maintenances/{maintenance['id']}", headers=admin_headers).status_code == 404
    assert client.get(f"{API}/licenses/{license_['id']}", headers=admin_headers).status_code == 404


@pytest.mark.parametrize(
    "sent, expected",
    [
        ("2025-03-10T09:30:00", datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)),
        ("2025-03-10T09:30:00+02:00", datetime(2025, 3, 10, 7, 30, tzinfo=timezone.utc)),
    ],
)
def test_intervention_dates_are_stored_in_utc(client, admin_headers, equipment, sent, expected):
    created = client.post(
        f"{API}/interventions",
        headers=admin_headers,
        json={"date": sent, "technician_name": "Karim", "note": "Diagnostic", "equipment_id": equipment["id"]},
    )
    assert created.status_code == 201, created.text

    shown = client.get(f"{API}/interventions/{created.json()['data']['id']}", headers=admin_headers)

    assert datetime.fromisoformat(shown.json()["data"]["date"].replace("Z", "+00:00")) == expected


def test_lists_carry_the_owner_and_equipment_names(client, admin_headers, equipment, intervention):
    equipments = client.get(f"{API}/equipments", headers=admin_headers).json()["data"]
    interventions = client.get(f"{API}/interventions", headers=admin_headers).json()["data"]

    assert equipments[0]["employer_name"] == "Employer User"
    assert interventions[0]["equipment_name"] == "PC-Compta-01"


def test_null_is_rejected_for_required_equipment_fields(client, admin_headers, equipment):
    response = client.put(f"{API}/equipments/{equipment['id']}", headers=admin_headers, json={"brand": None})

    assert response.status_code == 422
    assert response.json()["errors"]["brand"] == ["The brand field is required."]
