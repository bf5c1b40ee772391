import pytest

from conftest import API, login


@pytest.fixture()
def other_headers(client, factory, service_id):
    factory.employer("other@example.com", service_id=service_id, full_name="Other Employer")
    return login(client, "other@example.com")


def _declare(client, headers, title="Imprimante bloquée"):
    response = client.post(
        f"{API}/declarations",
        headers=headers,
        json={"issue_title": title, "description": "Bourrage papier au 2e étage"},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_employer_creates_a_pending_declaration(client, employer_headers, employer_id):
    response = client.post(
        f"{API}/declarations",
        headers=employer_headers,
        json={"issue_title": "Écran", "description": "Pixel mort", "status": "approved"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Declaration created successfully"
    assert body["data"]["status"] == "pending"
    assert body["data"]["employer_id"] == employer_id
    assert body["data"]["admin_comment"] is None


def test_admin_cannot_create_declarations(client, admin_headers):
    response = client.post(
        f"{API}/declarations",
        headers=admin_headers,
        json={"issue_title": "x", "description": "y"},
    )

    assert response.status_code == 403
    assert response.json()["message"] == "Unauthorized. Only employers can create declarations."


def test_employer_status_change_is_ignored_but_succeeds(client, employer_headers):
    declaration = _declare(client, employer_headers)

    response = client.put(
        f"{API}/declarations/{declaration['id']}",
        headers=employer_headers,
        json={"description": "Toujours bloquée", "status": "approved", "admin_comment": "moi-même"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["admin_comment"] is None
    assert data["description"] == "Toujours bloquée"
    assert response.json()["message"] == "Declaration updated successfully"


def test_admin_update_sets_status_but_not_content(client, admin_headers, employer_headers):
    declaration = _declare(client, employer_headers)

    response = client.put(
        f"{API}/declarations/{declaration['id']}",
        headers=admin_headers,
        json={"status": "resolved", "admin_comment": "Toner changé", "issue_title": "modifié"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Declaration status has been updated to resolved successfully"
    assert body["data"]["status"] == "resolved"
    assert body["data"]["admin_comment"] == "Toner changé"
    assert body["data"]["issue_title"] == "Imprimante bloquée"


def test_admin_update_rejects_an_unknown_status(client, admin_headers, employer_headers):
    declaration = _declare(client, employer_headers)

    response = client.put(f"{API}/declarations/{declaration['id']}", headers=admin_headers, json={"status": "closed"})

    assert response.status_code == 422
    assert "status" in response.json()["errors"]


def test_process_approves_with_dynamic_message(client, admin_headers, employer_headers):
    declaration = _declare(client, employer_headers)

    response = client.post(
        f"{API}/declarations/{declaration['id']}/process",
        headers=admin_headers,
        json={"status": "approved", "admin_comment": "Intervention prévue"},
    )

    assert response.status_code == 200
    body = response.json()
    assert "approved successfully" in body["message"]
    assert body["data"]["status"] == "approved"
    assert body["data"]["admin_comment"] == "Intervention prévue"


def test_process_refuses_resolved(client, admin_headers, employer_headers):
    declaration = _declare(client, employer_headers)

    response = client.post(
        f"{API}/declarations/{declaration['id']}/process",
        headers=admin_headers,
        json={"status": "resolved"},
    )

    assert response.status_code == 422
    shown = client.get(f"{API}/declarations/{declaration['id']}", headers=admin_headers)
    assert shown.json()["data"]["status"] == "pending"


def test_process_unknown_declaration_is_404(client, admin_headers):
    response = client.post(f"{API}/declarations/999/process", headers=admin_headers, json={"status": "approved"})

    assert response.status_code == 404


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_other_employers_declaration_is_403_and_missing_one_is_404(
    client, employer_headers, other_headers, method
):
    declaration = _declare(client, employer_headers)
    kwargs = {"json": {"description": "pirate"}} if method == "put" else {}

    foreign = client.request(method.upper(), f"{API}/declarations/{declaration['id']}", headers=other_headers, **kwargs)
    missing = client.request(method.upper(), f"{API}/declarations/999", headers=other_headers, **kwargs)

    assert foreign.status_code == 403
    assert foreign.json()["message"].startswith("Unauthorized. You can only")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Declaration not found"


def test_owner_and_admin_can_delete(client, admin_headers, employer_headers):
    first = _declare(client, employer_headers, "un")
    second = _declare(client, employer_headers, "deux")

    assert client.delete(f"{API}/declarations/{first['id']}", headers=employer_headers).status_code == 200
    response = client.delete(f"{API}/declarations/{second['id']}", headers=admin_headers)
    assert response.json()["message"] == "Declaration deleted successfully"
    assert client.get(f"{API}/declarations", headers=admin_headers).json()["data"] == []


def test_index_is_scoped_to_the_caller(client, admin_headers, employer_headers, other_headers):
    mine = _declare(client, employer_headers, "mine")
    _declare(client, other_headers, "theirs")

    own = client.get(f"{API}/declarations", headers=employer_headers).json()["data"]
    everything = client.get(f"{API}/declarations", headers=admin_headers).json()["data"]

    assert [d["id"] for d in own] == [mine["id"]]
    assert len(everything) == 2
    assert {d["employer_name"] for d in everything} == {"Employer User", "Other Employer"}


def test_all_declarations_filter_and_counts(client, admin_headers, employer_headers):
    pending = _declare(client, employer_headers, "p")
    approved = _declare(client, employer_headers, "a")
    rejected = _declare(client, employer_headers, "r")
    client.post(f"{API}/declarations/{approved['id']}/process", headers=admin_headers, json={"status": "approved"})
    client.post(f"{API}/declarations/{rejected['id']}/process", headers=admin_headers, json={"status": "rejected"})

    filtered = client.get(f"{API}/all-declarations", headers=admin_headers, params={"status": "pending"}).json()

    assert [d["id"] for d in filtered["data"]] == [pending["id"]]
    assert [d["id"] for d in filtered["grouped"]["pending"]] == [pending["id"]]
    assert filtered["grouped"]["approved"] == []
    counts = filtered["counts"]
    assert counts["total"] == counts["pending"] + counts["approved"] + counts["rejected"] == 1

    unfiltered = client.get(f"{API}/all-declarations", headers=admin_headers).json()
    assert unfiltered["counts"] == {"pending": 1, "approved": 1, "rejected": 1, "total": 3}


def test_resolved_is_not_a_valid_list_filter(client, admin_headers, employer_headers):
    declaration = _declare(client, employer_headers)
    _declare(client, employer_headers, "autre")
    client.put(f"{API}/declarations/{declaration['id']}", headers=admin_headers, json={"status": "resolved"})

    body = client.get(f"{API}/all-declarations", headers=admin_headers, params={"status": "resolved"}).json()

    # Filtre ignoré : tout est renvoyé, les résolues n'apparaissent dans aucun groupe nommé
    assert body["counts"]["total"] == 2
    assert body["counts"]["pending"] == 1
    assert len(body["grouped"]["all"]) == 2


def test_my_declarations_for_employer_and_admin(client, admin_headers, employer_headers, other_headers):
    _declare(client, employer_headers, "mine")
    _declare(client, other_headers, "theirs")

    own = client.get(f"{API}/my-declarations", headers=employer_headers).json()
    everything = client.get(f"{API}/my-declarations", headers=admin_headers).json()

    assert own["counts"]["total"] == 1
    assert everything["counts"]["total"] == 2


def test_declarations_by_employer_id(client, admin_headers, employer_headers, employer_id):
    _declare(client, employer_headers)

    response = client.get(f"{API}/employers/{employer_id}/declarations", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["counts"]["total"] == 1

    assert client.get(f"{API}/employers/999/declarations", headers=admin_headers).status_code == 404


def test_fields_outside_the_callers_role_are_ignored_whatever_their_type(client, admin_headers, employer_headers):
    declaration = _declare(client, employer_headers)
    url = f"{API}/declarations/{declaration['id']}"

    by_employer = client.put(
        url, headers=employer_headers, json={"issue_title": "Nouveau titre", "status": 5, "admin_comment": {"x": 1}}
    )
    by_admin = client.put(url, headers=admin_headers, json={"status": "approved", "issue_title": 123})

    assert by_employer.status_code == 200
    assert by_employer.json()["data"]["issue_title"] == "Nouveau titre"
    assert by_employer.json()["data"]["status"] == "pending"
    assert by_admin.status_code == 200
    assert by_admin.json()["data"]["status"] == "approved"
    assert by_admin.json()["data"]["issue_title"] == "Nouveau titre"


def test_owned_fields_are_still_type_checked(client, admin_headers, employer_headers):
    declaration = _declare(client, employer_headers)
    url = f"{API}/declarations/{declaration['id']}"

    assert client.put(url, headers=employer_headers, json={"issue_title": 123}).status_code == 422
    assert client.put(url, headers=admin_headers, json={"admin_comment": ["x"]}).status_code == 422


@pytest.mark.parametrize("declaration_id", [999, 0])
def test_process_reports_a_missing_declaration_before_checking_the_payload(client, admin_headers, declaration_id):
    response = client.post(f"{API}/declarations/{declaration_id}/process", headers=admin_headers, json={})

    assert response.status_code == 404


def test_process_requires_a_status(client, admin_headers, employer_headers):
    declaration = _declare(client, employer_headers)

    response = client.post(f"{API}/declarations/{declaration['id']}/process", headers=admin_headers, json={})

    assert response.status_code == 422
    assert response.json()["errors"]["status"] == ["The status field is required."]


def test_declaration_zero_is_a_plain_404(client, employer_headers):
    assert client.get(f"{API}/declarations/0", headers=employer_headers).status_code == 404
