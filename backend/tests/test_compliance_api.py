"""Document compliance routes (today = 2025-03-20, 30-day warning window)."""


def test_employee_rollups_and_summary(client, seeded):
    data = client.get("/api/facilities/fac-north/employees/compliance").json()["data"]

    statuses = {e["id"]: e["complianceStatus"] for e in data["employees"]}
    assert statuses == {
        "emp-ana": "EXPIRING_SOON",
        "emp-ben": "EXPIRED",
        "emp-cy": "NO_ITEMS",
    }
    assert [e["lastName"] for e in data["employees"]] == ["Alvarez", "Brooks", "Chen"]
    assert data["summary"] == {
        "compliant": 0,
        "expiringSoon": 1,
        "nonCompliant": 1,
        "notApplicable": 1,
    }


def test_inactive_employees_are_hidden_by_default(client, seeded, session):
    from bhrf.models.facility import Employee

    session.get(Employee, "emp-ben").is_active = False
    session.commit()

    ids = [e["id"] for e in client.get("/api/facilities/fac-north/employees/compliance").json()["data"]["employees"]]
    assert "emp-ben" not in ids

    resp = client.get(
        "/api/facilities/fac-north/employees/compliance", params={"includeInactive": "true"}
    )
    assert "emp-ben" in [e["id"] for e in resp.json()["data"]["employees"]]


def test_bhp_facility_rollup_is_worst_of_staff_documents(client, seeded):
    data = client.get("/api/bhp/bhp-1/facilities/compliance").json()["data"]

    by_id = {f["id"]: f for f in data}
    assert by_id["fac-north"]["complianceStatus"] == "EXPIRED"
    assert by_id["fac-north"]["employeeCount"] == 3
    assert by_id["fac-south"]["complianceStatus"] == "VALID"
    assert client.get("/api/bhp/nobody/facilities/compliance").json()["data"] == []


def test_credential_statuses(client, seeded):
    data = client.get("/api/bhp/bhp-1/credentials/compliance").json()["data"]

    assert data["complianceStatus"] == "EXPIRED"
    statuses = {c["name"]: c["status"] for c in data["credentials"]}
    assert statuses == {"LPC License": "EXPIRED", "CPR": "VALID"}


def test_credentials_for_unknown_bhp_are_not_applicable(client, seeded):
    data = client.get("/api/bhp/nobody/credentials/compliance").json()["data"]
    assert data == {"credentials": [], "complianceStatus": "NO_ITEMS"}


def test_add_employee_document_classifies_on_write(client, seeded):
    resp = client.post(
        "/api/employees/emp-cy/documents",
        json={"name": "First Aid", "expiresAt": "2025-04-01"},
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["status"] == "EXPIRING_SOON"

    data = client.get("/api/facilities/fac-north/employees/compliance").json()["data"]
    cy = next(e for e in data["employees"] if e["id"] == "emp-cy")
    assert cy["complianceStatus"] == "EXPIRING_SOON"
    assert cy["documentCount"] == 1


def test_add_document_without_expiration(client, seeded):
    resp = client.post(
        "/api/employees/emp-cy/documents",
        json={"name": "Diploma", "noExpiration": True},
    )
    assert resp.status_code == 201
    body = resp.json()["data"]
    assert body["status"] == "VALID"
    assert body["expiresAt"] is None


def test_add_document_requires_expiration_date(client, seeded):
    resp = client.post("/api/employees/emp-cy/documents", json={"name": "First Aid"})
    assert resp.status_code == 422


def test_add_document_for_unknown_employee(client, seeded):
    resp = client.post(
        "/api/employees/nobody/documents",
        json={"name": "First Aid", "expiresAt": "2025-04-01"},
    )
    assert resp.status_code == 404


def test_facility_summary_health(client, seeded):
    data = client.get("/api/facilities/fac-north/compliance/summary").json()["data"]

    assert data["facilityName"] == "North House"
    assert data["documents"] == {
        "total": 2,
        "expiringSoon": 1,
        "expired": 0,
        "complianceStatus": "EXPIRING_SOON",
    }
    # Fire inspection expiring plus four admin tasks with nothing submitted
    assert data["adminTasks"]["issueCount"] == 4
    assert data["issueCount"] == 5
    assert data["health"] == "danger"


def test_facility_summary_unknown_facility(client, seeded):
    assert client.get("/api/facilities/nope/compliance/summary").status_code == 404


def test_health_endpoint(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["service"] == "bhrf-api"


def test_integrity_errors_map_to_http_status():
    from sqlalchemy.exc import IntegrityError

    from bhrf.schemas.common import handle_integrity_error

    def status_for(message):
        return handle_integrity_error(IntegrityError("INSERT", {}, Exception(message))).status_code

    assert status_for("UNIQUE constraint failed: EmployeeDocument.id") == 409
    assert status_for("FOREIGN KEY constraint failed") == 404
    assert status_for("NOT NULL constraint failed: EmployeeDocument.name") == 500
