from datetime import date, timedelta


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_list_and_filter_devices(client):
    assert len(client.get("/api/devices/").json()) == 2

    found = client.get("/api/devices/", params={"search": "vent"}).json()
    assert [d["type"] for d in found] == ["Ventilator"]

    maintenance = client.get("/api/devices/", params={"status": "Maintenance"}).json()
    assert [d["deviceId"] for d in maintenance] == ["MD-002"]


def test_create_device(client):
    payload = {
        "deviceId": "MD-010",
        "type": "Infusion Pump",
        "model": "FlowSafe 3",
        "serialNumber": "IP010101",
        "facilityId": "FAC-001",
        "facilityName": "City General Hospital",
        "location": "Ward 3",
        "manufacturer": "MedTech Solutions",
        "batteryLevel": 64,
    }
    response = client.post("/api/devices/", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["deviceId"] == "MD-010"
    assert body["batteryLevel"] == 64
    assert len(client.get("/api/devices/").json()) == 3


def test_create_device_form_errors(client):
    response = client.post("/api/devices/", json={"deviceId": "bad id"})

    assert response.status_code == 422
    errors = response.json()["errors"]
    assert "device_id" in errors
    assert "serial_number" in errors
    assert len(client.get("/api/devices/").json()) == 2


def test_qr_lookup_and_missing_device(client):
    assert client.get("/api/devices/lookup/MD-001").json()["model"] == "VentMax Pro"
    assert client.get("/api/devices/lookup/MD-404").status_code == 404
    assert client.get("/api/devices/does-not-exist").status_code == 404


def test_device_status_patch(client, store):
    device_id = store.state.devices[0].id
    response = client.patch(f"/api/devices/{device_id}/status", json={"status": "Offline"})
    assert response.json()["status"] == "Offline"

    assert client.patch(f"/api/devices/{device_id}/battery", json={"batteryLevel": 101}).status_code == 422


def test_installation_flow(client):
    created = client.post(
        "/api/installations/",
        json={
            "deviceId": "MD-002",
            "installationDate": "2025-02-10",
            "engineerId": "ENG-001",
            "engineerName": "John Smith",
        },
    )
    assert created.status_code == 201
    installation_id = created.json()["id"]

    for item in [
        "unboxingPhotos",
        "deviceInspection",
        "powerConnection",
        "networkSetup",
        "calibration",
        "userTraining",
        "documentation",
        "finalTesting",
    ]:
        body = client.patch(
            f"/api/installations/{installation_id}/checklist", json={"item": item, "value": True}
        ).json()

    assert body["completionPercentage"] == 89
    assert body["status"] == "In Progress"

    body = client.patch(
        f"/api/installations/{installation_id}/training",
        json={"trainingCompleted": True, "trainedPersonnel": ["Nurse Mary Wilson"]},
    ).json()
    assert body["status"] == "Completed"
    assert body["completionDate"] is not None

    bad_item = client.patch(f"/api/installations/{installation_id}/checklist", json={"item": "paint", "value": True})
    assert bad_item.status_code == 400


def test_installation_date_with_time_is_a_form_error(client):
    response = client.post(
        "/api/installations/",
        json={
            "deviceId": "MD-002",
            "installationDate": "2025-02-10T09:30:00Z",
            "engineerId": "ENG-001",
            "engineerName": "John Smith",
        },
    )

    assert response.status_code == 422
    assert response.json()["errors"] == {"installation_date": "Invalid installation date"}


def test_service_visit_sign_off(client):
    created = client.post(
        "/api/service-visits/",
        json={
            "deviceId": "MD-001",
            "visitDate": "2025-03-01",
            "engineerId": "ENG-002",
            "engineerName": "Mike Johnson",
            "purpose": "Calibration",
            "description": "Quarterly calibration",
        },
    ).json()
    visit_id = created["id"]
    assert created["status"] == "Scheduled"

    edited = client.put(f"/api/service-visits/{visit_id}", json={"status": "Completed"}).json()
    assert edited["status"] == "Scheduled"

    client.post(f"/api/service-visits/{visit_id}/work", json={"work": "Flow sensor calibration"})
    done = client.post(
        f"/api/service-visits/{visit_id}/complete", json={"customerSignature": "Dr. Sarah Johnson"}
    ).json()
    assert done["status"] == "Completed"
    assert done["workPerformed"] == ["Flow sensor calibration"]


def test_contract_renewal(client, store):
    contract = store.state.contracts[1]
    new_end = (date.today() + timedelta(days=400)).isoformat()

    body = client.post(f"/api/contracts/{contract.id}/renew", json={"newEndDate": new_end}).json()

    assert body["status"] == "Active"
    assert body["renewalNotified"] is False
    assert body["endDate"] == new_end

    detail = client.get(f"/api/contracts/{contract.id}").json()
    assert detail["daysUntilExpiry"] == 400


def test_contract_refresh_and_filter(client):
    client.post("/api/contracts/refresh-statuses", params={"today": "2024-07-20"})
    expiring = client.get("/api/contracts/", params={"status": "Expiring Soon"}).json()
    assert [c["contractNumber"] for c in expiring] == ["CMC-2024-002"]


def test_photo_log_upload_and_alert(client):
    created = client.post(
        "/api/photo-logs/",
        json={
            "filename": "leak.jpg",
            "mimeType": "image/jpeg",
            "fileSize": 4096,
            "deviceId": "MD-002",
            "isAlert": True,
            "alertLevel": "Critical",
        },
    )
    assert created.status_code == 201
    photos = client.get("/api/photo-logs/").json()
    assert photos[0]["filename"] == "leak.jpg"

    rejected = client.post("/api/photo-logs/", json={"filename": "doc.pdf", "mimeType": "application/pdf"})
    assert rejected.status_code == 422
    assert "file" in rejected.json()["errors"]

    critical = client.get("/api/photo-logs/", params={"alert_level": "Critical"}).json()
    assert [p["filename"] for p in critical] == ["leak.jpg"]


def test_create_facility(client):
    response = client.post(
        "/api/facilities/",
        json={
            "name": "Lakeside Clinic",
            "type": "Clinic",
            "address": {"street": "9 Harbor Road", "city": "Lakeside", "zipCode": "24680"},
        },
    )
    assert response.status_code == 201
    assert response.json()["id"] == "FAC-003"
    assert client.get("/api/facilities/FAC-003").json()["deviceCount"] == 0


def test_export_devices_csv(client):
    response = client.get("/api/export/devices")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert f"devices_export_{date.today().isoformat()}.csv" in response.headers["content-disposition"]
    assert response.text.split("\n")[0].startswith('"Device ID","Type"')


def test_export_empty_and_unknown(client, store):
    ids = [photo.id for photo in store.state.photo_logs]
    client.post("/api/photo-logs/bulk-delete", json={"photoIds": ids})

    empty = client.get("/api/export/photo-logs")
    assert empty.status_code == 400
    assert empty.json()["detail"] == "No data to export"

    assert client.get("/api/export/patients").status_code == 404


def test_dashboard(client):
    body = client.get("/api/dashboard/").json()

    assert body["devices"]["total"] == 2
    assert body["devices"]["average_battery_level"] == 65
    assert body["service_visits"]["pending"] == 1
    assert body["alert_photos"] == 1
    assert len(body["recent_activities"]) == 3
    assert body["recent_activities"][0]["date"] == "2024-01-15"
