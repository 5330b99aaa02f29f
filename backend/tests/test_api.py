from datetime import date, timedelta
from io import BytesIO

from fastapi.testclient import TestClient
from openpyxl import load_workbook
from sqlalchemy.exc import OperationalError

from crud.memory_storage import MemoryStorage
from dependencies import get_storage
from main import app
from models.users import UserRole
from schemas.animals import AnimalCreate
from schemas.farms import FarmCreate
from schemas.users import UserCreate
from utils.auth_utils import create_access_token, hash_password


def create_animal(client, headers, farm_id, tag_number="TAG-001", name="Daisy"):
    response = client.post("/animals/", json={
        "farmId": farm_id,
        "tagNumber": tag_number,
        "name": name,
        "species": "cattle",
        "breed": "Friesian",
    }, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestAuth:

    def test_register_login_and_me(self, client):
        response = client.post("/auth/register", json={
            "username": "kamau",
            "password": "s3cret",
            "fullName": "Peter Kamau",
            "role": "farmer",
            "email": "kamau@example.com",
        })
        assert response.status_code == 201
        assert response.json()["message"] == "User created successfully"

        response = client.post("/auth/login", json={"username": "kamau", "password": "s3cret"})
        assert response.status_code == 200
        body = response.json()
        assert body["user"]["username"] == "kamau"
        assert body["user"]["role"] == "farmer"
        assert "password" not in body["user"]

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
        assert me.status_code == 200
        assert me.json()["fullName"] == "Peter Kamau"
        assert "password" not in me.json()

    def test_register_rejects_duplicates_and_admin_role(self, client):
        user = {"username": "dup", "password": "x", "fullName": "Dup", "role": "inspector", "email": "dup@example.com"}
        assert client.post("/auth/register", json=user).status_code == 201

        response = client.post("/auth/register", json=user)
        assert response.status_code == 400
        assert response.json()["detail"] == "Username already exists"

        response = client.post("/auth/register", json={**user, "username": "other"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Email already exists"

        response = client.post("/auth/register", json={**user, "username": "boss", "email": "boss@example.com", "role": "admin"})
        assert response.status_code == 422

    def test_bad_credentials(self, client, make_user):
        user, _ = make_user(UserRole.FARMER, password="right")
        response = client.post("/auth/login", json={"username": user.username, "password": "wrong"})
        assert response.status_code == 401
        assert client.post("/auth/login", json={"username": "ghost", "password": "x"}).status_code == 401

    def test_protected_routes_need_a_valid_token(self, client):
        assert client.get("/treatments/").status_code == 401
        assert client.get("/dashboard/stats", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


class TestFarmsAndAnimals:

    def test_create_farm_and_animals_updates_count(self, client, farmer_headers):
        response = client.post("/farms/", json={
            "name": "Sunrise Farm",
            "location": "Eldoret",
            "ownerName": "A. Kiprop",
            "registrationNumber": "REG-555",
            "contactEmail": "sunrise@example.com",
            "contactPhone": "0722000000",
        }, headers=farmer_headers)
        assert response.status_code == 201
        farm = response.json()
        assert farm["totalAnimals"] == 0

        create_animal(client, farmer_headers, farm["id"], "TAG-1")
        create_animal(client, farmer_headers, farm["id"], "TAG-2")

        farm = client.get(f"/farms/{farm['id']}", headers=farmer_headers).json()
        assert farm["totalAnimals"] == 2
        animals = client.get("/animals/", params={"farm_id": farm["id"]}, headers=farmer_headers).json()
        assert {a["tagNumber"] for a in animals} == {"TAG-1", "TAG-2"}
        assert all(a["status"] == "active" for a in animals)

    def test_duplicates_and_missing(self, client, farmer_headers, farm):
        create_animal(client, farmer_headers, farm.id, "TAG-1")
        response = client.post("/animals/", json={
            "farmId": farm.id, "tagNumber": "TAG-1", "name": "Again", "species": "goat",
        }, headers=farmer_headers)
        assert response.status_code == 400

        response = client.post("/animals/", json={
            "farmId": "no-such-farm", "tagNumber": "TAG-2", "name": "Lost", "species": "goat",
        }, headers=farmer_headers)
        assert response.status_code == 404

        response = client.post("/animals/", json={
            "farmId": farm.id, "tagNumber": "TAG-3", "name": "Odd", "species": "llama",
        }, headers=farmer_headers)
        assert response.status_code == 422

        duplicate_farm = {
            "name": "Copy", "location": "X", "ownerName": "Y", "registrationNumber": farm.registration_number,
            "contactEmail": "c@example.com", "contactPhone": "1",
        }
        assert client.post("/farms/", json=duplicate_farm, headers=farmer_headers).status_code == 400
        assert client.get("/farms/missing", headers=farmer_headers).status_code == 404
        assert client.get("/animals/missing", headers=farmer_headers).status_code == 404


class TestTreatments:

    def test_create_classifies_from_mrl_level(self, client, farmer_headers, farm, treatment_payload):
        animal = create_animal(client, farmer_headers, farm.id)
        expected = [("30", "compliant"), ("49.99", "compliant"), ("50", "warning"),
                    ("99.99", "warning"), ("100", "violation"), (0, "compliant")]
        for level, status in expected:
            response = client.post("/treatments/", json=treatment_payload(farm.id, animal["id"], mrlLevel=level),
                                   headers=farmer_headers)
            assert response.status_code == 201, response.text
            assert response.json()["complianceStatus"] == status

    def test_supplied_status_used_without_measurement(self, client, farmer_headers, farm, treatment_payload):
        body = treatment_payload(farm.id, "animal-1", complianceStatus="warning")
        response = client.post("/treatments/", json=body, headers=farmer_headers)
        assert response.json()["complianceStatus"] == "warning"
        assert response.json()["mrlLevel"] is None

        response = client.post("/treatments/", json=treatment_payload(farm.id, "animal-1"), headers=farmer_headers)
        assert response.json()["complianceStatus"] == "pending"

    def test_unreadable_mrl_level_falls_back_to_supplied_status(self, client, farmer_headers, farm,
                                                               treatment_payload):
        for level, supplied, expected in (("lots", "pending", "pending"), ("", "compliant", "compliant"),
                                          ("   ", None, "pending"), ("NaN", "warning", "warning")):
            overrides = {"mrlLevel": level}
            if supplied:
                overrides["complianceStatus"] = supplied
            response = client.post("/treatments/", json=treatment_payload(farm.id, "animal-1", **overrides),
                                   headers=farmer_headers)
            assert response.status_code == 201, response.text
            assert response.json()["complianceStatus"] == expected
            assert response.json()["mrlLevel"] is None

    def test_invalid_payloads(self, client, farmer_headers, farm, treatment_payload):
        for override in ({"mrlLevel": -5}, {"mrlLevel": "-0.5"}, {"complianceStatus": "unknown"},
                         {"administeredDate": "15/03/2025"}):
            response = client.post("/treatments/", json=treatment_payload(farm.id, "a", **override),
                                   headers=farmer_headers)
            assert response.status_code == 422

    def test_withdrawal_end_date_and_recorded_by(self, client, make_user, farm, treatment_payload):
        user, headers = make_user(UserRole.INSPECTOR)
        body = treatment_payload(farm.id, "animal-1", administeredDate="2025-01-10", withdrawalPeriodDays=21)
        record = client.post("/treatments/", json=body, headers=headers).json()
        assert record["withdrawalEndDate"] == "2025-01-31"
        assert record["recordedBy"] == user.id

        fetched = client.get(f"/treatments/{record['id']}", headers=headers)
        assert fetched.json() == record
        assert client.get("/treatments/missing", headers=headers).status_code == 404

    def test_list_filters(self, client, farmer_headers, farm, treatment_payload):
        client.post("/treatments/", json=treatment_payload(farm.id, "a1", mrlLevel=10), headers=farmer_headers)
        client.post("/treatments/", json=treatment_payload(farm.id, "a2", mrlLevel=120), headers=farmer_headers)
        client.post("/treatments/", json=treatment_payload("other-farm", "a3"), headers=farmer_headers)

        assert len(client.get("/treatments/", headers=farmer_headers).json()) == 3
        assert len(client.get("/treatments/", params={"farm_id": farm.id}, headers=farmer_headers).json()) == 2
        by_status = client.get("/treatments/", params={"status": "violation"}, headers=farmer_headers).json()
        assert [t["animalId"] for t in by_status] == ["a2"]
        by_animal = client.get("/treatments/", params={"animal_id": "a3"}, headers=farmer_headers).json()
        assert len(by_animal) == 1

    def test_animal_treatment_history(self, client, farmer_headers, farm, treatment_payload):
        animal = create_animal(client, farmer_headers, farm.id)
        client.post("/treatments/", json=treatment_payload(farm.id, animal["id"]), headers=farmer_headers)
        history = client.get(f"/animals/{animal['id']}/treatments", headers=farmer_headers)
        assert history.status_code == 200
        assert len(history.json()) == 1

    def test_farmer_with_farm_only_sees_own_records(self, client, make_user, farm, treatment_payload):
        _, own_headers = make_user(UserRole.FARMER, farm_id=farm.id)
        _, inspector_headers = make_user(UserRole.INSPECTOR)
        client.post("/treatments/", json=treatment_payload(farm.id, "a1"), headers=inspector_headers)
        client.post("/treatments/", json=treatment_payload("elsewhere", "a2"), headers=inspector_headers)

        own = client.get("/treatments/", params={"farm_id": "elsewhere"}, headers=own_headers).json()
        assert [t["farmId"] for t in own] == [farm.id]
        assert len(client.get("/treatments/", headers=inspector_headers).json()) == 2


class TestExport:

    def test_csv_export(self, client, farmer_headers, farm, treatment_payload):
        client.post("/treatments/", json=treatment_payload(farm.id, "a1", mrlLevel="75.5"), headers=farmer_headers)
        response = client.get("/treatments/export", headers=farmer_headers)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "mrl-treatment-records-" in response.headers["content-disposition"]
        lines = response.text.strip().splitlines()
        assert lines[0].startswith('"Date","Medicine Name","Antimicrobial Type"')
        assert '"75.5"' in lines[1]
        assert '"warning"' in lines[1]

    def test_xlsx_export(self, client, farmer_headers, farm, treatment_payload):
        client.post("/treatments/", json=treatment_payload(farm.id, "a1"), headers=farmer_headers)
        response = client.get("/treatments/export", params={"format": "xlsx"}, headers=farmer_headers)
        assert response.status_code == 200
        ws = load_workbook(BytesIO(response.content)).active
        assert ws["A1"].value == "Date"
        assert ws["A1"].font.bold
        assert ws["J2"].value == "pending"

    def test_empty_export_and_bad_format(self, client, farmer_headers):
        assert client.get("/treatments/export", headers=farmer_headers).status_code == 404
        assert client.get("/treatments/export", params={"format": "pdf"}, headers=farmer_headers).status_code == 422


class TestDashboard:

    def test_empty_dashboard(self, client, farmer_headers):
        stats = client.get("/dashboard/stats", headers=farmer_headers).json()
        assert stats == {
            "totalAnimals": 0,
            "activeTreatments": 0,
            "complianceRate": 100,
            "pendingReports": 0,
            "violationCount": 0,
            "warningCount": 0,
        }
        trends = client.get("/dashboard/trends", headers=farmer_headers).json()
        assert len(trends) == 6
        assert all(t["treatments"] == 0 for t in trends)
        assert client.get("/dashboard/compliance", headers=farmer_headers).json() == []

    def test_mixed_measurements(self, client, farmer_headers, farm, treatment_payload):
        animal = create_animal(client, farmer_headers, farm.id)
        for extra in ({"mrlLevel": 30}, {"mrlLevel": 75}, {"mrlLevel": 150},
                      {"mrlLevel": None, "complianceStatus": "pending"}):
            client.post("/treatments/", json=treatment_payload(farm.id, animal["id"], **extra), headers=farmer_headers)

        stats = client.get("/dashboard/stats", headers=farmer_headers).json()
        assert stats["totalAnimals"] == 1
        assert stats["complianceRate"] == 25
        assert stats["violationCount"] == 1
        assert stats["warningCount"] == 1
        assert stats["pendingReports"] == 1
        # Administered today with a 28 day withdrawal period
        assert stats["activeTreatments"] == 4

        compliance = client.get("/dashboard/compliance", headers=farmer_headers).json()
        assert [(c["name"], c["value"]) for c in compliance] == [
            ("Compliant", 1), ("Warning", 1), ("Violation", 1), ("Pending", 1),
        ]
        trends = client.get("/dashboard/trends", headers=farmer_headers).json()
        assert trends[-1]["treatments"] == 4

    def test_only_compliant(self, client, farmer_headers, farm, treatment_payload):
        for level in (10, 20):
            client.post("/treatments/", json=treatment_payload(farm.id, "a", mrlLevel=level), headers=farmer_headers)
        compliance = client.get("/dashboard/compliance", headers=farmer_headers).json()
        assert compliance == [{"name": "Compliant", "value": 2, "color": "hsl(var(--chart-1))"}]

    def test_expired_withdrawal_is_not_active(self, client, farmer_headers, farm, treatment_payload):
        past = (date.today() - timedelta(days=60)).isoformat()
        client.post("/treatments/", json=treatment_payload(farm.id, "a", administeredDate=past, withdrawalPeriodDays=7),
                    headers=farmer_headers)
        assert client.get("/dashboard/stats", headers=farmer_headers).json()["activeTreatments"] == 0

    def test_farmer_dashboard_is_scoped_to_their_farm(self, client, storage, make_user, farm, treatment_payload):
        other = storage.create_farm(FarmCreate(
            name="Other", location="L", owner_name="O", registration_number="REG-OTHER",
            contact_email="o@example.com", contact_phone="1",
        ))
        storage.create_animal(AnimalCreate(farm_id=farm.id, tag_number="T1", name="A", species="pig"))
        storage.create_animal(AnimalCreate(farm_id=other.id, tag_number="T2", name="B", species="pig"))
        _, headers = make_user(UserRole.FARMER, farm_id=farm.id)
        client.post("/treatments/", json=treatment_payload(farm.id, "a", mrlLevel=10), headers=headers)
        client.post("/treatments/", json=treatment_payload(other.id, "b", mrlLevel=500), headers=headers)

        stats = client.get("/dashboard/stats", headers=headers).json()
        assert stats["totalAnimals"] == 1
        assert stats["complianceRate"] == 100
        assert stats["violationCount"] == 0


class TestAdmin:

    def test_admin_routes_reject_other_roles(self, client, farmer_headers, inspector_headers):
        for headers in (farmer_headers, inspector_headers):
            response = client.get("/admin/system-stats", headers=headers)
            assert response.status_code == 403
            assert response.json()["detail"] == "Admin access required"
            assert client.get("/admin/users", headers=headers).status_code == 403
        assert client.get("/admin/compliance", headers=farmer_headers).status_code == 403
        assert client.get("/admin/compliance", headers=inspector_headers).status_code == 200

    def test_system_stats(self, client, make_user, admin_headers, farm, treatment_payload):
        make_user(UserRole.FARMER)
        make_user(UserRole.INSPECTOR)
        create_animal(client, admin_headers, farm.id)
        for level in (150, 60, 10):
            client.post("/treatments/", json=treatment_payload(farm.id, "a", mrlLevel=level), headers=admin_headers)

        stats = client.get("/admin/system-stats", headers=admin_headers).json()
        assert stats == {
            "totalUsers": 3,
            "totalFarms": 1,
            "totalAnimals": 1,
            "totalTreatments": 3,
            "activeViolations": 1,
            "activeWarnings": 1,
            "usersByRole": {"farmers": 1, "inspectors": 1, "admins": 1},
        }

    def test_list_users_and_change_role(self, client, make_user, admin_headers):
        farmer, farmer_headers = make_user(UserRole.FARMER)
        users = client.get("/admin/users", headers=admin_headers).json()
        assert len(users) == 2
        assert all("password" not in u for u in users)

        response = client.patch(f"/admin/users/{farmer.id}/role", json={"role": "inspector"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["role"] == "inspector"

        # Role is read from storage, so the old token now carries the new role
        assert client.get("/auth/me", headers=farmer_headers).json()["role"] == "inspector"

        assert client.patch(f"/admin/users/{farmer.id}/role", json={"role": "king"},
                            headers=admin_headers).status_code == 400
        assert client.patch("/admin/users/missing/role", json={"role": "admin"},
                            headers=admin_headers).status_code == 404

    def test_compliance_review_search(self, client, storage, admin_headers, farm, treatment_payload):
        animal = storage.create_animal(AnimalCreate(farm_id=farm.id, tag_number="T1", name="Bessie", species="cattle"))
        client.post("/treatments/", json=treatment_payload(farm.id, animal.id, mrlLevel=150, medicineName="Tylosin"),
                    headers=admin_headers)
        client.post("/treatments/", json=treatment_payload(farm.id, "other", mrlLevel=60, medicineName="Amoxicillin"),
                    headers=admin_headers)
        client.post("/treatments/", json=treatment_payload(farm.id, "other", mrlLevel=5), headers=admin_headers)

        review = client.get("/admin/compliance", headers=admin_headers).json()
        assert review["totalTreatments"] == 3
        assert review["violationCount"] == 1
        assert review["warningCount"] == 1
        assert len(review["treatments"]) == 2

        review = client.get("/admin/compliance", params={"search": "bessie"}, headers=admin_headers).json()
        assert [t["medicineName"] for t in review["treatments"]] == ["Tylosin"]


class TestFarmReports:

    def test_create_and_list(self, client, make_user, farm):
        user, headers = make_user(UserRole.INSPECTOR)
        response = client.post("/farm-reports/", json={
            "farmId": farm.id,
            "fileName": "inspection.pdf",
            "fileType": "pdf",
            "fileSize": 1024,
            "reportType": "inspection",
        }, headers=headers)
        assert response.status_code == 201
        report = response.json()
        assert report["uploadedBy"] == user.id
        assert report["uploadedAt"]

        assert len(client.get("/farm-reports/", headers=headers).json()) == 1
        assert client.get(f"/farm-reports/{report['id']}", headers=headers).status_code == 200
        assert client.get("/farm-reports/missing", headers=headers).status_code == 404

        response = client.post("/farm-reports/", json={
            "farmId": "missing", "fileName": "x.csv", "fileType": "csv", "fileSize": 1, "reportType": "compliance",
        }, headers=headers)
        assert response.status_code == 404


class FailingStorage(MemoryStorage):
    def get_all_treatment_records(self):
        raise OperationalError("SELECT * FROM treatment_records", {}, Exception("connection refused"))


def test_storage_failure_becomes_500():
    storage = FailingStorage()
    user = storage.create_user(
        UserCreate(username="u", full_name="U", role=UserRole.INSPECTOR, email="u@example.com", password="p"),
        hashed_password=hash_password("p"),
    )
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/dashboard/stats", headers={"Authorization": f"Bearer {create_access_token(user)}"})
        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
    finally:
        app.dependency_overrides.clear()
