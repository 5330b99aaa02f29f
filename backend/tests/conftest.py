import os
import tempfile

# Settings are read at import time, so they must be in place before the app loads
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="mrl-tracker-logs-")
os.environ.setdefault("SECRET_KEY", "test-secret-key")



import pytest
from fastapi.testclient import TestClient

from crud.memory_storage import MemoryStorage
from dependencies import get_storage
from main import app
from models.users import UserRole
from schemas.farms import FarmCreate
from schemas.users import UserCreate
from utils.auth_utils import create_access_token, hash_password
from utils.date_utils import today


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(storage):
    """Create a user directly in storage and return (user, auth headers)."""
    counter = {"n": 0}

    def _make_user(role: UserRole, farm_id: str = None, password: str = "secret123"):
        counter["n"] += 1
        username = f"{role.value}{counter['n']}"
        # UserCreate refuses admins, so build the record with model_construct
        user_in = UserCreate.model_construct(
            username=username,
            full_name=f"Test {role.value.title()}",
            role=role,
            email=f"{username}@example.com",
            farm_id=farm_id,
            password=password,
        )
        user = storage.create_user(user_in, hashed_password=hash_password(password))
        return user, {"Authorization": f"Bearer {create_access_token(user)}"}

    return _make_user


@pytest.fixture
def farmer_headers(make_user):
    return make_user(UserRole.FARMER)[1]


@pytest.fixture
def inspector_headers(make_user):
    return make_user(UserRole.INSPECTOR)[1]


@pytest.fixture
def admin_headers(make_user):
    return make_user(UserRole.ADMIN)[1]


@pytest.fixture
def farm(storage):
    return storage.create_farm(FarmCreate(
        name="Green Valley Dairy",
        location="Nakuru",
        owner_name="J. Mwangi",
        registration_number="REG-001",
        contact_email="info@greenvalley.example",
        contact_phone="+254700000001",
    ))


@pytest.fixture
def treatment_payload():
    """JSON body for POST /treatments/, camelCase like the dashboard client sends."""
    def _payload(farm_id: str, animal_id: str, **overrides):
        body = {
            "animalId": animal_id,
            "farmId": farm_id,
            "medicineName": "Oxytetracycline LA",
            "antimicrobialType": "tetracycline",
            "dosage": "20",
            "unit": "ml",
            "administeredBy": "Dr. Otieno",
            "administeredDate": today().isoformat(),
            "withdrawalPeriodDays": 28,
            "purposeOfTreatment": "Respiratory infection",
        }
        body.update(overrides)
        return body
    return _payload
