import uuid
from typing import Dict, List, Optional

from crud.storage import Storage
from models.users import UserRole
from schemas.users import UserCreate, UserInDB
from schemas.farms import Farm, FarmCreate
from schemas.animals import Animal, AnimalCreate
from schemas.treatment_records import TreatmentRecord, TreatmentRecordCreate
from schemas.farm_reports import FarmReport, FarmReportCreate
from utils.compliance import classify_compliance
from utils.date_utils import now


def _new_id() -> str:
    return str(uuid.uuid4())


class MemoryStorage(Storage):
    """Dict-backed storage for tests and local runs. State lives as long as the instance."""

    def __init__(self):
        self.users: Dict[str, UserInDB] = {}
        self.farms: Dict[str, Farm] = {}
        self.animals: Dict[str, Animal] = {}
        self.treatment_records: Dict[str, TreatmentRecord] = {}
        self.farm_reports: Dict[str, FarmReport] = {}

    # Users
    def get_user(self, user_id: str) -> Optional[UserInDB]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        return next((u for u in self.users.values() if u.username == username), None)

    def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(self, user: UserCreate, hashed_password: str) -> UserInDB:
        timestamp = now()
        db_user = UserInDB(
            **user.model_dump(exclude={"password"}),
            id=_new_id(),
            password=hashed_password,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self.users[db_user.id] = db_user
        return db_user

    def get_all_users(self) -> List[UserInDB]:
        return list(self.users.values())

    def update_user_role(self, user_id: str, role: UserRole) -> Optional[UserInDB]:
        db_user = self.users.get(user_id)
        if db_user is None:
            return None
        db_user = db_user.model_copy(update={"role": role, "updated_at": now()})
        self.users[user_id] = db_user
        return db_user

    # Farms
    def get_all_farms(self) -> List[Farm]:
        return list(self.farms.values())

    def get_farm_by_id(self, farm_id: str) -> Optional[Farm]:
        return self.farms.get(farm_id)

    def get_farm_by_registration_number(self, registration_number: str) -> Optional[Farm]:
        return next((f for f in self.farms.values() if f.registration_number == registration_number), None)

    def create_farm(self, farm: FarmCreate) -> Farm:
        db_farm = Farm(**farm.model_dump(), id=_new_id(), total_animals=0)
        self.farms[db_farm.id] = db_farm
        return db_farm

    def update_farm_animal_count(self, farm_id: str, count: int) -> None:
        db_farm = self.farms.get(farm_id)
        if db_farm is not None:
            self.farms[farm_id] = db_farm.model_copy(update={"total_animals": count})

    # Animals
    def get_all_animals(self) -> List[Animal]:
        return list(self.animals.values())

    def get_animal_by_id(self, animal_id: str) -> Optional[Animal]:
        return self.animals.get(animal_id)

    def get_animal_by_tag_number(self, tag_number: str) -> Optional[Animal]:
        return next((a for a in self.animals.values() if a.tag_number == tag_number), None)

    def get_animals_by_farm_id(self, farm_id: str) -> List[Animal]:
        return [a for a in self.animals.values() if a.farm_id == farm_id]

    def create_animal(self, animal: AnimalCreate) -> Animal:
        db_animal = Animal(**animal.model_dump(), id=_new_id())
        self.animals[db_animal.id] = db_animal
        self.update_farm_animal_count(db_animal.farm_id, len(self.get_animals_by_farm_id(db_animal.farm_id)))
        return db_animal

    # Treatment records
    def get_all_treatment_records(self) -> List[TreatmentRecord]:
        return list(self.treatment_records.values())

    def get_treatment_record_by_id(self, record_id: str) -> Optional[TreatmentRecord]:
        return self.treatment_records.get(record_id)

    def get_treatment_records_by_farm_id(self, farm_id: str) -> List[TreatmentRecord]:
        return [r for r in self.treatment_records.values() if r.farm_id == farm_id]

    def get_treatment_records_by_animal_id(self, animal_id: str) -> List[TreatmentRecord]:
        return [r for r in self.treatment_records.values() if r.animal_id == animal_id]

    def create_treatment_record(self, record: TreatmentRecordCreate, recorded_by: str) -> TreatmentRecord:
        compliance_status = classify_compliance(record.mrl_level, record.compliance_status)
        db_record = TreatmentRecord(
            **record.model_dump(exclude={"compliance_status", "recorded_by"}),
            id=_new_id(),
            recorded_by=recorded_by,
            compliance_status=compliance_status,
        )
        self.treatment_records[db_record.id] = db_record
        return db_record

    # Farm reports
    def get_all_farm_reports(self) -> List[FarmReport]:
        return list(self.farm_reports.values())

    def get_farm_report_by_id(self, report_id: str) -> Optional[FarmReport]:
        return self.farm_reports.get(report_id)

    def get_farm_reports_by_farm_id(self, farm_id: str) -> List[FarmReport]:
        return [r for r in self.farm_reports.values() if r.farm_id == farm_id]

    def create_farm_report(self, report: FarmReportCreate, uploaded_by: str) -> FarmReport:
        db_report = FarmReport(
            **report.model_dump(exclude={"uploaded_by"}),
            id=_new_id(),
            uploaded_by=uploaded_by,
            uploaded_at=now(),
        )
        self.farm_reports[db_report.id] = db_report
        return db_report
