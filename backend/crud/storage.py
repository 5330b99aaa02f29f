"""
Storage interface shared by the SQL and in-memory backends.

Both backends return pydantic read schemas, never ORM objects, so the
routers and the aggregation functions work the same on either one.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from models.users import UserRole
from schemas.users import UserCreate, UserInDB
from schemas.farms import Farm, FarmCreate
from schemas.animals import Animal, AnimalCreate
from schemas.treatment_records import TreatmentRecord, TreatmentRecordCreate
from schemas.farm_reports import FarmReport, FarmReportCreate


class Storage(ABC):

    # Users
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserInDB]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserInDB]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserInDB]: ...

    @abstractmethod
    def create_user(self, user: UserCreate, hashed_password: str) -> UserInDB: ...

    @abstractmethod
    def get_all_users(self) -> List[UserInDB]: ...

    @abstractmethod
    def update_user_role(self, user_id: str, role: UserRole) -> Optional[UserInDB]:
        """Returns the updated user, or None if it does not exist."""

    # Farms
    @abstractmethod
    def get_all_farms(self) -> List[Farm]: ...

    @abstractmethod
    def get_farm_by_id(self, farm_id: str) -> Optional[Farm]: ...

    @abstractmethod
    def get_farm_by_registration_number(self, registration_number: str) -> Optional[Farm]: ...

    @abstractmethod
    def create_farm(self, farm: FarmCreate) -> Farm: ...

    @abstractmethod
    def update_farm_animal_count(self, farm_id: str, count: int) -> None: ...

    # Animals
    @abstractmethod
    def get_all_animals(self) -> List[Animal]: ...

    @abstractmethod
    def get_animal_by_id(self, animal_id: str) -> Optional[Animal]: ...

    @abstractmethod
    def get_animal_by_tag_number(self, tag_number: str) -> Optional[Animal]: ...

    @abstractmethod
    def get_animals_by_farm_id(self, farm_id: str) -> List[Animal]: ...

    @abstractmethod
    def create_animal(self, animal: AnimalCreate) -> Animal:
        """Insert the animal and rewrite its farm's total_animals counter."""

    # Treatment records
    @abstractmethod
    def get_all_treatment_records(self) -> List[TreatmentRecord]: ...

    @abstractmethod
    def get_treatment_record_by_id(self, record_id: str) -> Optional[TreatmentRecord]: ...

    @abstractmethod
    def get_treatment_records_by_farm_id(self, farm_id: str) -> List[TreatmentRecord]: ...

    @abstractmethod
    def get_treatment_records_by_animal_id(self, animal_id: str) -> List[TreatmentRecord]: ...

    @abstractmethod
    def create_treatment_record(self, record: TreatmentRecordCreate, recorded_by: str) -> TreatmentRecord:
        """Insert the record with its compliance status classified from mrl_level."""

    # Farm reports
    @abstractmethod
    def get_all_farm_reports(self) -> List[FarmReport]: ...

    @abstractmethod
    def get_farm_report_by_id(self, report_id: str) -> Optional[FarmReport]: ...

    @abstractmethod
    def get_farm_reports_by_farm_id(self, farm_id: str) -> List[FarmReport]: ...

    @abstractmethod
    def create_farm_report(self, report: FarmReportCreate, uploaded_by: str) -> FarmReport: ...
