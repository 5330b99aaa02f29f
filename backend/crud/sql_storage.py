from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from crud.storage import Storage
from models.users import User as UserModel, UserRole
from models.farms import Farm as FarmModel
from models.animals import Animal as AnimalModel
from models.treatment_records import TreatmentRecord as TreatmentRecordModel
from models.farm_reports import FarmReport as FarmReportModel
from schemas.users import UserCreate, UserInDB
from schemas.farms import Farm, FarmCreate
from schemas.animals import Animal, AnimalCreate
from schemas.treatment_records import TreatmentRecord, TreatmentRecordCreate
from schemas.farm_reports import FarmReport, FarmReportCreate
from utils.compliance import classify_compliance
from utils.date_utils import now


def _to_schema(schema, obj):
    if obj is None:
        return None
    return schema.model_validate(obj)


def _to_schemas(schema, objs) -> list:
    return [schema.model_validate(obj) for obj in objs]


class SqlStorage(Storage):
    """Storage backed by a SQLAlchemy session. Errors from the database propagate to the caller."""

    def __init__(self, db: Session):
        self.db = db

    # Users
    def get_user(self, user_id: str) -> Optional[UserInDB]:
        return _to_schema(UserInDB, self.db.query(UserModel).filter(UserModel.id == user_id).first())

    def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        return _to_schema(UserInDB, self.db.query(UserModel).filter(UserModel.username == username).first())

    def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        return _to_schema(UserInDB, self.db.query(UserModel).filter(UserModel.email == email).first())

    def create_user(self, user: UserCreate, hashed_password: str) -> UserInDB:
        db_user = UserModel(**user.model_dump(exclude={"password"}), password=hashed_password)
        self.db.add(db_user)
        self.db.commit()
        self.db.refresh(db_user)
        return _to_schema(UserInDB, db_user)

    def get_all_users(self) -> List[UserInDB]:
        return _to_schemas(UserInDB, self.db.query(UserModel).order_by(UserModel.created_at).all())

    def update_user_role(self, user_id: str, role: UserRole) -> Optional[UserInDB]:
        db_user = self.db.query(UserModel).filter(UserModel.id == user_id).first()
        if not db_user:
            return None
        db_user.role = role
        self.db.commit()
        self.db.refresh(db_user)
        return _to_schema(UserInDB, db_user)

    # Farms
    def get_all_farms(self) -> List[Farm]:
        return _to_schemas(Farm, self.db.query(FarmModel).all())

    def get_farm_by_id(self, farm_id: str) -> Optional[Farm]:
        return _to_schema(Farm, self.db.query(FarmModel).filter(FarmModel.id == farm_id).first())

    def get_farm_by_registration_number(self, registration_number: str) -> Optional[Farm]:
        db_farm = self.db.query(FarmModel).filter(FarmModel.registration_number == registration_number).first()
        return _to_schema(Farm, db_farm)

    def create_farm(self, farm: FarmCreate) -> Farm:
        db_farm = FarmModel(**farm.model_dump(), total_animals=0)
        self.db.add(db_farm)
        self.db.commit()
        self.db.refresh(db_farm)
        return _to_schema(Farm, db_farm)

    def update_farm_animal_count(self, farm_id: str, count: int) -> None:
        db_farm = self.db.query(FarmModel).filter(FarmModel.id == farm_id).first()
        if db_farm:
            db_farm.total_animals = count
            self.db.commit()

    # Animals
    def get_all_animals(self) -> List[Animal]:
        return _to_schemas(Animal, self.db.query(AnimalModel).all())

    def get_animal_by_id(self, animal_id: str) -> Optional[Animal]:
        return _to_schema(Animal, self.db.query(AnimalModel).filter(AnimalModel.id == animal_id).first())

    def get_animal_by_tag_number(self, tag_number: str) -> Optional[Animal]:
        return _to_schema(Animal, self.db.query(AnimalModel).filter(AnimalModel.tag_number == tag_number).first())

    def get_animals_by_farm_id(self, farm_id: str) -> List[Animal]:
        return _to_schemas(Animal, self.db.query(AnimalModel).filter(AnimalModel.farm_id == farm_id).all())

    def create_animal(self, animal: AnimalCreate) -> Animal:
        db_animal = AnimalModel(**animal.model_dump())
        self.db.add(db_animal)
        self.db.flush()

        # Keep the farm's denormalized counter equal to the live animal count
        count = self.db.query(func.count(AnimalModel.id)).filter(AnimalModel.farm_id == db_animal.farm_id).scalar()
        db_farm = self.db.query(FarmModel).filter(FarmModel.id == db_animal.farm_id).first()
        if db_farm:
            db_farm.total_animals = count

        self.db.commit()
        self.db.refresh(db_animal)
        return _to_schema(Animal, db_animal)

    # Treatment records
    def get_all_treatment_records(self) -> List[TreatmentRecord]:
        return _to_schemas(TreatmentRecord, self.db.query(TreatmentRecordModel).all())

    def get_treatment_record_by_id(self, record_id: str) -> Optional[TreatmentRecord]:
        db_record = self.db.query(TreatmentRecordModel).filter(TreatmentRecordModel.id == record_id).first()
        return _to_schema(TreatmentRecord, db_record)

    def get_treatment_records_by_farm_id(self, farm_id: str) -> List[TreatmentRecord]:
        records = self.db.query(TreatmentRecordModel).filter(TreatmentRecordModel.farm_id == farm_id).all()
        return _to_schemas(TreatmentRecord, records)

    def get_treatment_records_by_animal_id(self, animal_id: str) -> List[TreatmentRecord]:
        records = self.db.query(TreatmentRecordModel).filter(TreatmentRecordModel.animal_id == animal_id).all()
        return _to_schemas(TreatmentRecord, records)

    def create_treatment_record(self, record: TreatmentRecordCreate, recorded_by: str) -> TreatmentRecord:
        compliance_status = classify_compliance(record.mrl_level, record.compliance_status)
        db_record = TreatmentRecordModel(
            **record.model_dump(exclude={"compliance_status", "recorded_by"}),
            recorded_by=recorded_by,
            compliance_status=compliance_status,
        )
        self.db.add(db_record)
        self.db.commit()
        self.db.refresh(db_record)
        return _to_schema(TreatmentRecord, db_record)

    # Farm reports
    def get_all_farm_reports(self) -> List[FarmReport]:
        return _to_schemas(FarmReport, self.db.query(FarmReportModel).order_by(FarmReportModel.uploaded_at.desc()).all())

    def get_farm_report_by_id(self, report_id: str) -> Optional[FarmReport]:
        return _to_schema(FarmReport, self.db.query(FarmReportModel).filter(FarmReportModel.id == report_id).first())

    def get_farm_reports_by_farm_id(self, farm_id: str) -> List[FarmReport]:
        reports = self.db.query(FarmReportModel).filter(FarmReportModel.farm_id == farm_id).all()
        return _to_schemas(FarmReport, reports)

    def create_farm_report(self, report: FarmReportCreate, uploaded_by: str) -> FarmReport:
        db_report = FarmReportModel(
            **report.model_dump(exclude={"uploaded_by"}),
            uploaded_by=uploaded_by,
            uploaded_at=now(),
        )
        self.db.add(db_report)
        self.db.commit()
        self.db.refresh(db_report)
        return _to_schema(FarmReport, db_report)
