from typing import Optional
from datetime import date, timedelta
from decimal import Decimal
from pydantic import Field, field_validator, model_validator
from models.treatment_records import ComplianceStatus
from schemas.common import CamelModel
from utils.compliance import parse_mrl_level


class TreatmentRecordBase(CamelModel):
    animal_id: str
    farm_id: str
    medicine_name: str = Field(min_length=1)
    antimicrobial_type: str
    dosage: str
    unit: str
    administered_by: str
    administered_date: date
    withdrawal_period_days: int = Field(ge=0)
    purpose_of_treatment: str
    notes: Optional[str] = None


class TreatmentRecordCreate(TreatmentRecordBase):
    withdrawal_end_date: Optional[date] = None
    # Measured residue in ppb; absent until a lab result exists
    mrl_level: Optional[Decimal] = Field(default=None, ge=0)
    compliance_status: Optional[ComplianceStatus] = None
    recorded_by: Optional[str] = None

    @field_validator('mrl_level', mode='before')
    @classmethod
    def read_mrl_level(cls, v):
        # Blank or unreadable input means no measurement; negatives still fail ge=0
        return parse_mrl_level(v)

    @model_validator(mode='after')
    def fill_withdrawal_end_date(self):
        if self.withdrawal_end_date is None:
            self.withdrawal_end_date = self.administered_date + timedelta(days=self.withdrawal_period_days)
        return self


class TreatmentRecord(TreatmentRecordBase):
    id: str
    recorded_by: str
    withdrawal_end_date: date
    mrl_level: Optional[Decimal] = None
    compliance_status: ComplianceStatus
