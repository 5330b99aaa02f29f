import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from crud.storage import Storage
from dependencies import get_storage
from models.treatment_records import ComplianceStatus
from schemas.treatment_records import TreatmentRecord, TreatmentRecordCreate
from schemas.users import UserInDB
from utils.auth_utils import get_current_user, get_user_identifier, scoped_farm_id
from utils.date_utils import today
from utils.exports import export_treatments

router = APIRouter(prefix="/treatments", tags=["treatments"])
logger = logging.getLogger("treatments")


def _visible_treatments(storage: Storage, user: UserInDB, farm_id: Optional[str] = None) -> List[TreatmentRecord]:
    farm_id = scoped_farm_id(user) or farm_id
    if farm_id:
        return storage.get_treatment_records_by_farm_id(farm_id)
    return storage.get_all_treatment_records()


@router.get("/", response_model=List[TreatmentRecord])
def get_treatments(
    farm_id: Optional[str] = None,
    animal_id: Optional[str] = None,
    compliance_status: Optional[ComplianceStatus] = Query(None, alias="status"),
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    """Get treatment records with optional farm, animal and status filters."""
    treatments = _visible_treatments(storage, user, farm_id)
    if animal_id:
        treatments = [t for t in treatments if t.animal_id == animal_id]
    if compliance_status:
        treatments = [t for t in treatments if t.compliance_status == compliance_status]
    return treatments


@router.post("/", response_model=TreatmentRecord, status_code=status.HTTP_201_CREATED)
def create_treatment(
    record: TreatmentRecordCreate,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    """
    Record a treatment. The compliance status is derived from the measured
    MRL level here, once, and stored with the record.
    """
    db_record = storage.create_treatment_record(record, recorded_by=record.recorded_by or user.id)
    logger.info(
        f"Treatment {db_record.id} ({db_record.medicine_name}) for animal {db_record.animal_id} "
        f"recorded as {db_record.compliance_status.value} by user {get_user_identifier(user)}"
    )
    if db_record.compliance_status == ComplianceStatus.VIOLATION:
        logger.warning(f"MRL violation recorded for animal {db_record.animal_id}: {db_record.mrl_level} ppb")
    return db_record


@router.get("/export")
def export_treatment_records(
    file_format: str = Query("csv", alias="format", pattern="^(csv|xlsx)$"),
    farm_id: Optional[str] = None,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    """Download treatment records as CSV or Excel."""
    treatments = _visible_treatments(storage, user, farm_id)
    if not treatments:
        raise HTTPException(status_code=404, detail="There are no treatment records available")

    buffer, media_type = export_treatments(treatments, file_format)
    filename = f"mrl-treatment-records-{today().isoformat()}.{file_format}"
    return StreamingResponse(
        buffer,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/{record_id}", response_model=TreatmentRecord)
def get_treatment(
    record_id: str,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    db_record = storage.get_treatment_record_by_id(record_id)
    if db_record is None:
        raise HTTPException(status_code=404, detail="Treatment record not found")
    return db_record
