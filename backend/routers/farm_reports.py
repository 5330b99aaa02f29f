import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from crud.storage import Storage
from dependencies import get_storage
from schemas.farm_reports import FarmReport, FarmReportCreate
from schemas.users import UserInDB
from utils.auth_utils import get_current_user, get_user_identifier, scoped_farm_id

router = APIRouter(prefix="/farm-reports", tags=["farm reports"])
logger = logging.getLogger("farm_reports")


@router.get("/", response_model=List[FarmReport])
def get_farm_reports(
    farm_id: Optional[str] = None,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    farm_id = scoped_farm_id(user) or farm_id
    if farm_id:
        return storage.get_farm_reports_by_farm_id(farm_id)
    return storage.get_all_farm_reports()


@router.post("/", response_model=FarmReport, status_code=status.HTTP_201_CREATED)
def create_farm_report(
    report: FarmReportCreate,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    """Record the metadata of a compliance, inspection or veterinary report."""
    if storage.get_farm_by_id(report.farm_id) is None:
        raise HTTPException(status_code=404, detail="Farm not found")

    db_report = storage.create_farm_report(report, uploaded_by=report.uploaded_by or user.id)
    logger.info(f"Report '{db_report.file_name}' for farm {db_report.farm_id} recorded by user {get_user_identifier(user)}")
    return db_report


@router.get("/{report_id}", response_model=FarmReport)
def get_farm_report(
    report_id: str,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    db_report = storage.get_farm_report_by_id(report_id)
    if db_report is None:
        raise HTTPException(status_code=404, detail="Farm report not found")
    return db_report
