from typing import List

from fastapi import APIRouter, Depends

from crud.storage import Storage
from dependencies import get_storage
from schemas.dashboard import ComplianceSlice, DashboardStats, TrendPoint
from schemas.users import UserInDB
from utils.aggregation import compute_distribution, compute_stats, compute_trends
from utils.auth_utils import get_current_user, scoped_farm_id

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _load(storage: Storage, user: UserInDB):
    farm_id = scoped_farm_id(user)
    if farm_id:
        return storage.get_animals_by_farm_id(farm_id), storage.get_treatment_records_by_farm_id(farm_id)
    return storage.get_all_animals(), storage.get_all_treatment_records()


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    animals, treatments = _load(storage, user)
    return compute_stats(animals, treatments)


@router.get("/trends", response_model=List[TrendPoint])
def get_dashboard_trends(
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    """Treatments per month for the last six months, oldest first."""
    _, treatments = _load(storage, user)
    return compute_trends(treatments)


@router.get("/compliance", response_model=List[ComplianceSlice])
def get_dashboard_compliance(
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    _, treatments = _load(storage, user)
    return compute_distribution(treatments)
