import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from crud.storage import Storage
from dependencies import get_storage
from models.users import UserRole
from models.treatment_records import ComplianceStatus
from schemas.dashboard import CriticalTreatments, SystemStats
from schemas.users import RoleUpdate, User, UserInDB
from utils.aggregation import compute_system_stats, critical_treatments, status_counts
from utils.auth_utils import get_user_identifier, require_roles

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger("admin")

admin_only = require_roles(UserRole.ADMIN)


@router.get("/users", response_model=List[User])
def get_users(
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(admin_only),
):
    return storage.get_all_users()


@router.patch("/users/{user_id}/role", response_model=User)
def update_user_role(
    user_id: str,
    role_update: RoleUpdate,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(admin_only),
):
    try:
        role = UserRole(role_update.role)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid role")

    db_user = storage.update_user_role(user_id, role)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info(f"Role of user '{db_user.username}' set to {db_user.role.value} by {get_user_identifier(user)}")
    return db_user


@router.get("/system-stats", response_model=SystemStats)
def get_system_stats(
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(admin_only),
):
    return compute_system_stats(
        storage.get_all_users(),
        storage.get_all_farms(),
        storage.get_all_animals(),
        storage.get_all_treatment_records(),
    )


@router.get("/compliance", response_model=CriticalTreatments)
def get_compliance_review(
    search: Optional[str] = None,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(require_roles(UserRole.ADMIN, UserRole.INSPECTOR)),
):
    """Violations and warnings across all farms, for review."""
    treatments = storage.get_all_treatment_records()
    counts = status_counts(treatments)
    return CriticalTreatments(
        total_treatments=len(treatments),
        violation_count=counts[ComplianceStatus.VIOLATION],
        warning_count=counts[ComplianceStatus.WARNING],
        treatments=critical_treatments(treatments, storage.get_all_farms(), storage.get_all_animals(), search),
    )
