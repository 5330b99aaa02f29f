import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from crud.storage import Storage
from dependencies import get_storage
from schemas.farms import Farm, FarmCreate
from schemas.users import UserInDB
from utils.auth_utils import get_current_user, get_user_identifier

router = APIRouter(prefix="/farms", tags=["farms"])
logger = logging.getLogger("farms")


@router.get("/", response_model=List[Farm])
def get_all_farms(
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    """Get all registered farms."""
    return storage.get_all_farms()


@router.post("/", response_model=Farm, status_code=status.HTTP_201_CREATED)
def create_farm(
    farm: FarmCreate,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    """Register a new farm."""
    if storage.get_farm_by_registration_number(farm.registration_number):
        raise HTTPException(status_code=400, detail="Farm with this registration number already exists")

    db_farm = storage.create_farm(farm)
    logger.info(f"Farm '{db_farm.name}' (ID: {db_farm.id}) created by user {get_user_identifier(user)}")
    return db_farm


@router.get("/{farm_id}", response_model=Farm)
def get_farm(
    farm_id: str,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    """Get a specific farm by ID."""
    db_farm = storage.get_farm_by_id(farm_id)
    if db_farm is None:
        raise HTTPException(status_code=404, detail="Farm not found")
    return db_farm
