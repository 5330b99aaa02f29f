import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from crud.storage import Storage
from dependencies import get_storage
from schemas.animals import Animal, AnimalCreate
from schemas.treatment_records import TreatmentRecord
from schemas.users import UserInDB
from utils.auth_utils import get_current_user, get_user_identifier, scoped_farm_id

router = APIRouter(prefix="/animals", tags=["animals"])
logger = logging.getLogger("animals")


@router.get("/", response_model=List[Animal])
def get_animals(
    farm_id: Optional[str] = None,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    """Get animals, optionally for a single farm. Farmers only see their own farm."""
    farm_id = scoped_farm_id(user) or farm_id
    if farm_id:
        return storage.get_animals_by_farm_id(farm_id)
    return storage.get_all_animals()


@router.post("/", response_model=Animal, status_code=status.HTTP_201_CREATED)
def create_animal(
    animal: AnimalCreate,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    """Register an animal on a farm. The farm's animal count is updated."""
    if storage.get_farm_by_id(animal.farm_id) is None:
        raise HTTPException(status_code=404, detail="Farm not found")
    if storage.get_animal_by_tag_number(animal.tag_number):
        raise HTTPException(status_code=400, detail="Animal with this tag number already exists")

    db_animal = storage.create_animal(animal)
    logger.info(f"Animal '{db_animal.tag_number}' added to farm {db_animal.farm_id} by user {get_user_identifier(user)}")
    return db_animal


@router.get("/{animal_id}", response_model=Animal)
def get_animal(
    animal_id: str,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    db_animal = storage.get_animal_by_id(animal_id)
    if db_animal is None:
        raise HTTPException(status_code=404, detail="Animal not found")
    return db_animal


@router.get("/{animal_id}/treatments", response_model=List[TreatmentRecord])
def get_animal_treatments(
    animal_id: str,
    storage: Storage = Depends(get_storage),
    user: UserInDB = Depends(get_current_user),
):
    """Treatment history of one animal."""
    if storage.get_animal_by_id(animal_id) is None:
        raise HTTPException(status_code=404, detail="Animal not found")
    return storage.get_treatment_records_by_animal_id(animal_id)
