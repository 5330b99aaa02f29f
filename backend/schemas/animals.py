from typing import Optional
from datetime import date
from decimal import Decimal
from pydantic import Field
from models.animals import AnimalSpecies, AnimalStatus
from schemas.common import CamelModel


class AnimalBase(CamelModel):
    farm_id: str
    tag_number: str = Field(min_length=1)
    name: str
    species: AnimalSpecies
    breed: Optional[str] = None
    date_of_birth: Optional[date] = None
    weight: Optional[Decimal] = Field(default=None, ge=0)


class AnimalCreate(AnimalBase):
    status: AnimalStatus = AnimalStatus.ACTIVE


class Animal(AnimalBase):
    id: str
    status: AnimalStatus
