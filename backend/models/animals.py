from sqlalchemy import Column, Numeric, String, Date, Enum, ForeignKey
from database import Base
import enum
import uuid


class AnimalSpecies(enum.Enum):
    CATTLE = "cattle"
    SHEEP = "sheep"
    GOAT = "goat"
    PIG = "pig"
    POULTRY = "poultry"


class AnimalStatus(enum.Enum):
    ACTIVE = "active"
    QUARANTINE = "quarantine"
    SOLD = "sold"
    DECEASED = "deceased"


class Animal(Base):
    __tablename__ = "animals"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    farm_id = Column(String, ForeignKey("farms.id"), nullable=False, index=True)
    tag_number = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    species = Column(Enum(AnimalSpecies), nullable=False)
    breed = Column(String, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    weight = Column(Numeric(10, 2), nullable=True)  # kg
    status = Column(Enum(AnimalStatus), nullable=False, default=AnimalStatus.ACTIVE)
