from pydantic import Field
from schemas.common import CamelModel


class FarmBase(CamelModel):
    name: str = Field(min_length=1)
    location: str
    owner_name: str
    registration_number: str = Field(min_length=1)
    contact_email: str
    contact_phone: str


class FarmCreate(FarmBase):
    pass


class Farm(FarmBase):
    id: str
    total_animals: int = 0
