from sqlalchemy import Column, Integer, String
from database import Base
import uuid


class Farm(Base):
    __tablename__ = "farms"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    location = Column(String, nullable=False)
    owner_name = Column(String, nullable=False)
    registration_number = Column(String, unique=True, index=True, nullable=False)
    contact_email = Column(String, nullable=False)
    contact_phone = Column(String, nullable=False)
    # Denormalized; rewritten by storage every time an animal is added
    total_animals = Column(Integer, nullable=False, default=0)
