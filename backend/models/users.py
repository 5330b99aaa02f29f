from database import Base
from sqlalchemy import Column, String, Enum
import enum
import uuid

from models.audit_mixin import TimestampMixin


class UserRole(enum.Enum):
    FARMER = "farmer"
    INSPECTOR = "inspector"
    ADMIN = "admin"


class User(Base, TimestampMixin):
    __tablename__ = 'users'

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # passlib hash
    full_name = Column(String, nullable=False)
    role = Column(Enum(UserRole), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    farm_id = Column(String, nullable=True)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
