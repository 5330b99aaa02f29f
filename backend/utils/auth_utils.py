import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from passlib.context import CryptContext

from config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, SECRET_KEY
from crud.storage import Storage
from dependencies import get_storage
from models.users import UserRole
from schemas.users import UserInDB

logger = logging.getLogger("auth")

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return pwd_context.verify(password, hashed_password)


def create_access_token(user: UserInDB, expires_delta: timedelta = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode: Dict[str, Any] = {
        "sub": user.id,
        "username": user.username,
        "role": user.role.value,
        "exp": expire,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired"
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Token validation failed: {e}"
        )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    storage: Storage = Depends(get_storage),
) -> UserInDB:
    """
    FastAPI dependency that validates the bearer token and loads its user.

    The role is read from storage rather than from the token, so a role change
    applies to tokens issued before it.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header is missing",
        )
    payload = decode_access_token(credentials.credentials)
    user_id = payload.get("sub")
    user = storage.get_user(user_id) if user_id else None
    if user is None:
        logger.warning(f"Token presented for unknown user id {user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    return user


def require_roles(*roles: UserRole):
    """Dependency factory restricting a route to the given roles."""
    def checker(user: UserInDB = Depends(get_current_user)) -> UserInDB:
        if user.role not in roles:
            names = " or ".join(r.value.capitalize() for r in roles)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"{names} access required"
            )
        return user
    return checker


def get_user_identifier(user: UserInDB) -> str:
    return user.username if user else "unknown"


def scoped_farm_id(user: UserInDB):
    """Farm a farmer is restricted to, or None when the user sees every farm."""
    if user.role == UserRole.FARMER and user.farm_id:
        return user.farm_id
    return None
