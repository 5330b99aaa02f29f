import logging
from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from crud.storage import Storage
from dependencies import get_storage
from schemas.users import LoginCredentials, RegisterResponse, Token, User, UserCreate, UserInDB
from utils.auth_utils import create_access_token, get_current_user, hash_password, verify_password

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger("auth")


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    user: UserCreate,
    storage: Storage = Depends(get_storage)
):
    if storage.get_user_by_username(user.username):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists")
    if storage.get_user_by_email(user.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    new_user = storage.create_user(user, hashed_password=hash_password(user.password))
    logger.info(f"User '{new_user.username}' registered with role {new_user.role.value}")
    return RegisterResponse(message="User created successfully", user_id=new_user.id)


@router.post("/login", response_model=Token)
def login(
    credentials: LoginCredentials,
    storage: Storage = Depends(get_storage)
):
    user = storage.get_user_by_username(credentials.username)
    if not user or not verify_password(credentials.password, user.password):
        logger.warning(f"Failed login attempt for username '{credentials.username}'")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    return Token(
        token=create_access_token(user),
        user=User.model_validate(user.model_dump(exclude={"password"})),
    )


@router.get("/me", response_model=User)
def read_current_user(user: UserInDB = Depends(get_current_user)):
    return user
