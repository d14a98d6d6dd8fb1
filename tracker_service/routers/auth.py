import logging
import secrets
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from ..core.auth import CurrentUser, get_current_user, require_admin
from ..core.config import get_settings
from ..dependencies import get_entity_store
from ..schemas.user import AdminLoginRequest, AuthResponse, LoginRequest, Token, UserCreate, UserOut
from ..services.entity_store import EntityKind, EntityStore
from ..utils.security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_token(user) -> str:
    return create_access_token({"sub": user.id, "email": user.email})


@router.post("/admin/login", response_model=Token, tags=["admin"])
def admin_login(payload: AdminLoginRequest):
    admin_secret = get_settings().admin_secret
    if not admin_secret or not secrets.compare_digest(payload.secret, admin_secret):
        logger.warning("Invalid admin secret provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid Secret")
    token = create_access_token({"role": "admin"})
    logger.info("Admin login successful")
    return {"message": "Admin login successful", "token": token}


@router.get("/admin/api/data", tags=["admin"])
def admin_data(current_user: CurrentUser = Depends(require_admin)):
    logger.info(f"Protected admin route accessed by: {current_user}")
    return {"message": "Protected route accessible to admin"}


@router.post("/api/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED, tags=["auth"])
def signup(user_in: UserCreate, store: EntityStore = Depends(get_entity_store)):
    user = store.create(EntityKind.USER, {
        "name": user_in.name.strip(),
        "email": user_in.email.strip(),
        "hashed_password": get_password_hash(user_in.password),
    })
    logger.info(f"Signup successful for email: {user.email}")
    return {"message": "User registered successfully", "token": _user_token(user),
            "email": user.email, "name": user.name}


@router.post("/api/login", response_model=AuthResponse, tags=["auth"])
def login(credentials: LoginRequest, store: EntityStore = Depends(get_entity_store)):
    user = store.find_by_field(EntityKind.USER, "email", credentials.email.strip())
    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.warning(f"Failed login for email: {credentials.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    logger.info(f"Login successful for email: {user.email}")
    return {"message": "Login successful", "token": _user_token(user),
            "email": user.email, "name": user.name}


@router.get("/api/verify-token", tags=["auth"])
def verify_token(current_user: CurrentUser = Depends(get_current_user)):
    return {"message": "Token is valid", "user": current_user.to_dict()}


@router.get("/auth/users", response_model=List[UserOut], tags=["auth"])
def list_users(
    current_user: CurrentUser = Depends(get_current_user),
    store: EntityStore = Depends(get_entity_store)
):
    return store.list(EntityKind.USER)
