"""
Admin authentication and profile routes.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import asdict

from fastapi import APIRouter, Depends

from blogfolio.config import Settings, get_settings
from blogfolio.db import DbClient
from blogfolio.dependencies import get_db_client, get_token_service, require_admin
from blogfolio.errors import (
    DuplicateEmailError,
    ForbiddenError,
    InvalidCredentialsError,
    UnauthorizedError,
)
from blogfolio.patches import PROFILE_PATCH_POLICY, select_changes
from blogfolio.records import Role, UserRecord
from blogfolio.schemas import (
    AuthResponse,
    CreateAdminRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)
from blogfolio.security import TokenService, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_response(user: UserRecord) -> UserResponse:
    return UserResponse.model_validate(asdict(user))


def _auth_response(user: UserRecord, tokens: TokenService) -> AuthResponse:
    return AuthResponse(token=tokens.issue(user.id), user=_user_response(user))


def _create_admin(db: DbClient, payload: RegisterRequest) -> UserRecord:
    if db.get_user_by_email(payload.email):
        raise DuplicateEmailError()
    user = UserRecord(
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        # Every account created through the API is an admin.
        role=Role.ADMIN.value,
    )
    return db.create_user(user)


@router.post("/register", response_model=AuthResponse)
def register(
    payload: RegisterRequest,
    _: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Register another admin. Only an existing admin may do this.
    """
    user = _create_admin(db, payload)
    logger.info("Admin %s registered", user.email)
    return _auth_response(user, tokens)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    db: DbClient = Depends(get_db_client),
    tokens: TokenService = Depends(get_token_service),
):
    user = db.get_user_by_email(payload.email)
    if not user:
        logger.warning("Login failed for unknown email %s", payload.email)
        raise InvalidCredentialsError()
    # Role is checked before the password.
    if not user.is_admin:
        logger.warning("Login refused for non-admin %s", payload.email)
        raise ForbiddenError("Access denied. Admin login only.")
    if not verify_password(payload.password, user.password_hash):
        logger.warning("Login failed for %s", payload.email)
        raise InvalidCredentialsError()
    return _auth_response(user, tokens)


@router.get("/user", response_model=UserResponse)
def current_user(user: UserRecord = Depends(require_admin)):
    return _user_response(user)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    user: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    changes = select_changes(
        payload.model_dump(exclude_unset=True), PROFILE_PATCH_POLICY
    )
    if "social_links" in changes:
        changes["social_links"] = {**user.social_links, **changes["social_links"]}
    updated = db.update_user(user.id, changes) if changes else user
    if not updated:
        raise UnauthorizedError("Token is not valid")
    return _user_response(updated)


@router.post("/create-admin", response_model=AuthResponse)
def create_admin(
    payload: CreateAdminRequest,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Bootstrap an admin account using the shared ADMIN_KEY.
    """
    if not settings.admin_key or not secrets.compare_digest(
        payload.admin_key.encode("utf-8"), settings.admin_key.encode("utf-8")
    ):
        logger.warning("create-admin rejected: bad admin key")
        raise UnauthorizedError("Invalid admin key")
    user = _create_admin(db, payload)
    logger.info("Admin %s created via admin key", user.email)
    return _auth_response(user, tokens)
