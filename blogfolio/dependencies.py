"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header

from blogfolio.config import Settings, get_settings
from blogfolio.db import DbClient, InMemoryDbClient, PostgresDbClient
from blogfolio.errors import ForbiddenError, UnauthorizedError
from blogfolio.media import CloudinaryMediaClient, InMemoryMediaClient, MediaClient
from blogfolio.records import UserRecord
from blogfolio.security import TokenService

_db_client: DbClient | None = None
_media_client: MediaClient | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so state persists across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _db_client = InMemoryDbClient()
    else:
        _db_client = PostgresDbClient(settings.database_url)
    return _db_client


def get_media_client() -> MediaClient:
    global _media_client
    if _media_client:
        return _media_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.cloudinary_cloud_name:
        _media_client = InMemoryMediaClient(folder=settings.media_folder)
    else:
        _media_client = CloudinaryMediaClient(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key or "",
            api_secret=settings.cloudinary_api_secret or "",
            folder=settings.media_folder,
        )
    return _media_client


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService.from_settings(settings)


def require_admin(
    authorization: Optional[str] = Header(None),
    db: DbClient = Depends(get_db_client),
    tokens: TokenService = Depends(get_token_service),
) -> UserRecord:
    """
    Resolve the bearer token to an admin user or reject the request.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise UnauthorizedError()
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise UnauthorizedError()

    user_id = tokens.verify(token)
    user = db.get_user(user_id)
    if not user:
        raise UnauthorizedError("Token is not valid")
    if not user.is_admin:
        raise ForbiddenError()
    return user
