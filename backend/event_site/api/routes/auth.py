"""Auth Routes — admin login issuing bearer tokens.

Invariants:
    - Unknown email and wrong password produce the same 401 response
    - The password hash never leaves this module
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.config import Settings, get_settings
from event_site.core.errors import UnauthorizedError
from event_site.infrastructure.credentials import Principal, check_password, issue_token
from event_site.infrastructure.database import get_db
from event_site.models.user import User
from event_site.schemas.auth import LoginRequest, LoginResponse, UserResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    result = await db.execute(select(User).where(User.email == body.email.strip()))
    user = result.scalar_one_or_none()
    if user is None or not check_password(body.password, user.password_hash):
        logger.warning("Rejected admin login attempt")
        raise UnauthorizedError("Invalid credentials")

    principal = Principal(user_id=user.id, email=user.email, name=user.name)
    token = issue_token(
        principal, settings.jwt_secret,
        expiry_hours=settings.jwt_expiry_hours, algorithm=settings.jwt_algorithm,
    )
    logger.info(f"Admin {user.id} logged in")
    return LoginResponse(
        token=token,
        user=UserResponse(id=user.id, name=user.name, email=user.email),
    )
