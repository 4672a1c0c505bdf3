"""API Dependencies — collaborators injected into route handlers.

Invariants:
    - require_admin: missing bearer -> UnauthorizedError (401), bad token -> ForbiddenError (403)
    - optional_admin never raises: anonymous and invalid tokens both yield None
    - Gateway and storage are process singletons; tests replace them through
      app.dependency_overrides

Design Decisions:
    - HTTPBearer(auto_error=False): the gate raises domain errors so every auth
      failure shares the global error envelope
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from event_site.config import Settings, get_settings
from event_site.core.errors import ForbiddenError, UnauthorizedError
from event_site.core.repository_protocols import FileStorage, PaymentGateway
from event_site.infrastructure.credentials import Principal, verify_token
from event_site.infrastructure.file_storage import LocalFileStorage
from event_site.infrastructure.payment_gateway import MercadoPagoGateway

_bearer = HTTPBearer(auto_error=False)

_payment_gateway: PaymentGateway | None = None
_file_storage: FileStorage | None = None


def get_payment_gateway() -> PaymentGateway:
    global _payment_gateway
    if _payment_gateway is None:
        _payment_gateway = MercadoPagoGateway()
    return _payment_gateway


def get_file_storage() -> FileStorage:
    global _file_storage
    if _file_storage is None:
        settings = get_settings()
        _file_storage = LocalFileStorage(
            settings.upload_dir, max_bytes=settings.upload_max_bytes,
        )
    return _file_storage


async def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> Principal:
    """Credential gate for privileged routes."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return verify_token(
        credentials.credentials, settings.jwt_secret, settings.jwt_algorithm,
    )


async def optional_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> Principal | None:
    """Principal when a valid bearer is supplied, otherwise None."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return verify_token(
            credentials.credentials, settings.jwt_secret, settings.jwt_algorithm,
        )
    except ForbiddenError:
        return None
