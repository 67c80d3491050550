from datetime import timedelta
from typing import Optional

from fastapi import Depends, Header, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.auth_header import extract_bearer_token
from src.app.services.claims_codec import ClaimsCodec
from src.app.services.session_store import SessionStore
from src.app.services.token_generator import OpaqueTokenGenerator
from src.app.services.token_lifecycle import TokenLifecycleManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.claims import AccessClaims
from src.domain.entities import Role
from src.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_claims_codec() -> ClaimsCodec:
    return ClaimsCodec(
        ApplicationConfig.JWT_SECRET,
        timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES),
    )


def get_token_generator() -> OpaqueTokenGenerator:
    return OpaqueTokenGenerator(ApplicationConfig.REFRESH_TOKEN_BYTES)


def get_session_store(
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_generator: OpaqueTokenGenerator = Depends(get_token_generator),
) -> SessionStore:
    return SessionStore(
        uow,
        token_generator,
        timedelta(days=ApplicationConfig.REFRESH_TOKEN_TTL_DAYS),
    )


def get_token_manager(
    codec: ClaimsCodec = Depends(get_claims_codec),
    store: SessionStore = Depends(get_session_store),
) -> TokenLifecycleManager:
    return TokenLifecycleManager(codec, store)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    tokens: TokenLifecycleManager = Depends(get_token_manager),
) -> AccessClaims:
    """
    Dependency to extract and verify the access token from the Authorization header.

    Verification is signature + expiry only; no session lookup, so a token
    outlives the revocation of its session by at most its own lifetime.

    Returns:
        AccessClaims of the caller

    Raises:
        ClientError: 401 UNAUTHORIZED for a missing, malformed, forged or expired token
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise ClientError.unauthorized()

    result = tokens.verify_access(token)
    if result.is_err():
        raise ClientError.unauthorized()

    return result.value


def require_roles(*roles: Role):
    """Dependency factory: only callers holding one of roles get through."""

    async def check_role(
        current_user: AccessClaims = Depends(get_current_user),
    ) -> AccessClaims:
        if current_user.role not in roles:
            allowed = " or ".join(role.value for role in roles)
            raise ClientError(
                Error(
                    "FORBIDDEN",
                    f"Access denied. Required role: {allowed}. Your role: {current_user.role.value}",
                ),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return current_user

    return check_role
