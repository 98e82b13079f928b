from typing import Optional
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import verify_jwt
from src.app.services.caller_context import CallerContext
from src.domain.entities import ProfileRole


def engine_connect_args(db_uri: str) -> dict:
    """SQLite writers wait for the database lock instead of failing at once"""
    if db_uri.startswith("sqlite"):
        return {"timeout": ApplicationConfig.DB_BUSY_TIMEOUT_SECONDS}
    return {}


engine = create_async_engine(
    ApplicationConfig.DB_URI,
    echo=False,
    future=True,
    connect_args=engine_connect_args(ApplicationConfig.DB_URI),
)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(
            session, ledger_enabled=ApplicationConfig.CREDIT_LEDGER_ENABLED
        )


async def get_current_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CallerContext:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        CallerContext built from the token's user_id, tenant_id and role

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    unauthorized = ClientError(
        Error("unauthorized", "Invalid or expired token"),
        status_code=status.HTTP_401_UNAUTHORIZED,
    )
    if credentials is None:
        raise unauthorized

    payload = verify_jwt(credentials.credentials)
    if payload is None:
        raise unauthorized

    try:
        return CallerContext(
            user_id=UUID(payload["user_id"]),
            tenant_id=UUID(payload["tenant_id"]),
            is_admin=payload.get("role") == ProfileRole.admin.value,
        )
    except (KeyError, TypeError, ValueError):
        raise unauthorized
