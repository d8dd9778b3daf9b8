"""API Dependencies"""

from typing import Optional
from uuid import UUID
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError

from app.database import get_db
from app.core.security import decode_token
from app.schemas.auth import CallerIdentity
from app.services.dashboard_service import DashboardService

# auto_error=False: a missing header resolves to no identity instead of a 403
security = HTTPBearer(auto_error=False)


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_optional_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[CallerIdentity]:
    """
    Resolve the caller identity from the bearer token.
    
    Returns:
        The caller, or None when no Authorization header was sent
        
    Raises:
        HTTPException: If a token was sent but is invalid
    """
    if credentials is None:
        return None
    
    payload = decode_token(credentials.credentials)
    if not payload:
        raise _credentials_error()
    
    if payload.get("type") != "access":
        raise _credentials_error("Invalid token type")
    
    user_id_str: Optional[str] = payload.get("sub")
    if not user_id_str:
        raise _credentials_error()
    
    try:
        return CallerIdentity(user_id=UUID(user_id_str), role=payload.get("role"))
    except (ValueError, ValidationError):
        raise _credentials_error("Invalid token subject or role")


async def get_current_caller(
    caller: Optional[CallerIdentity] = Depends(get_optional_caller),
) -> CallerIdentity:
    """Require an authenticated caller."""
    if caller is None:
        raise _credentials_error("Not authenticated")
    return caller


async def require_staff(
    caller: CallerIdentity = Depends(get_current_caller),
) -> CallerIdentity:
    """Require a teacher or admin caller."""
    if not caller.is_staff:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )
    return caller


def get_dashboard_service() -> DashboardService:
    return DashboardService()
