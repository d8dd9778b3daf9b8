from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.auth import CallerIdentity
from app.schemas.user import UserResponse
from app.schemas.responses import SuccessResponse
from app.services.user_service import UserService

router = APIRouter()


@router.get("/me", response_model=SuccessResponse[UserResponse])
async def read_current_user(
    caller: CallerIdentity = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Get the authenticated caller's user record.
    """
    user = await UserService.get_user_by_id(db, caller.user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return SuccessResponse(data=UserResponse.model_validate(user))
