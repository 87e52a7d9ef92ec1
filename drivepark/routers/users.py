from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from drivepark.core.auth import Identity, resolve_identity
from drivepark.core.utils import app_service
from drivepark.services.user_service import UnauthorizedError, UserNotFoundError, UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}")
def get_user(user_id: str, request: Request, identity: Identity = Depends(resolve_identity)):
    svc: UserService = app_service(request, "user_service")
    try:
        return svc.get_user(identity, user_id)
    except UnauthorizedError:
        raise HTTPException(401, "Unauthorized", headers={"WWW-Authenticate": "Bearer"})
    except UserNotFoundError:
        raise HTTPException(404, "User not found")
