from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from drivepark.core.rate_limiter import rate_limit_ip
from drivepark.core.utils import app_service
from drivepark.services.auth_service import AuthService, InvalidCredentialsError

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginBody(BaseModel):
    email: str
    password: str


@router.post("/login")
def login(body: LoginBody, request: Request):
    rate_limit_ip(request, "auth_login", limit=10, window_seconds=60)
    svc: AuthService = app_service(request, "auth_service")
    try:
        result = svc.login(body.email, body.password)
    except InvalidCredentialsError:
        raise HTTPException(401, "Invalid email or password", headers={"WWW-Authenticate": "Bearer"})
    return {
        "accessToken": result.access_token,
        "tokenType": result.token_type,
        "user": result.user,
    }
