"""Registration and login endpoints."""

from fastapi import APIRouter, Depends, status

from ..dependencies.services import get_auth_service
from ..errors import ValidationError
from ..schemas.user import (
    LoginRequest,
    RegisterRequest,
    UserResponse,
    validate_login_request,
    validate_register_request,
)
from ..services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    errors = validate_register_request(request)
    if errors:
        raise ValidationError(errors)
    return auth.register(request)


@router.post("/login", response_model=UserResponse)
def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    errors = validate_login_request(request)
    if errors:
        raise ValidationError(errors)
    return auth.login(request)
