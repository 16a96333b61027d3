"""User account endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from ..dependencies.services import get_user_service
from ..errors import UserNotFoundError
from ..schemas.user import UserResponse
from ..services.users import UserService

router = APIRouter()


@router.get("/count", response_model=int)
def count_users(service: UserService = Depends(get_user_service)):
    return service.count_users()


@router.get("/email/{email}", response_model=UserResponse)
def get_user_by_email(email: str, service: UserService = Depends(get_user_service)):
    user = service.find_by_email(email)
    if not user:
        raise UserNotFoundError(email)
    return user


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    user = service.find_by_id(user_id)
    if not user:
        raise UserNotFoundError(user_id)
    return user


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    email: str = Query(...),
    password: str = Query(...),
    username: str = Query(...),
    service: UserService = Depends(get_user_service),
):
    return service.create_user(email, password, username)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    username: str = Query(...),
    service: UserService = Depends(get_user_service),
):
    return service.update_username(user_id, username)


@router.put("/{user_id}/password", response_model=UserResponse)
def update_password(
    user_id: int,
    new_password: str = Query(...),
    service: UserService = Depends(get_user_service),
):
    return service.update_password(user_id, new_password)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
