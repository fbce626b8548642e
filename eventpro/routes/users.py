# eventpro/routes/users.py
from typing import List

from fastapi import APIRouter, Depends

from eventpro.dependencies import get_user_service
from eventpro.models.user import User, UserUpdate
from eventpro.services.users import UserService

router = APIRouter()


@router.get("", response_model=List[User])
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.list_users()


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return await service.get_user(user_id)


@router.patch("/{user_id}", response_model=User)
async def update_user(user_id: str, changes: UserUpdate, service: UserService = Depends(get_user_service)):
    return await service.update_user(user_id, changes.model_dump(by_alias=True, exclude_unset=True))


@router.delete("/{user_id}")
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    await service.delete_user(user_id)
    return {"message": "User deleted successfully."}
