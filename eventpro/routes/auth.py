# eventpro/routes/auth.py
from fastapi import APIRouter, Depends, status

from eventpro.dependencies import get_user_service
from eventpro.models.user import LoginRequest, LoginResponse, UserCreate, UserResponse
from eventpro.services.users import UserService

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, service: UserService = Depends(get_user_service)):
    created = await service.register(user.model_dump(by_alias=True))
    return {"message": "Registration completed successfully!", "user": created}


@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginRequest, service: UserService = Depends(get_user_service)):
    user = await service.login(credentials.email, credentials.password)
    return {"message": "Login successful!", "user": user}
