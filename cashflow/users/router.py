from fastapi import APIRouter

from cashflow.dependencies import CurrentUserId, UserServiceDep
from cashflow.users.schemas import UserCreate, UserResponse, UserUpdate

router = APIRouter()


@router.post("/me", status_code=201, response_model=UserResponse)
async def register_user(
    data: UserCreate,
    service: UserServiceDep,
    user_id: CurrentUserId,
) -> UserResponse:
    return await service.register(user_id, data)


@router.get("/me", response_model=UserResponse)
async def get_profile(
    service: UserServiceDep,
    user_id: CurrentUserId,
) -> UserResponse:
    return await service.get_profile(user_id)


@router.put("/me", response_model=UserResponse)
async def update_profile(
    data: UserUpdate,
    service: UserServiceDep,
    user_id: CurrentUserId,
) -> UserResponse:
    return await service.update(user_id, data)
