from fastapi import APIRouter, Depends

from src.users.constants import MOCK_USERS
from src.users.dependencies import get_current_user
from src.users.schemas import User


router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.get("")
def list_users() -> list[User]:
    return MOCK_USERS


@router.get("/me")
def get_me(user: User = Depends(get_current_user)) -> User:
    return user
